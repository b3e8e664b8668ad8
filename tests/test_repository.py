"""Tests for ContentRepository caching, listing, and error propagation."""

from __future__ import annotations

import typing as typ

import pytest

from cms_pages.api import ListResponse, RestApiClient
from cms_pages.cache import MemoryCache, cache_key
from cms_pages.content import ContentFieldCollection, ShortText
from cms_pages.content_model import ContentTypeNotSetError, build_content_model
from cms_pages.materializer import ContentFieldError
from cms_pages.repository import ContentRepository

if typ.TYPE_CHECKING:
    from pytest_mock import MockerFixture

MODEL = build_content_model(
    {
        "news": {
            "fields": [
                {"name": "title", "type": "text"},
                {"name": "views", "type": "number"},
            ]
        }
    }
)


@pytest.fixture
def api(mocker: MockerFixture) -> typ.Any:
    """Return a mocked API client."""
    client = mocker.Mock(spec=RestApiClient)
    client.get_one.return_value = {"id": 1, "title": "Hello", "views": 3}
    client.list.return_value = ListResponse(
        data=[{"title": "One"}, {"title": "Two"}],
        pagination={"total_results": 7, "limit": 2},
        metadata={"total_results": 7, "limit": 2, "results": 2, "lang": "en"},
    )
    return client


def test_content_type_must_be_selected(api: typ.Any) -> None:
    repository = ContentRepository(api, MODEL)

    with pytest.raises(ContentTypeNotSetError, match="Content type is not set!"):
        repository.get_one(1)
    with pytest.raises(ContentTypeNotSetError):
        repository.set_content_type("events")


def test_get_one_reads_through_cache(api: typ.Any) -> None:
    """A second lookup for the same id is served from the cache."""
    cache = MemoryCache()
    repository = ContentRepository(api, MODEL, cache=cache).set_content_type("news")

    first = repository.get_one(1)
    second = repository.get_one(1)

    assert second is first
    api.get_one.assert_called_once_with("news", 1)
    assert cache.get(cache_key("news", "one", 1)) is first
    assert str(first) == "Hello 3"


def test_cache_entries_expire() -> None:
    now = [100.0]
    cache = MemoryCache(clock=lambda: now[0])
    cache.set("key", "value", 10)

    assert cache.get("key") == "value"
    now[0] = 110.0
    assert cache.get("key") is None
    assert len(cache) == 0


def test_list_builds_pages_and_filters_reserved_metadata(api: typ.Any) -> None:
    repository = ContentRepository(api, MODEL).set_content_type("news")

    pages = repository.list(2, {"sort": "date"})

    api.list.assert_called_once_with("news", 2, {"sort": "date"})
    assert [str(page) for page in pages] == ["One", "Two"]
    assert pages.pagination.page == 2
    assert pages.pagination.total_pages == 4
    assert pages.pagination.has_next
    assert pages.metadata == {"lang": "en"}, (
        f"paging keys should be filtered out, got {pages.metadata!r}"
    )


def test_list_cache_key_includes_options(api: typ.Any) -> None:
    repository = ContentRepository(api, MODEL, cache=MemoryCache()).set_content_type(
        "news"
    )

    repository.list(1, {"sort": "date"})
    repository.list(1, {"sort": "date"})
    repository.list(1, {"sort": "title"})

    assert api.list.call_count == 2


def test_malformed_record_raises_and_is_not_cached(api: typ.Any) -> None:
    api.get_one.return_value = {"title": "Hello", "views": "lots"}
    cache = MemoryCache()
    repository = ContentRepository(api, MODEL, cache=cache).set_content_type("news")

    with pytest.raises(ContentFieldError) as excinfo:
        repository.get_one(1)

    assert excinfo.value.field_name == "views"
    assert len(cache) == 0


def test_set_custom_content_fields_adds_in_place(api: typ.Any) -> None:
    repository = ContentRepository(api, MODEL)
    news = MODEL.get_content_type("news")
    content = ContentFieldCollection([ShortText("title", "Old")])

    result = repository.set_custom_content_fields(news, content, {"views": 5})

    assert result is content
    assert content.names() == ["title", "views"]


def test_set_custom_content_fields_leaves_content_on_failure(api: typ.Any) -> None:
    """A failing field leaves the target collection exactly as it was."""
    repository = ContentRepository(api, MODEL)
    news = MODEL.get_content_type("news")
    content = ContentFieldCollection([ShortText("extra", "keep")])

    with pytest.raises(ContentFieldError):
        repository.set_custom_content_fields(
            news, content, {"title": "New", "views": "lots"}
        )

    assert content.names() == ["extra"]


def test_list_reads_pagination_from_metadata_when_block_is_absent(
    api: typ.Any,
) -> None:
    """Without a pagination block, paging keys are taken from metadata."""
    api.list.return_value = ListResponse(
        data=[{"title": "One"}],
        metadata={"total_results": 3, "limit": 2, "page": 2, "lang": "en"},
    )
    repository = ContentRepository(api, MODEL).set_content_type("news")

    pages = repository.list(2)

    assert pages.pagination.total_results == 3, (
        f"expected metadata totals to be used, got {pages.pagination!r}"
    )
    assert pages.pagination.limit == 2
    assert pages.pagination.page == 2
    assert pages.pagination.total_pages == 2
    assert not pages.pagination.has_next
    assert pages.metadata == {"lang": "en"}
