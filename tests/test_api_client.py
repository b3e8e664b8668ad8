"""Tests for the REST API client's request and error handling."""

from __future__ import annotations

import typing as typ

import pytest
import requests

from cms_pages.api import (
    ApiPermissionError,
    FailedRequestError,
    NotFoundError,
    RestApiClient,
    format_params,
)

if typ.TYPE_CHECKING:
    from pytest_mock import MockerFixture

BASE_URL = "https://cms.example.invalid/api"


def _client(
    mocker: MockerFixture,
    payload: typ.Any = None,
    *,
    status: int = 200,
) -> tuple[RestApiClient, typ.Any]:
    response = mocker.Mock(spec=requests.Response)
    response.status_code = status
    response.text = "body"
    response.json.return_value = payload
    session = mocker.Mock(spec=requests.Session)
    session.get.return_value = response
    return RestApiClient(BASE_URL + "/", session=session, timeout=3.0), session


def test_get_one_builds_record_url(mocker: MockerFixture) -> None:
    """Single records are fetched from ``{base}/{endpoint}/{id}``."""
    client, session = _client(mocker, {"id": 1, "title": "Hello"})

    record = client.get_one("news", 1)

    assert record == {"id": 1, "title": "Hello"}
    session.get.assert_called_once()
    args, kwargs = session.get.call_args
    assert args[0] == f"{BASE_URL}/news/1", f"unexpected url: {args[0]!r}"
    assert kwargs["timeout"] == pytest.approx(3.0)
    assert kwargs["headers"]["Accept"] == "application/json"


@pytest.mark.parametrize(
    ("record_id", "suffix"),
    [
        ("a/b", "news/a%2Fb"),
        ("1?x=2", "news/1%3Fx%3D2"),
        ("two words", "news/two%20words"),
    ],
)
def test_get_one_encodes_record_id_as_one_segment(
    mocker: MockerFixture, record_id: str, suffix: str
) -> None:
    """Reserved characters in an id are escaped rather than reshaping the URL."""
    client, session = _client(mocker, {"id": record_id})

    client.get_one("news", record_id)

    args, _ = session.get.call_args
    assert args[0] == f"{BASE_URL}/{suffix}", f"unexpected url: {args[0]!r}"


def test_list_passes_page_and_options(mocker: MockerFixture) -> None:
    client, session = _client(
        mocker,
        {
            "data": [{"id": 1}, "junk", {"id": 2}],
            "metadata": {"total_results": 12, "limit": 5, "page": 2, "lang": "en"},
        },
    )

    result = client.list("news", 2, {"sort": "date"})

    _, kwargs = session.get.call_args
    assert kwargs["params"] == {"page": 2, "sort": "date"}
    assert result.data == [{"id": 1}, {"id": 2}], "non-object rows should be dropped"
    assert result.pagination["total_results"] == 12
    assert result.metadata["lang"] == "en"


def test_list_prefers_pagination_block(mocker: MockerFixture) -> None:
    client, _ = _client(
        mocker,
        {
            "data": [],
            "pagination": {"total_results": 3, "limit": 10},
            "metadata": {"total_results": 99},
        },
    )

    result = client.list("news")

    assert result.pagination == {"total_results": 3, "limit": 10}


def test_list_without_data_array_fails(mocker: MockerFixture) -> None:
    client, _ = _client(mocker, {"results": []})

    with pytest.raises(FailedRequestError, match="no 'data' array"):
        client.list("news")


@pytest.mark.parametrize(
    ("status", "error"),
    [
        (404, NotFoundError),
        (401, ApiPermissionError),
        (403, ApiPermissionError),
        (500, FailedRequestError),
        (422, FailedRequestError),
    ],
)
def test_http_errors_map_to_api_errors(
    mocker: MockerFixture, status: int, error: type[Exception]
) -> None:
    client, _ = _client(mocker, {}, status=status)

    with pytest.raises(error):
        client.get_one("news", 1)


def test_transport_failure_is_wrapped(mocker: MockerFixture) -> None:
    client, session = _client(mocker)
    session.get.side_effect = requests.ConnectionError("boom")

    with pytest.raises(FailedRequestError) as excinfo:
        client.get_one("news", 1)
    assert isinstance(excinfo.value.__cause__, requests.ConnectionError)


def test_invalid_json_is_wrapped(mocker: MockerFixture) -> None:
    client, session = _client(mocker)
    session.get.return_value.json.side_effect = ValueError("bad json")

    with pytest.raises(FailedRequestError, match="not valid JSON"):
        client.get_one("news", 1)


def test_non_object_record_is_rejected(mocker: MockerFixture) -> None:
    client, _ = _client(mocker, [1, 2])

    with pytest.raises(FailedRequestError, match="Expected a JSON object"):
        client.get_one("news", 1)


def test_format_params_renders_booleans_and_nested_mappings() -> None:
    assert format_params({"one": 100, "two": 200, "http_errors": False}) == (
        "one=100, two=200, http_errors=0"
    )
    assert format_params({"filter": {"lang": "en", "draft": True}}) == (
        "filter=[lang=en, draft=1]"
    )
