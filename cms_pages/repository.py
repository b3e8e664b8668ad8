"""Fetch API records for a content type and materialize them into pages.

:class:`ContentRepository` is the entry point most callers use: pick a content
type, then call :meth:`~ContentRepository.get_one` or
:meth:`~ContentRepository.list`. Results are read through an optional cache,
keyed by content type, operation, and call parameters.

Example
-------
>>> from pathlib import Path
>>> from cms_pages.api import RestApiClient
>>> from cms_pages.config import load_site_config
>>> site = load_site_config(Path("config/content.yaml"))  # doctest: +SKIP
>>> repo = ContentRepository(
...     RestApiClient(site.api.base_url), site.content_model
... )  # doctest: +SKIP
>>> repo.set_content_type("news").get_one(1).get("title")  # doctest: +SKIP
ShortText(name='title', value='Hello world')
"""

from __future__ import annotations

import logging
import typing as typ

from ._constants import DEFAULT_CACHE_LIFETIME, RESERVED_METADATA_KEYS
from .cache import cache_key
from .content import ContentFieldCollection, Page, PageCollection, Pagination
from .content_model import ContentTypeNotSetError
from .materializer import FieldMaterializer
from .parse_trace import ParseTrace

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .api import RestApiClient
    from .cache import ContentCache
    from .content_model import ContentModel, ContentType

logger = logging.getLogger(__name__)


class ContentRepository:
    """Read pages of one content type from the API, with optional caching."""

    def __init__(
        self,
        api: RestApiClient,
        content_model: ContentModel,
        *,
        cache: ContentCache | None = None,
        cache_lifetime: int = DEFAULT_CACHE_LIFETIME,
    ) -> None:
        """Initialise the repository.

        Parameters
        ----------
        api : RestApiClient
            Client used to fetch raw records.
        content_model : ContentModel
            Content types available to :meth:`set_content_type` and to
            embedded relations.
        cache : ContentCache, optional
            Read-through cache for built pages; ``None`` disables caching.
        cache_lifetime : int, optional
            Seconds to keep cached results.
        """
        self.api = api
        self.content_model = content_model
        self.cache = cache
        self.cache_lifetime = cache_lifetime
        self.materializer = FieldMaterializer(content_model)
        self._content_type: ContentType | None = None

    def set_content_type(self, name: str) -> ContentRepository:
        """Select the content type used by subsequent calls."""
        self._content_type = self.content_model.get_content_type(name)
        return self

    @property
    def content_type(self) -> ContentType:
        """Return the selected content type.

        Raises
        ------
        ContentTypeNotSetError
            If :meth:`set_content_type` has not been called.
        """
        if self._content_type is None:
            msg = "Content type is not set!"
            raise ContentTypeNotSetError(msg)
        return self._content_type

    def get_one(self, record_id: object) -> Page:
        """Return the page for ``record_id``, from cache when available."""
        content_type = self.content_type
        key = cache_key(content_type.name, "one", record_id)
        cached = self._cache_get(key)
        if cached is not None:
            return cached

        data = self.api.get_one(content_type.api_endpoint, record_id)
        page = self.create_page(data)
        self._cache_set(key, page)
        return page

    def list(
        self, page: int = 1, options: cabc.Mapping[str, typ.Any] | None = None
    ) -> PageCollection:
        """Return one page of records as a PageCollection.

        Metadata keys used for pagination (``total_results``, ``limit``,
        ``results``, ``page``) are not copied into ``PageCollection.metadata``.
        """
        content_type = self.content_type
        params = dict(options or {})
        key = cache_key(content_type.name, "list", page, params)
        cached = self._cache_get(key)
        if cached is not None:
            return cached

        response = self.api.list(content_type.api_endpoint, page, params)
        pages = PageCollection(
            pagination=Pagination.from_mapping(
                response.pagination or response.metadata, page=page
            )
        )
        for record in response.data:
            pages.add(self.create_page(record))
        pages.metadata.update(
            (name, value)
            for name, value in response.metadata.items()
            if name not in RESERVED_METADATA_KEYS
        )

        self._cache_set(key, pages)
        return pages

    def create_page(self, data: cabc.Mapping[str, typ.Any]) -> Page:
        """Materialize ``data`` as a page of the selected content type.

        Raises
        ------
        ContentTypeNotSetError
            If no content type is selected.
        ContentFieldError
            If any field fails to build; no partial page is returned.
        """
        return self.materializer.materialize_record(self.content_type, data)

    def set_custom_content_fields(
        self,
        content_type: ContentType,
        content: ContentFieldCollection,
        data: cabc.Mapping[str, typ.Any],
    ) -> ContentFieldCollection:
        """Add every field of ``content_type`` present in ``data`` to ``content``.

        Fields are built into a fresh collection first, so ``content`` is left
        unchanged when any field fails.
        """
        trace = ParseTrace(content_type.name)
        built = self.materializer.materialize_fields(content_type.fields, data, trace)
        for field in built:
            content.add(field)
        return content

    def _cache_get(self, key: str) -> typ.Any | None:
        if self.cache is None:
            return None
        value = self.cache.get(key)
        logger.debug("Cache %s for %s", "miss" if value is None else "hit", key)
        return value

    def _cache_set(self, key: str, value: object) -> None:
        if self.cache is not None:
            self.cache.set(key, value, self.cache_lifetime)


__all__ = ["ContentRepository"]
