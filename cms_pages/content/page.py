"""Materialized content records and list results."""

from __future__ import annotations

import dataclasses as dc
import math
import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from cms_pages.content_model import ContentType

    from .collection import ContentFieldCollection
    from .fields import ContentField


@dc.dataclass(frozen=True, slots=True)
class Page:
    """One materialized API record: its content type and top-level fields."""

    content_type: ContentType
    content: ContentFieldCollection

    def get(self, name: str) -> ContentField | None:
        """Return the top-level field called ``name``, or ``None``."""
        return self.content.get(name)

    def __str__(self) -> str:
        return str(self.content)


@dc.dataclass(frozen=True, slots=True)
class Pagination:
    """Paging details reported by a list endpoint.

    Attributes
    ----------
    total_results : int
        Number of records across every page.
    limit : int
        Records per page.
    page : int
        Current page number, starting at 1.
    """

    total_results: int = 0
    limit: int = 0
    page: int = 1

    @property
    def total_pages(self) -> int:
        """Return the number of pages, or 1 when no limit was reported."""
        if self.limit <= 0:
            return 1
        return max(1, math.ceil(self.total_results / self.limit))

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @classmethod
    def from_mapping(
        cls, payload: cabc.Mapping[str, typ.Any], *, page: int = 1
    ) -> Pagination:
        """Build pagination from response metadata, tolerating missing keys."""
        return cls(
            total_results=_as_int(payload.get("total_results"), 0),
            limit=_as_int(payload.get("limit"), 0),
            page=_as_int(payload.get("page"), page),
        )


@dc.dataclass(slots=True)
class PageCollection:
    """Pages returned by a list call plus pagination and extra metadata."""

    pagination: Pagination = dc.field(default_factory=Pagination)
    pages: list[Page] = dc.field(default_factory=list)
    metadata: dict[str, typ.Any] = dc.field(default_factory=dict)

    def add(self, page: Page) -> None:
        self.pages.append(page)

    def __iter__(self) -> cabc.Iterator[Page]:
        return iter(self.pages)

    def __len__(self) -> int:
        return len(self.pages)


def _as_int(value: object, default: int) -> int:
    if isinstance(value, bool):
        return default
    try:
        return int(typ.cast("typ.Any", value))
    except (TypeError, ValueError):
        return default


__all__ = ["Page", "PageCollection", "Pagination"]
