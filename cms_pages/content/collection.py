"""Ordered, name-keyed container of content fields."""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .fields import ContentField


class ContentFieldCollection:
    """Insertion-ordered mapping of field name to content field.

    Re-adding a field with an existing name replaces the stored node without
    moving it: iteration order is always first-insertion order. Fields are
    addressed by name through :meth:`get`, which templates can call directly
    (``{{ page.content.get("title") }}``).

    Examples
    --------
    >>> from cms_pages.content.fields import ShortText
    >>> fields = ContentFieldCollection()
    >>> fields.add(ShortText("x", "1")).add(ShortText("y", "2")).add(ShortText("y", "3"))
    ContentFieldCollection(['x', 'y'])
    >>> str(fields)
    '1 3'
    """

    __slots__ = ("_keys", "_nodes")

    def __init__(self, fields: cabc.Iterable[ContentField] = ()) -> None:
        self._keys: list[str] = []
        self._nodes: dict[str, ContentField] = {}
        for field in fields:
            self.add(field)

    def add(self, field: ContentField) -> ContentFieldCollection:
        """Insert ``field`` under its name, replacing any existing value in place."""
        if field.name not in self._nodes:
            self._keys.append(field.name)
        self._nodes[field.name] = field
        return self

    def get(self, name: str) -> ContentField | None:
        """Return the field called ``name``, or ``None`` when absent."""
        return self._nodes.get(name)

    def names(self) -> list[str]:
        """Return field names in iteration order."""
        return list(self._keys)

    def __iter__(self) -> cabc.Iterator[ContentField]:
        nodes = self._nodes
        return iter([nodes[key] for key in self._keys])

    def __len__(self) -> int:
        return len(self._keys)

    def __contains__(self, name: object) -> bool:
        return name in self._nodes

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ContentFieldCollection):
            return NotImplemented
        return self._keys == other._keys and all(
            self._nodes[key] == other._nodes[key] for key in self._keys
        )

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return " ".join(str(field) for field in self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._keys!r})"


__all__ = ["ContentFieldCollection"]
