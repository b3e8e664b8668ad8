"""Diagnostic breadcrumbs for nested content materialization.

A :class:`ParseTrace` frame stands for "the record currently being parsed as
``type_label``". The materializer records each field on the frame before
building it, and opens a child frame (linked through ``parent``) whenever it
descends into an array row, component, or related record. Rendering a frame
gives the full path from the root content type down to the field that was
being built, which is what :class:`~cms_pages.materializer.ContentFieldError`
reports.

Examples
--------
>>> news = ParseTrace("news")
>>> news.record("team", "array", [{"name": "Bob"}])
>>> author = ParseTrace("author", news)
>>> author.record("name", "text", "Bob")
>>> print(author, end="")
Parents: news > team (array)
Type: author
SchemaField: name (text)
Content: 'Bob'
"""

from __future__ import annotations

import collections.abc as cabc
import typing as typ


class ParseTrace:
    """One frame of the parse path, linked to the frame that opened it."""

    __slots__ = ("field_name", "field_type", "parent", "type_label", "value")

    def __init__(self, type_label: str, parent: ParseTrace | None = None) -> None:
        self.type_label = type_label
        self.parent = parent
        self.field_name: str | None = None
        self.field_type: str | None = None
        self.value: typ.Any = None

    def record(self, field_name: str, field_type: str, value: typ.Any) -> None:
        """Set the field currently being parsed on this frame."""
        self.field_name = field_name
        self.field_type = field_type
        self.value = value

    def ancestors(self) -> list[ParseTrace]:
        """Return parent frames ordered from the root to the nearest."""
        chain: list[ParseTrace] = []
        frame = self.parent
        while frame is not None:
            chain.append(frame)
            frame = frame.parent
        chain.reverse()
        return chain

    def breadcrumb(self) -> str:
        """Return the ``a > b (type) > ...`` path through the parent frames."""
        segments: list[str] = []
        for frame in self.ancestors():
            segments.append(frame.type_label)
            if frame.field_name is not None:
                segments.append(frame._field_label())
        return " > ".join(segments)

    def _field_label(self) -> str:
        return f"{self.field_name or ''} ({self.field_type or ''})"

    def __str__(self) -> str:
        lines: list[str] = []
        if self.parent is not None:
            lines.append(f"Parents: {self.breadcrumb()}")
        lines.append(f"Type: {self.type_label}")
        lines.append(f"SchemaField: {self._field_label()}")
        lines.append(f"Content: {export_value(self.value)}")
        return "\n".join(lines) + "\n"

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}({self.type_label!r}, "
            f"field={self.field_name!r}, parent={self.parent!r})"
        )


def export_value(value: typ.Any, level: int = 0) -> str:
    """Render ``value`` as a structured, indented dump.

    Strings are single-quoted, ``None``/booleans render as ``NULL``/``true``/
    ``false``, and mappings and sequences render as ``array ( ... )`` blocks
    with one ``key => value,`` entry per line. Nested containers open on the
    line after their key.

    Examples
    --------
    >>> print(export_value({"id": 5, "title": "It's here"}))
    array (
      'id' => 5,
      'title' => 'It\\'s here',
    )
    """
    if not _is_container(value):
        return _export_scalar(value)

    pad = "  " * level
    inner = pad + "  "
    entries = value.items() if isinstance(value, cabc.Mapping) else enumerate(value)
    lines = ["array ("]
    for key, item in entries:
        label = _export_scalar(key)
        if _is_container(item):
            lines.append(f"{inner}{label} => ")
            lines.append(f"{inner}{export_value(item, level + 1)},")
        else:
            lines.append(f"{inner}{label} => {_export_scalar(item)},")
    lines.append(f"{pad})")
    return "\n".join(lines)


def _is_container(value: object) -> bool:
    return isinstance(value, cabc.Mapping | list | tuple)


def _export_scalar(value: object) -> str:
    match value:
        case None:
            return "NULL"
        case bool():
            return "true" if value else "false"
        case int() | float():
            return repr(value)
        case str():
            escaped = value.replace("\\", "\\\\").replace("'", "\\'")
            return f"'{escaped}'"
        case _:
            return repr(value)


__all__ = ["ParseTrace", "export_value"]
