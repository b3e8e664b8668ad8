"""Content field node variants produced by the materializer.

Each variant corresponds to exactly one :class:`~cms_pages.content_model.FieldType`
tag and keeps the raw API value it was built from in ``value`` (leaf types) or
the nested collections it owns (composite types). Constructors validate only
what they need to expose a typed view of the value; a failure here surfaces as
a :class:`~cms_pages.materializer.ContentFieldError` for the whole record.
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import datetime as dt
import typing as typ

from cms_pages.content_model import FieldType

if typ.TYPE_CHECKING:
    from .collection import ContentFieldCollection

_TRUE_STRINGS = frozenset({"1", "true", "yes", "on"})
_FALSE_STRINGS = frozenset({"", "0", "false", "no", "off"})


@dc.dataclass(slots=True)
class ContentField:
    """Base class for every materialized content field."""

    field_type: typ.ClassVar[FieldType]

    name: str


@dc.dataclass(slots=True)
class _TextField(ContentField):
    value: typ.Any

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(
            self.value, str | int | float
        ):
            msg = f"Text field '{self.name}' expects a string, got {type(self.value).__name__}."
            raise TypeError(msg)

    def __str__(self) -> str:
        return str(self.value)


@dc.dataclass(slots=True)
class ShortText(_TextField):
    """Single-line text."""

    field_type: typ.ClassVar[FieldType] = FieldType.TEXT


@dc.dataclass(slots=True)
class PlainText(_TextField):
    """Multi-line text without markup."""

    field_type: typ.ClassVar[FieldType] = FieldType.PLAINTEXT


@dc.dataclass(slots=True)
class RichText(_TextField):
    """HTML content supplied by the CMS editor."""

    field_type: typ.ClassVar[FieldType] = FieldType.RICHTEXT


@dc.dataclass(slots=True)
class Number(ContentField):
    """Numeric value; numeric strings are accepted and parsed."""

    field_type: typ.ClassVar[FieldType] = FieldType.NUMBER

    value: typ.Any
    number: int | float = dc.field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        self.number = _parse_number(self.name, self.value)

    def __str__(self) -> str:
        return str(self.number)


@dc.dataclass(slots=True)
class Boolean(ContentField):
    """True/false flag; accepts booleans, 0/1 and common string spellings."""

    field_type: typ.ClassVar[FieldType] = FieldType.BOOLEAN

    value: typ.Any
    enabled: bool = dc.field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        self.enabled = _parse_bool(self.name, self.value)

    def __bool__(self) -> bool:
        return self.enabled

    def __str__(self) -> str:
        return "true" if self.enabled else "false"


@dc.dataclass(slots=True)
class Date(ContentField):
    """Calendar date parsed from an ISO 8601 string or a ``date`` value."""

    field_type: typ.ClassVar[FieldType] = FieldType.DATE

    value: typ.Any
    date: dt.date = dc.field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        match self.value:
            case dt.datetime() as moment:
                self.date = moment.date()
            case dt.date() as day:
                self.date = day
            case str() as text:
                self.date = dt.date.fromisoformat(text.strip()[:10])
            case _:
                msg = f"Date field '{self.name}' expects an ISO date string."
                raise TypeError(msg)

    def __str__(self) -> str:
        return self.date.isoformat()


@dc.dataclass(slots=True)
class DateTime(ContentField):
    """Timestamp parsed from an ISO 8601 string or a ``datetime`` value."""

    field_type: typ.ClassVar[FieldType] = FieldType.DATETIME

    value: typ.Any
    datetime: dt.datetime = dc.field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        match self.value:
            case dt.datetime() as moment:
                self.datetime = moment
            case str() as text:
                sanitized = text.strip()
                if sanitized.endswith("Z"):
                    sanitized = sanitized[:-1] + "+00:00"
                self.datetime = dt.datetime.fromisoformat(sanitized)
            case _:
                msg = f"Datetime field '{self.name}' expects an ISO timestamp string."
                raise TypeError(msg)

    def __str__(self) -> str:
        return self.datetime.isoformat()


@dc.dataclass(slots=True)
class AssetField(ContentField):
    """A file reference given either as a URL string or a mapping with ``url``.

    Any other keys of a mapping value (``title``, ``alt``, ``filesize`` and so
    on) are exposed through ``metadata``.
    """

    field_type: typ.ClassVar[FieldType] = FieldType.ASSET

    value: typ.Any
    url: str = dc.field(init=False, compare=False)
    metadata: dict[str, typ.Any] = dc.field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        match self.value:
            case str() as url:
                self.url = url
                self.metadata = {}
            case {"url": str() as url, **rest}:
                self.url = url
                self.metadata = dict(rest)
            case _:
                msg = f"Asset field '{self.name}' requires a url."
                raise ValueError(msg)

    @property
    def title(self) -> str | None:
        """Return the asset title when the CMS supplied one."""
        return self.metadata.get("title")

    def __str__(self) -> str:
        return self.url


@dc.dataclass(slots=True)
class Image(AssetField):
    """Image asset."""

    field_type: typ.ClassVar[FieldType] = FieldType.IMAGE

    @property
    def alt(self) -> str:
        """Return alternative text, falling back to the title."""
        return self.metadata.get("alt") or self.title or ""


@dc.dataclass(slots=True)
class Audio(AssetField):
    field_type: typ.ClassVar[FieldType] = FieldType.AUDIO


@dc.dataclass(slots=True)
class Video(AssetField):
    field_type: typ.ClassVar[FieldType] = FieldType.VIDEO


@dc.dataclass(slots=True)
class Document(AssetField):
    field_type: typ.ClassVar[FieldType] = FieldType.DOCUMENT


@dc.dataclass(slots=True)
class ArrayContent(ContentField):
    """Repeating group of fields; one collection per raw data row."""

    field_type: typ.ClassVar[FieldType] = FieldType.ARRAY

    rows: list[ContentFieldCollection] = dc.field(default_factory=list)

    def add_row(self, row: ContentFieldCollection) -> None:
        self.rows.append(row)

    def __iter__(self) -> cabc.Iterator[ContentFieldCollection]:
        return iter(self.rows)

    def __len__(self) -> int:
        return len(self.rows)

    def __str__(self) -> str:
        return " ".join(str(row) for row in self.rows)


@dc.dataclass(slots=True)
class Component(ContentField):
    """Named group of fields embedded in a record."""

    field_type: typ.ClassVar[FieldType] = FieldType.COMPONENT

    content: ContentFieldCollection

    def __str__(self) -> str:
        return str(self.content)


@dc.dataclass(slots=True)
class FlexibleContent(ContentField):
    """Ordered list of components, each chosen from a set of allowed layouts."""

    field_type: typ.ClassVar[FieldType] = FieldType.FLEXIBLE_CONTENT

    components: list[Component] = dc.field(default_factory=list)

    def __iter__(self) -> cabc.Iterator[Component]:
        return iter(self.components)

    def __len__(self) -> int:
        return len(self.components)

    def __str__(self) -> str:
        return " ".join(str(component) for component in self.components)


@dc.dataclass(slots=True)
class Relation(ContentField):
    """Link to another content type, embedded or by reference.

    ``content`` holds the related record's fields when the API embedded it;
    ``reference`` holds the bare identifier otherwise.
    """

    field_type: typ.ClassVar[FieldType] = FieldType.RELATION

    content_type: str
    content: ContentFieldCollection | None = None
    reference: typ.Any = None

    def __str__(self) -> str:
        if self.content is not None:
            return str(self.content)
        return "" if self.reference is None else str(self.reference)


def _parse_number(name: str, value: object) -> int | float:
    """Return ``value`` as an int or float, rejecting booleans and containers."""
    match value:
        case bool():
            pass
        case int() | float():
            return value
        case str() as text:
            stripped = text.strip()
            try:
                return int(stripped)
            except ValueError:
                return float(stripped)
    msg = f"Number field '{name}' expects a numeric value, got {type(value).__name__}."
    raise TypeError(msg)


def _parse_bool(name: str, value: object) -> bool:
    match value:
        case bool():
            return value
        case 0 | 1:
            return bool(value)
        case str() as text if text.strip().lower() in _TRUE_STRINGS:
            return True
        case str() as text if text.strip().lower() in _FALSE_STRINGS:
            return False
    msg = f"Boolean field '{name}' cannot interpret {value!r}."
    raise ValueError(msg)


LEAF_FIELDS: dict[FieldType, type[ContentField]] = {
    FieldType.NUMBER: Number,
    FieldType.TEXT: ShortText,
    FieldType.PLAINTEXT: PlainText,
    FieldType.RICHTEXT: RichText,
    FieldType.DATE: Date,
    FieldType.DATETIME: DateTime,
    FieldType.BOOLEAN: Boolean,
    FieldType.IMAGE: Image,
    FieldType.ASSET: AssetField,
    FieldType.AUDIO: Audio,
    FieldType.VIDEO: Video,
    FieldType.DOCUMENT: Document,
}


__all__ = [
    "LEAF_FIELDS",
    "ArrayContent",
    "AssetField",
    "Audio",
    "Boolean",
    "Component",
    "ContentField",
    "Date",
    "DateTime",
    "Document",
    "FlexibleContent",
    "Image",
    "Number",
    "PlainText",
    "Relation",
    "RichText",
    "ShortText",
    "Video",
]
