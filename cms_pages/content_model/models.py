"""Typed dataclasses describing the CMS content model."""

from __future__ import annotations

import dataclasses as dc
import enum
import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc


class ContentModelError(ValueError):
    """Raised when a content model definition is invalid or incomplete."""


class ContentTypeNotSetError(LookupError):
    """Raised when a content type is used before it has been configured."""


class ContentFieldNotSetError(LookupError):
    """Raised when a content field is requested that the type does not define."""


class FieldType(enum.StrEnum):
    """Declared field types understood by the materializer."""

    NUMBER = "number"
    TEXT = "text"
    PLAINTEXT = "plaintext"
    RICHTEXT = "richtext"
    DATE = "date"
    DATETIME = "datetime"
    BOOLEAN = "boolean"
    ARRAY = "array"
    IMAGE = "image"
    ASSET = "asset"
    AUDIO = "audio"
    VIDEO = "video"
    DOCUMENT = "document"
    RELATION = "relation"
    COMPONENT = "component"
    FLEXIBLE_CONTENT = "flexible_content"

    @classmethod
    def parse(cls, value: str) -> FieldType | None:
        """Return the matching member, or ``None`` for unrecognised tags."""
        try:
            return cls(value)
        except ValueError:
            return None

    @property
    def is_composite(self) -> bool:
        """Return whether fields of this type declare child fields."""
        return self in _COMPOSITE_TYPES


_COMPOSITE_TYPES = frozenset(
    {FieldType.ARRAY, FieldType.COMPONENT, FieldType.FLEXIBLE_CONTENT}
)


@dc.dataclass(frozen=True, slots=True)
class SchemaField:
    """Declarative definition of one content field.

    Attributes
    ----------
    name : str
        Key of the field in raw API records.
    type : str
        Declared type tag. Unrecognised tags are preserved so the
        materializer can skip them.
    children : tuple[SchemaField, ...]
        Child definitions for composite types, in declaration order.
    content_type : str | None
        Related content type name for ``relation`` fields.
    """

    name: str
    type: str
    children: tuple[SchemaField, ...] = ()
    content_type: str | None = None

    def __post_init__(self) -> None:
        if not self.name:
            msg = "Schema fields require a non-empty name."
            raise ContentModelError(msg)
        kind = FieldType.parse(self.type)
        if self.children and (kind is None or not kind.is_composite):
            msg = f"Field '{self.name}' of type '{self.type}' cannot declare children."
            raise ContentModelError(msg)
        seen: set[str] = set()
        for child in self.children:
            if child.name in seen:
                msg = f"Duplicate child field '{child.name}' in '{self.name}'."
                raise ContentModelError(msg)
            seen.add(child.name)

    @property
    def kind(self) -> FieldType | None:
        """Return the parsed field type, or ``None`` when unrecognised."""
        return FieldType.parse(self.type)

    def __iter__(self) -> cabc.Iterator[SchemaField]:
        return iter(self.children)

    def get_child(self, name: str) -> SchemaField | None:
        """Return the child definition called ``name`` if present."""
        for child in self.children:
            if child.name == name:
                return child
        return None


@dc.dataclass(frozen=True, slots=True)
class ContentType:
    """A named content type with its ordered top-level field definitions."""

    name: str
    api_endpoint: str
    fields: tuple[SchemaField, ...] = ()

    def __iter__(self) -> cabc.Iterator[SchemaField]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    def get_field(self, name: str) -> SchemaField:
        """Return the field called ``name`` or raise ContentFieldNotSetError."""
        for field in self.fields:
            if field.name == name:
                return field
        msg = f"Content field '{name}' is not defined for content type '{self.name}'."
        raise ContentFieldNotSetError(msg)


@dc.dataclass(slots=True)
class ContentModel:
    """Collection of content types keyed by name."""

    content_types: dict[str, ContentType] = dc.field(default_factory=dict)

    def add(self, content_type: ContentType) -> None:
        """Register ``content_type``, replacing any previous definition."""
        self.content_types[content_type.name] = content_type

    def get_content_type(self, name: str) -> ContentType:
        """Return the content type called ``name``.

        Raises
        ------
        ContentTypeNotSetError
            If no content type with that name is configured.
        """
        try:
            return self.content_types[name]
        except KeyError as exc:
            known = ", ".join(sorted(self.content_types)) or "none"
            msg = f"Unknown content type '{name}'. Known content types: {known}"
            raise ContentTypeNotSetError(msg) from exc

    def __contains__(self, name: object) -> bool:
        return name in self.content_types

    def __iter__(self) -> cabc.Iterator[ContentType]:
        return iter(self.content_types.values())


__all__ = [
    "ContentFieldNotSetError",
    "ContentModel",
    "ContentModelError",
    "ContentType",
    "ContentTypeNotSetError",
    "FieldType",
    "SchemaField",
]
