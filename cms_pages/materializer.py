"""Schema-driven materialization of raw API records into content fields.

:class:`FieldMaterializer` walks a content type's schema against a raw record
(a mapping decoded from API JSON), building one
:class:`~cms_pages.content.fields.ContentField` per field that is present in
the data. Dispatch is by declared :class:`~cms_pages.content_model.FieldType`
through a handler table; composite types (``array``, ``component``,
``flexible_content``, embedded ``relation`` records) recurse into nested
:class:`~cms_pages.content.ContentFieldCollection` objects.

Shape mismatches are dropped quietly: an unknown field type, a missing key,
or a composite field whose value is not a sequence/mapping produces no field.
Any exception raised while *building* a field, at any depth, is caught at the
top-level dispatch call and re-raised as a single :class:`ContentFieldError`.
The error names that top-level field, its type and raw value, and carries
the parse path down to the frame that failed. It aborts the whole record.

Example
-------
>>> from cms_pages.content_model import ContentType, SchemaField
>>> news = ContentType("news", "news", (
...     SchemaField("title", "text"),
...     SchemaField("team", "array", (SchemaField("name", "text"),)),
... ))
>>> page = FieldMaterializer().materialize_record(
...     news, {"title": "Hello", "team": [{"name": "Bob"}, {}]}
... )
>>> [len(row) for row in page.get("team")]
[1, 0]
"""

from __future__ import annotations

import collections.abc as cabc
import logging
import typing as typ

from ._constants import FLEXIBLE_COMPONENT_KEY
from .content import (
    ArrayContent,
    Component,
    ContentFieldCollection,
    FlexibleContent,
    Page,
    Relation,
)
from .content.fields import LEAF_FIELDS
from .content_model import ContentModel, ContentTypeNotSetError, FieldType
from .parse_trace import ParseTrace, export_value

if typ.TYPE_CHECKING:
    from .content import ContentField
    from .content_model import ContentType, SchemaField

    Handler = cabc.Callable[[SchemaField, typ.Any, ParseTrace], ContentField | None]

logger = logging.getLogger(__name__)


class ContentFieldError(RuntimeError):
    """Raised when a content field cannot be built from its raw value.

    Attributes
    ----------
    field_name : str
        Name of the top-level field whose build failed.
    field_type : str
        Declared type of that field.
    value_dump : str
        Structured dump of the raw value.
    trace : str
        Rendered parse path from the root content type to the frame that
        raised, which may be a field nested inside ``field_name``.
    """

    def __init__(
        self,
        message: str,
        *,
        field_name: str,
        field_type: str,
        value_dump: str,
        trace: str,
    ) -> None:
        super().__init__(message)
        self.field_name = field_name
        self.field_type = field_type
        self.value_dump = value_dump
        self.trace = trace

    @classmethod
    def from_failure(
        cls, field: SchemaField, value: typ.Any, rendered: str, exc: Exception
    ) -> ContentFieldError:
        """Build the diagnostic error for ``exc`` raised while building ``field``.

        ``rendered`` is the parse trace of the frame that was active when
        ``exc`` was raised, which may be nested well below ``field``.
        """
        value_dump = export_value(value)
        message = (
            f"{type(exc).__name__} raised when creating content field "
            f"'{field.name}' (type: {field.type}) for value: {value_dump}\n"
            f"{exc}\n{rendered}"
        )
        return cls(
            message,
            field_name=field.name,
            field_type=field.type,
            value_dump=value_dump,
            trace=rendered,
        )


class _NestedFailure(Exception):
    """Carry a build failure and the trace it happened at up to the dispatch call."""

    def __init__(self, error: Exception, trace: ParseTrace) -> None:
        super().__init__(str(error))
        self.error = error
        self.rendered = str(trace)


class FieldMaterializer:
    """Build typed content fields from raw values according to the schema.

    Parameters
    ----------
    content_model : ContentModel, optional
        Model used to resolve the content type of ``relation`` fields that
        embed the related record. Without it, embedded relations raise
        :class:`ContentFieldError`; relations given by reference still work.
    """

    def __init__(self, content_model: ContentModel | None = None) -> None:
        self.content_model = content_model
        self._handlers: dict[FieldType, Handler] = dict.fromkeys(
            LEAF_FIELDS, self._leaf
        )
        self._handlers.update(
            {
                FieldType.ARRAY: self._array,
                FieldType.COMPONENT: self._component,
                FieldType.FLEXIBLE_CONTENT: self._flexible_content,
                FieldType.RELATION: self._relation,
            }
        )

    def materialize_record(
        self, content_type: ContentType, data: cabc.Mapping[str, typ.Any]
    ) -> Page:
        """Return a Page holding every field of ``content_type`` found in ``data``.

        Raises
        ------
        ContentFieldError
            If any field in the record, however deeply nested, fails to build.
        """
        trace = ParseTrace(content_type.name)
        content = self.materialize_fields(content_type.fields, data, trace)
        return Page(content_type=content_type, content=content)

    def materialize_fields(
        self,
        fields: cabc.Iterable[SchemaField],
        data: cabc.Mapping[str, typ.Any],
        trace: ParseTrace,
    ) -> ContentFieldCollection:
        """Materialize each schema field present in ``data`` into one collection.

        Keys that are missing or hold ``None`` are skipped, as are fields the
        materializer drops. Each field is a top-level dispatch: a failure
        anywhere beneath it is reported against that field.
        """
        return self._collect(self.materialize, fields, data, trace)

    def materialize(
        self, field: SchemaField, value: typ.Any, trace: ParseTrace | None = None
    ) -> ContentField | None:
        """Build the content field for ``field`` from ``value``.

        Returns ``None`` when the field type is unrecognised or the value does
        not have the shape a composite field needs.

        Raises
        ------
        ContentFieldError
            If building the field, or any nested field, raised an exception.
            The error names ``field`` and ``value``; its ``trace`` is the
            parse path of the frame where the exception was raised.
        """
        if trace is None:
            trace = ParseTrace(field.name)
        try:
            return self._build(field, value, trace)
        except _NestedFailure as failure:
            error = failure.error
            raise ContentFieldError.from_failure(
                field, value, failure.rendered, error
            ) from error

    def _collect(
        self,
        build: cabc.Callable[[SchemaField, typ.Any, ParseTrace], ContentField | None],
        fields: cabc.Iterable[SchemaField],
        data: cabc.Mapping[str, typ.Any],
        trace: ParseTrace,
    ) -> ContentFieldCollection:
        collection = ContentFieldCollection()
        for field in fields:
            value = data.get(field.name)
            if value is None:
                continue
            node = build(field, value, trace)
            if node is not None:
                collection.add(node)
        return collection

    def _build_fields(
        self,
        fields: cabc.Iterable[SchemaField],
        data: cabc.Mapping[str, typ.Any],
        trace: ParseTrace,
    ) -> ContentFieldCollection:
        return self._collect(self._build, fields, data, trace)

    def _build(
        self, field: SchemaField, value: typ.Any, trace: ParseTrace
    ) -> ContentField | None:
        trace.record(field.name, field.type, value)

        kind = field.kind
        if kind is None:
            logger.debug("Skipping field %r with unknown type %r", field.name, field.type)
            return None

        handler = self._handlers[kind]
        try:
            return handler(field, value, trace)
        except _NestedFailure:
            raise
        except Exception as exc:
            raise _NestedFailure(exc, trace) from exc

    def _leaf(
        self, field: SchemaField, value: typ.Any, trace: ParseTrace
    ) -> ContentField:
        node_type = LEAF_FIELDS[typ.cast("FieldType", field.kind)]
        return node_type(field.name, value)

    def _array(
        self, field: SchemaField, value: typ.Any, trace: ParseTrace
    ) -> ArrayContent | None:
        if not isinstance(value, list | tuple):
            _log_drop(field, value, "a list of rows")
            return None
        array = ArrayContent(field.name)
        for index, row in enumerate(value):
            row_trace = ParseTrace(f"{field.name}[{index}]", trace)
            if isinstance(row, cabc.Mapping):
                array.add_row(self._build_fields(field.children, row, row_trace))
            else:
                logger.debug("Array field %r has a non-mapping row", field.name)
                array.add_row(ContentFieldCollection())
        return array

    def _component(
        self, field: SchemaField, value: typ.Any, trace: ParseTrace
    ) -> Component | None:
        if not isinstance(value, cabc.Mapping):
            _log_drop(field, value, "a mapping")
            return None
        child_trace = ParseTrace(field.name, trace)
        content = self._build_fields(field.children, value, child_trace)
        return Component(field.name, content)

    def _flexible_content(
        self, field: SchemaField, value: typ.Any, trace: ParseTrace
    ) -> FlexibleContent | None:
        if not isinstance(value, list | tuple):
            _log_drop(field, value, "a list of components")
            return None
        flexible = FlexibleContent(field.name)
        for row in value:
            if not isinstance(row, cabc.Mapping):
                continue
            layout = row.get(FLEXIBLE_COMPONENT_KEY)
            definition = field.get_child(str(layout)) if layout else None
            if definition is None:
                logger.debug(
                    "Skipping unknown component %r in field %r", layout, field.name
                )
                continue
            component = self._component(definition, row, trace)
            if component is not None:
                flexible.components.append(component)
        return flexible

    def _relation(
        self, field: SchemaField, value: typ.Any, trace: ParseTrace
    ) -> Relation | None:
        related = field.content_type or ""
        match value:
            case cabc.Mapping():
                if self.content_model is None:
                    msg = f"No content model available to resolve '{related}'."
                    raise ContentTypeNotSetError(msg)
                content_type = self.content_model.get_content_type(related)
                child_trace = ParseTrace(content_type.name, trace)
                content = self._build_fields(content_type.fields, value, child_trace)
                return Relation(
                    field.name, related, content=content, reference=value.get("id")
                )
            case bool():
                pass
            case str() | int():
                return Relation(field.name, related, reference=value)
        _log_drop(field, value, "a record or an identifier")
        return None


def materialize(
    field: SchemaField, value: typ.Any, trace: ParseTrace | None = None
) -> ContentField | None:
    """Materialize a single field without a content model.

    Shorthand for ``FieldMaterializer().materialize(field, value, trace)``.
    """
    return FieldMaterializer().materialize(field, value, trace)


def _log_drop(field: SchemaField, value: object, expected: str) -> None:
    logger.debug(
        "Dropping %s field %r: expected %s, got %s",
        field.type,
        field.name,
        expected,
        type(value).__name__,
    )


__all__ = ["ContentFieldError", "FieldMaterializer", "materialize"]
