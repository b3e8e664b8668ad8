"""Declarative content model: content types and their schema fields.

The content model describes, per content type, the ordered fields a raw API
record may carry, their declared types, and the child definitions of
composite fields. It is read-only input to :mod:`cms_pages.materializer`.

Examples
--------
>>> from cms_pages.content_model import SchemaField, FieldType
>>> field = SchemaField("team", "array", (SchemaField("name", "text"),))
>>> field.kind is FieldType.ARRAY
True
>>> [child.name for child in field]
['name']
"""

from .loader import build_content_model
from .models import (
    ContentFieldNotSetError,
    ContentModel,
    ContentModelError,
    ContentType,
    ContentTypeNotSetError,
    FieldType,
    SchemaField,
)

__all__ = [
    "ContentFieldNotSetError",
    "ContentModel",
    "ContentModelError",
    "ContentType",
    "ContentTypeNotSetError",
    "FieldType",
    "SchemaField",
    "build_content_model",
]
