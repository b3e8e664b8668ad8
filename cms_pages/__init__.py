"""Materialize CMS API records into typed, ordered content trees.

This package turns raw records from a content API into pages of typed content
fields, driven by a declarative content model, and renders them (and
navigation menus) with Jinja templates. The ``cms-pages`` console script
exposes the same pipeline for inspection.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.
- ``FieldMaterializer`` / ``ContentFieldError``: the schema-driven builder
  and the single error it raises for malformed records.
- ``ContentRepository``: API + cache + materializer façade.

Examples
--------
>>> from cms_pages import FieldMaterializer
>>> from cms_pages.content_model import SchemaField
>>> FieldMaterializer().materialize(SchemaField("views", "number"), 3)
Number(name='views', value=3)
"""

from __future__ import annotations

from .cli import app, main
from .materializer import ContentFieldError, FieldMaterializer
from .repository import ContentRepository

__all__ = [
    "ContentFieldError",
    "ContentRepository",
    "FieldMaterializer",
    "app",
    "main",
]
