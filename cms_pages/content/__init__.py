"""Materialized content: field nodes, field collections, pages, and menus."""

from .collection import ContentFieldCollection
from .fields import (
    ArrayContent,
    AssetField,
    Audio,
    Boolean,
    Component,
    ContentField,
    Date,
    DateTime,
    Document,
    FlexibleContent,
    Image,
    Number,
    PlainText,
    Relation,
    RichText,
    ShortText,
    Video,
)
from .menus import (
    Menu,
    MenuConfigError,
    MenuItem,
    MenuItemCollection,
    MenuSeekError,
    build_menu,
)
from .page import Page, PageCollection, Pagination

__all__ = [
    "ArrayContent",
    "AssetField",
    "Audio",
    "Boolean",
    "Component",
    "ContentField",
    "ContentFieldCollection",
    "Date",
    "DateTime",
    "Document",
    "FlexibleContent",
    "Image",
    "Menu",
    "MenuConfigError",
    "MenuItem",
    "MenuItemCollection",
    "MenuSeekError",
    "Number",
    "Page",
    "PageCollection",
    "Pagination",
    "PlainText",
    "Relation",
    "RichText",
    "ShortText",
    "Video",
    "build_menu",
]
