"""Build content model dataclasses from YAML-sourced mappings."""

from __future__ import annotations

import typing as typ

from .models import ContentModel, ContentModelError, ContentType, FieldType, SchemaField


def build_content_model(payload: typ.Mapping[str, typ.Any] | None) -> ContentModel:
    """Build a ContentModel from the ``content_types`` mapping of a config file.

    Parameters
    ----------
    payload : Mapping[str, Any] | None
        Mapping of content type name to its definition. Each definition may
        set ``api_endpoint`` (defaults to the type name) and must provide a
        ``fields`` list.

    Returns
    -------
    ContentModel
        The parsed model, preserving declaration order of types and fields.

    Raises
    ------
    ContentModelError
        If a content type or field definition is malformed.

    Examples
    --------
    >>> model = build_content_model(
    ...     {"news": {"fields": [{"name": "title", "type": "text"}]}}
    ... )
    >>> model.get_content_type("news").get_field("title").type
    'text'
    """
    model = ContentModel()
    match payload:
        case None:
            return model
        case dict():
            pass
        case _:
            msg = "Content types must be defined as a mapping."
            raise ContentModelError(msg)

    for name, definition in payload.items():
        match definition:
            case dict():
                pass
            case _:
                msg = f"Content type '{name}' must be a mapping."
                raise ContentModelError(msg)
        fields = _build_fields(definition.get("fields"), parent=str(name))
        model.add(
            ContentType(
                name=str(name),
                api_endpoint=str(definition.get("api_endpoint") or name),
                fields=fields,
            )
        )
    return model


def _build_fields(
    entries: list[typ.Any] | None, *, parent: str
) -> tuple[SchemaField, ...]:
    """Build an ordered tuple of schema fields, rejecting duplicate names."""
    match entries:
        case None:
            return ()
        case list() as items:
            pass
        case _:
            msg = f"Fields of '{parent}' must be a list."
            raise ContentModelError(msg)

    fields: list[SchemaField] = []
    seen: set[str] = set()
    for entry in items:
        field = _build_field(entry, parent=parent)
        if field.name in seen:
            msg = f"Duplicate field '{field.name}' in '{parent}'."
            raise ContentModelError(msg)
        seen.add(field.name)
        fields.append(field)
    return tuple(fields)


def _build_field(entry: object, *, parent: str) -> SchemaField:
    match entry:
        case {"name": name, "type": field_type, **rest}:
            pass
        case _:
            msg = f"Fields of '{parent}' require 'name' and 'type'."
            raise ContentModelError(msg)

    name = str(name)
    field_type = str(field_type)
    if field_type == FieldType.FLEXIBLE_CONTENT:
        children = _build_components(rest.get("components"), parent=name)
    else:
        children = _build_fields(rest.get("fields"), parent=name)

    content_type = rest.get("content_type")
    if field_type == FieldType.RELATION and not content_type:
        msg = f"Relation field '{name}' requires a 'content_type'."
        raise ContentModelError(msg)

    return SchemaField(
        name=name,
        type=field_type,
        children=children,
        content_type=str(content_type) if content_type else None,
    )


def _build_components(
    payload: typ.Mapping[str, typ.Any] | None, *, parent: str
) -> tuple[SchemaField, ...]:
    """Build component definitions for a flexible content field."""
    match payload:
        case None:
            return ()
        case dict():
            pass
        case _:
            msg = f"Components of '{parent}' must be a mapping."
            raise ContentModelError(msg)

    components: list[SchemaField] = []
    for component, definition in payload.items():
        match definition:
            case None:
                fields = None
            case dict():
                fields = definition.get("fields")
            case _:
                msg = f"Component '{component}' of '{parent}' must be a mapping."
                raise ContentModelError(msg)
        components.append(
            SchemaField(
                name=str(component),
                type=FieldType.COMPONENT,
                children=_build_fields(fields, parent=str(component)),
            )
        )
    return tuple(components)


__all__ = ["build_content_model"]
