"""Conversion between Notion page properties and typed records."""

from collections.abc import Mapping
from typing import Any

from schema2notion.models import MISSING, Schema
from schema2notion.notion.values import dehydrate_value, hydrate_value


def hydrate(schema: Schema, properties: Mapping[str, dict]) -> dict[str, Any]:
    """Convert page properties (keyed by label) into a record keyed by schema key.

    Keys whose property is absent from the page, or whose value cannot be
    represented, are left out of the record rather than set to ``None``.

    Example:
        >>> schema = {"name": title("Name")}
        >>> hydrate(schema, page["properties"])
        {'name': 'My Item'}
    """
    record: dict[str, Any] = {}
    for key, field in schema.items():
        prop = properties.get(field.label)
        if not prop:
            continue
        value = hydrate_value(prop, field)
        if value is MISSING:
            continue
        record[key] = value
    return record


def dehydrate(schema: Schema, record: Mapping[str, Any]) -> dict[str, dict]:
    """Convert a record into property values keyed by label.

    Keys not declared in the schema, ``MISSING`` values and read-only field
    types are skipped.
    """
    properties: dict[str, dict] = {}
    for key, value in record.items():
        field = schema.get(key)
        if field is None or value is MISSING:
            continue
        prop = dehydrate_value(field, value)
        if prop is None:
            continue
        properties[field.label] = prop
    return properties
