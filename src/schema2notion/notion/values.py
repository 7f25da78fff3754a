"""Conversion between Notion property values and local typed values.

``hydrate_value`` reads one property value from a Notion page, ``dehydrate_value``
builds the payload to write it back. Select, multi_select and status values are
translated through the field's option vocabulary so that local code works with
stable option keys rather than display names.

Notion computes formula, rollup, files, unique_id and the created/last edited
metadata itself; those types hydrate only.
"""

from datetime import date, datetime
from typing import Any

from schema2notion.models import (
    MISSING,
    MultiSelectField,
    SchemaField,
    SelectField,
    StatusField,
)
from schema2notion.notion.options import (
    OptionVocabulary,
    build_status_vocabulary,
    build_vocabulary,
)


def default_annotations() -> dict[str, Any]:
    return {
        "bold": False,
        "italic": False,
        "strikethrough": False,
        "underline": False,
        "code": False,
        "color": "default",
    }


def to_rich_text(value: str | list[dict] | None) -> list[dict]:
    """Format a plain string as a rich text span list.

    A list is assumed to already be rich text and is returned as is.
    """
    if value is None or value == "":
        return []
    if isinstance(value, list):
        return value
    return [
        {
            "type": "text",
            "text": {"content": value, "link": None},
            "plain_text": value,
            "href": None,
            "annotations": default_annotations(),
        }
    ]


def plain_text(spans: list[dict] | None) -> str:
    """Concatenate the plain text of a rich text span list."""
    parts = []
    for span in spans or []:
        text = span.get("plain_text")
        if text is None:
            text = (span.get("text") or {}).get("content", "")
        parts.append(text)
    return "".join(parts)


def file_url(file: dict) -> str | None:
    """Extract the URL from a hosted or external file object."""
    if file.get("type") == "external":
        return file["external"]["url"]
    return (file.get("file") or {}).get("url")


def _unique_id(value: dict) -> str:
    prefix = value.get("prefix")
    number = value.get("number")
    return f"{prefix}-{number}" if prefix else str(number)


def _extract(prop: dict, vocabulary: OptionVocabulary | None) -> Any:
    """Extract a local value from a property value.

    With no vocabulary, option names are returned untranslated.
    """
    prop_type = prop.get("type")

    if prop_type in ("title", "rich_text"):
        return plain_text(prop.get(prop_type))

    if prop_type in ("select", "status"):
        option = prop.get(prop_type)
        if not option:
            return None
        name = option.get("name")
        return vocabulary.to_key(name) if vocabulary else name

    if prop_type == "multi_select":
        names = [option.get("name") for option in prop.get("multi_select") or []]
        return [vocabulary.to_key(name) for name in names] if vocabulary else names

    if prop_type in (
        "number",
        "date",
        "checkbox",
        "url",
        "email",
        "phone_number",
        "created_time",
        "last_edited_time",
    ):
        return prop.get(prop_type)

    if prop_type == "relation":
        return [related["id"] for related in prop.get("relation") or []]

    if prop_type == "people":
        return [user["id"] for user in prop.get("people") or []]

    if prop_type in ("created_by", "last_edited_by"):
        return (prop.get(prop_type) or {}).get("id")

    if prop_type == "files":
        return [file_url(file) for file in prop.get("files") or []]

    if prop_type == "unique_id":
        value = prop.get("unique_id")
        return _unique_id(value) if value else MISSING

    if prop_type == "formula":
        result = prop.get("formula") or {}
        result_type = result.get("type")
        if result_type in ("string", "number", "boolean", "date"):
            return result.get(result_type)
        return MISSING

    if prop_type == "rollup":
        result = prop.get("rollup") or {}
        result_type = result.get("type")
        if result_type in ("number", "date"):
            return result.get(result_type)
        if result_type == "array":
            # Items carry no field of their own, so no vocabulary applies
            return [_extract(item, None) for item in result.get("array") or []]
        return MISSING

    return MISSING


def _vocabulary_for(prop_type: str | None, field: SchemaField) -> OptionVocabulary | None:
    if prop_type != field.type:
        return None
    if isinstance(field, (SelectField, MultiSelectField)) and field.options:
        return build_vocabulary(field.options)
    if isinstance(field, StatusField) and field.groups:
        return build_status_vocabulary(field.groups)
    return None


def hydrate_value(prop: dict, field: SchemaField) -> Any:
    """Convert a Notion property value into a local value.

    Returns ``MISSING`` when the value has no local representation, for
    example a formula whose result type is unknown.
    """
    if "type" not in prop:
        prop = {**prop, "type": field.type}
    return _extract(prop, _vocabulary_for(prop["type"], field))


def dehydrate_value(field: SchemaField, value: Any) -> dict | None:
    """Build the Notion property value payload for a local value.

    Returns ``None`` for field types Notion does not accept writes for; the
    caller should leave them out of the payload.
    """
    field_type = field.type

    if field_type in ("title", "rich_text"):
        return {"type": field_type, field_type: to_rich_text(value)}

    if field_type == "select":
        if not value:
            return {"type": "select", "select": None}
        name = build_vocabulary(field.options).to_name(value)
        return {"type": "select", "select": {"name": name}}

    if field_type == "multi_select":
        vocabulary = build_vocabulary(field.options)
        return {
            "type": "multi_select",
            "multi_select": [{"name": vocabulary.to_name(key)} for key in value or []],
        }

    if field_type == "status":
        if not value:
            return {"type": "status", "status": None}
        name = build_status_vocabulary(field.groups).to_name(value)
        return {"type": "status", "status": {"name": name}}

    if field_type == "date":
        if isinstance(value, (date, datetime)):
            value = {"start": value.isoformat()}
        return {"type": "date", "date": value}

    if field_type in ("number", "checkbox", "url", "email", "phone_number"):
        return {"type": field_type, field_type: value}

    if field_type == "relation":
        # has_more is always False: relations are written in full
        return {
            "type": "relation",
            "relation": [{"id": related_id} for related_id in value or []],
            "has_more": False,
        }

    if field_type == "people":
        return {
            "type": "people",
            "people": [{"object": "user", "id": user_id} for user_id in value or []],
        }

    return None
