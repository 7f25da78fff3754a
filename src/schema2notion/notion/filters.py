"""Query filters that identify a record by its unique properties."""

from collections.abc import Mapping, Sequence
from typing import Any

from schema2notion.exceptions import MissingSchemaFieldError, UnsupportedFilterTypeError
from schema2notion.models import Schema, SelectField, StatusField
from schema2notion.notion.options import build_status_vocabulary, build_vocabulary

TEXT_TYPES = frozenset({"rich_text", "email", "phone_number", "url"})

UNSUPPORTED_TYPES = frozenset(
    {
        "multi_select",
        "date",
        "people",
        "files",
        "formula",
        "rollup",
        "created_time",
        "created_by",
        "last_edited_time",
        "last_edited_by",
    }
)


def _to_filter_string(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (str, int, float)):
        return str(value)
    return ""


def _to_filter_number(value: Any, prefixed: bool = False) -> int | float | None:
    """Best-effort numeric coercion; None when the value is not numeric."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value
    if prefixed and isinstance(value, str):
        # Unique IDs may carry their prefix, e.g. "TASK-42"
        value = value.rsplit("-", 1)[-1].strip()
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return int(number) if number.is_integer() else number


def build_upsert_filter(
    schema: Schema,
    unique_keys: Sequence[str],
    data: Mapping[str, Any],
) -> dict:
    """Build a query filter matching records with the same unique property values.

    A single key yields a bare property filter; several keys are combined
    with ``and`` in the order given.

    Raises:
        MissingSchemaFieldError: a key is not declared in the schema.
        UnsupportedFilterTypeError: a key's field type cannot be matched on.

    Example:
        >>> build_upsert_filter(schema, ["email"], {"email": "jane@example.com"})
        {'property': 'Email', 'rich_text': {'equals': 'jane@example.com'}}
    """
    filters = []
    for key in unique_keys:
        field = schema.get(key)
        if field is None:
            raise MissingSchemaFieldError(key)

        value = data.get(key)
        field_type = field.type

        if field_type in UNSUPPORTED_TYPES:
            raise UnsupportedFilterTypeError(field_type, key)

        if field_type == "title":
            condition = {"title": {"equals": _to_filter_string(value)}}
        elif field_type in TEXT_TYPES:
            condition = {"rich_text": {"equals": _to_filter_string(value)}}
        elif field_type == "number":
            condition = {"number": {"equals": _to_filter_number(value)}}
        elif field_type == "unique_id":
            condition = {"number": {"equals": _to_filter_number(value, prefixed=True)}}
        elif field_type == "checkbox":
            condition = {"checkbox": {"equals": bool(value)}}
        elif isinstance(field, SelectField):
            name = build_vocabulary(field.options).to_name(_to_filter_string(value))
            condition = {"select": {"equals": name}}
        elif isinstance(field, StatusField):
            name = build_status_vocabulary(field.groups).to_name(_to_filter_string(value))
            condition = {"status": {"equals": name}}
        else:
            # relation: local values are lists of page IDs, match on the first
            if isinstance(value, (list, tuple)):
                value = value[0] if value else None
            condition = {"relation": {"contains": _to_filter_string(value)}}

        filters.append({"property": field.label, **condition})

    return filters[0] if len(filters) == 1 else {"and": filters}
