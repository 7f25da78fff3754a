"""Conversion between local schemas and Notion property definitions."""

import logging
import re
import unicodedata
from collections.abc import Mapping
from urllib.parse import unquote

from schema2notion.models import (
    CheckboxField,
    CreatedByField,
    CreatedTimeField,
    DateField,
    EmailField,
    FilesField,
    FormulaField,
    LastEditedByField,
    LastEditedTimeField,
    MultiSelectField,
    NumberField,
    PeopleField,
    PhoneNumberField,
    RelationField,
    RichTextField,
    RollupField,
    Schema,
    SchemaField,
    SelectField,
    SelectOption,
    SelectOptions,
    StatusField,
    StatusGroup,
    TitleField,
    UniqueIdField,
    UrlField,
)
from schema2notion.notion.expressions import build_expression, restore_expression
from schema2notion.notion.options import iter_options

logger = logging.getLogger(__name__)

# Property types whose definition body is always empty
SIMPLE_TYPES: dict[str, type] = {
    "title": TitleField,
    "rich_text": RichTextField,
    "date": DateField,
    "people": PeopleField,
    "files": FilesField,
    "checkbox": CheckboxField,
    "url": UrlField,
    "email": EmailField,
    "phone_number": PhoneNumberField,
    "created_time": CreatedTimeField,
    "created_by": CreatedByField,
    "last_edited_time": LastEditedTimeField,
    "last_edited_by": LastEditedByField,
}

_WORD_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")
_NON_ALNUM = re.compile(r"[^A-Za-z0-9]+")


def to_key(label: str) -> str:
    """Fold a Notion label into a snake_case schema key.

    "Due Date" -> "due_date", "isActive" -> "is_active", "Créé le" -> "cree_le"
    """
    ascii_label = unicodedata.normalize("NFKD", label).encode("ascii", "ignore").decode()
    words = _NON_ALNUM.split(_WORD_BOUNDARY.sub(" ", ascii_label))
    key = "_".join(word.lower() for word in words if word)
    return key or label


# --- Schema -> Notion ---


def _select_options(options: SelectOptions | None) -> list[dict]:
    return [
        {"id": "", "name": name, "color": color or "default"}
        for _, name, color in iter_options(options)
    ]


def _definition_body(field: SchemaField, schema: Schema | None) -> dict:
    if field.type in SIMPLE_TYPES:
        return {}
    if isinstance(field, NumberField):
        return {"format": field.format or "number"}
    if isinstance(field, (SelectField, MultiSelectField)):
        return {"options": _select_options(field.options)}
    if isinstance(field, StatusField):
        # Notion treats status options and groups as read-only
        return {}
    if isinstance(field, FormulaField):
        expression = field.expression
        if schema is not None:
            expression = build_expression(expression, schema)
        return {"expression": expression}
    if isinstance(field, UniqueIdField):
        return {"prefix": field.prefix}
    if isinstance(field, RelationField):
        if field.relation_type == "dual_property":
            return {
                "data_source_id": field.data_source_id,
                "type": "dual_property",
                "dual_property": {
                    "synced_property_id": field.synced_property_id,
                    "synced_property_name": field.synced_property_name,
                },
            }
        return {
            "data_source_id": field.data_source_id,
            "type": "single_property",
            "single_property": {},
        }
    if isinstance(field, RollupField):
        return {
            "relation_property_name": field.relation_property,
            "rollup_property_name": field.rollup_property,
            "function": field.function,
        }
    raise TypeError(f"Unsupported field type: {field.type}")


def to_property_definition(field: SchemaField, schema: Schema | None = None) -> dict:
    """Convert a schema field into a Notion property definition.

    When ``schema`` is given, formula expressions written against schema keys
    are rewritten to reference property labels.
    """
    definition: dict = {"type": field.type, field.type: _definition_body(field, schema)}
    if field.id:
        definition["id"] = field.id
    return definition


def to_properties_definition(schema: Schema) -> dict[str, dict]:
    """Convert a schema into Notion property definitions keyed by label."""
    return {field.label: to_property_definition(field, schema) for field in schema.values()}


# --- Notion -> Schema ---


def _schema_options(options: list[dict]) -> SelectOptions:
    if not options:
        return []
    return {
        to_key(option["name"]): SelectOption(
            id=unquote(option.get("id") or ""),
            label=option["name"],
            color=option.get("color"),
        )
        for option in options
    }


def _schema_groups(options: list[dict], groups: list[dict]) -> dict[str, StatusGroup]:
    options_by_id = {option["id"]: option for option in options}
    result: dict[str, StatusGroup] = {}
    for group in groups:
        group_options: dict[str, SelectOption] = {}
        for option_id in group.get("option_ids", []):
            option = options_by_id.get(option_id)
            if option is None:
                continue
            group_options[to_key(option["name"])] = SelectOption(
                id=unquote(option["id"]),
                label=option["name"],
                color=option.get("color"),
            )
        result[to_key(group["name"])] = StatusGroup(
            id=unquote(group.get("id") or ""),
            label=group["name"],
            color=group.get("color") or "default",
            options=group_options,
        )
    return result


def to_schema_field(definition: dict) -> SchemaField | None:
    """Convert a Notion property definition into a schema field.

    Returns None for property types that have no schema counterpart.
    """
    prop_type = definition.get("type")
    label = definition["name"]
    field_id = unquote(definition.get("id") or "") or None
    body = definition.get(prop_type) or {}

    if prop_type in SIMPLE_TYPES:
        return SIMPLE_TYPES[prop_type](label=label, id=field_id)
    if prop_type == "number":
        return NumberField(label=label, id=field_id, format=body.get("format"))
    if prop_type == "select":
        return SelectField(label=label, id=field_id, options=_schema_options(body.get("options", [])))
    if prop_type == "multi_select":
        return MultiSelectField(
            label=label, id=field_id, options=_schema_options(body.get("options", []))
        )
    if prop_type == "status":
        return StatusField(
            label=label,
            id=field_id,
            groups=_schema_groups(body.get("options", []), body.get("groups", [])),
        )
    if prop_type == "formula":
        return FormulaField(label=label, id=field_id, expression=body.get("expression", ""))
    if prop_type == "unique_id":
        return UniqueIdField(label=label, id=field_id, prefix=body.get("prefix"))
    if prop_type == "relation":
        data_source_id = body.get("data_source_id") or body.get("database_id", "")
        if body.get("type") == "dual_property":
            dual = body.get("dual_property") or {}
            return RelationField(
                label=label,
                id=field_id,
                data_source_id=data_source_id,
                relation_type="dual_property",
                synced_property_id=dual.get("synced_property_id"),
                synced_property_name=dual.get("synced_property_name"),
            )
        return RelationField(label=label, id=field_id, data_source_id=data_source_id)
    if prop_type == "rollup":
        return RollupField(
            label=label,
            id=field_id,
            relation_property=body.get("relation_property_name", ""),
            rollup_property=body.get("rollup_property_name", ""),
            function=body.get("function", ""),
        )
    return None


def infer_schema(properties: Mapping[str, dict], data_source_id: str | None = None) -> Schema:
    """Infer a local schema from the property definitions of a data source.

    Keys are the snake_case form of each label; if two labels fold to the same
    key the later one wins. When ``data_source_id`` is given, formula references
    to properties of that data source are restored to ``prop("key")`` form.

    Example:
        >>> infer_schema({"Due Date": {"id": "a%3Ab", "name": "Due Date", "type": "date", "date": {}}})
        {'due_date': DateField(label='Due Date', id='a:b', type='date')}
    """
    schema: Schema = {}
    for definition in properties.values():
        field = to_schema_field(definition)
        if field is None:
            logger.debug(f"Skipping unsupported property type: {definition.get('type')}")
            continue
        schema[to_key(definition["name"])] = field

    if data_source_id:
        for key, field in schema.items():
            if isinstance(field, FormulaField) and field.expression:
                expression = restore_expression(field.expression, data_source_id, schema)
                schema[key] = field.model_copy(update={"expression": expression})

    return schema
