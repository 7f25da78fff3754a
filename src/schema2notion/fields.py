"""Shorthands for declaring schema fields.

Example:
    schema = {
        "name": title("Name"),
        "priority": select("Priority", {"low": "Low", "high": {"label": "High", "color": "red"}}),
        "total": formula("Total", 'prop("quantity") * prop("unit_price")'),
    }
"""

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
    SelectField,
    SelectOptions,
    StatusField,
    StatusGroup,
    TitleField,
    UniqueIdField,
    UrlField,
)


def title(label: str, id: str | None = None) -> TitleField:
    """Title field; every data source has exactly one."""
    return TitleField(label=label, id=id)


def text(label: str, id: str | None = None) -> RichTextField:
    """Rich text field; values are plain strings."""
    return RichTextField(label=label, id=id)


def number(label: str, format: str = "number", id: str | None = None) -> NumberField:
    """Number field; ``format`` is a Notion number format such as "dollar"."""
    return NumberField(label=label, format=format, id=id)


def select(label: str, options: SelectOptions | None = None, id: str | None = None) -> SelectField:
    """Single select field; values are option keys."""
    return SelectField(label=label, options=options, id=id)


def multi_select(
    label: str, options: SelectOptions | None = None, id: str | None = None
) -> MultiSelectField:
    """Multi-select field; values are lists of option keys."""
    return MultiSelectField(label=label, options=options, id=id)


def status(
    label: str, groups: dict[str, StatusGroup | dict] | None = None, id: str | None = None
) -> StatusField:
    """Status field.

    Groups are only used to translate option keys; Notion does not accept
    status options or groups in property definitions.
    """
    return StatusField(label=label, groups=groups, id=id)


def date(label: str, id: str | None = None) -> DateField:
    """Date field; values are date objects or {"start", "end"} dicts."""
    return DateField(label=label, id=id)


def people(label: str, id: str | None = None) -> PeopleField:
    """People field; values are lists of user IDs."""
    return PeopleField(label=label, id=id)


def files(label: str, id: str | None = None) -> FilesField:
    """Files field; read-only, values are file URLs."""
    return FilesField(label=label, id=id)


def checkbox(label: str, id: str | None = None) -> CheckboxField:
    """Checkbox field."""
    return CheckboxField(label=label, id=id)


def url(label: str, id: str | None = None) -> UrlField:
    """URL field."""
    return UrlField(label=label, id=id)


def email(label: str, id: str | None = None) -> EmailField:
    """Email field."""
    return EmailField(label=label, id=id)


def phone(label: str, id: str | None = None) -> PhoneNumberField:
    """Phone number field."""
    return PhoneNumberField(label=label, id=id)


def formula(label: str, expression: str, id: str | None = None) -> FormulaField:
    """Formula field; reference other fields with ``prop("key")``."""
    return FormulaField(label=label, expression=expression, id=id)


def relation(
    label: str,
    data_source_id: str,
    single: bool = True,
    synced_property_id: str | None = None,
    synced_property_name: str | None = None,
    id: str | None = None,
) -> RelationField:
    """Relation to another data source.

    Pass ``single=False`` for a dual relation, mirrored on the target data source.
    """
    return RelationField(
        label=label,
        data_source_id=data_source_id,
        relation_type="single_property" if single else "dual_property",
        synced_property_id=synced_property_id,
        synced_property_name=synced_property_name,
        id=id,
    )


def rollup(
    label: str,
    relation_property: str,
    rollup_property: str,
    function: str,
    id: str | None = None,
) -> RollupField:
    """Rollup of ``rollup_property`` across the pages of ``relation_property``."""
    return RollupField(
        label=label,
        relation_property=relation_property,
        rollup_property=rollup_property,
        function=function,
        id=id,
    )


def created_time(label: str, id: str | None = None) -> CreatedTimeField:
    """Created time field; read-only."""
    return CreatedTimeField(label=label, id=id)


def created_by(label: str, id: str | None = None) -> CreatedByField:
    """Created by field; read-only, values are user IDs."""
    return CreatedByField(label=label, id=id)


def last_edited_time(label: str, id: str | None = None) -> LastEditedTimeField:
    """Last edited time field; read-only."""
    return LastEditedTimeField(label=label, id=id)


def last_edited_by(label: str, id: str | None = None) -> LastEditedByField:
    """Last edited by field; read-only, values are user IDs."""
    return LastEditedByField(label=label, id=id)


def unique_id(label: str, prefix: str | None = None, id: str | None = None) -> UniqueIdField:
    """Auto-incremented ID field; read-only, values look like "PREFIX-42"."""
    return UniqueIdField(label=label, prefix=prefix, id=id)
