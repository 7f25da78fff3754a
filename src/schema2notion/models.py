"""Data models for schema2notion."""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter


class _Missing:
    """Marker for a value that is absent, as opposed to an explicit ``None``."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING = _Missing()

# Types that may only appear once per schema
SINGLETON_TYPES = frozenset({"title"})


# --- Options ---


class SelectOption(BaseModel):
    """A select/status option with an optional display label and color."""

    id: str | None = None
    label: str | None = None
    color: str | None = None


SelectOptions = Union[list[str], dict[str, Union[str, SelectOption]]]


class StatusGroup(BaseModel):
    """A labeled, colored group of status options."""

    id: str | None = None
    label: str
    color: str = "default"
    options: SelectOptions = Field(default_factory=list)


# --- Fields ---


class _BaseField(BaseModel):
    label: str
    id: str | None = Field(default=None, description="Notion property ID")


class TitleField(_BaseField):
    type: Literal["title"] = "title"


class RichTextField(_BaseField):
    type: Literal["rich_text"] = "rich_text"


class NumberField(_BaseField):
    type: Literal["number"] = "number"
    format: str | None = None


class SelectField(_BaseField):
    type: Literal["select"] = "select"
    options: SelectOptions | None = None


class MultiSelectField(_BaseField):
    type: Literal["multi_select"] = "multi_select"
    options: SelectOptions | None = None


class StatusField(_BaseField):
    type: Literal["status"] = "status"
    groups: dict[str, StatusGroup] | None = None


class DateField(_BaseField):
    type: Literal["date"] = "date"


class PeopleField(_BaseField):
    type: Literal["people"] = "people"


class FilesField(_BaseField):
    type: Literal["files"] = "files"


class CheckboxField(_BaseField):
    type: Literal["checkbox"] = "checkbox"


class UrlField(_BaseField):
    type: Literal["url"] = "url"


class EmailField(_BaseField):
    type: Literal["email"] = "email"


class PhoneNumberField(_BaseField):
    type: Literal["phone_number"] = "phone_number"


class FormulaField(_BaseField):
    type: Literal["formula"] = "formula"
    expression: str


class RelationField(_BaseField):
    """Relation to another data source.

    Dual relations also carry the synced (mirror) property on the target side.
    """

    type: Literal["relation"] = "relation"
    data_source_id: str
    relation_type: Literal["single_property", "dual_property"] = "single_property"
    synced_property_id: str | None = None
    synced_property_name: str | None = None


class RollupField(_BaseField):
    type: Literal["rollup"] = "rollup"
    relation_property: str
    rollup_property: str
    function: str


class CreatedTimeField(_BaseField):
    type: Literal["created_time"] = "created_time"


class CreatedByField(_BaseField):
    type: Literal["created_by"] = "created_by"


class LastEditedTimeField(_BaseField):
    type: Literal["last_edited_time"] = "last_edited_time"


class LastEditedByField(_BaseField):
    type: Literal["last_edited_by"] = "last_edited_by"


class UniqueIdField(_BaseField):
    type: Literal["unique_id"] = "unique_id"
    prefix: str | None = None


SchemaField = Annotated[
    Union[
        TitleField,
        RichTextField,
        NumberField,
        SelectField,
        MultiSelectField,
        StatusField,
        DateField,
        PeopleField,
        FilesField,
        CheckboxField,
        UrlField,
        EmailField,
        PhoneNumberField,
        FormulaField,
        RelationField,
        RollupField,
        CreatedTimeField,
        CreatedByField,
        LastEditedTimeField,
        LastEditedByField,
        UniqueIdField,
    ],
    Field(discriminator="type"),
]

# Local key -> field, in declaration order
Schema = dict[str, SchemaField]

schema_adapter: TypeAdapter[Schema] = TypeAdapter(Schema)


# --- Diffs ---


class AddedDiff(BaseModel):
    """Field present only in the target schema."""

    type: Literal["added"] = "added"
    key: str
    field: SchemaField


class RemovedDiff(BaseModel):
    """Field present only in the source schema."""

    type: Literal["removed"] = "removed"
    key: str
    field: SchemaField


class ModifiedDiff(BaseModel):
    """Same logical field in both schemas, with a different key, label or type."""

    type: Literal["modified"] = "modified"
    key: str
    from_field: SchemaField
    to_field: SchemaField
    changes: list[Literal["key", "label", "type"]]
    from_key: str | None = None
    id: str | None = None


SchemaDiff = Annotated[
    Union[AddedDiff, RemovedDiff, ModifiedDiff],
    Field(discriminator="type"),
]

diffs_adapter: TypeAdapter[list[SchemaDiff]] = TypeAdapter(list[SchemaDiff])


# --- Sync ---


class SyncStats(BaseModel):
    """Statistics from a batch upsert."""

    created: int = 0
    updated: int = 0
    skipped: int = 0
    errors: list[str] = Field(default_factory=list)
