"""Typed schemas and records for Notion data sources."""

from schema2notion.exceptions import (
    MissingSchemaError,
    MissingSchemaFieldError,
    Schema2NotionError,
    SchemaConflictError,
    UnsupportedFilterTypeError,
)
from schema2notion.models import (
    MISSING,
    AddedDiff,
    ModifiedDiff,
    RemovedDiff,
    Schema,
    SchemaDiff,
    SchemaField,
)
from schema2notion.notion import (
    apply_schema_changes,
    build_expression,
    build_upsert_filter,
    dehydrate,
    dehydrate_value,
    diff_schema,
    hydrate,
    hydrate_value,
    infer_schema,
    restore_expression,
    to_properties_definition,
    to_property_definition,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Models
    "MISSING",
    "AddedDiff",
    "ModifiedDiff",
    "RemovedDiff",
    "Schema",
    "SchemaDiff",
    "SchemaField",
    # Errors
    "MissingSchemaError",
    "MissingSchemaFieldError",
    "Schema2NotionError",
    "SchemaConflictError",
    "UnsupportedFilterTypeError",
    # Codecs
    "apply_schema_changes",
    "build_expression",
    "build_upsert_filter",
    "dehydrate",
    "dehydrate_value",
    "diff_schema",
    "hydrate",
    "hydrate_value",
    "infer_schema",
    "restore_expression",
    "to_properties_definition",
    "to_property_definition",
]
