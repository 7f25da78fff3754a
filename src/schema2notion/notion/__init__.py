"""Notion-facing codecs: values, records, property definitions and filters."""

from schema2notion.notion.changes import ConflictStrategy, apply_schema_changes
from schema2notion.notion.diff import diff_schema
from schema2notion.notion.expressions import build_expression, restore_expression
from schema2notion.notion.filters import build_upsert_filter
from schema2notion.notion.records import dehydrate, hydrate
from schema2notion.notion.schema import (
    infer_schema,
    to_properties_definition,
    to_property_definition,
)
from schema2notion.notion.sync import DataSourceSyncer
from schema2notion.notion.values import dehydrate_value, hydrate_value, to_rich_text

__all__ = [
    "ConflictStrategy",
    "DataSourceSyncer",
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
    "to_rich_text",
]
