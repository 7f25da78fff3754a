"""Turn a schema diff into a Notion property update payload."""

import logging
from typing import Literal

from schema2notion.exceptions import SchemaConflictError
from schema2notion.models import AddedDiff, ModifiedDiff, RemovedDiff, Schema, SchemaDiff
from schema2notion.notion.schema import to_property_definition

logger = logging.getLogger(__name__)

ConflictStrategy = Literal["merge", "overwrite", "strict"]


def apply_schema_changes(
    local_schema: Schema,
    diffs: list[SchemaDiff],
    strategy: ConflictStrategy = "merge",
) -> dict[str, dict | None]:
    """Build the property definitions to send to Notion for a schema diff.

    ``diffs`` must come from ``diff_schema(remote_schema, local_schema)``, so that
    added fields are created, modified fields updated, and removed fields are
    the ones that only exist remotely. What happens to those depends on
    ``strategy``:

      - merge: leave them alone
      - overwrite: delete them (the label maps to ``None``)
      - strict: raise ``SchemaConflictError`` naming every one of them

    Example:
        >>> diffs = diff_schema(remote_schema, local_schema)
        >>> apply_schema_changes(local_schema, diffs, "overwrite")
        {'Tags': {'type': 'multi_select', ...}, 'Old Column': None}
    """
    removed = [diff for diff in diffs if isinstance(diff, RemovedDiff)]
    if strategy == "strict" and removed:
        raise SchemaConflictError([diff.key for diff in removed])

    result: dict[str, dict | None] = {}

    for diff in diffs:
        if not isinstance(diff, AddedDiff):
            continue
        field = local_schema.get(diff.key)
        if field is not None:
            result[field.label] = to_property_definition(field, local_schema)

    for diff in diffs:
        if not isinstance(diff, ModifiedDiff):
            continue
        field = local_schema.get(diff.key)
        if field is None:
            continue

        definition = to_property_definition(field, local_schema)
        # Notion needs the ID to update a property in place
        property_id = diff.id or diff.from_field.id
        if property_id:
            definition["id"] = property_id

        if "label" in diff.changes:
            # Target the existing property by its old label, rename through "name"
            definition["name"] = field.label
            result[diff.from_field.label] = definition
        else:
            result[field.label] = definition

    if strategy == "overwrite":
        for diff in removed:
            result[diff.field.label] = None

    logger.debug(f"Applying {len(diffs)} schema change(s) with '{strategy}' strategy")
    return result
