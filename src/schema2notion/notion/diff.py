"""Schema diff for schema2notion.

Compares two schemas and lists the changes needed to turn one into the other.
Fields of the target schema are paired with fields of the source schema in
priority order:

  1. By ID: same Notion property ID
  2. By key: same schema key
  3. By label: same display label
  4. By singleton type: e.g. the one title property every data source has

Each source field can be paired at most once. Unpaired target fields are
added, unpaired source fields are removed, and pairs that differ in key,
label or type are modified.
"""

import logging

from schema2notion.models import (
    SINGLETON_TYPES,
    AddedDiff,
    ModifiedDiff,
    RemovedDiff,
    Schema,
    SchemaDiff,
    SchemaField,
)

logger = logging.getLogger(__name__)


def diff_schema(from_schema: Schema, to_schema: Schema) -> list[SchemaDiff]:
    """Compute the differences between two schemas.

    Args:
        from_schema: The original schema (usually the remote one).
        to_schema: The desired schema.

    Returns:
        Added and modified entries in ``to_schema`` order, followed by
        removed entries in ``from_schema`` order.

    Example:
        >>> diff_schema({"a": title("T", id="x")}, {"b": title("T", id="x")})
        [ModifiedDiff(key='b', from_key='a', id='x', changes=['key'], ...)]
    """
    # Lookup indexes over fields not yet paired; entries are dropped once used
    unmatched: dict[str, SchemaField] = dict(from_schema)
    by_id: dict[str, str] = {}
    by_label: dict[str, str] = {}
    by_type: dict[str, str] = {}
    for key, field in from_schema.items():
        if field.id:
            by_id[field.id] = key
        by_label[field.label] = key
        if field.type in SINGLETON_TYPES:
            by_type[field.type] = key

    def find_match(to_key: str, to_field: SchemaField) -> str | None:
        if to_field.id and by_id.get(to_field.id) in unmatched:
            return by_id[to_field.id]
        if to_key in unmatched:
            return to_key
        if by_label.get(to_field.label) in unmatched:
            return by_label[to_field.label]
        if to_field.type in SINGLETON_TYPES and by_type.get(to_field.type) in unmatched:
            return by_type[to_field.type]
        return None

    diffs: list[SchemaDiff] = []
    for to_key, to_field in to_schema.items():
        from_key = find_match(to_key, to_field)
        if from_key is None:
            diffs.append(AddedDiff(key=to_key, field=to_field))
            continue

        from_field = unmatched.pop(from_key)
        changes = []
        if from_key != to_key:
            changes.append("key")
        if from_field.label != to_field.label:
            changes.append("label")
        if from_field.type != to_field.type:
            changes.append("type")
        if not changes:
            continue

        diffs.append(
            ModifiedDiff(
                key=to_key,
                from_field=from_field,
                to_field=to_field,
                changes=changes,
                from_key=from_key if from_key != to_key else None,
                id=from_field.id,
            )
        )

    for key, field in unmatched.items():
        diffs.append(RemovedDiff(key=key, field=field))

    logger.debug(
        f"Schema diff: {len(diffs)} change(s) "
        f"({len(from_schema)} source field(s), {len(to_schema)} target field(s))"
    )
    return diffs
