"""Data source syncer: keeps a Notion data source in line with a local schema."""

import logging
from collections.abc import AsyncIterator, Mapping, Sequence
from typing import Any

from schema2notion.exceptions import MissingSchemaError
from schema2notion.models import Schema, SyncStats
from schema2notion.notion.adapter import Adapter
from schema2notion.notion.changes import ConflictStrategy, apply_schema_changes
from schema2notion.notion.diff import diff_schema
from schema2notion.notion.filters import build_upsert_filter
from schema2notion.notion.records import dehydrate, hydrate
from schema2notion.notion.schema import infer_schema

logger = logging.getLogger(__name__)


class DataSourceSyncer:
    """Reads and writes typed records in one Notion data source."""

    def __init__(
        self,
        adapter: Adapter,
        data_source: dict,
        schema: Schema | None = None,
    ):
        self.adapter = adapter
        self.data_source = data_source
        self.schema = schema

    @classmethod
    async def load(
        cls,
        adapter: Adapter,
        data_source_id: str,
        schema: Schema | None = None,
    ) -> "DataSourceSyncer":
        """Fetch a data source and wrap it."""
        data_source = await adapter.get_data_source(data_source_id)
        return cls(adapter, data_source, schema)

    @property
    def id(self) -> str:
        return self.data_source["id"]

    @property
    def properties(self) -> dict[str, dict]:
        return self.data_source.get("properties", {})

    def infer_schema(self) -> Schema:
        """Infer the local schema of the data source as it is now."""
        return infer_schema(self.properties, self.id)

    def _require_schema(self, action: str) -> Schema:
        if self.schema is None:
            raise MissingSchemaError(f"Cannot {action} records without a schema.")
        return self.schema

    async def ensure_schema(
        self,
        schema: Schema,
        strategy: ConflictStrategy = "merge",
    ) -> "DataSourceSyncer":
        """Bring the remote properties in line with ``schema``.

        Returns a syncer bound to ``schema`` and the updated data source.

        Raises:
            SchemaConflictError: strategy is "strict" and the data source has
                properties the schema does not declare.
        """
        diffs = diff_schema(self.infer_schema(), schema)
        if not diffs:
            logger.info(f"Schema of data source {self.id} is up to date")
            return DataSourceSyncer(self.adapter, self.data_source, schema)

        properties = apply_schema_changes(schema, diffs, strategy)
        if not properties:
            logger.info(f"No property updates needed for data source {self.id}")
            return DataSourceSyncer(self.adapter, self.data_source, schema)

        logger.info(f"Updating {len(properties)} properties on data source {self.id}:")
        for label, definition in properties.items():
            logger.info(f"  - {label}: {'delete' if definition is None else definition['type']}")

        data_source = await self.adapter.update_data_source(self.id, {"properties": properties})
        return DataSourceSyncer(self.adapter, data_source, schema)

    def query_pages(self, query: dict | None = None) -> AsyncIterator[dict]:
        """Iterate over raw pages of the data source."""
        return self.adapter.query_data_source(self.id, query)

    async def find(self, query: dict | None = None) -> AsyncIterator[dict[str, Any]]:
        """Iterate over hydrated records matching ``query``."""
        schema = self._require_schema("query")
        async for page in self.query_pages(query):
            yield hydrate(schema, page.get("properties", {}))

    async def find_one(self, query: dict | None = None) -> dict[str, Any] | None:
        """Return the first record matching ``query``, if any."""
        async for record in self.find({**(query or {}), "page_size": 1}):
            return record
        return None

    async def _find_one_page(self, query: dict) -> dict | None:
        async for page in self.query_pages({**query, "page_size": 1}):
            return page
        return None

    async def insert(self, data: Mapping[str, Any]) -> dict:
        """Create a page from a record."""
        schema = self._require_schema("create")
        properties = dehydrate(schema, data)
        return await self.adapter.create_page(
            {"parent": {"type": "data_source_id", "data_source_id": self.id}, "properties": properties}
        )

    async def upsert(
        self,
        unique_by: Sequence[str],
        data: Mapping[str, Any],
    ) -> tuple[dict, str]:
        """
        Update the record matching ``unique_by`` or create it.

        Returns: (page, action) where action is "created" or "updated"
        """
        schema = self._require_schema("upsert")
        query_filter = build_upsert_filter(schema, unique_by, data)
        existing = await self._find_one_page({"filter": query_filter})

        if existing:
            properties = dehydrate(schema, data)
            page = await self.adapter.update_page(existing["id"], {"properties": properties})
            return page, "updated"

        page = await self.insert(data)
        return page, "created"

    async def upsert_many(
        self,
        records: Sequence[Mapping[str, Any]],
        unique_by: Sequence[str],
    ) -> SyncStats:
        """
        Upsert a batch of records.

        A failing record is counted in ``errors`` and does not stop the batch.
        Records with nothing to write are skipped.

        Returns SyncStats with counts.
        """
        schema = self._require_schema("upsert")
        logger.info(f"\n=== Upserting {len(records)} records into {self.id} ===")
        stats = SyncStats()

        for i, record in enumerate(records, 1):
            try:
                if not dehydrate(schema, record):
                    stats.skipped += 1
                else:
                    _, action = await self.upsert(unique_by, record)
                    if action == "created":
                        stats.created += 1
                    else:
                        stats.updated += 1
            except Exception as e:
                error_msg = f"Failed to upsert record {i}: {e}"
                stats.errors.append(error_msg)
                logger.error(f"  Error: {error_msg}")

            if i % 10 == 0 or i == len(records):
                logger.info(f"Progress: {i}/{len(records)} records processed")

        logger.info("\nUpsert complete:")
        logger.info(f"  Created: {stats.created}")
        logger.info(f"  Updated: {stats.updated}")
        logger.info(f"  Skipped: {stats.skipped}")
        logger.info(f"  Errors: {len(stats.errors)}")

        return stats
