"""Tests for schema2notion.notion.sync -- DataSourceSyncer against an in-memory adapter."""

import pytest

from schema2notion import fields
from schema2notion.exceptions import MissingSchemaError, SchemaConflictError
from schema2notion.models import EmailField, RichTextField, TitleField
from schema2notion.notion.sync import DataSourceSyncer


# --- Helpers ---


def _schema():
    return {"name": fields.title("Name"), "email": fields.email("Email")}


async def _syncer(adapter, schema=None) -> DataSourceSyncer:
    return await DataSourceSyncer.load(adapter, "ds1", schema)


# --- Loading ---


class TestLoad:
    @pytest.mark.asyncio
    async def test_load_fetches_data_source(self, adapter):
        syncer = await _syncer(adapter)
        assert syncer.id == "ds1"
        assert adapter.calls_to("get_data_source") == [("get_data_source", "ds1")]
        assert syncer.schema is None

    @pytest.mark.asyncio
    async def test_infer_schema(self, adapter):
        syncer = await _syncer(adapter)
        assert syncer.infer_schema() == {
            "name": TitleField(label="Name", id="title"),
            "email": EmailField(label="Email", id="e:1"),
            "old_notes": RichTextField(label="Old Notes", id="n1"),
        }


# --- Schema sync ---


class TestEnsureSchema:
    @pytest.mark.asyncio
    async def test_up_to_date_makes_no_update(self, adapter):
        syncer = await _syncer(adapter)
        synced = await syncer.ensure_schema(syncer.infer_schema())
        assert adapter.calls_to("update_data_source") == []
        assert synced.schema == syncer.infer_schema()

    @pytest.mark.asyncio
    async def test_merge_adds_and_keeps_remote_fields(self, adapter):
        syncer = await _syncer(adapter)
        schema = {**_schema(), "priority": fields.select("Priority", ["Low", "High"])}
        synced = await syncer.ensure_schema(schema)

        [(_, data_source_id, payload)] = adapter.calls_to("update_data_source")
        assert data_source_id == "ds1"
        assert list(payload["properties"]) == ["Priority"]
        assert payload["properties"]["Priority"]["type"] == "select"

        assert synced.schema is schema
        assert "Priority" in synced.properties
        assert "Old Notes" in synced.properties

    @pytest.mark.asyncio
    async def test_merge_with_only_removed_fields_skips_update(self, adapter):
        syncer = await _syncer(adapter)
        synced = await syncer.ensure_schema(_schema())
        assert adapter.calls_to("update_data_source") == []
        assert synced.schema == _schema()

    @pytest.mark.asyncio
    async def test_overwrite_deletes_remote_fields(self, adapter):
        syncer = await _syncer(adapter)
        synced = await syncer.ensure_schema(_schema(), "overwrite")

        [(_, _, payload)] = adapter.calls_to("update_data_source")
        assert payload == {"properties": {"Old Notes": None}}
        assert "Old Notes" not in synced.properties

    @pytest.mark.asyncio
    async def test_strict_raises_without_update(self, adapter):
        syncer = await _syncer(adapter)
        with pytest.raises(SchemaConflictError) as exc_info:
            await syncer.ensure_schema(_schema(), "strict")

        assert exc_info.value.keys == ["old_notes"]
        assert adapter.calls_to("update_data_source") == []

    @pytest.mark.asyncio
    async def test_label_rename_sends_new_name(self, adapter):
        syncer = await _syncer(adapter)
        schema = {**_schema(), "old_notes": fields.text("Notes")}
        synced = await syncer.ensure_schema(schema)

        [(_, _, payload)] = adapter.calls_to("update_data_source")
        assert payload["properties"] == {
            "Old Notes": {"type": "rich_text", "rich_text": {}, "id": "n1", "name": "Notes"}
        }
        assert "Notes" in synced.properties
        assert "Old Notes" not in synced.properties


# --- Records ---


class TestRecords:
    @pytest.mark.asyncio
    async def test_find_requires_schema(self, adapter):
        syncer = await _syncer(adapter)
        with pytest.raises(MissingSchemaError):
            async for _ in syncer.find():
                pass

    @pytest.mark.asyncio
    async def test_insert_requires_schema(self, adapter):
        syncer = await _syncer(adapter)
        with pytest.raises(MissingSchemaError):
            await syncer.insert({"name": "Jane"})

    @pytest.mark.asyncio
    async def test_insert_targets_data_source(self, adapter):
        syncer = await _syncer(adapter, _schema())
        await syncer.insert({"name": "Jane", "email": "jane@example.com"})

        [(_, payload)] = adapter.calls_to("create_page")
        assert payload["parent"] == {"type": "data_source_id", "data_source_id": "ds1"}
        assert payload["properties"]["Email"] == {"type": "email", "email": "jane@example.com"}

    @pytest.mark.asyncio
    async def test_find_hydrates_records(self, adapter):
        syncer = await _syncer(adapter, _schema())
        await syncer.insert({"name": "Jane", "email": "jane@example.com"})
        await syncer.insert({"name": "John", "email": None})

        records = [record async for record in syncer.find()]
        assert records == [
            {"name": "Jane", "email": "jane@example.com"},
            {"name": "John", "email": None},
        ]

    @pytest.mark.asyncio
    async def test_find_one(self, adapter):
        syncer = await _syncer(adapter, _schema())
        assert await syncer.find_one() is None

        await syncer.insert({"name": "Jane"})
        await syncer.insert({"name": "John"})
        assert await syncer.find_one() == {"name": "Jane"}

        [*_, (_, _, query)] = adapter.calls_to("query_data_source")
        assert query["page_size"] == 1


class TestUpsert:
    @pytest.mark.asyncio
    async def test_creates_then_updates(self, adapter):
        syncer = await _syncer(adapter, _schema())

        page, action = await syncer.upsert(["email"], {"name": "Jane", "email": "j@example.com"})
        assert action == "created"

        updated, action = await syncer.upsert(["email"], {"name": "Jane Doe", "email": "j@example.com"})
        assert action == "updated"
        assert updated["id"] == page["id"]
        assert await syncer.find_one() == {"name": "Jane Doe", "email": "j@example.com"}

        [(_, page_id, _)] = adapter.calls_to("update_page")
        assert page_id == page["id"]

    @pytest.mark.asyncio
    async def test_lookup_uses_upsert_filter(self, adapter):
        syncer = await _syncer(adapter, _schema())
        await syncer.upsert(["name", "email"], {"name": "Jane", "email": "j@example.com"})

        [(_, _, query)] = adapter.calls_to("query_data_source")
        assert query == {
            "filter": {
                "and": [
                    {"property": "Name", "title": {"equals": "Jane"}},
                    {"property": "Email", "rich_text": {"equals": "j@example.com"}},
                ]
            },
            "page_size": 1,
        }

    @pytest.mark.asyncio
    async def test_upsert_many_collects_stats(self, adapter):
        syncer = await _syncer(adapter, _schema())
        adapter.fail_on.add("Bad")

        stats = await syncer.upsert_many(
            [
                {"name": "A", "email": "a@example.com"},
                {"name": "B", "email": "b@example.com"},
                {"unknown": "nothing to write"},
                {"name": "A2", "email": "a@example.com"},
                {"name": "Bad", "email": "bad@example.com"},
            ],
            unique_by=["email"],
        )

        assert stats.created == 2
        assert stats.updated == 1
        assert stats.skipped == 1
        assert stats.errors == ["Failed to upsert record 5: rejected Bad"]
        assert len(adapter.pages) == 2

    @pytest.mark.asyncio
    async def test_upsert_many_without_schema(self, adapter):
        syncer = await _syncer(adapter)
        with pytest.raises(MissingSchemaError):
            await syncer.upsert_many([{"name": "A"}], unique_by=["name"])

    @pytest.mark.asyncio
    async def test_upsert_many_continues_after_unwritable_record(self, adapter):
        schema = {**_schema(), "tags": fields.multi_select("Tags")}
        syncer = await _syncer(adapter, schema)

        stats = await syncer.upsert_many(
            [{"name": "A"}, {"name": "B", "tags": 5}, {"name": "C"}],
            unique_by=["name"],
        )

        assert stats.created == 2
        assert stats.skipped == 0
        assert len(stats.errors) == 1
        assert stats.errors[0].startswith("Failed to upsert record 2:")
        written = [record async for record in syncer.find()]
        assert [record["name"] for record in written] == ["A", "C"]
