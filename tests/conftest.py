"""Shared fixtures: an in-memory stand-in for the Notion API."""

import itertools
from collections.abc import AsyncIterator

import pytest


def _plain(spans: list[dict]) -> str:
    return "".join(span.get("plain_text") or span["text"]["content"] for span in spans)


def _matches(page: dict, query_filter: dict | None) -> bool:
    """Evaluate the subset of Notion filters the syncer builds."""
    if not query_filter:
        return True
    if "and" in query_filter:
        return all(_matches(page, f) for f in query_filter["and"])

    prop = page["properties"].get(query_filter["property"])
    if prop is None:
        return False
    condition_type = next(k for k in query_filter if k != "property")
    condition = query_filter[condition_type]

    if condition_type in ("title", "rich_text"):
        value = prop.get(prop["type"])
        if isinstance(value, list):
            value = _plain(value)
        return (value or "") == condition["equals"]
    if condition_type in ("select", "status"):
        option = prop.get(condition_type) or {}
        return option.get("name") == condition["equals"]
    if condition_type == "relation":
        return condition["contains"] in [r["id"] for r in prop.get("relation") or []]
    return prop.get(condition_type) == condition["equals"]


class FakeAdapter:
    """Keeps one data source and its pages in memory and records every call."""

    def __init__(self, data_source: dict, pages: list[dict] | None = None):
        self.data_source = data_source
        self.pages = list(pages or [])
        self.calls: list[tuple] = []
        self.fail_on: set[str] = set()
        self._ids = itertools.count(1)

    async def get_data_source(self, data_source_id: str) -> dict:
        self.calls.append(("get_data_source", data_source_id))
        return self.data_source

    async def update_data_source(self, data_source_id: str, payload: dict) -> dict:
        self.calls.append(("update_data_source", data_source_id, payload))
        properties = dict(self.data_source["properties"])
        for label, definition in payload["properties"].items():
            if definition is None:
                properties.pop(label, None)
                continue
            name = definition.get("name", label)
            properties.pop(label, None)
            properties[name] = {**definition, "name": name, "id": definition.get("id", name)}
        self.data_source = {**self.data_source, "properties": properties}
        return self.data_source

    async def query_data_source(
        self, data_source_id: str, query: dict | None = None
    ) -> AsyncIterator[dict]:
        self.calls.append(("query_data_source", data_source_id, query))
        query = query or {}
        matching = [page for page in self.pages if _matches(page, query.get("filter"))]
        for page in matching[: query.get("page_size")]:
            yield page

    async def create_page(self, payload: dict) -> dict:
        self.calls.append(("create_page", payload))
        title = next(
            (_plain(p["title"]) for p in payload["properties"].values() if p["type"] == "title"), ""
        )
        if title in self.fail_on:
            raise RuntimeError(f"rejected {title}")
        page = {"id": f"page-{next(self._ids)}", "properties": payload["properties"]}
        self.pages.append(page)
        return page

    async def update_page(self, page_id: str, payload: dict) -> dict:
        self.calls.append(("update_page", page_id, payload))
        page = next(page for page in self.pages if page["id"] == page_id)
        page["properties"] = {**page["properties"], **payload["properties"]}
        return page

    def calls_to(self, method: str) -> list[tuple]:
        return [call for call in self.calls if call[0] == method]


@pytest.fixture
def data_source() -> dict:
    return {
        "object": "data_source",
        "id": "ds1",
        "properties": {
            "Name": {"id": "title", "name": "Name", "type": "title", "title": {}},
            "Email": {"id": "e%3A1", "name": "Email", "type": "email", "email": {}},
            "Old Notes": {"id": "n1", "name": "Old Notes", "type": "rich_text", "rich_text": {}},
        },
    }


@pytest.fixture
def adapter(data_source) -> FakeAdapter:
    return FakeAdapter(data_source)
