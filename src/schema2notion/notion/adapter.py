"""Interface to the Notion API used by the data source syncer.

schema2notion ships no HTTP client. Callers pass any object with these
coroutines, e.g. a thin wrapper over their own Notion client. Payloads and
responses are Notion API JSON objects.
"""

from collections.abc import AsyncIterator
from typing import Protocol


class Adapter(Protocol):
    """Data source and page operations against a Notion workspace."""

    async def get_data_source(self, data_source_id: str) -> dict:
        """Retrieve a data source object, including its ``properties``."""
        ...

    async def update_data_source(self, data_source_id: str, payload: dict) -> dict:
        """Update a data source and return the updated object."""
        ...

    def query_data_source(
        self, data_source_id: str, query: dict | None = None
    ) -> AsyncIterator[dict]:
        """Iterate over every page matching ``query``, across result pages."""
        ...

    async def create_page(self, payload: dict) -> dict:
        """Create a page and return it."""
        ...

    async def update_page(self, page_id: str, payload: dict) -> dict:
        """Update a page and return it."""
        ...
