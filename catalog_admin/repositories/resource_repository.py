"""
Repository layer for one REST resource (``categories`` or ``products``).
All HTTP for the resource's list/create/update/delete endpoints lives here.
"""
import logging
from typing import Any

import httpx

from catalog_admin.core.http import read_json, send_request
from catalog_admin.core.logging_config import log_api_timing

logger = logging.getLogger(__name__)


class ResourceRepository:
    """Backend access for a single resource collection."""

    def __init__(self, client: httpx.AsyncClient, resource: str) -> None:
        """Store the HTTP client and the collection path segment."""
        logger.trace("Initializing ResourceRepository resource=%s", resource)
        self._client = client
        self.resource = resource

    def __repr__(self) -> str:
        return f"ResourceRepository({self.resource})"

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    @log_api_timing
    async def fetch_all(self) -> Any:
        """Return the raw list envelope; shape checking is the caller's job."""
        logger.trace("Fetching %s", self.resource)
        response = await send_request(self._client, "GET", f"/{self.resource}")
        return read_json(response)

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    @log_api_timing
    async def create(self, payload: dict[str, Any]) -> Any:
        logger.info("Creating %s record", self.resource)
        response = await send_request(
            self._client, "POST", f"/{self.resource}", json=payload
        )
        return read_json(response)

    @log_api_timing
    async def update(self, entity_id: Any, payload: dict[str, Any]) -> Any:
        logger.info("Updating %s record id=%s", self.resource, entity_id)
        response = await send_request(
            self._client, "PUT", f"/{self.resource}/{entity_id}", json=payload
        )
        return read_json(response)

    @log_api_timing
    async def delete(self, entity_id: Any) -> None:
        logger.info("Deleting %s record id=%s", self.resource, entity_id)
        await send_request(self._client, "DELETE", f"/{self.resource}/{entity_id}")
