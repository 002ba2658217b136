import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)


class StaticResourceClient:
    """Fetch static site resources (index JSON, markdown bodies) relative to the site root."""

    def __init__(self, client: httpx.AsyncClient):
        self.client = client

    async def get(self, path: str) -> httpx.Response:
        logger.debug(f"Fetching static resource {path}")
        response = await self.client.get(path)
        response.raise_for_status()
        return response

    async def get_text(self, path: str) -> str:
        response = await self.get(path)
        return response.text

    async def get_json(self, path: str) -> Any:
        response = await self.get(path)
        return response.json()
