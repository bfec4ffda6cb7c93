from __future__ import annotations

from typing import Any, Dict, Optional

import httpx

from ...errors import ProviderError
from . import provider_name
from .base import ProviderClient


@provider_name("zoomeye")
class ZoomEyeClient(ProviderClient):
    display_name = "ZoomEye"

    def missing_key_message(self) -> str:
        return "ZoomEye API key not configured. Please set ZOOMEYE_API_KEY environment variable."

    def auth_headers(self) -> Dict[str, str]:
        return {"API-KEY": self.api_key}

    def error_message(self, response: httpx.Response) -> str:
        return f"{response.status_code} {response.reason_phrase}"

    async def _search(self, path: str, label: str, query: str, page: int, facets: Optional[str]) -> Dict[str, Any]:
        params: Dict[str, Any] = {"query": query, "page": page}
        if facets:
            params["facets"] = facets
        try:
            return await self.get_json(path, params)
        except ProviderError as exc:
            exc.message = f"ZoomEye {label} search error: {exc.message}"
            raise

    async def search_hosts(self, query: str, page: int = 1, facets: Optional[str] = None) -> Dict[str, Any]:
        return await self._search("/host/search", "host", query, page, facets)

    async def search_web(self, query: str, page: int = 1, facets: Optional[str] = None) -> Dict[str, Any]:
        return await self._search("/web/search", "web", query, page, facets)

    async def user_info(self) -> Dict[str, Any]:
        try:
            return await self.get_json("/user")
        except ProviderError as exc:
            exc.message = f"ZoomEye user info error: {exc.message}"
            raise
