from __future__ import annotations

from typing import Any, Dict, Optional

import httpx

from . import provider_name
from .base import ProviderClient


@provider_name("shodan")
class ShodanClient(ProviderClient):
    display_name = "Shodan"

    def missing_key_message(self) -> str:
        return "Shodan API key not configured"

    def auth_params(self) -> Dict[str, str]:
        return {"key": self.api_key}

    def error_message(self, response: httpx.Response) -> str:
        if response.status_code == 401:
            return "Invalid Shodan API key"
        if response.status_code == 403:
            return "Shodan API access forbidden - check your subscription"
        if response.status_code == 429:
            return "Shodan API rate limit exceeded"
        return f"Shodan API error: {response.reason_phrase}"

    async def host_search(self, query: str, page: int = 1, facets: Optional[str] = None, limit: Optional[int] = None) -> Dict[str, Any]:
        params: Dict[str, Any] = {"query": query, "page": page}
        if facets:
            params["facets"] = facets
        if limit is not None:
            params["limit"] = limit
        return await self.get_json("/shodan/host/search", params)
