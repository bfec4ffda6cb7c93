from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, Optional

import httpx

from ...config import Settings, is_valid_api_key
from ...errors import ConfigurationError, ProviderError
from . import provider_name
from .base import ProviderClient


SECURITY_TERMS = "(cybersecurity OR security OR vulnerability OR threat OR malware OR phishing)"
MAX_RESULTS_PER_REQUEST = 10


@dataclass(frozen=True)
class SearchOptions:
    query: str
    start_index: int = 1
    count: int = 10
    site_search: Optional[str] = None
    date_restrict: Optional[str] = None
    sort: Optional[str] = None
    gl: Optional[str] = None
    lr: Optional[str] = None
    safe: str = "active"


@provider_name("google")
class GoogleSearchClient(ProviderClient):
    display_name = "Google Custom Search"

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
        super().__init__(settings, transport=transport)
        if not is_valid_api_key(settings.google_search_engine_id):
            raise ConfigurationError("GOOGLE_CUSTOM_SEARCH_ENGINE_ID environment variable is required", provider=self.name)
        self.search_engine_id = settings.google_search_engine_id

    def missing_key_message(self) -> str:
        return "GOOGLE_CUSTOM_SEARCH_API_KEY environment variable is required"

    def auth_params(self) -> Dict[str, str]:
        return {"key": self.api_key, "cx": self.search_engine_id}

    def error_message(self, response: httpx.Response) -> str:
        try:
            detail = (response.json().get("error") or {}).get("message") or "Unknown error"
        except (ValueError, AttributeError):
            detail = "Unknown error"
        return f"Google Custom Search API error: {response.status_code} - {detail}"

    async def search(self, options: SearchOptions) -> Dict[str, Any]:
        params: Dict[str, Any] = {
            "q": options.query,
            "start": options.start_index,
            # the API rejects num > 10
            "num": min(options.count, MAX_RESULTS_PER_REQUEST),
            "safe": options.safe,
            "siteSearch": options.site_search,
            "dateRestrict": options.date_restrict,
            "sort": options.sort,
            "gl": options.gl,
            "lr": options.lr,
        }
        try:
            return await self.get_json("", params)
        except ProviderError as exc:
            exc.message = f"Failed to perform Google Custom Search: {exc.message}"
            raise

    async def search_security_content(self, options: SearchOptions) -> Dict[str, Any]:
        enhanced = replace(options, query=f"{options.query} {SECURITY_TERMS}", safe="active")
        return await self.search(enhanced)
