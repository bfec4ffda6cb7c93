from __future__ import annotations

from typing import Any, Dict, List, Sequence

from . import provider_name
from .base import ProviderClient


DEFAULT_INDICATOR_TYPES = ("IPv4", "domain", "hostname", "FileHash-SHA256")


@provider_name("otx")
class OTXClient(ProviderClient):
    display_name = "OTX"

    def missing_key_message(self) -> str:
        return "OTX_API_KEY environment variable is not set"

    def auth_headers(self) -> Dict[str, str]:
        return {"X-OTX-API-KEY": self.api_key}

    async def recent_pulses(self, limit: int = 10) -> List[Dict[str, Any]]:
        data = await self.get_json("/pulses/subscribed", {"limit": limit})
        return data.get("results") or []

    async def recent_indicators(self, types: Sequence[str] = DEFAULT_INDICATOR_TYPES, limit: int = 20) -> List[Dict[str, Any]]:
        data = await self.get_json("/indicators/export", {"types": ",".join(types), "limit": limit})
        return data.get("results") or []
