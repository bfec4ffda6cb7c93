from __future__ import annotations

from typing import Any, Dict, List

from . import provider_name
from .base import ProviderClient


RECENT_THREATS_QUERY = "classification:malicious last_seen:1d"


@provider_name("greynoise")
class GreyNoiseClient(ProviderClient):
    display_name = "GreyNoise"

    def missing_key_message(self) -> str:
        return "GREYNOISE_API_KEY environment variable is not set"

    def auth_headers(self) -> Dict[str, str]:
        return {"key": self.api_key}

    async def ip_context(self, ip: str) -> Dict[str, Any]:
        return await self.get_json(f"/noise/context/{ip}")

    async def ping(self) -> bool:
        data = await self.get_json("/ping")
        return isinstance(data, dict) and data.get("pong") is True

    async def recent_threats(self, limit: int = 10) -> List[Dict[str, Any]]:
        data = await self.get_json("/experimental/gnql", {"query": RECENT_THREATS_QUERY, "size": limit})
        return data.get("data") or []

    async def stats(self, query: str) -> Dict[str, Any]:
        return await self.get_json("/experimental/gnql/stats", {"query": query})
