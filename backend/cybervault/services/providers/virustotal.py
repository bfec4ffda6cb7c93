from __future__ import annotations

from typing import Any, Dict, List

from . import provider_name
from .base import ProviderClient


RECENT_THREATS_QUERY = "type:file positives:10+ fs:2023-01-01+"
RECENT_CVES_QUERY = "type:file tag:cve"


@provider_name("virustotal")
class VirusTotalClient(ProviderClient):
    display_name = "VirusTotal"

    def missing_key_message(self) -> str:
        return "VirusTotal API key not configured"

    def auth_headers(self) -> Dict[str, str]:
        return {"x-apikey": self.api_key}

    async def intelligence_search(self, query: str, limit: int = 5) -> List[Dict[str, Any]]:
        data = await self.get_json("/intelligence/search", {"query": query, "descriptors_only": "true", "limit": limit})
        return data.get("data") or []

    async def recent_threat_files(self) -> List[Dict[str, Any]]:
        return await self.intelligence_search(RECENT_THREATS_QUERY)

    async def recent_cve_files(self) -> List[Dict[str, Any]]:
        return await self.intelligence_search(RECENT_CVES_QUERY)
