from __future__ import annotations

from typing import Any, Dict, List

from fastapi import APIRouter, Depends

from ..config import Settings, get_settings
from ..services.catalog import MINIMUM_REQUIRED_PROVIDERS, PROVIDER_DIRECTORY


router = APIRouter()


@router.get("")
async def api_status(settings: Settings = Depends(get_settings)) -> Dict[str, Any]:
    """Which providers have credentials, without revealing the credentials themselves."""
    providers: List[Dict[str, Any]] = []
    for key, info in PROVIDER_DIRECTORY.items():
        config = settings.provider_config(key)
        providers.append({
            "id": key,
            **info,
            "baseUrl": config.base_url,
            "isConfigured": config.api_key_present,
        })
    configured = [p for p in providers if p["isConfigured"]]
    total = len(providers)
    return {
        "configured": len(configured),
        "unconfigured": total - len(configured),
        "total": total,
        "percentage": round(len(configured) / total * 100) if total else 0,
        "hasMinimumRequired": all(settings.is_configured(name) for name in MINIMUM_REQUIRED_PROVIDERS),
        "providers": providers,
    }
