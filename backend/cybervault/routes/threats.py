from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
import logging

from ..deps import get_provider_factory
from ..services import fallbacks
from ..services.aggregator import aggregate
from ..services.normalize import normalize_vt_threats
from ..services.providers import ProviderFactory
from ..utils.clock import utcnow_iso


logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("")
async def list_threats(providers: ProviderFactory = Depends(get_provider_factory)) -> JSONResponse:
    try:
        result = await aggregate(
            "virustotal_threats",
            lambda: providers.create("virustotal").recent_threat_files(),
            normalize_vt_threats,
            fallbacks.virustotal_demo_threats,
            fallback_when_empty=True,
        )
        data = [t.model_dump(by_alias=True, exclude_none=True) for t in result.data]
    except Exception as exc:  # noqa: BLE001
        logger.error("Error in threats API: %s", exc)
        return JSONResponse({"success": False, "error": "Failed to fetch threat data", "data": []}, status_code=500)
    return JSONResponse({"success": True, "data": data, "timestamp": utcnow_iso()})
