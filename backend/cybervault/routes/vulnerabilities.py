from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
import logging

from ..deps import get_provider_factory
from ..services import fallbacks
from ..services.aggregator import aggregate
from ..services.normalize import normalize_vt_cves
from ..services.providers import ProviderFactory
from ..utils.clock import utcnow_iso


logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("")
async def list_vulnerabilities(providers: ProviderFactory = Depends(get_provider_factory)) -> JSONResponse:
    try:
        result = await aggregate(
            "virustotal_vulnerabilities",
            lambda: providers.create("virustotal").recent_cve_files(),
            normalize_vt_cves,
            fallbacks.virustotal_demo_cves,
            fallback_when_empty=True,
        )
        data = [v.model_dump(exclude_none=True) for v in result.data]
    except Exception as exc:  # noqa: BLE001
        logger.error("Error in vulnerabilities API: %s", exc)
        return JSONResponse({"success": False, "error": "Failed to fetch vulnerability data", "data": []}, status_code=500)
    return JSONResponse({"success": True, "data": data, "timestamp": utcnow_iso()})
