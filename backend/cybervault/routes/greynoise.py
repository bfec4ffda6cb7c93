from __future__ import annotations

import logging
import re
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ..config import Settings, get_settings
from ..deps import get_provider_factory
from ..errors import ProviderError
from ..models.threats import ThreatsResponse, ThreatStatsResponse
from ..services import fallbacks
from ..services.aggregator import aggregate, gather_isolated
from ..services.catalog import THREAT_STAT_QUERIES
from ..services.normalize import normalize_greynoise_threats, normalize_ip_context, normalize_threat_stat
from ..services.providers import ProviderFactory
from ..utils.clock import utcnow_iso


logger = logging.getLogger(__name__)

router = APIRouter()

IPV4_RE = re.compile(r"^(?:(?:25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)\.){3}(?:25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)$")

RECENT_THREATS_LIMIT = 10


@router.get("/ip-lookup")
async def ip_lookup(ip: Optional[str] = None, providers: ProviderFactory = Depends(get_provider_factory)) -> JSONResponse:
    if not ip:
        return JSONResponse({"error": "IP address is required"}, status_code=400)
    if not IPV4_RE.match(ip):
        return JSONResponse({"error": "Invalid IP address format"}, status_code=400)

    try:
        result = await aggregate(
            "ip_reputation",
            lambda: providers.create("greynoise").ip_context(ip),
            lambda context: normalize_ip_context(ip, context),
        )
    except ProviderError as exc:
        logger.error("IP lookup for %s failed: %s", ip, exc.message)
        return JSONResponse(
            {"error": "Failed to commune with the digital spirits", "source": "error", "emoji": "💀"},
            status_code=500,
        )
    return JSONResponse(result.data.model_dump(by_alias=True))


@router.get("/threats", response_model=ThreatsResponse, response_model_exclude_none=True)
async def recent_threats(
    settings: Settings = Depends(get_settings),
    providers: ProviderFactory = Depends(get_provider_factory),
) -> ThreatsResponse:
    connected = False
    if settings.is_configured("greynoise"):
        try:
            connected = await providers.create("greynoise").ping()
        except ProviderError as exc:
            logger.error("GreyNoise connection check failed: %s", exc.message)
    if not connected:
        logger.warning("GreyNoise API not available, using fallback data")
        return ThreatsResponse(threats=fallbacks.greynoise_offline_threats(), source="fallback")

    result = await aggregate(
        "greynoise_threats",
        lambda: providers.create("greynoise").recent_threats(RECENT_THREATS_LIMIT),
        normalize_greynoise_threats,
        fallbacks.greynoise_error_threats,
    )
    if not result.live:
        return ThreatsResponse(threats=result.data, source="error_fallback", error="Failed to fetch threat data")
    return ThreatsResponse(threats=result.data, source="greynoise", timestamp=utcnow_iso())


@router.get("/stats", response_model=ThreatStatsResponse)
async def threat_stats(providers: ProviderFactory = Depends(get_provider_factory)) -> ThreatStatsResponse:
    def stat_call(query: str):
        async def call():
            raw = await providers.create("greynoise").stats(query)
            return normalize_threat_stat(query, raw)
        return call

    stats = await gather_isolated(
        [stat_call(q) for q in THREAT_STAT_QUERIES],
        [fallbacks.threat_stat_default(q) for q in THREAT_STAT_QUERIES],
    )
    return ThreatStatsResponse(stats=stats, timestamp=utcnow_iso())
