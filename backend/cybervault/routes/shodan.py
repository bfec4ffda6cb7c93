from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from ..config import Settings, get_settings
from ..deps import get_provider_factory
from ..errors import ProviderError, UpstreamError
from ..models.devices import IoTDevice, IoTScanResponse
from ..models.search import HostSearchResponse
from ..services import fallbacks
from ..services.aggregator import aggregate, gather_isolated
from ..services.catalog import DEVICE_PATTERNS
from ..services.normalize import normalize_iot_device, normalize_shodan_matches, normalize_shodan_results
from ..services.providers import ProviderFactory
from ..utils.clock import utcnow_iso


logger = logging.getLogger(__name__)

router = APIRouter()

MAX_QUERY_LENGTH = 1000
IOT_SCAN_PATTERNS = 3
IOT_SCAN_DEVICES = 5


def _int(value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


@router.post("")
async def host_search(
    request: Request,
    settings: Settings = Depends(get_settings),
    providers: ProviderFactory = Depends(get_provider_factory),
) -> JSONResponse:
    try:
        body = await request.json()
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        body = {}
    query = body.get("query")
    limit = _int(body.get("limit"), 10)
    page = _int(body.get("page"), 1)

    if not query:
        return JSONResponse({"error": "Query parameter is required"}, status_code=400)

    if not settings.is_configured("shodan"):
        logger.info("Shodan key not configured, serving demo data for query: %s", query)
        demo = fallbacks.shodan_demo_results()
        response = HostSearchResponse(
            results=demo[:max(limit, 0)],
            total=len(demo),
            query=str(query),
            page=page,
            limit=limit,
            note=fallbacks.SHODAN_DEMO_NOTE,
        )
        return JSONResponse(response.model_dump())

    try:
        result = await aggregate(
            "host_search",
            lambda: providers.create("shodan").host_search(str(query), page=page, limit=limit),
            lambda data: (normalize_shodan_results(data, limit), int(data.get("total") or 0)),
        )
    except UpstreamError as exc:
        logger.error("Shodan API error: %s %s", exc.status, exc.message)
        return JSONResponse({"error": "Failed to fetch data from Shodan API"}, status_code=exc.status)
    except ProviderError as exc:
        logger.error("Shodan host search failed: %s", exc.message)
        return JSONResponse({"error": "Internal server error"}, status_code=500)

    results, total = result.data
    response = HostSearchResponse(
        results=results,
        total=total,
        query=str(query),
        page=page,
        limit=limit,
    )
    return JSONResponse(response.model_dump(exclude_none=True))


@router.get("/search")
async def paged_search(
    q: str = "port:80",
    page: str = "1",
    facets: str = "",
    providers: ProviderFactory = Depends(get_provider_factory),
) -> JSONResponse:
    if len(q) > MAX_QUERY_LENGTH:
        return JSONResponse({"error": "Query too long"}, status_code=400)

    try:
        result = await aggregate(
            "host_search_paged",
            lambda: providers.create("shodan").host_search(q, page=_int(page, 1), facets=facets or None),
            normalize_shodan_matches,
        )
    except ProviderError as exc:
        logger.error("Shodan search error: %s", exc.message)
        status = 401 if "API key" in exc.message else 500
        return JSONResponse({"error": exc.message}, status_code=status)
    return JSONResponse(result.data.model_dump())


@router.get("/iot-scan", response_model=IoTScanResponse, response_model_exclude_none=True)
async def iot_scan(
    settings: Settings = Depends(get_settings),
    providers: ProviderFactory = Depends(get_provider_factory),
) -> IoTScanResponse:
    if not settings.is_configured("shodan"):
        return IoTScanResponse(error="Shodan API key not configured", devices=[], fallback=True)

    patterns = DEVICE_PATTERNS[:IOT_SCAN_PATTERNS]

    def scan(pattern: Dict[str, Any]):
        async def call() -> Optional[IoTDevice]:
            query = pattern["queries"][0]
            data = await providers.create("shodan").host_search(query, page=1)
            return normalize_iot_device(pattern, data)
        return call

    found = await gather_isolated([scan(p) for p in patterns], [None] * len(patterns))
    devices: List[IoTDevice] = [d for d in found if d is not None]
    while len(devices) < IOT_SCAN_DEVICES:
        devices.append(fallbacks.iot_placeholder_device(len(devices)))
    return IoTScanResponse(devices=devices[:IOT_SCAN_DEVICES], timestamp=utcnow_iso(), source="shodan")
