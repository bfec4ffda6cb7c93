from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from ..deps import get_provider_factory
from ..errors import ProviderError
from ..models.search import ZoomEyeSearchRequest
from ..services.aggregator import aggregate
from ..services.normalize import normalize_zoomeye_hosts, normalize_zoomeye_user, normalize_zoomeye_web
from ..services.providers import ProviderFactory
from ..utils.clock import utcnow_iso


logger = logging.getLogger(__name__)

router = APIRouter()


def _page(value: Any) -> int:
    try:
        return int(str(value)) or 1
    except ValueError:
        return 1


def _facets(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    if isinstance(value, (list, tuple)):
        return ",".join(str(v) for v in value)
    return str(value)


@router.post("/search")
async def search(request: Request, providers: ProviderFactory = Depends(get_provider_factory)) -> JSONResponse:
    try:
        body = await request.json()
    except ValueError:
        body = {}
    req = ZoomEyeSearchRequest.model_validate(body if isinstance(body, dict) else {})

    if not isinstance(req.query, str) or not req.query.strip():
        return JSONResponse(
            {"error": "Invalid query parameter. The spirits require a proper incantation.", "success": False},
            status_code=400,
        )
    if req.type not in ("host", "web"):
        return JSONResponse(
            {"error": 'Invalid search type. Must be either "host" or "web".', "success": False},
            status_code=400,
        )

    query = req.query.strip()
    page = _page(req.page)
    facets = _facets(req.facets)

    def fetch():
        client = providers.create("zoomeye")
        if req.type == "host":
            return client.search_hosts(query, page=page, facets=facets)
        return client.search_web(query, page=page, facets=facets)

    normalize = normalize_zoomeye_hosts if req.type == "host" else normalize_zoomeye_web
    try:
        result = await aggregate("zoomeye_search", fetch, normalize)
    except ProviderError as exc:
        logger.error("ZoomEye API error: %s", exc.message)
        return JSONResponse(
            {
                "error": exc.message,
                "success": False,
                "message": "👻 The spirits are not responding. Please try your incantation again.",
            },
            status_code=500,
        )

    results = result.data
    return JSONResponse({
        "success": True,
        "data": results.model_dump(),
        "message": f'🔮 The digital séance has revealed {len(results.matches)} spectral entities for your query: "{req.query}"',
        "metadata": {"query": req.query, "page": req.page, "type": req.type, "timestamp": utcnow_iso()},
    })


@router.get("/search")
async def search_account(providers: ProviderFactory = Depends(get_provider_factory)) -> JSONResponse:
    try:
        result = await aggregate("zoomeye_user", lambda: providers.create("zoomeye").user_info(), normalize_zoomeye_user)
    except ProviderError as exc:
        logger.error("ZoomEye user info error: %s", exc.message)
        return JSONResponse(
            {
                "error": exc.message,
                "success": False,
                "message": "🦇 Unable to establish connection with the digital realm.",
            },
            status_code=500,
        )
    return JSONResponse({
        "success": True,
        "data": result.data,
        "message": "🎃 Salem Cyber Vault ZoomEye integration is active and ready for digital divination.",
    })


@router.get("/user")
async def user(providers: ProviderFactory = Depends(get_provider_factory)) -> JSONResponse:
    try:
        result = await aggregate("zoomeye_user", lambda: providers.create("zoomeye").user_info(), normalize_zoomeye_user)
    except ProviderError as exc:
        logger.error("ZoomEye user info error: %s", exc.message)
        return JSONResponse(
            {
                "error": exc.message,
                "success": False,
                "message": "🦇 Unable to establish connection with the ZoomEye spiritual realm.",
            },
            status_code=500,
        )
    return JSONResponse({
        "success": True,
        "data": result.data,
        "message": "🎃 Salem Cyber Vault ZoomEye connection established successfully.",
        "metadata": {"timestamp": utcnow_iso(), "service": "ZoomEye API"},
    })
