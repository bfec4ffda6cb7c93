from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from ..deps import get_provider_factory
from ..errors import ProviderError
from ..services.aggregator import aggregate
from ..services.normalize import normalize_google_response
from ..services.providers import ProviderFactory
from ..services.providers.google import SearchOptions


logger = logging.getLogger(__name__)

router = APIRouter()

MISSING_Q = 'Query parameter "q" is required'
MISSING_BODY_QUERY = "Query is required in request body"


def _int(value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _options_from_params(params: Dict[str, Any]) -> Optional[SearchOptions]:
    query = params.get("q") or params.get("query")
    if not query:
        return None
    return SearchOptions(
        query=query,
        start_index=_int(params.get("start"), 1),
        count=_int(params.get("num"), 10),
        site_search=params.get("siteSearch"),
        date_restrict=params.get("dateRestrict"),
        sort=params.get("sort"),
        gl=params.get("gl"),
        lr=params.get("lr"),
        safe=params.get("safe") or "active",
    )


def _options_from_body(body: Dict[str, Any]) -> Optional[SearchOptions]:
    query = body.get("query")
    if not query or not isinstance(query, str):
        return None
    return SearchOptions(
        query=query,
        start_index=_int(body.get("startIndex"), 1),
        count=_int(body.get("count"), 10),
        site_search=body.get("siteSearch"),
        date_restrict=body.get("dateRestrict"),
        sort=body.get("sort"),
        gl=body.get("gl"),
        lr=body.get("lr"),
        safe=body.get("safe") or "active",
    )


async def _read_body(request: Request) -> Dict[str, Any]:
    try:
        body = await request.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


async def _run(endpoint: str, options: SearchOptions, providers: ProviderFactory) -> JSONResponse:
    def fetch():
        client = providers.create("google")
        if endpoint == "security_search":
            return client.search_security_content(options)
        return client.search(options)

    try:
        result = await aggregate(endpoint, fetch, normalize_google_response)
    except ProviderError as exc:
        logger.error("%s failed: %s", endpoint, exc.message)
        return JSONResponse({"error": exc.message}, status_code=500)
    return JSONResponse(result.data)


@router.get("")
async def search(request: Request, providers: ProviderFactory = Depends(get_provider_factory)) -> JSONResponse:
    options = _options_from_params(dict(request.query_params))
    if options is None:
        return JSONResponse({"error": MISSING_Q}, status_code=400)
    return await _run("generic_search", options, providers)


@router.post("")
async def search_post(request: Request, providers: ProviderFactory = Depends(get_provider_factory)) -> JSONResponse:
    options = _options_from_body(await _read_body(request))
    if options is None:
        return JSONResponse({"error": MISSING_BODY_QUERY}, status_code=400)
    return await _run("generic_search", options, providers)


@router.get("/security")
async def security_search(request: Request, providers: ProviderFactory = Depends(get_provider_factory)) -> JSONResponse:
    options = _options_from_params(dict(request.query_params))
    if options is None:
        return JSONResponse({"error": MISSING_Q}, status_code=400)
    return await _run("security_search", options, providers)


@router.post("/security")
async def security_search_post(request: Request, providers: ProviderFactory = Depends(get_provider_factory)) -> JSONResponse:
    options = _options_from_body(await _read_body(request))
    if options is None:
        return JSONResponse({"error": MISSING_BODY_QUERY}, status_code=400)
    return await _run("security_search", options, providers)
