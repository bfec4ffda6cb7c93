from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Generic, List, Optional, Sequence, TypeVar

from ..errors import ProviderError, TransformError


logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


class ErrorPolicy(str, Enum):
    SURFACE = "surface"    # provider failures reach the caller as an error status
    FALLBACK = "fallback"  # provider failures are replaced by fallback records and a 200


ENDPOINT_POLICIES: Dict[str, ErrorPolicy] = {
    "ip_reputation": ErrorPolicy.SURFACE,
    "greynoise_threats": ErrorPolicy.FALLBACK,
    "otx_indicators": ErrorPolicy.FALLBACK,
    "otx_threats": ErrorPolicy.FALLBACK,
    "generic_search": ErrorPolicy.SURFACE,
    "security_search": ErrorPolicy.SURFACE,
    "host_search": ErrorPolicy.SURFACE,
    "host_search_paged": ErrorPolicy.SURFACE,
    "zoomeye_search": ErrorPolicy.SURFACE,
    "zoomeye_user": ErrorPolicy.SURFACE,
    "virustotal_threats": ErrorPolicy.FALLBACK,
    "virustotal_vulnerabilities": ErrorPolicy.FALLBACK,
}


@dataclass
class Aggregated(Generic[T]):
    data: T
    live: bool
    error: Optional[ProviderError] = None


def _as_provider_error(exc: Exception) -> ProviderError:
    if isinstance(exc, ProviderError):
        return exc
    return ProviderError(str(exc) or exc.__class__.__name__, status=500)


async def aggregate(
    endpoint: str,
    fetch: Callable[[], Awaitable[R]],
    normalize: Callable[[R], T],
    fallback: Optional[Callable[[], T]] = None,
    fallback_when_empty: bool = False,
) -> Aggregated[T]:
    """Fetch once, normalize, and apply the endpoint's error policy on failure.

    SURFACE endpoints re-raise the failure as a ``ProviderError`` for the
    route to turn into a status code. FALLBACK endpoints get the supplier's
    records instead. Errors raised while normalizing count as provider
    failures (``TransformError``).
    """
    policy = ENDPOINT_POLICIES[endpoint]
    try:
        raw = await fetch()
        try:
            data = normalize(raw)
        except Exception as exc:  # noqa: BLE001
            raise TransformError(f"Unexpected {endpoint} payload: {exc.__class__.__name__}: {exc}")
    except Exception as exc:  # noqa: BLE001
        error = _as_provider_error(exc)
        if policy is ErrorPolicy.SURFACE or fallback is None:
            if error is exc:
                raise
            raise error from exc
        logger.warning("%s: falling back after provider failure: %s", endpoint, error.message)
        return Aggregated(data=fallback(), live=False, error=error)

    if fallback_when_empty and fallback is not None and not data:
        logger.info("%s: provider returned no records, using fallback", endpoint)
        return Aggregated(data=fallback(), live=False)
    return Aggregated(data=data, live=True)


async def gather_isolated(calls: Sequence[Callable[[], Awaitable[T]]], defaults: Sequence[Any]) -> List[Any]:
    """Run every call concurrently; a failing call yields its default instead of failing the batch."""
    results = await asyncio.gather(*(call() for call in calls), return_exceptions=True)
    out: List[Any] = []
    for result, default in zip(results, defaults):
        if isinstance(result, BaseException):
            if not isinstance(result, Exception):
                raise result
            logger.warning("fan-out call failed, using default: %s", result)
            out.append(default)
        else:
            out.append(result)
    return out
