from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends

from ..deps import get_provider_factory
from ..models.indicators import IndicatorsResponse
from ..models.threats import ThreatsResponse
from ..services import fallbacks
from ..services.aggregator import aggregate
from ..services.normalize import normalize_otx_indicators, normalize_otx_pulses
from ..services.providers import ProviderFactory
from ..services.providers.otx import DEFAULT_INDICATOR_TYPES


router = APIRouter()

MAX_INDICATORS = 500
MAX_PULSES = 100


def _limit(value: Optional[str], default: int, maximum: int) -> int:
    # unparseable values fall back to the default; both endpoints always answer 200
    try:
        parsed = int(str(value).strip())
    except (TypeError, ValueError):
        return default
    return max(1, min(parsed, maximum))


@router.get("/indicators", response_model=IndicatorsResponse)
async def indicators(
    limit: Optional[str] = None,
    providers: ProviderFactory = Depends(get_provider_factory),
) -> IndicatorsResponse:
    count = _limit(limit, 20, MAX_INDICATORS)
    result = await aggregate(
        "otx_indicators",
        lambda: providers.create("otx").recent_indicators(DEFAULT_INDICATOR_TYPES, count),
        lambda rows: normalize_otx_indicators(rows, count),
        fallbacks.otx_indicator_error,
    )
    return IndicatorsResponse(indicators=result.data)


@router.get("/threats", response_model=ThreatsResponse, response_model_exclude_none=True)
async def pulses(
    limit: Optional[str] = None,
    providers: ProviderFactory = Depends(get_provider_factory),
) -> ThreatsResponse:
    count = _limit(limit, 10, MAX_PULSES)
    result = await aggregate(
        "otx_threats",
        lambda: providers.create("otx").recent_pulses(count),
        normalize_otx_pulses,
        fallbacks.otx_pulse_error,
    )
    return ThreatsResponse(threats=result.data)
