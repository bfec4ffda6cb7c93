from pydantic import BaseModel, Field, field_validator
from typing import Any, List

from .threats import Severity, coerce_severity


class IndicatorItem(BaseModel):
    indicator: str
    type: str  # IPv4, domain, hostname, FileHash-SHA256, ... or "system"
    description: str
    created: str
    severity: Severity = "medium"
    source: str

    @field_validator("severity", mode="before")
    @classmethod
    def _severity(cls, v: Any) -> str:
        return coerce_severity(v)


class IndicatorsResponse(BaseModel):
    indicators: List[IndicatorItem] = Field(default_factory=list)
