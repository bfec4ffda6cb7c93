from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Any, Dict, List, Literal, Optional


SEVERITIES = ("low", "medium", "high", "critical")
Severity = Literal["low", "medium", "high", "critical"]


def coerce_severity(value: Any, default: str = "medium") -> str:
    lowered = str(value).strip().lower() if value is not None else ""
    return lowered if lowered in SEVERITIES else default


class ThreatItem(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    severity: Severity = "medium"
    description: str
    first_seen: str = Field(alias="firstSeen")
    emoji: Optional[str] = None
    source: Optional[str] = None
    ip: Optional[str] = None
    classification: Optional[str] = None
    tags: Optional[List[str]] = None
    malware_families: Optional[List[str]] = Field(default=None, alias="malwareFamilies")
    indicators: Optional[int] = None  # raw indicator count of the pulse
    detection_ratio: Optional[str] = Field(default=None, alias="detectionRatio")
    sha256: Optional[str] = None

    @field_validator("severity", mode="before")
    @classmethod
    def _severity(cls, v: Any) -> str:
        return coerce_severity(v)


class ThreatsResponse(BaseModel):
    threats: List[ThreatItem] = Field(default_factory=list)
    source: Optional[str] = None
    timestamp: Optional[str] = None
    error: Optional[str] = None


class ThreatStat(BaseModel):
    query: str
    count: int = 0
    stats: Dict[str, Any] = Field(default_factory=dict)


class ThreatStatsResponse(BaseModel):
    stats: List[ThreatStat]
    timestamp: str


class VulnerabilityItem(BaseModel):
    id: str
    title: str
    severity: Severity = "medium"
    cvss: float = 0.0
    description: str
    affected: str
    status: str
    emoji: Optional[str] = None

    @field_validator("severity", mode="before")
    @classmethod
    def _severity(cls, v: Any) -> str:
        return coerce_severity(v)
