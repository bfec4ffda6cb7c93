from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Any, Literal, Optional


CLASSIFICATIONS = ("malicious", "benign", "unknown")


class IPReputation(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    ip: str
    is_noisy: bool = Field(False, alias="isNoisy")
    is_riot: bool = Field(False, alias="isRiot")
    classification: Literal["malicious", "benign", "unknown"] = "unknown"
    threat_level: str = Field(alias="threatLevel")
    last_seen: Optional[str] = Field(None, alias="lastSeen")
    spooky_description: str = Field(alias="spookyDescription")
    emoji: str
    source: str = "greynoise"
    timestamp: str

    @field_validator("classification", mode="before")
    @classmethod
    def _classification(cls, v: Any) -> str:
        lowered = str(v).strip().lower() if v is not None else ""
        return lowered if lowered in CLASSIFICATIONS else "unknown"
