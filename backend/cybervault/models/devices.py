from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional


class IoTDevice(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    emoji: str
    ip: str
    port: int
    org: str
    location: str
    product: str
    last_scan: str = Field(alias="lastScan")
    status: str
    vulnerabilities: int = 0
    risk: str


class IoTScanResponse(BaseModel):
    devices: List[IoTDevice] = Field(default_factory=list)
    timestamp: Optional[str] = None
    source: Optional[str] = None
    error: Optional[str] = None
    fallback: Optional[bool] = None
