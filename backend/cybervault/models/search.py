from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional


class SearchResultItem(BaseModel):
    ip: str
    port: int
    hostnames: List[str] = Field(default_factory=list)
    organization: str = "Unknown"
    os: str = "Unknown"
    country: str = "Unknown"
    city: str = "Unknown"
    timestamp: Optional[str] = None
    preview: str = ""


class HostSearchResponse(BaseModel):
    results: List[SearchResultItem] = Field(default_factory=list)
    total: int = 0
    query: str
    page: int = 1
    limit: int = 10
    note: Optional[str] = None


class ShodanLocation(BaseModel):
    country_name: str = "Unknown"
    city: str = "Unknown"


class ShodanMatch(BaseModel):
    ip: Optional[str] = None
    port: Optional[int] = None
    org: str = "Unknown"
    hostnames: List[str] = Field(default_factory=list)
    location: ShodanLocation = Field(default_factory=ShodanLocation)
    data: str = ""
    product: str = "Unknown"
    version: str = ""
    timestamp: Optional[str] = None
    transport: str = "tcp"


class ShodanSearchResponse(BaseModel):
    total: int = 0
    matches: List[ShodanMatch] = Field(default_factory=list)
    facets: Dict[str, Any] = Field(default_factory=dict)


class ZoomEyeLocation(BaseModel):
    country: str = "Unknown"
    city: str = "Unknown"
    latitude: Optional[float] = None
    longitude: Optional[float] = None


class ZoomEyeMatch(BaseModel):
    ip: str = "Unknown"
    port: int = 0
    protocol: str = "Unknown"
    banner: str = ""
    timestamp: Optional[str] = None
    location: ZoomEyeLocation = Field(default_factory=ZoomEyeLocation)
    organization: Optional[str] = None
    service: Optional[str] = None
    version: Optional[str] = None


class ZoomEyeResults(BaseModel):
    total: int = 0
    available: int = 0
    matches: List[ZoomEyeMatch] = Field(default_factory=list)


class ZoomEyeSearchRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    query: Any = None
    page: Any = 1
    type: Any = "host"
    facets: Any = None
