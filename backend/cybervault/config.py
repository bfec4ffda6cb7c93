from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


SEARCH_PROVIDERS = ("shodan", "zoomeye", "google")


@dataclass(frozen=True)
class ProviderConfig:
    api_key_present: bool
    base_url: str
    timeout_seconds: float


def is_valid_api_key(key: Optional[str]) -> bool:
    # Template values such as "your_shodan_key" count as absent
    if not key or not key.strip():
        return False
    return "your_" not in key and "YOUR_" not in key


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore", populate_by_name=True)

    greynoise_api_key: Optional[str] = Field(None, alias="GREYNOISE_API_KEY")
    otx_api_key: Optional[str] = Field(None, alias="OTX_API_KEY")
    shodan_api_key: Optional[str] = Field(None, alias="SHODAN_API_KEY")
    zoomeye_api_key: Optional[str] = Field(None, alias="ZOOMEYE_API_KEY")
    virustotal_api_key: Optional[str] = Field(None, alias="VT_API_KEY")
    google_api_key: Optional[str] = Field(None, alias="GOOGLE_CUSTOM_SEARCH_API_KEY")
    google_search_engine_id: Optional[str] = Field(None, alias="GOOGLE_CUSTOM_SEARCH_ENGINE_ID")

    greynoise_base_url: str = Field("https://api.greynoise.io/v3", alias="GREYNOISE_BASE_URL")
    otx_base_url: str = Field("https://otx.alienvault.com/api/v1", alias="OTX_BASE_URL")
    shodan_base_url: str = Field("https://api.shodan.io", alias="SHODAN_BASE_URL")
    zoomeye_base_url: str = Field("https://api.zoomeye.org", alias="ZOOMEYE_BASE_URL")
    virustotal_base_url: str = Field("https://www.virustotal.com/api/v3", alias="VT_BASE_URL")
    google_base_url: str = Field("https://www.googleapis.com/customsearch/v1", alias="GOOGLE_CUSTOM_SEARCH_BASE_URL")

    request_timeout_seconds: float = Field(15.0, alias="REQUEST_TIMEOUT_SECONDS")
    search_timeout_seconds: float = Field(10.0, alias="SEARCH_TIMEOUT_SECONDS")

    cors_origins: List[str] = Field(default_factory=lambda: ["*"], alias="CORS_ORIGINS")
    host: str = Field("0.0.0.0", alias="HOST")
    port: int = Field(8000, alias="PORT")
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    def api_key_for(self, provider: str) -> Optional[str]:
        key = getattr(self, f"{provider}_api_key", None)
        return key if is_valid_api_key(key) else None

    def is_configured(self, provider: str) -> bool:
        if provider == "google":
            return bool(self.api_key_for("google")) and is_valid_api_key(self.google_search_engine_id)
        return self.api_key_for(provider) is not None

    def provider_config(self, provider: str) -> ProviderConfig:
        timeout = self.search_timeout_seconds if provider in SEARCH_PROVIDERS else self.request_timeout_seconds
        return ProviderConfig(
            api_key_present=self.is_configured(provider),
            base_url=getattr(self, f"{provider}_base_url"),
            timeout_seconds=timeout,
        )

    def provider_configs(self) -> Dict[str, ProviderConfig]:
        return {name: self.provider_config(name) for name in ("greynoise", "otx", "shodan", "zoomeye", "virustotal", "google")}


settings = Settings()


def get_settings() -> Settings:
    return settings
