from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from ...config import Settings
from ...errors import ConfigurationError, TransformError, UpstreamError


logger = logging.getLogger(__name__)

USER_AGENT = "Salem-Cyber-Vault/1.0"


class ProviderClient:
    """One third-party API: base URL, credential injection, timeout and error mapping.

    Subclasses declare ``name`` and ``display_name`` and override
    ``auth_headers``/``auth_params`` to place the credential. Construction
    fails with ``ConfigurationError`` when the credential is missing, so an
    instance always holds a usable key.
    """

    name: str = ""
    display_name: str = ""

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
        self.settings = settings
        config = settings.provider_config(self.name)
        self.base_url = config.base_url.rstrip("/")
        self.timeout = config.timeout_seconds
        self.api_key = settings.api_key_for(self.name)
        if not self.api_key:
            raise ConfigurationError(self.missing_key_message(), provider=self.name)
        self._transport = transport

    def missing_key_message(self) -> str:
        return f"{self.name.upper()}_API_KEY environment variable is not set"

    def auth_headers(self) -> Dict[str, str]:
        return {}

    def auth_params(self) -> Dict[str, str]:
        return {}

    def error_message(self, response: httpx.Response) -> str:
        return f"{self.display_name} API error: {response.status_code} {response.reason_phrase}"

    async def get_json(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        query = {**self.auth_params(), **{k: v for k, v in (params or {}).items() if v is not None}}
        headers = {"Accept": "application/json", "User-Agent": USER_AGENT, **self.auth_headers()}
        url = f"{self.base_url}{path}"
        # path only: query strings may carry the key
        logger.debug("%s GET %s", self.name, path)
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(url, params=query, headers=headers)
        except httpx.TimeoutException:
            raise UpstreamError(f"{self.display_name} request timed out after {self.timeout:g}s", status=504, provider=self.name)
        except httpx.HTTPError as exc:
            raise UpstreamError(f"{self.display_name} request failed: {exc.__class__.__name__}", status=502, provider=self.name)

        if not response.is_success:
            message = self.error_message(response)
            logger.warning("%s responded %s for %s", self.name, response.status_code, path)
            raise UpstreamError(message, status=response.status_code, provider=self.name)
        try:
            return response.json()
        except ValueError:
            raise TransformError(f"{self.display_name} returned a non-JSON body", provider=self.name)
