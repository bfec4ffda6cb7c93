from typing import Callable, Dict, Optional

import httpx
import pytest
from fastapi.testclient import TestClient

from cybervault.config import Settings, get_settings
from cybervault.deps import get_provider_factory
from cybervault.main import app
from cybervault.services.providers import ProviderFactory


KEY_ENV = (
    "GREYNOISE_API_KEY",
    "OTX_API_KEY",
    "SHODAN_API_KEY",
    "ZOOMEYE_API_KEY",
    "VT_API_KEY",
    "GOOGLE_CUSTOM_SEARCH_API_KEY",
    "GOOGLE_CUSTOM_SEARCH_ENGINE_ID",
)

Handler = Callable[[httpx.Request], httpx.Response]


def unexpected(request: httpx.Request) -> httpx.Response:
    raise AssertionError(f"unexpected outbound call to {request.url}")


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in KEY_ENV:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def make_client():
    """Build a TestClient whose providers talk to an in-process handler instead of the network."""
    def build(keys: Optional[Dict[str, str]] = None, handler: Handler = unexpected) -> TestClient:
        settings = Settings(_env_file=None, **(keys or {}))
        transport = httpx.MockTransport(handler)
        app.dependency_overrides[get_settings] = lambda: settings
        app.dependency_overrides[get_provider_factory] = lambda: ProviderFactory(settings, transport=transport)
        return TestClient(app)

    yield build
    app.dependency_overrides.clear()
