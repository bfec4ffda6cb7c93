import asyncio
import logging

import httpx
import pytest

from cybervault.config import Settings
from cybervault.errors import ConfigurationError, TransformError, UpstreamError
from cybervault.services.providers import ProviderFactory
from cybervault.utils.logs import configure_logging


SHODAN_KEY = "shodan-secret-123"
GOOGLE = {"GOOGLE_CUSTOM_SEARCH_API_KEY": "g-secret-456", "GOOGLE_CUSTOM_SEARCH_ENGINE_ID": "engine-1"}


def _shodan(handler):
    settings = Settings(_env_file=None, SHODAN_API_KEY=SHODAN_KEY)
    return ProviderFactory(settings, transport=httpx.MockTransport(handler)).create("shodan")


def _raise(exc_type):
    def handler(request):
        raise exc_type("boom", request=request)
    return handler


def test_timeout_maps_to_504():
    client = _shodan(_raise(httpx.ReadTimeout))
    with pytest.raises(UpstreamError) as info:
        asyncio.run(client.host_search("nginx"))
    assert info.value.status == 504
    assert info.value.provider == "shodan"


def test_transport_error_maps_to_502():
    client = _shodan(_raise(httpx.ConnectError))
    with pytest.raises(UpstreamError) as info:
        asyncio.run(client.host_search("nginx"))
    assert info.value.status == 502


def test_non_json_body_is_transform_error():
    client = _shodan(lambda request: httpx.Response(200, text="<html>maintenance</html>"))
    with pytest.raises(TransformError):
        asyncio.run(client.host_search("nginx"))


def test_redirect_is_upstream_error_with_status():
    client = _shodan(lambda request: httpx.Response(302, headers={"Location": "https://example.test/login"}))
    with pytest.raises(UpstreamError) as info:
        asyncio.run(client.host_search("nginx"))
    assert info.value.status == 302


def test_missing_key_fails_at_construction():
    with pytest.raises(ConfigurationError):
        ProviderFactory(Settings(_env_file=None)).create("shodan")


def test_none_params_are_dropped():
    seen = {}

    def handler(request):
        seen.update(request.url.params)
        return httpx.Response(200, json={"matches": []})

    asyncio.run(_shodan(handler).host_search("nginx", facets=None))
    assert "facets" not in seen
    assert "limit" not in seen
    assert seen["key"] == SHODAN_KEY


def test_credentials_never_logged(caplog):
    configure_logging("DEBUG")
    caplog.set_level(logging.DEBUG, logger="cybervault")
    client = _shodan(lambda request: httpx.Response(401))
    with pytest.raises(UpstreamError):
        asyncio.run(client.host_search("nginx"))
    assert "shodan GET /shodan/host/search" in caplog.text
    assert "shodan responded 401" in caplog.text
    assert SHODAN_KEY not in caplog.text


def test_timeout_on_fallback_endpoint_serves_alert(make_client):
    res = make_client({"OTX_API_KEY": "otx-key"}, _raise(httpx.ReadTimeout)).get("/api/otx/threats")
    assert res.status_code == 200
    assert res.json()["threats"][0]["source"] == "System Alert"


def test_transport_error_on_search_is_500(make_client, caplog):
    caplog.set_level(logging.DEBUG, logger="cybervault")
    res = make_client(GOOGLE, _raise(httpx.ConnectError)).get("/api/search", params={"q": "botnet"})
    assert res.status_code == 500
    assert "request failed" in res.json()["error"]
    assert "g-secret-456" not in caplog.text


def test_non_json_on_search_is_500(make_client):
    handler = lambda request: httpx.Response(200, text="<html>")
    res = make_client(GOOGLE, handler).get("/api/search", params={"q": "botnet"})
    assert res.status_code == 500
    assert "non-JSON" in res.json()["error"]
