import logging

from fastapi.testclient import TestClient

from cybervault.main import app
from cybervault.utils.logs import configure_logging


def test_startup_and_healthz(caplog):
    caplog.set_level(logging.INFO, logger="cybervault")
    with TestClient(app) as client:
        res = client.get("/healthz")
    assert res.json() == {"ok": True}
    assert "Providers configured" in caplog.text


def test_routes_are_mounted_under_api():
    paths = {route.path for route in app.routes}
    for path in (
        "/api/greynoise/ip-lookup",
        "/api/greynoise/threats",
        "/api/greynoise/stats",
        "/api/otx/indicators",
        "/api/otx/threats",
        "/api/search",
        "/api/search/security",
        "/api/shodan",
        "/api/shodan/search",
        "/api/shodan/iot-scan",
        "/api/zoomeye/search",
        "/api/zoomeye/user",
        "/api/threats",
        "/api/vulnerabilities",
        "/api/status",
    ):
        assert path in paths


def test_configure_logging_tolerates_unknown_level():
    configure_logging("chatty")
    assert logging.getLogger("cybervault").level == logging.INFO
    assert logging.getLogger("httpx").level == logging.WARNING
