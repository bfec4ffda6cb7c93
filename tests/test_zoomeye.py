import httpx
import pytest


ZE = {"ZOOMEYE_API_KEY": "ze-test-key"}

HOST_PAYLOAD = {
    "total": 1,
    "available": 1,
    "matches": [{
        "ip": "203.0.113.7",
        "timestamp": "2024-02-02T00:00:00",
        "portinfo": {"port": 8080, "service": "http", "banner": "C" * 400, "version": "1.2"},
        "geoinfo": {"country": {"names": {"en": "Japan"}}, "city": {"names": {}}, "organization": "Example KK"},
    }],
}


@pytest.mark.parametrize("body", [{}, {"query": "   "}, {"query": 5}])
def test_search_requires_query(make_client, body):
    res = make_client(ZE).post("/api/zoomeye/search", json=body)
    assert res.status_code == 400
    assert res.json()["success"] is False


def test_search_rejects_unknown_type(make_client):
    res = make_client(ZE).post("/api/zoomeye/search", json={"query": "nginx", "type": "dns"})
    assert res.status_code == 400
    assert res.json()["error"] == 'Invalid search type. Must be either "host" or "web".'


def test_host_search_normalizes_matches(make_client):
    seen = {}

    def handler(request):
        seen["path"] = request.url.path
        seen["key"] = request.headers.get("API-KEY")
        return httpx.Response(200, json=HOST_PAYLOAD)

    res = make_client(ZE, handler).post("/api/zoomeye/search", json={"query": "app:nginx", "page": 2})
    assert res.status_code == 200
    body = res.json()
    assert seen == {"path": "/host/search", "key": "ze-test-key"}
    assert body["success"] is True
    assert body["metadata"]["type"] == "host"
    assert body["metadata"]["page"] == 2
    match = body["data"]["matches"][0]
    assert match["port"] == 8080
    assert len(match["banner"]) == 200
    assert match["location"]["country"] == "Japan"
    assert match["location"]["city"] == "Unknown"
    assert match["organization"] == "Example KK"


def test_web_search_uses_web_endpoint(make_client):
    def handler(request):
        assert request.url.path == "/web/search"
        return httpx.Response(200, json={"total": 1, "matches": [{"ip": ["192.0.2.1"], "webapp": [{"name": "WordPress"}]}]})

    body = make_client(ZE, handler).post("/api/zoomeye/search", json={"query": "wordpress", "type": "web"}).json()
    match = body["data"]["matches"][0]
    assert match["ip"] == "192.0.2.1"
    assert match["port"] == 80
    assert match["protocol"] == "HTTP"
    assert match["service"] == "WordPress"


def test_search_failure_is_500_with_prefix(make_client):
    handler = lambda request: httpx.Response(402, text="no credits")
    res = make_client(ZE, handler).post("/api/zoomeye/search", json={"query": "nginx"})
    assert res.status_code == 500
    assert res.json()["error"].startswith("ZoomEye host search error: 402")


def test_search_without_key_is_500(make_client):
    res = make_client().post("/api/zoomeye/search", json={"query": "nginx"})
    assert res.status_code == 500
    assert "ZOOMEYE_API_KEY" in res.json()["error"]


def test_user_info(make_client):
    handler = lambda request: httpx.Response(
        200, json={"plan": "developer", "resources": {"search": 10}, "quota": {}, "email": "a@example.test", "token": "t"}
    )
    body = make_client(ZE, handler).get("/api/zoomeye/user").json()
    assert body["success"] is True
    assert body["data"] == {"plan": "developer", "resources": {"search": 10}, "quota": {}, "email": "a@example.test"}
    assert body["metadata"]["service"] == "ZoomEye API"


def test_account_status_hides_raw_payload(make_client):
    handler = lambda request: httpx.Response(200, json={"plan": "free", "token": "secret"})
    body = make_client(ZE, handler).get("/api/zoomeye/search").json()
    assert body["data"]["plan"] == "free"
    assert "token" not in body["data"]


def test_user_info_failure(make_client):
    handler = lambda request: httpx.Response(401)
    res = make_client(ZE, handler).get("/api/zoomeye/user")
    assert res.status_code == 500
    assert res.json()["error"].startswith("ZoomEye user info error:")


@pytest.mark.parametrize("facets, sent", [(5, "5"), (["app", "os"], "app,os"), ("", None)])
def test_search_coerces_facets(make_client, facets, sent):
    seen = {}

    def handler(request):
        seen["facets"] = request.url.params.get("facets")
        return httpx.Response(200, json=HOST_PAYLOAD)

    res = make_client(ZE, handler).post("/api/zoomeye/search", json={"query": "nginx", "facets": facets})
    assert res.status_code == 200
    assert res.json()["success"] is True
    assert seen["facets"] == sent
