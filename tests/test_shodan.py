import httpx


SHODAN = {"SHODAN_API_KEY": "shodan-test-key"}


def _match(i, **extra):
    return {"ip_str": f"198.51.100.{i}", "port": 80, "org": "Example", "location": {"country_name": "Norway"}, **extra}


def test_post_requires_query(make_client):
    res = make_client(SHODAN).post("/api/shodan", json={"limit": 5})
    assert res.status_code == 400
    assert res.json() == {"error": "Query parameter is required"}


def test_post_without_key_serves_demo_data(make_client):
    res = make_client().post("/api/shodan", json={"query": "apache", "limit": 2})
    assert res.status_code == 200
    body = res.json()
    assert body["note"] == "Demo data - Shodan API key not configured"
    assert len(body["results"]) == 2
    assert body["total"] == 5
    assert body["query"] == "apache"


def test_post_normalizes_and_truncates_preview(make_client):
    seen = {}

    def handler(request):
        seen.update(request.url.params)
        return httpx.Response(200, json={"total": 42, "matches": [_match(1, data="A" * 500), _match(2)]})

    body = make_client(SHODAN, handler).post("/api/shodan", json={"query": "nginx", "limit": 1}).json()
    assert seen["key"] == "shodan-test-key"
    assert seen["query"] == "nginx"
    assert body["total"] == 42
    assert len(body["results"]) == 1
    result = body["results"][0]
    assert len(result["preview"]) == 200
    assert result["organization"] == "Example"
    assert result["city"] == "Unknown"
    assert "note" not in body


def test_post_upstream_status_is_passed_through(make_client):
    handler = lambda request: httpx.Response(429)
    res = make_client(SHODAN, handler).post("/api/shodan", json={"query": "nginx"})
    assert res.status_code == 429
    assert res.json() == {"error": "Failed to fetch data from Shodan API"}


def test_paged_search_rejects_long_query(make_client):
    res = make_client(SHODAN).get("/api/shodan/search", params={"q": "x" * 1001})
    assert res.status_code == 400
    assert res.json() == {"error": "Query too long"}


def test_paged_search_bad_key_is_401(make_client):
    handler = lambda request: httpx.Response(401)
    res = make_client(SHODAN, handler).get("/api/shodan/search", params={"q": "port:22"})
    assert res.status_code == 401
    assert res.json() == {"error": "Invalid Shodan API key"}


def test_paged_search_missing_key_is_401(make_client):
    res = make_client().get("/api/shodan/search")
    assert res.status_code == 401


def test_paged_search_other_failure_is_500(make_client):
    handler = lambda request: httpx.Response(502)
    res = make_client(SHODAN, handler).get("/api/shodan/search")
    assert res.status_code == 500


def test_paged_search_caps_and_marks_truncated_data(make_client):
    matches = [_match(i, data="short") for i in range(12)]
    matches[0]["data"] = "B" * 300

    def handler(request):
        assert request.url.params["query"] == "port:80"
        return httpx.Response(200, json={"total": 12, "matches": matches, "facets": {"country": []}})

    body = make_client(SHODAN, handler).get("/api/shodan/search").json()
    assert len(body["matches"]) == 10
    assert body["matches"][0]["data"] == "B" * 200 + "..."
    assert body["matches"][1]["data"] == "short"
    assert body["matches"][1]["transport"] == "tcp"
    assert body["facets"] == {"country": []}


def test_iot_scan_without_key(make_client):
    body = make_client().get("/api/shodan/iot-scan").json()
    assert body == {"error": "Shodan API key not configured", "devices": [], "fallback": True}


def test_iot_scan_pads_with_placeholders(make_client):
    def handler(request):
        if request.url.params["query"] == "webcam":
            return httpx.Response(200, json={"matches": [_match(9, port=23, data="default admin:admin 200 OK")]})
        if request.url.params["query"] == "thermostat":
            return httpx.Response(500)
        return httpx.Response(200, json={"matches": []})

    body = make_client(SHODAN, handler).get("/api/shodan/iot-scan").json()
    devices = body["devices"]
    assert body["source"] == "shodan"
    assert len(devices) == 5
    camera = devices[0]
    assert camera["name"] == "Security Camera"
    assert camera["status"] == "critical"
    assert camera["lastScan"] == "Just now"
    assert all(d["ip"] == "0.0.0.0" for d in devices[1:])


def test_rows_without_address_get_defaults(make_client):
    handler = lambda request: httpx.Response(200, json={"total": 2, "matches": [{"port": 80}, _match(1)]})
    res = make_client(SHODAN, handler).post("/api/shodan", json={"query": "nginx"})
    assert res.status_code == 200
    results = res.json()["results"]
    assert [r["ip"] for r in results] == ["Unknown", "198.51.100.1"]


def test_iot_scan_row_without_address(make_client):
    handler = lambda request: httpx.Response(200, json={"matches": [{"port": 554, "product": "cam"}]})
    devices = make_client(SHODAN, handler).get("/api/shodan/iot-scan").json()["devices"]
    assert devices[0]["ip"] == "Unknown"
    assert devices[0]["port"] == 554
