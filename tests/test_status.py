def test_status_reports_configured_providers_without_keys(make_client):
    body = make_client({"SHODAN_API_KEY": "sk-live", "VT_API_KEY": "vt-live", "OTX_API_KEY": "your_otx_key"}).get(
        "/api/status"
    ).json()
    assert body["total"] == 6
    assert body["configured"] == 2
    assert body["unconfigured"] == 4
    assert body["percentage"] == 33
    assert body["hasMinimumRequired"] is True
    by_id = {p["id"]: p for p in body["providers"]}
    assert by_id["shodan"]["isConfigured"] is True
    assert by_id["otx"]["isConfigured"] is False
    assert "sk-live" not in str(body)


def test_status_minimum_not_met(make_client):
    body = make_client({"SHODAN_API_KEY": "sk-live"}).get("/api/status").json()
    assert body["hasMinimumRequired"] is False
