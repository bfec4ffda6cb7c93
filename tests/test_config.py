from cybervault.config import Settings, is_valid_api_key


def test_placeholder_keys_count_as_absent():
    assert not is_valid_api_key(None)
    assert not is_valid_api_key("  ")
    assert not is_valid_api_key("your_shodan_key")
    assert not is_valid_api_key("YOUR_KEY_HERE")
    assert is_valid_api_key("abc123")


def test_provider_configs_use_search_timeout_for_search_providers():
    settings = Settings(_env_file=None, SHODAN_API_KEY="k", REQUEST_TIMEOUT_SECONDS=12, SEARCH_TIMEOUT_SECONDS=4)
    configs = settings.provider_configs()
    assert configs["shodan"].api_key_present is True
    assert configs["shodan"].timeout_seconds == 4
    assert configs["greynoise"].timeout_seconds == 12
    assert configs["greynoise"].api_key_present is False


def test_google_needs_engine_id():
    settings = Settings(_env_file=None, GOOGLE_CUSTOM_SEARCH_API_KEY="k")
    assert settings.api_key_for("google") == "k"
    assert settings.is_configured("google") is False


def test_base_url_override():
    settings = Settings(_env_file=None, OTX_BASE_URL="http://otx.local/api/v1")
    assert settings.provider_config("otx").base_url == "http://otx.local/api/v1"


def test_registry_covers_every_listed_provider():
    from cybervault.services.catalog import PROVIDER_DIRECTORY
    from cybervault.services.providers import all_providers

    assert sorted(all_providers()) == sorted(PROVIDER_DIRECTORY)
