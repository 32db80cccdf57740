"""
Tests for gateway settings.
"""

import pytest

from conftest import BASE_URL, FakeResponse
from storefront_gateway import api as api_module
from storefront_gateway.api import build_client
from storefront_gateway.cache.memory import NullCache, TTLCache
from storefront_gateway.client.gateway import GatewayClient
from storefront_gateway.core.config import GatewaySettings
from storefront_gateway.core.exceptions import ConfigurationError


class TestGatewaySettings:
    """Tests for GatewaySettings.from_env."""

    def test_defaults(self):
        """Test only the base URL is required."""
        settings = GatewaySettings.from_env({"API_BASE_URL": "https://api.example.com/"})

        assert settings.base_url == "https://api.example.com"
        assert settings.cache_ttl == 300
        assert settings.timeout == 30
        assert settings.rate_limit_backoff == 2.0
        assert settings.session_secret == "your-secret-key"
        assert settings.log_level == "info"

    def test_overrides(self):
        """Test every variable is read."""
        settings = GatewaySettings.from_env({
            "API_BASE_URL": "http://localhost:4000/api",
            "SESSION_SECRET": "s3cret",
            "CACHE_TTL": "60",
            "REQUEST_TIMEOUT": "5",
            "RATE_LIMIT_BACKOFF": "0.5",
            "LOG_LEVEL": "DEBUG",
        })

        assert settings.session_secret == "s3cret"
        assert settings.cache_ttl == 60
        assert settings.timeout == 5
        assert settings.rate_limit_backoff == 0.5
        assert settings.log_level == "debug"

    def test_base_url_argument_keeps_other_variables(self):
        """Test an explicit base URL still reads the rest of the environment."""
        settings = GatewaySettings.from_env(
            {
                "API_BASE_URL": "https://env.example",
                "CACHE_TTL": "60",
                "RATE_LIMIT_BACKOFF": "0.5",
                "LOG_LEVEL": "debug",
            },
            base_url="https://override.example/api/",
        )

        assert settings.base_url == "https://override.example/api"
        assert settings.cache_ttl == 60
        assert settings.rate_limit_backoff == 0.5
        assert settings.log_level == "debug"

    def test_base_url_argument_without_variable(self):
        """Test an explicit base URL satisfies the required setting."""
        settings = GatewaySettings.from_env({}, base_url="https://a.example")

        assert settings.base_url == "https://a.example"

    def test_invalid_base_url_argument(self):
        """Test an explicit base URL is validated like the variable."""
        with pytest.raises(ConfigurationError) as exc_info:
            GatewaySettings.from_env({}, base_url="ftp://a.example")
        assert exc_info.value.setting == "API_BASE_URL"

    def test_missing_base_url(self):
        """Test a missing base URL is a configuration error."""
        with pytest.raises(ConfigurationError) as exc_info:
            GatewaySettings.from_env({})
        assert exc_info.value.setting == "API_BASE_URL"

    def test_invalid_base_url(self):
        """Test a malformed base URL is a configuration error."""
        with pytest.raises(ConfigurationError):
            GatewaySettings.from_env({"API_BASE_URL": "not a url"})

    @pytest.mark.parametrize("value", ["abc", "-1"])
    def test_invalid_ttl(self, value):
        """Test non-numeric or negative numbers are rejected."""
        with pytest.raises(ConfigurationError) as exc_info:
            GatewaySettings.from_env({"API_BASE_URL": "https://a.example", "CACHE_TTL": value})
        assert exc_info.value.setting == "CACHE_TTL"

    def test_reads_dotenv_file(self, tmp_path, monkeypatch):
        """Test values are loaded from a .env file."""
        # Register the variables so monkeypatch removes what load_dotenv sets
        for name in ("API_BASE_URL", "CACHE_TTL"):
            monkeypatch.setenv(name, "placeholder")
            monkeypatch.delenv(name)
        env_file = tmp_path / ".env"
        env_file.write_text("API_BASE_URL=https://dotenv.example/api\nCACHE_TTL=120\n")

        settings = GatewaySettings.from_env(env_file=env_file)

        assert settings.base_url == "https://dotenv.example/api"
        assert settings.cache_ttl == 120


class TestBuildClient:
    """Tests for building a client from settings."""

    def test_cache_ttl_applied(self):
        """Test the configured TTL reaches the cache."""
        client = build_client(GatewaySettings(base_url="https://a.example", cache_ttl=42))

        assert isinstance(client.cache, TTLCache)
        assert client.cache.ttl == 42
        assert client.backoff == 2.0

    def test_cache_disabled(self):
        """Test caching can be turned off."""
        client = build_client(GatewaySettings(base_url="https://a.example"), use_cache=False)

        assert isinstance(client.cache, NullCache)


class TestModuleHelpers:
    """Tests for the module-level fetch helpers."""

    @pytest.mark.asyncio
    async def test_fetch_with_base_url_reads_environment(
        self, monkeypatch, fake_session, tmp_path
    ):
        """Test an explicit base URL does not drop the tuning variables."""
        built = []

        def fake_build_client(settings, use_cache=True):
            built.append(settings)
            return GatewayClient(settings.base_url, session=fake_session)

        monkeypatch.setattr(api_module, "build_client", fake_build_client)
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("CACHE_TTL", "60")
        monkeypatch.setenv("RATE_LIMIT_BACKOFF", "0.5")
        fake_session.queue("GET", "/brands", FakeResponse(body=[]))

        result = await api_module.fetch("/brands", BASE_URL)

        assert result.ok
        assert built[0].base_url == BASE_URL
        assert built[0].cache_ttl == 60
        assert built[0].rate_limit_backoff == 0.5
