"""Unit tests for settings and the HTTP client configuration."""
import certifi

from concept_insights.adapters.http.client import APIClient
from concept_insights.service import ConceptInsights
from concept_insights.settings import DEFAULT_API_BASE_URL, Settings


class TestSettings:
    """Test settings defaults and environment loading."""

    def test_defaults(self, monkeypatch):
        """Test the default settings."""
        for name in ("USERNAME", "PASSWORD", "API_BASE_URL", "TOTAL_RETRIES"):
            monkeypatch.delenv(f"CONCEPT_INSIGHTS_{name}", raising=False)
        cfg = Settings(_env_file=None)
        assert str(cfg.api_base_url).rstrip("/") == DEFAULT_API_BASE_URL
        assert cfg.total_retries == 0
        assert cfg.verify_ssl is True
        assert cfg.username is None

    def test_environment(self, monkeypatch):
        """Test that settings are read from the environment."""
        monkeypatch.setenv("CONCEPT_INSIGHTS_USERNAME", "env-user")
        monkeypatch.setenv("CONCEPT_INSIGHTS_PASSWORD", "env-secret")
        monkeypatch.setenv("CONCEPT_INSIGHTS_TIMEOUT_SECONDS", "5")
        cfg = Settings(_env_file=None)
        assert cfg.username == "env-user"
        assert cfg.password.get_secret_value() == "env-secret"
        assert cfg.timeout_seconds == 5.0

    def test_password_is_masked(self, settings):
        """Test that the password does not appear in repr."""
        assert "secret" not in repr(settings)


class TestAPIClient:
    """Test the HTTP session configuration."""

    def test_session_configuration(self, settings):
        """Test auth, headers, SSL and retry configuration."""
        client = APIClient(settings=settings)
        assert client.session.auth == ("user", "secret")
        assert client.session.headers["Accept"] == "application/json"
        assert client.session.headers["User-Agent"] == settings.user_agent
        assert client.verify == certifi.where()
        assert client.session.get_adapter("https://ci.example.com").max_retries.total == 0

    def test_explicit_arguments_override_settings(self, settings):
        """Test that explicit arguments win over settings."""
        client = APIClient(settings=settings, username="other", password="pw", api_base_url="http://localhost:9000/ci/")
        assert client.session.auth == ("other", "pw")
        assert client.url_for("/v2/graphs") == "http://localhost:9000/ci/v2/graphs"

    def test_no_credentials(self):
        """Test that no auth is set without credentials."""
        client = APIClient(settings=Settings(_env_file=None, username=None, password=None))
        assert client.session.auth is None

    def test_ssl_verification_can_be_disabled(self):
        """Test that SSL verification can be turned off."""
        client = APIClient(settings=Settings(_env_file=None, verify_ssl=False))
        assert client.verify is False

    def test_service_context_manager_closes_session(self, settings, monkeypatch):
        """Test that leaving the context closes the session."""
        closed = []
        with ConceptInsights(settings=settings) as service:
            monkeypatch.setattr(service.client.session, "close", lambda: closed.append(True))
        assert closed == [True]
