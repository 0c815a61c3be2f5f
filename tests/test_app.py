"""
Tests for settings and application wiring.
"""

from datetime import timedelta

import pytest
from pydantic import ValidationError

from account_service.auth.dependencies import AuthServices
from account_service.core.config import DEFAULT_JWT_SECRET, build_settings

CONFIG_VARS = [
    "ENV",
    "SECRET_KEY",
    "JWT_SECRET",
    "ALLOWED_ORIGINS",
    "ALLOW_ORIGINS",
    "SESSION_COOKIE_NAME",
    "SESSION_COOKIE_SECURE",
    "SESSION_COOKIE_SAMESITE",
    "SESSION_COOKIE_DOMAIN",
]


@pytest.fixture
def clean_env(tmp_path, monkeypatch):
    """Run from an empty directory with no config variables set."""
    for name in CONFIG_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


class TestSettings:
    def test_ttl_helpers(self, settings):
        assert settings.register_token_ttl() == timedelta(hours=5)
        assert settings.login_token_ttl() == timedelta(days=30)
        assert settings.oauth_token_ttl() == timedelta(hours=1)

    def test_cookie_defaults(self, clean_env):
        s = build_settings()
        assert s.SESSION_COOKIE_NAME == "token"
        assert s.SESSION_COOKIE_SECURE is True
        assert s.SESSION_COOKIE_SAMESITE == "lax"

    def test_postgres_scheme_is_rewritten(self):
        s = build_settings(DATABASE_URL="postgres://u:p@db:5432/accounts")
        assert s.DATABASE_URL == "postgresql://u:p@db:5432/accounts"

    def test_allowed_origins_from_csv(self, clean_env, monkeypatch):
        monkeypatch.setenv("ALLOWED_ORIGINS", "https://a.example, https://b.example,")
        s = build_settings()
        assert s.ALLOW_ORIGINS == ["https://a.example", "https://b.example"]

    def test_dotenv_supplies_secret_and_origins(self, clean_env):
        (clean_env / ".env").write_text(
            "SECRET_KEY=prod-secret-from-dotenv\n"
            "ALLOWED_ORIGINS=https://app.example.com\n"
        )

        s = build_settings()

        assert s.JWT_SECRET == "prod-secret-from-dotenv"
        assert s.ALLOW_ORIGINS == ["https://app.example.com"]
        auth = AuthServices.from_settings(s)
        assert auth.issuer.key.secret == "prod-secret-from-dotenv"
        assert auth.verifier.key.secret == "prod-secret-from-dotenv"

    def test_secret_key_wins_over_jwt_secret(self, clean_env, monkeypatch):
        monkeypatch.setenv("SECRET_KEY", "from-secret-key")
        monkeypatch.setenv("JWT_SECRET", "from-jwt-secret")
        assert build_settings().JWT_SECRET == "from-secret-key"

    def test_jwt_secret_env_is_accepted(self, clean_env, monkeypatch):
        monkeypatch.setenv("JWT_SECRET", "from-jwt-secret")
        assert build_settings().JWT_SECRET == "from-jwt-secret"

    def test_production_refuses_default_secret(self, clean_env, monkeypatch):
        monkeypatch.setenv("ENV", "production")
        with pytest.raises(ValidationError, match="SECRET_KEY"):
            build_settings()

    def test_production_with_real_secret(self, clean_env, monkeypatch):
        monkeypatch.setenv("ENV", "production")
        monkeypatch.setenv("SECRET_KEY", "a-real-secret")
        s = build_settings()
        assert s.JWT_SECRET != DEFAULT_JWT_SECRET

    def test_development_allows_default_secret(self, clean_env):
        assert build_settings().JWT_SECRET == DEFAULT_JWT_SECRET

    @pytest.mark.parametrize(
        "overrides",
        [
            {"BCRYPT_ROUNDS": 3},
            {"BCRYPT_ROUNDS": 32},
            {"SESSION_COOKIE_SAMESITE": "sideways"},
            {"JWT_SECRET": ""},
        ],
    )
    def test_rejects_bad_values(self, overrides):
        with pytest.raises(ValidationError):
            build_settings(**overrides)


class TestApp:
    def test_root(self, client):
        res = client.get("/")
        assert res.status_code == 200
        assert "running" in res.json()["message"]

    def test_auth_services_built_from_settings(self, app, settings):
        auth = app.state.auth
        assert auth.hasher.rounds == settings.BCRYPT_ROUNDS
        assert auth.cookie.name == "token"
        assert auth.cookie.secure is False
        assert auth.issuer.key == auth.verifier.key
        assert auth.issuer.key.secret == settings.JWT_SECRET

    def test_unexpected_error_is_generic_500(self, app):
        from fastapi.testclient import TestClient

        @app.get("/boom")
        def boom():
            raise RuntimeError("connection string postgres://secret@db leaked")

        with TestClient(app, raise_server_exceptions=False) as client:
            res = client.get("/boom")

        assert res.status_code == 500
        assert res.json() == {"message": "Internal server error"}
