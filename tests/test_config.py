"""
Tests for environment-driven configuration and fail-fast startup.
"""

import dataclasses

import pytest

import run
from vegetable_market_api.app.core.config import ConfigurationError, Settings
from vegetable_market_api.app.main import create_app


def test_required_and_default_values():
    settings = Settings.from_env({"DATABASE_URL": "prices.db", "JWT_SECRET": "s3cret"})
    assert settings.database_url == "prices.db"
    assert settings.secret_key == "s3cret"
    assert settings.port == 5000
    assert settings.environment == "production"
    assert settings.access_token_expire_minutes == 24 * 60
    assert settings.cors_origins == ("*",)


def test_overrides_and_aliases():
    settings = Settings.from_env(
        {
            "DATABASE_URL": "prices.db",
            "SECRET_KEY": "legacy",
            "PORT": "8080",
            "NODE_ENV": "development",
            "ACCESS_TOKEN_EXPIRE_MINUTES": "60",
            "PASSWORD_HASH_ITERATIONS": "5000",
            "CORS_ORIGINS": "https://a.example, https://b.example",
        }
    )
    assert settings.secret_key == "legacy"
    assert settings.port == 8080
    assert settings.environment == "development"
    assert settings.access_token_expire_minutes == 60
    assert settings.password_hash_iterations == 5000
    assert settings.cors_origins == ("https://a.example", "https://b.example")


def test_environment_label_prefers_environment_over_node_env():
    settings = Settings.from_env(
        {"DATABASE_URL": "x.db", "JWT_SECRET": "s", "ENVIRONMENT": "staging", "NODE_ENV": "dev"}
    )
    assert settings.environment == "staging"


@pytest.mark.parametrize(
    "env",
    [
        {"JWT_SECRET": "s3cret"},
        {"DATABASE_URL": "prices.db"},
        {"DATABASE_URL": "prices.db", "JWT_SECRET": ""},
    ],
)
def test_missing_required_setting_raises(env):
    with pytest.raises(ConfigurationError):
        Settings.from_env(env)


def test_settings_are_immutable():
    settings = Settings(database_url="x.db", secret_key="s")
    with pytest.raises(dataclasses.FrozenInstanceError):
        settings.secret_key = "other"


def test_create_app_refuses_to_start_without_secret(monkeypatch):
    monkeypatch.delenv("JWT_SECRET", raising=False)
    monkeypatch.delenv("SECRET_KEY", raising=False)
    with pytest.raises(ConfigurationError):
        create_app()


@pytest.mark.parametrize("name", ["PORT", "ACCESS_TOKEN_EXPIRE_MINUTES", "PASSWORD_HASH_ITERATIONS"])
def test_non_integer_setting_raises_configuration_error(name):
    with pytest.raises(ConfigurationError, match=name):
        Settings.from_env({"DATABASE_URL": "prices.db", "JWT_SECRET": "s3cret", name: "eighty"})


def test_run_exits_cleanly_on_bad_configuration(monkeypatch):
    monkeypatch.setenv("PORT", "not-a-port")
    with pytest.raises(SystemExit) as excinfo:
        run.main()
    assert excinfo.value.code == 1
