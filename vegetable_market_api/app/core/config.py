"""
Configuration management.

``Settings`` is an immutable dataclass populated from environment
variables by :meth:`Settings.from_env`.  It is built once when the
application is created and stored on ``app.state.settings``; request
handlers obtain it through the :func:`get_settings` dependency rather
than importing a module level instance.

The store location and the token signing secret are required.  If
either is missing the application refuses to start instead of running
with an undefined database or an insecure secret.
"""

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional, Tuple

from fastapi import Request


class ConfigurationError(RuntimeError):
    """Raised when a required setting is absent at startup."""


def _first(env: Mapping[str, str], *names: str) -> Optional[str]:
    for name in names:
        value = env.get(name)
        if value:
            return value
    return None


def _int(env: Mapping[str, str], name: str, default: int) -> int:
    value = env.get(name)
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {value!r}") from None


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    database_url: str
    secret_key: str
    project_name: str = "Vegetable Market Prices API"
    api_version: str = "1.0.0"
    environment: str = "production"
    host: str = "0.0.0.0"
    port: int = 5000
    log_level: str = "INFO"
    log_file: Optional[str] = None
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24

    # PBKDF2 work factor.  100k rounds of SHA‑256 is roughly the cost of
    # bcrypt with 10 rounds on commodity hardware.
    password_hash_iterations: int = 100_000

    cors_origins: Tuple[str, ...] = field(default=("*",))

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from ``env`` (defaults to ``os.environ``).

        Raises
        ------
        ConfigurationError
            If ``DATABASE_URL`` or ``JWT_SECRET`` is not set, or a numeric
            setting is not an integer.
        """
        env = os.environ if env is None else env
        database_url = _first(env, "DATABASE_URL")
        if not database_url:
            raise ConfigurationError("DATABASE_URL environment variable is not set!")
        secret_key = _first(env, "JWT_SECRET", "SECRET_KEY")
        if not secret_key:
            raise ConfigurationError("JWT_SECRET environment variable is not set!")
        origins = env.get("CORS_ORIGINS", "*")
        return cls(
            database_url=database_url,
            secret_key=secret_key,
            project_name=env.get("PROJECT_NAME", cls.project_name),
            api_version=env.get("API_VERSION", cls.api_version),
            environment=_first(env, "ENVIRONMENT", "NODE_ENV") or cls.environment,
            host=env.get("HOST", cls.host),
            port=_int(env, "PORT", cls.port),
            log_level=env.get("LOG_LEVEL", cls.log_level),
            log_file=env.get("LOG_FILE") or None,
            access_token_expire_minutes=_int(
                env, "ACCESS_TOKEN_EXPIRE_MINUTES", cls.access_token_expire_minutes
            ),
            password_hash_iterations=_int(
                env, "PASSWORD_HASH_ITERATIONS", cls.password_hash_iterations
            ),
            cors_origins=tuple(o.strip() for o in origins.split(",") if o.strip()),
        )


def get_settings(request: Request) -> Settings:
    """Dependency returning the settings the running app was built with."""
    return request.app.state.settings
