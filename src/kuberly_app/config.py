import os
from dataclasses import dataclass, field
from functools import lru_cache

import redis
from dotenv import load_dotenv

load_dotenv()

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _env(name: str, default: str) -> str:
    """Read an environment variable, treating empty values as unset."""
    return os.getenv(name) or default


def _number_env(name: str, default: str, cast: type) -> int | float | str:
    """Read a numeric variable; unparseable values are kept raw for validation."""
    raw = _env(name, default)
    try:
        return cast(raw)
    except ValueError:
        return raw


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # PostgreSQL
    postgres_host: str = field(default_factory=lambda: _env("POSTGRES_HOST", "postgres"))
    postgres_port: int = field(default_factory=lambda: _number_env("POSTGRES_PORT", "5432", int))
    postgres_user: str = field(default_factory=lambda: _env("POSTGRES_USER", "postgres"))
    postgres_password: str = field(default_factory=lambda: _env("POSTGRES_PASSWORD", "postgres"))
    postgres_db: str = field(default_factory=lambda: _env("POSTGRES_DB", "testdb"))
    postgres_connect_timeout: int = field(
        default_factory=lambda: _number_env("POSTGRES_CONNECT_TIMEOUT", "5", int)
    )

    # Redis
    redis_host: str = field(default_factory=lambda: _env("REDIS_HOST", "redis"))
    redis_port: int = field(default_factory=lambda: _number_env("REDIS_PORT", "6379", int))
    redis_timeout: float = field(default_factory=lambda: _number_env("REDIS_TIMEOUT", "5", float))

    # API
    api_host: str = field(default_factory=lambda: _env("HOST", "0.0.0.0"))
    api_port: int = field(default_factory=lambda: _number_env("PORT", "8080", int))
    app_version: str = field(default_factory=lambda: _env("APP_VERSION", "1.0.0"))
    log_level: str = field(default_factory=lambda: _env("LOG_LEVEL", "INFO").upper())
    log_json: bool = field(default_factory=lambda: _env("LOG_JSON", "false").lower() == "true")

    # Self-test target
    app_host: str = field(default_factory=lambda: _env("APP_HOST", "localhost"))

    @property
    def postgres_dsn(self) -> str:
        """Connection string for psycopg."""
        return (
            f"postgresql://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
            f"?connect_timeout={self.postgres_connect_timeout}"
        )

    @property
    def redis_url(self) -> str:
        return f"redis://{self.redis_host}:{self.redis_port}/0"

    @property
    def app_base_url(self) -> str:
        """Base URL the self-test harness sends HTTP requests to."""
        return f"http://{self.app_host}:{self.api_port}"

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        errors = []

        for name in ("postgres_port", "redis_port", "api_port"):
            port = getattr(self, name)
            if not isinstance(port, int):
                errors.append(f"invalid {name}: {port!r}")
            elif not 1 <= port <= 65535:
                errors.append(f"invalid {name}: {port}")

        for name in ("postgres_connect_timeout", "redis_timeout"):
            timeout = getattr(self, name)
            if not isinstance(timeout, (int, float)):
                errors.append(f"invalid {name}: {timeout!r}")
            elif timeout <= 0:
                errors.append(f"invalid {name}: {timeout}")

        if self.log_level not in VALID_LOG_LEVELS:
            errors.append(f"invalid log level: {self.log_level}")

        if errors:
            raise ValueError(f"Configuration errors: {', '.join(errors)}")

    def masked(self) -> dict[str, str | int | float | bool]:
        """Effective configuration with the store password hidden."""
        return {
            "postgres": f"{self.postgres_user}:***@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}",
            "redis": f"{self.redis_host}:{self.redis_port}",
            "listen": f"{self.api_host}:{self.api_port}",
            "version": self.app_version,
            "log_level": self.log_level,
            "log_json": self.log_json,
        }


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def get_redis_client(settings: Settings | None = None) -> redis.Redis:
    """Create a Redis client instance.

    Values are decoded to ``str``; every network call is bounded by
    ``settings.redis_timeout``.
    """
    settings = settings or get_settings()
    return redis.from_url(
        settings.redis_url,
        decode_responses=True,
        socket_timeout=settings.redis_timeout,
        socket_connect_timeout=settings.redis_timeout,
    )
