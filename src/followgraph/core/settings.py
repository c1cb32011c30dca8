"""Service settings for followgraph.

All values can be overridden via environment variables prefixed with
``FOLLOWGRAPH_``; nested sections use ``__`` as delimiter, e.g.
``FOLLOWGRAPH_SECURITY__TOKEN_SECRET`` or
``FOLLOWGRAPH_DIRECTORY__INSTANCES='{"users": ["http://users-1:8081"]}'``.

Order of precedence (highest → lowest):
    1. Constructor arguments (tests)
    2. Environment variables
    3. ``.env`` file
    4. Defaults below

Tags:
    settings, configuration, pydantic, environment

Doc-Types:
    - API Reference
    - Configuration Guide
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

TEST_PROFILE = "test"


class SecuritySettings(BaseModel):
    """Inbound bearer token verification."""

    token_secret: str = Field(
        default="change-me-change-me-change-me-change-me",
        description="Shared HMAC secret used to sign bearer tokens",
    )
    token_algorithms: list[str] = Field(
        default=["HS256", "HS384", "HS512"],
        description="Accepted symmetric signing algorithms",
    )


class DirectorySettings(BaseModel):
    """Outbound user directory lookups."""

    service_name: str = Field(default="users", description="Logical name of the user directory service")
    instances: dict[str, list[str]] = Field(
        default_factory=lambda: {"users": ["http://localhost:8081"]},
        description="Service name → base URLs of its running instances",
    )
    connect_timeout_s: float = Field(default=10.0, description="Connect timeout in seconds")
    read_timeout_s: float = Field(default=10.0, description="Read timeout in seconds")
    cache_enabled: bool = Field(default=True, description="Cache successful lookups on disk")
    cache_dir: Path | None = Field(default=None, description="Cache directory (temp dir when unset)")
    cache_size_bytes: int = Field(default=10 * 1024 * 1024, description="On-disk cache budget")


class FollowgraphSettings(BaseSettings):
    """Settings for the followgraph service."""

    model_config = SettingsConfigDict(
        env_prefix="FOLLOWGRAPH_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    # ── Server ───────────────────────────────────────────────────────────
    host: str = Field(default="0.0.0.0", description="Bind address")
    port: int = Field(default=8082, description="Bind port")
    debug: bool = Field(default=False, description="Enable debug mode")

    # ── Observability ────────────────────────────────────────────────────
    log_level: str = Field(default="INFO", description="Log level")
    log_json: bool | None = Field(default=None, description="JSON logs (None → auto-detect tty)")

    # ── Profiles ─────────────────────────────────────────────────────────
    profiles: list[str] = Field(default_factory=list, description="Active profiles (e.g. ['test'])")

    # ── API ──────────────────────────────────────────────────────────────
    api_prefix: str = Field(default="/api/v1", description="URL prefix for all endpoints")
    api_title: str = Field(default="followgraph API", description="OpenAPI title")
    api_version: str = Field(default="0.1.0", description="OpenAPI version string")
    cors_origins: list[str] = Field(default=["*"], description="Allowed CORS origins")

    # ── Database ─────────────────────────────────────────────────────────
    data_dir: Path = Field(
        default_factory=lambda: Path.home() / ".followgraph",
        description="Data directory for the default SQLite database",
    )
    database_url: str | None = Field(
        default=None,
        description="SQLAlchemy connection URL (defaults to SQLite under data_dir)",
    )

    # ── Sections ─────────────────────────────────────────────────────────
    security: SecuritySettings = Field(default_factory=SecuritySettings)
    directory: DirectorySettings = Field(default_factory=DirectorySettings)

    @property
    def test_profile(self) -> bool:
        """True when the ``test`` profile is active."""
        return TEST_PROFILE in self.profiles

    def resolved_database_url(self) -> str:
        """Return ``database_url`` or the default SQLite file under ``data_dir``."""
        if self.database_url:
            return self.database_url
        return f"sqlite:///{Path(self.data_dir).expanduser() / 'followgraph.db'}"


@lru_cache(maxsize=1)
def get_settings() -> FollowgraphSettings:
    """Cached settings — loaded once per process."""
    return FollowgraphSettings()
