"""Pydantic configuration models with validation."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal, Optional

from pydantic import (
    AliasChoices,
    AliasPath,
    BaseModel,
    Field,
    field_validator,
    model_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

Environment = Literal["dev", "test", "prod"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]
LogFormat = Literal["json", "console"]
CacheBackend = Literal["diskcache", "redis"]
LanguagePattern = Literal["strict", "loose"]

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.0.0.0 Safari/537.36 Edg/120.0.0.0"
)


def _normalize_path(value: Any) -> Path:
    """
    Normalize a path-like value without causing filesystem side-effects.

    This function MUST NOT create directories or files.
    """
    if isinstance(value, Path):
        return value.expanduser()
    if isinstance(value, str):
        return Path(value).expanduser()
    raise TypeError(f"Expected path-like value, got: {type(value)!r}")


class SiteSelectors(BaseModel):
    """CSS selectors of the upstream DooPlay theme."""

    player_option: str = "#player-option-1"
    seasons: str = "#seasons"
    season_title: str = ".title"
    episode_list: str = ".episodios"
    episode_number: str = ".numerando"
    episode_link: str = "a"
    synopsis: str = ".wp-content p"
    image: str = ".g-item a"


class SiteProfile(BaseModel):
    """One upstream site variant (base URL, header set, selector set)."""

    server_name: str = Field(
        default="MultiMovies",
        description="Value of the 'server' field in stream results.",
    )
    base_url: str = Field(default="https://multimovies.press")
    host_family: str = Field(
        default="multimovies",
        description="Iframe hosts containing this string need no helper hop.",
    )
    user_agent: str = Field(default=DEFAULT_USER_AGENT)
    headers: dict[str, str] = Field(
        default={
            "sec-ch-ua": (
                '"Not_A Brand";v="8", "Chromium";v="120", "Microsoft Edge";v="120"'
            ),
            "sec-ch-ua-mobile": "?0",
            "sec-ch-ua-platform": '"Windows"',
            "Referer": "https://multimovies.press/",
            "Sec-Fetch-User": "?1",
        },
        description="Browser-like headers sent with every upstream request.",
    )
    series_marker: str = Field(
        default="tvshows",
        description="URL substring identifying series pages.",
    )
    title_segment_index: int = Field(
        default=4,
        description="Index into url.split('/') holding the title slug.",
    )
    ajax_path: str = "/wp-admin/admin-ajax.php"
    ajax_action: str = "doo_player_ajax"
    embed_helper_path: str = "/embedhelper.php"
    embed_helper_key: str = Field(
        default="smwh",
        description="Key into siteUrls/mresult of the embed helper reply.",
    )
    subtitle_language_pattern: LanguagePattern = Field(
        default="strict",
        description="'strict' = 3-letter _xxx.vtt codes, 'loose' = 2-3 letters.",
    )
    selectors: SiteSelectors = Field(default_factory=SiteSelectors)

    @field_validator("base_url")
    @classmethod
    def _strip_base_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("base_url must be an absolute http(s) URL")
        return v.rstrip("/")

    def request_headers(self) -> dict[str, str]:
        """Header set for upstream requests (profile headers + User-Agent)."""
        return {**self.headers, "User-Agent": self.user_agent}


class AppConfig(BaseModel):
    """
    Canonical application configuration (validated, final).

    Note:
    - YAML is expected to be sectioned (http/logging/cache/api/sites).
    - Environment variables are handled by EnvOverrides(BaseSettings) to allow strict
      precedence control (defaults < YAML < ENV < CLI) in load.py.
    """

    # General
    app_name: str = Field(default="reelscrape", description="Application name.")
    environment: Environment = Field(
        default="dev",
        description="Runtime environment (affects log format and error details).",
    )

    # HTTP (YAML section: http.*)
    http_timeout_seconds: float = Field(
        default=10.0,
        validation_alias=AliasChoices(
            "http_timeout_seconds",
            AliasPath("http", "timeout_seconds"),
        ),
        description="Per-request upstream timeout in seconds.",
    )
    http_retry_max_attempts: int = Field(
        default=3,
        validation_alias=AliasChoices(
            "http_retry_max_attempts",
            AliasPath("http", "retry_max_attempts"),
        ),
        description="Total attempts for network-class failures.",
    )
    http_retry_backoff_base: float = Field(
        default=1.0,
        validation_alias=AliasChoices(
            "http_retry_backoff_base",
            AliasPath("http", "retry_backoff_base"),
        ),
        description="Linear backoff step in seconds (attempt * base).",
    )

    # Logging (YAML section: logging.*)
    log_level: LogLevel = Field(
        default="INFO",
        validation_alias=AliasChoices(
            "log_level",
            AliasPath("logging", "level"),
        ),
        description="Log level.",
    )
    log_format: Optional[LogFormat] = Field(
        default=None,
        validation_alias=AliasChoices(
            "log_format",
            AliasPath("logging", "format"),
        ),
        description=(
            "Log renderer format (console/json). If unset, derived from environment."
        ),
    )

    # Cache (YAML section: cache.*)
    cache_backend: CacheBackend = Field(
        default="diskcache",
        validation_alias=AliasChoices(
            "cache_backend",
            AliasPath("cache", "backend"),
        ),
        description="Cache backend: 'diskcache' (SQLite) or 'redis'.",
    )
    cache_dir: Path = Field(
        default=Path("./.cache/reelscrape"),
        validation_alias=AliasChoices(
            "cache_dir",
            AliasPath("cache", "dir"),
        ),
        description="Diskcache directory.",
    )
    cache_redis_url: str = Field(
        default="redis://localhost:6379/0",
        validation_alias=AliasChoices(
            "cache_redis_url",
            AliasPath("cache", "redis_url"),
        ),
        description="Redis connection URL (only when backend=redis).",
    )
    cache_ttl_seconds: int = Field(
        default=900,
        validation_alias=AliasChoices(
            "cache_ttl_seconds",
            AliasPath("cache", "ttl_seconds"),
        ),
        description="TTL of cached info/stream results in seconds.",
    )
    cache_max_concurrent: int = Field(
        default=10,
        validation_alias=AliasChoices(
            "cache_max_concurrent",
            AliasPath("cache", "max_concurrent"),
        ),
        description="Max parallel cache ops (semaphore limit).",
    )

    # API (YAML section: api.*)
    cors_allow_origins: list[str] = Field(
        default=["*"],
        validation_alias=AliasChoices(
            "cors_allow_origins",
            AliasPath("api", "cors_allow_origins"),
        ),
        description="Origins allowed by the CORS middleware.",
    )

    # Site profiles (YAML section: sites.<name>.*)
    sites: dict[str, SiteProfile] = Field(
        default_factory=lambda: {"multimovies": SiteProfile()},
        description="Upstream site profiles keyed by the name used in /api/<name>/.",
    )

    @field_validator("cache_dir", mode="before")
    @classmethod
    def _validate_paths(cls, v: Any) -> Path:
        return _normalize_path(v)

    @field_validator("http_timeout_seconds")
    @classmethod
    def _validate_http_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("http_timeout_seconds must be > 0")
        return v

    @field_validator("http_retry_max_attempts")
    @classmethod
    def _validate_retry_attempts(cls, v: int) -> int:
        if v < 1:
            raise ValueError("http_retry_max_attempts must be >= 1")
        return v

    @field_validator("cache_ttl_seconds")
    @classmethod
    def _validate_cache_ttl(cls, v: int) -> int:
        if v < 0:
            raise ValueError("cache_ttl_seconds must be >= 0")
        return v

    @field_validator("sites")
    @classmethod
    def _validate_sites(cls, v: dict[str, SiteProfile]) -> dict[str, SiteProfile]:
        if not v:
            raise ValueError("at least one site profile is required")
        return v

    @model_validator(mode="after")
    def _derive_defaults(self) -> "AppConfig":
        # Default log format: console in dev/test, json in prod.
        if self.log_format is None:
            self.log_format = "json" if self.environment == "prod" else "console"
        return self


class EnvOverrides(BaseSettings):
    """
    Environment-variable overrides (all optional).

    Intended usage:
    - load.py creates EnvOverrides() to read REELSCRAPE_* variables,
      converts to dict of set values, merges into YAML/defaults,
      then validates AppConfig.

    Supported env var examples (flat, explicit):
    - REELSCRAPE_ENVIRONMENT
    - REELSCRAPE_HTTP_TIMEOUT_SECONDS
    - REELSCRAPE_CACHE_BACKEND
    - REELSCRAPE_LOG_LEVEL
    """

    model_config = SettingsConfigDict(
        env_prefix="REELSCRAPE_",
        extra="ignore",
        case_sensitive=False,
    )

    app_name: Optional[str] = None
    environment: Optional[Environment] = None

    http_timeout_seconds: Optional[float] = None
    http_retry_max_attempts: Optional[int] = None
    http_retry_backoff_base: Optional[float] = None

    log_level: Optional[LogLevel] = None
    log_format: Optional[LogFormat] = None

    cache_backend: Optional[CacheBackend] = None
    cache_dir: Optional[Path] = None
    cache_redis_url: Optional[str] = None
    cache_ttl_seconds: Optional[int] = None

    @field_validator("cache_dir", mode="before")
    @classmethod
    def _validate_paths(cls, v: Any) -> Any:
        if v is None:
            return None
        return _normalize_path(v)

    def to_update_dict(self) -> dict[str, Any]:
        """
        Return only values that were actually provided (non-None), for merging.
        """
        return self.model_dump(exclude_none=True)
