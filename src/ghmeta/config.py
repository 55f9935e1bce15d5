"""Configuration loading and validation for ghmeta."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import (
    AnyHttpUrl,
    BaseModel,
    Field,
    TypeAdapter,
    ValidationError,
    field_validator,
    model_validator,
)

from ghmeta.core.errors import ConfigError

DEFAULT_CONFIG_PATH = ".ghmeta.yaml"

_TRUE_VALUES = {"1", "true", "yes", "on"}

_HTTP_URL = TypeAdapter(AnyHttpUrl)


class GithubMetaConfig(BaseModel):
    """Options controlling repository detection and metadata output."""

    homepage: str | None = Field(default=None, description="Homepage override")
    remote: list[str] = Field(
        default_factory=lambda: ["origin"],
        description="Remote names to probe, in priority order",
    )
    issues: bool = Field(default=False, description="Include the issue tracker URL")
    user: str | None = Field(default=None, description="Repository owner (skips detection)")
    repo: str | None = Field(default=None, description="Repository name (skips detection)")
    host: str = Field(default="github.com", description="Hosting service domain")
    git_timeout: float = Field(default=5.0, gt=0, description="Timeout for git calls (seconds)")
    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator("homepage")
    @classmethod
    def validate_homepage(cls, v: str | None) -> str | None:
        """Require an http(s) URL but keep it exactly as written."""
        if v is not None:
            try:
                _HTTP_URL.validate_python(v)
            except ValidationError as e:
                raise ValueError(f"Invalid homepage URL: {v!r}") from e
        return v

    @field_validator("remote", mode="before")
    @classmethod
    def coerce_remote(cls, v: Any) -> Any:
        """Accept a single remote name as shorthand for a one-item list."""
        if isinstance(v, str):
            return [v]
        return v

    @field_validator("remote")
    @classmethod
    def validate_remote(cls, v: list[str]) -> list[str]:
        """Require at least one remote and no blank names."""
        names = [name.strip() for name in v]
        if not names or not all(names):
            raise ValueError("remote must list at least one non-empty remote name")
        return names

    @field_validator("host")
    @classmethod
    def validate_host(cls, v: str) -> str:
        """Validate host is a bare domain."""
        host = v.strip().lower()
        if not host or "/" in host or ":" in host:
            raise ValueError(f"Invalid host: {v!r}. Expected a bare domain like 'github.com'.")
        return host

    @model_validator(mode="after")
    def validate_user_repo_pair(self) -> GithubMetaConfig:
        """user and repo must be given together or not at all."""
        if bool(self.user) != bool(self.repo):
            raise ValueError("user and repo must be set together")
        return self

    @property
    def homepage_url(self) -> str | None:
        """Homepage override as a plain string."""
        return self.homepage


def coerce_config(config: GithubMetaConfig | dict[str, Any] | None) -> GithubMetaConfig:
    """Validate a mapping into a GithubMetaConfig.

    Raises:
        ConfigError: If the mapping is invalid.
    """
    if isinstance(config, GithubMetaConfig):
        return config
    try:
        return GithubMetaConfig(**(config or {}))
    except Exception as e:
        raise ConfigError(f"Invalid configuration: {e}") from e


def load_config(path: str | None = None) -> GithubMetaConfig:
    """Load and validate configuration from a YAML file.

    Without ``path``, ``.ghmeta.yaml`` in the current directory is used if it
    exists; otherwise defaults apply.

    Environment variable overrides:
        GHMETA_HOMEPAGE: overrides homepage
        GHMETA_REMOTE: comma-separated remote names
        GHMETA_ISSUES: enables the issue tracker when truthy
        GHMETA_HOST: overrides host

    Args:
        path: Path to config file.

    Returns:
        Validated GithubMetaConfig.

    Raises:
        ConfigError: If an explicit config file is missing, or any file is
            unreadable or invalid.
    """
    data: dict[str, Any] = {}
    config_path = Path(path or DEFAULT_CONFIG_PATH).expanduser()

    if config_path.exists():
        try:
            raw = config_path.read_text()
        except OSError as e:
            raise ConfigError(f"Cannot read config file: {e}") from e

        try:
            loaded = yaml.safe_load(raw)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in config file: {e}") from e

        if loaded is not None and not isinstance(loaded, dict):
            raise ConfigError("Config file must contain a YAML mapping")
        data = loaded or {}
    elif path is not None:
        raise ConfigError(f"Config file not found: {config_path}")

    # Apply environment variable overrides
    env_homepage = os.environ.get("GHMETA_HOMEPAGE")
    if env_homepage:
        data["homepage"] = env_homepage

    env_remote = os.environ.get("GHMETA_REMOTE")
    if env_remote:
        data["remote"] = [name for name in env_remote.split(",") if name.strip()]

    env_issues = os.environ.get("GHMETA_ISSUES")
    if env_issues:
        data["issues"] = env_issues.strip().lower() in _TRUE_VALUES

    env_host = os.environ.get("GHMETA_HOST")
    if env_host:
        data["host"] = env_host

    return coerce_config(data)
