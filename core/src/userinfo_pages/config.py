from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Final, Literal

from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)

CONFIG_ENV: Final[str] = "USERINFO_CONFIG"


class NetworkConfig(BaseModel):
    bind_host: str = Field(default="127.0.0.1")
    port: int = Field(default=8080, ge=1, le=65535)


class PagesConfig(BaseModel):
    logged_out_redirect: str = Field(
        default="https://localhost:8443/logged-out",
        description="Absolute URL the auth proxy sends the browser to after logout.",
    )
    logout_endpoint: str = Field(
        default="/redirect_uri",
        description="Auth proxy endpoint that performs logout; receives ?logout=<target>.",
    )
    login_url: str = Field(default="/user", description="Link target on the logged-out page.")
    escape_user_id: bool = Field(
        default=False,
        description=(
            "HTML-escape the X-User-Id value before rendering. Off by default so the "
            "header is inserted verbatim."
        ),
    )
    templates_dir: str | None = Field(
        default=None,
        description=(
            "Optional directory holding user-info.html and logged-out.html; if relative, "
            "resolved against the config file's directory"
        ),
    )


class LoggingConfig(BaseModel):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO")
    file: str | None = Field(default=None, description="Optional rotating log file path.")
    max_size_mb: int = Field(
        default=10, ge=1, description="Max size of a log file in MB before rolling."
    )
    backup_count: int = Field(default=5, ge=1, description="Number of log archives to keep.")

    @field_validator("level", mode="before")
    @classmethod
    def _normalize_level(cls, value: Any) -> Any:
        return value.strip().upper() if isinstance(value, str) else value


class AppConfig(BaseModel):
    version: str = Field(default="1")
    network: NetworkConfig = Field(default_factory=NetworkConfig)
    pages: PagesConfig = Field(default_factory=PagesConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    # Directory of the file this config was read from; used to resolve relative paths.
    source_dir: Path | None = Field(default=None, exclude=True)


def _read_json(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


def resolve_config_path(environ: dict[str, str] | None = None) -> Path | None:
    env = os.environ if environ is None else environ

    raw = (env.get(CONFIG_ENV) or "").strip()
    if not raw:
        return None
    return Path(raw).expanduser().resolve()


def load_app_config(path: Path | None = None) -> AppConfig:
    """Load config from a JSON file (default: $USERINFO_CONFIG).

    - If no path is configured or the file is missing: returns defaults.
    - Validation is performed by Pydantic.
    """

    config_path = resolve_config_path() if path is None else path
    if config_path is None:
        return AppConfig()
    if not config_path.exists():
        logger.warning("Config file %s not found; using defaults", config_path)
        return AppConfig()

    raw = _read_json(config_path)
    config = AppConfig.model_validate(raw)
    return config.model_copy(update={"source_dir": config_path.resolve().parent})


def resolve_templates_dir(config: AppConfig) -> Path | None:
    """Return the configured template override directory, or None for bundled templates."""

    raw = config.pages.templates_dir
    if raw is None or not str(raw).strip():
        return None
    candidate = Path(raw).expanduser()
    if not candidate.is_absolute():
        base = config.source_dir if config.source_dir is not None else Path.cwd()
        candidate = base / candidate
    return candidate.resolve()
