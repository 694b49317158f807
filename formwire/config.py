"""Configuration loading for the forms API client and webhook listener.

Rules:
- Primary source: `formwire_config.json` at the project root.
- Overrides: environment variables, then optional text files under `config/`.
- Validation: Pydantic models enforce required fields and value constraints.

The resulting `AppConfig` is passed explicitly to the API client and the
application factory; nothing here is held in module-level state.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError as PydanticValidationError, field_validator


CONFIG_DIR = Path("config")
ROOT_CONFIG = Path("formwire_config.json")
logger = logging.getLogger(__name__)


def _read_config_file(rel_path: str) -> Optional[str]:
    path = CONFIG_DIR / rel_path
    try:
        if path.exists():
            return path.read_text(encoding="utf-8").strip()
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Failed to read override %s: %s", path, e)
        return None
    return None


def _env(key: str, default: Optional[str] = None) -> Optional[str]:
    return os.environ.get(key, default)


class ApiConfig(BaseModel):
    token: str = ""
    base_url: str = "https://api.typeform.io"
    version: str = "v0.4"
    timeout_seconds: float = Field(default=10.0, gt=0)

    @field_validator("base_url")
    @classmethod
    def base_url_must_be_absolute(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("api.base_url must be an http(s) URL")
        return v.rstrip("/")

    @property
    def forms_url(self) -> str:
        return f"{self.base_url}/{self.version}/forms"


class WebhookConfig(BaseModel):
    path: str = "/webhook"

    @field_validator("path")
    @classmethod
    def path_must_be_absolute(cls, v: str) -> str:
        if not v.startswith("/"):
            raise ValueError("webhook.path must start with '/'")
        return v


class LoggingConfig(BaseModel):
    level: str = "INFO"

    @field_validator("level")
    @classmethod
    def level_must_be_known(cls, v: str) -> str:
        level = v.strip().upper()
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if level not in allowed:
            raise ValueError(f"logging.level must be one of {sorted(allowed)}")
        return level


class AppConfig(BaseModel):
    api: ApiConfig = Field(default_factory=ApiConfig)
    webhook: WebhookConfig = Field(default_factory=WebhookConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def _read_json_file(path: Path) -> dict:
    try:
        if path.exists():
            return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.error("Failed to read JSON config %s: %s", path, e)
    return {}


def load_config(root_config: Path = ROOT_CONFIG) -> AppConfig:
    """Load configuration with validation.

    Precedence (highest first):
    1) Environment variables
    2) Text files in `config/` (optional)
    3) formwire_config.json at project root
    4) Defaults
    """

    base = _read_json_file(root_config)

    def _base(path: str, default: Optional[str] = None) -> Optional[str]:
        cur: object = base
        for key in path.split("."):
            if not isinstance(cur, dict) or key not in cur:
                return default
            cur = cur[key]
        return str(cur) if cur is not None else default

    token = _env("FORMWIRE_API_TOKEN") or _read_config_file("api.token") or _base("api.token", "")
    base_url = _env("FORMWIRE_API_BASE_URL") or _read_config_file("api.base_url") or _base("api.base_url", "https://api.typeform.io")
    version = _env("FORMWIRE_API_VERSION") or _read_config_file("api.version") or _base("api.version", "v0.4")
    timeout_text = _env("FORMWIRE_API_TIMEOUT") or _read_config_file("api.timeout_seconds") or _base("api.timeout_seconds", "10")

    webhook_path = _env("FORMWIRE_WEBHOOK_PATH") or _read_config_file("webhook.path") or _base("webhook.path", "/webhook")
    log_level = _env("FORMWIRE_LOG_LEVEL") or _read_config_file("logging.level") or _base("logging.level", "INFO")

    try:
        return AppConfig(
            api=ApiConfig(
                token=str(token).strip(),
                base_url=str(base_url).strip(),
                version=str(version).strip(),
                timeout_seconds=str(timeout_text).strip(),
            ),
            webhook=WebhookConfig(path=str(webhook_path).strip()),
            logging=LoggingConfig(level=str(log_level)),
        )
    except PydanticValidationError as e:
        logger.error("Invalid application configuration: %s", e)
        raise


__all__ = [
    "AppConfig",
    "ApiConfig",
    "WebhookConfig",
    "LoggingConfig",
    "load_config",
]
