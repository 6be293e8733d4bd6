import os
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional

import yaml
from dotenv import load_dotenv
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, field_validator

_ENV_VARS = {
    "STORY_APP_ENV": "environment",
    "STORY_APP_HOST": "host",
    "PORT": "port",
    "STORY_APP_PORT": "port",
    "STORY_APP_API_PREFIX": "api_prefix",
    "STORY_APP_LOG_LEVEL": "log_level",
    "STORY_APP_SEED_DEMO_DATA": "seed_demo_data",
    "STORY_APP_CORS_ORIGINS": "cors_origins",
}


class AppSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    app_name: str = "Story App API"
    environment: Literal["development", "production", "test"] = "production"
    host: str = "0.0.0.0"
    port: int = Field(default=5000, ge=1, le=65535)
    api_prefix: str = "/api"
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])
    log_level: str = "INFO"
    seed_demo_data: bool = True

    @field_validator("api_prefix")
    @classmethod
    def _normalize_prefix(cls, value: str) -> str:
        if not value:
            return value
        if not value.startswith("/") or value.endswith("/"):
            raise ValueError("api_prefix must start with '/' and must not end with '/'")
        return value

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _split_origins(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.upper()

    @property
    def is_development(self) -> bool:
        return self.environment == "development"


def _read_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    return data or {}


def _apply_env(data: Dict[str, Any]) -> Dict[str, Any]:
    for var, field in _ENV_VARS.items():
        value = os.getenv(var)
        if value:
            data[field] = value
    return data


def load_settings(
    config_path: Optional[Path] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> AppSettings:
    """Build settings from .env, an optional YAML file, overrides and the environment."""
    load_dotenv(Path.cwd() / ".env", override=False)

    data: Dict[str, Any] = {}
    if config_path:
        data.update(_read_yaml(config_path))
    if overrides:
        data.update(overrides)
    data = _apply_env(data)

    settings = AppSettings.model_validate(data)
    logger.debug("Loaded settings for environment {}", settings.environment)
    return settings
