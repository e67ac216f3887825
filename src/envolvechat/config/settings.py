"""Configuration management for envolvechat.

Loads settings from a YAML configuration file with environment variable
overrides for the API key. Supports .env files.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field, SecretStr
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config/envolvechat.yaml")


class SigningConfig(BaseModel):
    clock: Literal["local", "utc"] = Field(
        default="local", description="Which calendar date is stamped into commands"
    )


class EmbedConfig(BaseModel):
    escape: bool = Field(
        default=False, description="Escape quotes and backslashes in the embedded command"
    )


class LoggingConfig(BaseModel):
    level: str = Field(default="INFO")
    format: str = Field(
        default="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    file: str | None = Field(default=None)


class Settings(BaseSettings):
    """Root configuration for envolvechat.

    Loads from YAML file and supports environment variable overrides.
    Reads .env files automatically.
    """

    model_config = {
        "env_prefix": "ENVOLVECHAT_",
        "env_nested_delimiter": "__",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    api_key: SecretStr = Field(default=SecretStr(""))
    client_ip: str = Field(default="none")

    signing: SigningConfig = Field(default_factory=SigningConfig)
    embed: EmbedConfig = Field(default_factory=EmbedConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def load_settings(config_path: Path | str | None = None) -> Settings:
    """Load settings from YAML + .env + environment variables.

    Priority: YAML file > env vars > .env file > defaults
    """
    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH

    _load_dotenv()

    yaml_data = {}
    if path.exists():
        with open(path) as f:
            yaml_data = yaml.safe_load(f) or {}
        logger.info("Loaded configuration from %s", path)
    else:
        logger.warning("Config file %s not found, using defaults + env vars", path)

    _apply_env_overrides(yaml_data)

    return Settings(**yaml_data)


def _load_dotenv() -> None:
    """Load .env file into os.environ if it exists."""
    env_path = Path(".env")
    if not env_path.exists():
        return
    with open(env_path) as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" in line:
                key, _, value = line.partition("=")
                key = key.strip()
                value = value.strip()
                if not os.environ.get(key):
                    os.environ[key] = value


def _apply_env_overrides(yaml_data: dict) -> None:
    """Map the non-prefixed ENVOLVE_API_KEY onto the settings structure."""
    api_key = os.environ.get("ENVOLVE_API_KEY", "")
    if api_key and not yaml_data.get("api_key"):
        yaml_data["api_key"] = api_key
