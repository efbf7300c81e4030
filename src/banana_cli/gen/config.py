from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from ..schema import DEFAULT_MODEL, Model
from .credentials import DEFAULT_API_KEY_ENV, EnvCredentialSource
from .request import API_BASE_URL

CONFIG_FILENAME = "banana.toml"


class BananaConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    default_model: Model = DEFAULT_MODEL
    api_key_env: str = DEFAULT_API_KEY_ENV
    base_url: str = API_BASE_URL

    @field_validator("api_key_env")
    @classmethod
    def validate_api_key_env(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("api_key_env cannot be empty")
        return v.strip()

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        v = v.strip().rstrip("/")
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"base_url must be an http(s) URL, got '{v}'")
        return v

    def credential_source(self) -> EnvCredentialSource:
        return EnvCredentialSource(self.api_key_env)


class ConfigError(Exception):
    """A ``banana.toml`` that cannot be used; the message names the file when known."""

    def __init__(self, message: str, path: Optional[Path] = None):
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)


def load_config(config_path: Path) -> BananaConfig:
    if not config_path.exists():
        raise ConfigError(f"Config file not found: {config_path}", path=config_path)

    try:
        data = tomllib.loads(config_path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Failed to parse TOML: {e}", path=config_path) from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}", path=config_path) from e

    try:
        return BananaConfig.model_validate(data)
    except ValueError as e:
        raise ConfigError(f"Invalid configuration: {e}", path=config_path) from e


def find_config(start_dir: Optional[Path] = None) -> Optional[Path]:
    if start_dir is None:
        start_dir = Path.cwd()

    current = start_dir.resolve()
    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.exists():
            return candidate
        if current == current.parent:
            return None
        current = current.parent


def resolve_config(config_path: Optional[Path] = None) -> BananaConfig:
    """Load an explicit config file, else the nearest ``banana.toml``, else defaults."""
    if config_path is None:
        config_path = find_config()
        if config_path is None:
            return BananaConfig()
    return load_config(config_path)
