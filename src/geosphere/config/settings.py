# src/geosphere/config/settings.py
"""
Application settings (Pydantic).

Settings are loaded from `src/geosphere/config/defaults.yaml`, then optionally overridden by:
- environment variables (e.g., `GEOSPHERE_EARTH_RADIUS_M`, `GEOSPHERE_LOG_LEVEL`)
- an external YAML file via `GEOSPHERE_CONFIG_PATH`

Design rule:
- The geodesy functions never read settings; the dispatcher, API and CLI pass values in.
"""

from __future__ import annotations

import os
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field

from geosphere.core.env import load_dotenv_if_present


def _read_package_yaml(filename: str) -> dict[str, Any]:
    """Read a YAML file packaged inside `geosphere.config`."""
    text = resources.files("geosphere.config").joinpath(filename).read_text(encoding="utf-8")
    data = yaml.safe_load(text) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid YAML root object for {filename}; expected a mapping.")
    return data


def _read_yaml_file(path: str | Path) -> dict[str, Any]:
    """Read a YAML file from disk and return its mapping root."""
    data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid YAML root object for {path}; expected a mapping.")
    return data


class AppSettings(BaseModel):
    name: str = "geosphere"
    log_level: str = "INFO"


class GeodesySettings(BaseModel):
    earth_radius_m: float = Field(6_371_000.0, gt=0)
    default_format: Literal["d", "dm", "dms"] = "dms"
    decimal_places: int | None = Field(default=None, ge=0, le=12)


class ApiSettings(BaseModel):
    cors_origins: list[str] = Field(default_factory=list)


class Settings(BaseModel):
    app: AppSettings = Field(default_factory=AppSettings)
    geodesy: GeodesySettings = Field(default_factory=GeodesySettings)
    api: ApiSettings = Field(default_factory=ApiSettings)


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    """Overlay selected environment variables onto raw settings payload.

    Note: We intentionally keep this whitelist small; anything else belongs in YAML.
    """
    load_dotenv_if_present()
    data = dict(data)

    log_level = os.getenv("GEOSPHERE_LOG_LEVEL")
    if log_level:
        data.setdefault("app", {})["log_level"] = log_level

    radius = os.getenv("GEOSPHERE_EARTH_RADIUS_M")
    if radius:
        data.setdefault("geodesy", {})["earth_radius_m"] = radius

    default_format = os.getenv("GEOSPHERE_DEFAULT_FORMAT")
    if default_format:
        data.setdefault("geodesy", {})["default_format"] = default_format.strip().lower()

    return data


@lru_cache
def get_settings() -> Settings:
    """Load and validate settings (cached)."""
    load_dotenv_if_present()
    config_path = os.getenv("GEOSPHERE_CONFIG_PATH")
    raw = _read_yaml_file(config_path) if config_path else _read_package_yaml("defaults.yaml")
    raw = _apply_env_overrides(raw)
    return Settings.model_validate(raw)


@lru_cache
def get_logging_config() -> dict[str, Any]:
    """Load logging configuration (cached)."""
    return _read_package_yaml("logging.yaml")
