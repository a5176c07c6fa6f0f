# src/geodistance/config/settings.py
"""
Application settings (Pydantic).

Settings are loaded from `src/geodistance/config/defaults.yaml`, then optionally overridden by:
- an external YAML file via `GEODISTANCE_CONFIG_PATH`
- environment variables (e.g., `GEODISTANCE_LOG_LEVEL`, `GEODISTANCE_VINCENTY_MAX_ITERATIONS`)

Design rule:
- Tuning knobs (iteration limits, fallback policy, demo places) live in YAML, not in the math.
"""

from __future__ import annotations

import os
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field

from geodistance.core.env import load_dotenv_if_present, resolve_project_path
from geodistance.core.errors import UnknownPlaceError
from geodistance.domain.models import GeoPoint, Place


def _read_package_yaml(filename: str) -> dict[str, Any]:
    """Read a YAML file packaged inside `geodistance.config`."""
    text = resources.files("geodistance.config").joinpath(filename).read_text(encoding="utf-8")
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
    name: str = "GeoDistance"
    log_level: str = "INFO"
    default_unit: Literal["km", "mi"] = "km"


class VincentySettings(BaseModel):
    max_iterations: int = Field(100, ge=1)
    tolerance: float = Field(1e-12, gt=0)
    # None keeps the strict behaviour: non-convergence is reported as a failure.
    fallback_method: Literal["haversine", "slc", "sep"] | None = None


class PlaceDefinition(BaseModel):
    label: str = ""
    location: GeoPoint


class Settings(BaseModel):
    app: AppSettings = Field(default_factory=AppSettings)
    vincenty: VincentySettings = Field(default_factory=VincentySettings)
    places: dict[str, PlaceDefinition] = Field(default_factory=dict)

    def get_place(self, code: str) -> Place:
        """Look up a configured place by code (case-insensitive)."""
        wanted = code.strip().upper()
        for key, place in self.places.items():
            if key.upper() == wanted:
                return Place(code=key, label=place.label, location=place.location)
        raise UnknownPlaceError(code, sorted(self.places))


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    """Overlay selected environment variables onto raw settings payload.

    Note: We intentionally keep this whitelist small; anything else belongs in a YAML file.
    """
    load_dotenv_if_present()
    data = dict(data)

    log_level = os.getenv("GEODISTANCE_LOG_LEVEL")
    if log_level:
        data.setdefault("app", {})["log_level"] = log_level

    default_unit = os.getenv("GEODISTANCE_DEFAULT_UNIT")
    if default_unit:
        data.setdefault("app", {})["default_unit"] = default_unit.strip().lower()

    max_iterations = os.getenv("GEODISTANCE_VINCENTY_MAX_ITERATIONS")
    if max_iterations:
        data.setdefault("vincenty", {})["max_iterations"] = max_iterations

    fallback = os.getenv("GEODISTANCE_VINCENTY_FALLBACK")
    if fallback:
        value = fallback.strip().lower()
        data.setdefault("vincenty", {})["fallback_method"] = None if value == "none" else value

    return data


@lru_cache
def get_settings() -> Settings:
    """Load and validate settings (cached)."""
    load_dotenv_if_present()
    config_path = os.getenv("GEODISTANCE_CONFIG_PATH")
    raw = (
        _read_yaml_file(resolve_project_path(config_path))
        if config_path
        else _read_package_yaml("defaults.yaml")
    )
    raw = _apply_env_overrides(raw)
    return Settings.model_validate(raw)


@lru_cache
def get_logging_config() -> dict[str, Any]:
    """Load logging configuration (cached)."""
    return _read_package_yaml("logging.yaml")
