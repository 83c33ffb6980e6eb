"""Application settings.

Sections are plain pydantic models; the root `Settings` is a
`pydantic_settings.BaseSettings` so every field can be overridden from the
environment (`PROPSHEET_PROVIDER__TIMEOUT_SECONDS=30`). A YAML file, if one
is found, supplies defaults underneath explicit arguments and env values.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

CONFIG_ENV_VAR = "PROPSHEET_CONFIG"

_last_yaml_path: Optional[Path] = None


class ProviderSettings(BaseModel):
    events_url: str = "https://cms-prod.ladbrokes.com/cms/api/ladbrokes/fsc/16"
    odds_url: str = (
        "https://ss-aka-ori.ladbrokes.com/openbet-ssviewer/Drilldown/2.86/EventToOutcomeForEvent/{EVENT_ID}"
        "?scorecast=true&translationLang=en&responseFormat=json&referenceEachWayTerms=true"
    )
    user_agent: str = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"
    timeout_seconds: float = 15.0

    @field_validator("timeout_seconds")
    @classmethod
    def _positive_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("timeout_seconds must be > 0")
        return value

    @field_validator("odds_url")
    @classmethod
    def _odds_url_placeholder(cls, value: str) -> str:
        if "{EVENT_ID}" not in value:
            raise ValueError("odds_url must contain the {EVENT_ID} placeholder")
        return value


class ExportSettings(BaseModel):
    output_dir: str = "."
    date_format: str = "%d.%m.%Y"
    time_format: str = "%H:%M"
    # IANA zone for the Datum/Vreme columns; None keeps the provider offset
    timezone: Optional[str] = None

    @field_validator("timezone")
    @classmethod
    def _known_timezone(cls, value: Optional[str]) -> Optional[str]:
        if not value:
            return None
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"unknown timezone: {value}") from exc
        return value


class LoggingSettings(BaseModel):
    json_logs: bool = False
    level: str = "INFO"
    log_dir: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _alias_json(cls, data: Any) -> Any:
        if isinstance(data, dict) and "json" in data and "json_logs" not in data:
            data = dict(data)
            data["json_logs"] = data.pop("json")
        return data


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="PROPSHEET_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    provider: ProviderSettings = Field(default_factory=ProviderSettings)
    export: ExportSettings = Field(default_factory=ExportSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


def _project_root() -> Path:
    return Path(__file__).resolve().parents[2]


def last_yaml_path() -> Optional[Path]:
    """Path of the YAML file used by the most recent `load_settings` call."""
    return _last_yaml_path


def _yaml_candidates(path: Optional[str | Path]) -> list[Path]:
    candidates: list[Path] = []
    if path:
        candidates.append(Path(path))
    env_path = os.getenv(CONFIG_ENV_VAR)
    if env_path:
        candidates.append(Path(env_path))
    candidates.append(Path.cwd() / "config" / "propsheet.yaml")
    candidates.append(_project_root() / "config" / "propsheet.yaml")
    return candidates


def _load_yaml_overrides(path: Optional[str | Path]) -> Dict[str, Any]:
    global _last_yaml_path
    _last_yaml_path = None
    for candidate in _yaml_candidates(path):
        if not candidate.exists():
            continue
        with candidate.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"{candidate} must contain a mapping at the top level")
        _last_yaml_path = candidate.resolve()
        return data
    return {}


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_settings(path: Optional[str | Path] = None, **overrides: Any) -> Settings:
    """Build settings from YAML defaults, the environment and explicit overrides.

    Precedence (highest first): keyword overrides, PROPSHEET_* environment
    variables, the YAML file.
    """
    yaml_data = _load_yaml_overrides(path)
    env_settings = Settings()
    env_data = env_settings.model_dump(exclude_defaults=True)
    data = _deep_merge(_deep_merge(yaml_data, env_data), overrides)
    return Settings.model_validate(data)


def sanitize_dict(data: Dict[str, Any]) -> Dict[str, Any]:
    """Copy of a settings dump that is safe to log."""
    redacted: Dict[str, Any] = {}
    for key, value in data.items():
        if isinstance(value, dict):
            redacted[key] = sanitize_dict(value)
        elif any(word in key.lower() for word in ("key", "token", "secret", "password")):
            redacted[key] = "***"
        else:
            redacted[key] = value
    return redacted
