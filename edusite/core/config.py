"""
Typed configuration helpers for the content site.

The site YAML names the remote store, the outline model and the admin gate.
Secrets never live in the YAML; each section points at the environment
variable that carries them.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

DEFAULT_STORE_KEY_ENV = "SUPABASE_ANON_KEY"
DEFAULT_ADMIN_PASSWORD_ENV = "EDUSITE_ADMIN_PASSWORD"


class StoreConfig(BaseModel):
    """Connection info for the hosted table service."""

    base_url: str = Field(..., description="Project URL, e.g. https://<ref>.supabase.co")
    api_key: str | None = None
    api_key_env: str = DEFAULT_STORE_KEY_ENV
    rest_path: str = "/rest/v1"
    timeout: float = Field(default=30.0, gt=0)

    @field_validator("base_url", mode="before")
    @classmethod
    def strip_trailing_slash(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().rstrip("/")
        return value

    def resolve_api_key(self) -> str | None:
        if self.api_key:
            return self.api_key
        return os.getenv(self.api_key_env)


class OutlineModelConfig(BaseModel):
    """LM settings for the course outline generator."""

    model_config = ConfigDict(extra="allow")

    provider: Literal["openai"] = "openai"
    model: str = "gpt-4o-mini"
    temperature: float | None = Field(default=0.7, ge=0.0, le=1.0)
    max_tokens: int | None = Field(default=4000, ge=64)
    api_key_env: str | None = None
    api_base: str | None = None
    api_base_env: str | None = None
    default_category: str = "Umumiy"
    min_chapters: int = Field(default=5, ge=1)
    requested_chapters: int = Field(default=6, ge=1)

    @model_validator(mode="after")
    def check_chapter_counts(self) -> "OutlineModelConfig":
        if self.requested_chapters < self.min_chapters:
            raise ValueError("requested_chapters must be >= min_chapters")
        return self

    @property
    def extra_kwargs(self) -> Dict[str, Any]:
        return getattr(self, "model_extra", {}) or {}


class AdminConfig(BaseModel):
    """Credentials for the hidden admin console."""

    username: str = "admin"
    password: str | None = None
    password_env: str = DEFAULT_ADMIN_PASSWORD_ENV
    login_delay_seconds: float = Field(default=1.0, ge=0.0)
    session_ttl_seconds: float = Field(default=8 * 3600, gt=0)

    def resolve_password(self) -> str | None:
        if self.password:
            return self.password
        return os.getenv(self.password_env)


class PreferencesConfig(BaseModel):
    """Location of the persisted display-language preference."""

    path: Path = Field(default=Path("outputs/preferences.json"))
    default_language: Literal["uz", "ru", "en"] = "uz"

    @field_validator("path", mode="before")
    @classmethod
    def coerce_path(cls, value: Any) -> Path:
        return Path(value).expanduser()


class SiteConfig(BaseModel):
    """Top-level configuration for the site runtime."""

    store: StoreConfig
    ai: OutlineModelConfig = Field(default_factory=OutlineModelConfig)
    admin: AdminConfig = Field(default_factory=AdminConfig)
    preferences: PreferencesConfig = Field(default_factory=PreferencesConfig)

    @model_validator(mode="before")
    @classmethod
    def ensure_sections_present(cls, values: Any) -> Any:
        if isinstance(values, dict) and "store" not in values:
            raise ValueError("Missing config sections: store")
        return values


def read_yaml_file(path: Path) -> Dict[str, Any]:
    """Load a YAML file and return a dictionary."""
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected mapping at root of {path}, received {type(data)}")
    return data


def _absolutize_preferences_path(data: Dict[str, Any], base_dir: Path) -> None:
    preferences = data.get("preferences")
    if not isinstance(preferences, dict) or not preferences.get("path"):
        return
    path = Path(preferences["path"]).expanduser()
    if not path.is_absolute():
        path = base_dir / path
    preferences["path"] = str(path.resolve())


def load_site_config(path: Path, *, base_dir: Path | None = None) -> SiteConfig:
    """Load the site config used by the backend and the CLI."""
    path = path.expanduser().resolve()
    data = read_yaml_file(path)
    _absolutize_preferences_path(data, base_dir=(base_dir or path.parent).resolve())
    try:
        return SiteConfig.model_validate(data)
    except ValidationError as exc:
        raise ValueError(f"Invalid site config in {path}") from exc


__all__ = [
    "AdminConfig",
    "OutlineModelConfig",
    "PreferencesConfig",
    "SiteConfig",
    "StoreConfig",
    "load_site_config",
    "read_yaml_file",
]
