"""Application configuration loader.

Loads configuration from data/config/app_config_v1.yaml when present,
falls back to built-in defaults, then applies environment overrides.

Usage:
    from eduportal.config.app_config import load_app_config

    config = load_app_config()
    url = config.backend.url
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import structlog
import yaml

logger = structlog.get_logger(__name__)

# Config file path (relative to project root)
CONFIG_FILE = Path("data/config/app_config_v1.yaml")

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass
class BackendConfig:
    """Connection settings for the Supabase project."""

    url: str = ""
    anon_key_env: str = "SUPABASE_ANON_KEY"

    def get_anon_key(self) -> str | None:
        """Get the anon key from its environment variable."""
        if self.anon_key_env:
            return os.environ.get(self.anon_key_env)
        return None


@dataclass
class SiteConfig:
    """Site-wide switches."""

    environment: str = "development"
    protect_site: bool = False
    allowed_origins: list[str] = field(default_factory=list)

    @property
    def is_locked(self) -> bool:
        """The lockout only applies in production."""
        return self.environment == "production" and self.protect_site


@dataclass
class SessionConfig:
    """Cookie settings for the auth tokens."""

    access_cookie: str = "sb-access-token"
    refresh_cookie: str = "sb-refresh-token"
    secure_cookies: bool = False
    max_age_seconds: int = 60 * 60 * 24 * 7


@dataclass
class AppConfig:
    """Application-wide configuration."""

    backend: BackendConfig = field(default_factory=BackendConfig)
    site: SiteConfig = field(default_factory=SiteConfig)
    session: SessionConfig = field(default_factory=SessionConfig)


# Module-level cache
_cached_config: AppConfig | None = None


def _get_defaults() -> dict[str, Any]:
    """Get default configuration values."""
    return {
        "backend": {
            "url": "",
            "anon_key_env": "SUPABASE_ANON_KEY",
        },
        "site": {
            "environment": "development",
            "protect_site": False,
            "allowed_origins": [],
        },
        "session": {
            "access_cookie": "sb-access-token",
            "refresh_cookie": "sb-refresh-token",
            "secure_cookies": False,
            "max_age_seconds": 60 * 60 * 24 * 7,
        },
    }


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _TRUE_VALUES


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    """Environment variables win over file values."""
    backend = data.setdefault("backend", {})
    site = data.setdefault("site", {})

    if os.environ.get("SUPABASE_URL"):
        backend["url"] = os.environ["SUPABASE_URL"]
    if os.environ.get("APP_ENV"):
        site["environment"] = os.environ["APP_ENV"]
    if "PROTECT_SITE" in os.environ:
        site["protect_site"] = _as_bool(os.environ["PROTECT_SITE"])

    return data


def _parse_config(data: dict[str, Any]) -> AppConfig:
    """Parse configuration dictionary into AppConfig object."""
    defaults = _get_defaults()

    backend_data = {**defaults["backend"], **(data.get("backend") or {})}
    backend = BackendConfig(
        url=backend_data["url"] or "",
        anon_key_env=backend_data["anon_key_env"],
    )

    site_data = {**defaults["site"], **(data.get("site") or {})}
    site = SiteConfig(
        environment=str(site_data["environment"]),
        protect_site=_as_bool(site_data["protect_site"]),
        allowed_origins=[str(o) for o in site_data["allowed_origins"] or []],
    )

    session_data = {**defaults["session"], **(data.get("session") or {})}
    session = SessionConfig(
        access_cookie=session_data["access_cookie"],
        refresh_cookie=session_data["refresh_cookie"],
        secure_cookies=_as_bool(session_data["secure_cookies"]),
        max_age_seconds=int(session_data["max_age_seconds"]),
    )

    return AppConfig(backend=backend, site=site, session=session)


def load_app_config(force_reload: bool = False) -> AppConfig:
    """Load application config.

    Args:
        force_reload: If True, ignore cached config and reload from file.

    Returns:
        AppConfig object with all settings.
    """
    global _cached_config

    if _cached_config is not None and not force_reload:
        return _cached_config

    data: dict[str, Any]

    if CONFIG_FILE.exists():
        logger.debug("loading_app_config", source=str(CONFIG_FILE))
        data = yaml.safe_load(CONFIG_FILE.read_text(encoding="utf-8")) or {}
    else:
        logger.info("using_default_config")
        data = _get_defaults()

    _cached_config = _parse_config(_apply_env_overrides(data))
    return _cached_config


def clear_config_cache() -> None:
    """Clear the configuration cache.

    Useful for testing or when config is modified at runtime.
    """
    global _cached_config
    _cached_config = None
