"""Configuration package for eduportal."""

from eduportal.config.app_config import (
    AppConfig,
    BackendConfig,
    SessionConfig,
    SiteConfig,
    clear_config_cache,
    load_app_config,
)

__all__ = [
    "AppConfig",
    "BackendConfig",
    "SessionConfig",
    "SiteConfig",
    "clear_config_cache",
    "load_app_config",
]
