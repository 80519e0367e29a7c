# Configuration Module

from pr_validator.config.settings import (
    Settings,
    get_settings,
    reset_settings,
    CISettings,
    DevelopmentSettings,
    get_environment_settings,
    DEFAULT_TITLE_PATTERN
)

__all__ = [
    "Settings",
    "get_settings",
    "reset_settings",
    "CISettings",
    "DevelopmentSettings",
    "get_environment_settings",
    "DEFAULT_TITLE_PATTERN"
]
