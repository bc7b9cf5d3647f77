"""Configuration loading utilities for daybook."""

from .settings import (
    DEFAULT_CONFIG_PATH,
    JournalSettings,
    Settings,
    bootstrap_settings,
    load_settings,
    save_settings,
)

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "JournalSettings",
    "Settings",
    "bootstrap_settings",
    "load_settings",
    "save_settings",
]
