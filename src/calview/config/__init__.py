"""Configuration models and helpers."""

from __future__ import annotations

from .settings import (
    AppSettings,
    NotificationSettings,
    StorageSettings,
    UiSettings,
    get_settings,
)
from .theme import CALENDAR_COLORS, AppPalette

__all__ = [
    "AppPalette",
    "AppSettings",
    "CALENDAR_COLORS",
    "NotificationSettings",
    "StorageSettings",
    "UiSettings",
    "get_settings",
]
