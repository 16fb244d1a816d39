from __future__ import annotations

import calendar
import os
from dataclasses import dataclass
from datetime import timedelta
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from platformdirs import user_data_dir

load_dotenv()

APP_NAME = "Calview"
APP_AUTHOR = "Calview"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class UiSettings:
    app_name: str
    organization: str
    sidebar_open: bool
    week_start: int

    @property
    def starts_on_monday(self) -> bool:
        return self.week_start == calendar.MONDAY


@dataclass(frozen=True)
class StorageSettings:
    data_dir: Path
    events_file: Path
    log_dir: Path


@dataclass(frozen=True)
class NotificationSettings:
    reminder_lead: timedelta
    poll_interval: timedelta
    lookahead: timedelta


@dataclass(frozen=True)
class AppSettings:
    ui: UiSettings
    storage: StorageSettings
    notifications: NotificationSettings


def _bool_from_env(name: str, default: bool) -> bool:
    raw = (os.getenv(name) or "").strip().lower()
    if raw in _TRUE_VALUES:
        return True
    if raw in _FALSE_VALUES:
        return False
    return default


def _int_from_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value >= 0 else default


def _week_start_from_env(name: str) -> int:
    raw = (os.getenv(name) or "").strip().lower()
    if raw == "monday":
        return calendar.MONDAY
    return calendar.SUNDAY


def _path_from_env(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    return Path(raw).expanduser() if raw else default


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    ui = UiSettings(
        app_name=os.getenv("CALVIEW_APP_NAME", APP_NAME),
        organization=os.getenv("CALVIEW_APP_ORG", APP_AUTHOR),
        sidebar_open=_bool_from_env("CALVIEW_SIDEBAR_OPEN", True),
        week_start=_week_start_from_env("CALVIEW_WEEK_START"),
    )

    data_dir = _path_from_env("CALVIEW_DATA_DIR", Path(user_data_dir(APP_NAME, APP_AUTHOR)))
    storage = StorageSettings(
        data_dir=data_dir,
        events_file=_path_from_env("CALVIEW_EVENTS_FILE", data_dir / "events.json"),
        log_dir=_path_from_env("CALVIEW_LOG_DIR", data_dir / "logs"),
    )

    notifications = NotificationSettings(
        reminder_lead=timedelta(minutes=_int_from_env("CALVIEW_REMINDER_LEAD_MINUTES", 15)),
        poll_interval=timedelta(seconds=_int_from_env("CALVIEW_NOTIFY_INTERVAL_SECONDS", 30) or 30),
        lookahead=timedelta(days=_int_from_env("CALVIEW_NOTIFY_LOOKAHEAD_DAYS", 7)),
    )

    return AppSettings(ui=ui, storage=storage, notifications=notifications)
