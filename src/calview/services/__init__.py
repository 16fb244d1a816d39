"""Application services built on top of the event set."""

from __future__ import annotations

from .context import AppContext
from .notifications import Notification, NotificationEngine, Toast

__all__ = ["AppContext", "Notification", "NotificationEngine", "Toast"]
