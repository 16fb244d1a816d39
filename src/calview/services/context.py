from __future__ import annotations

from dataclasses import dataclass, field

from ..config import AppSettings, get_settings
from ..core import CalendarController
from ..data import InMemoryEventStore, JsonEventStore
from .notifications import NotificationEngine


@dataclass(slots=True)
class AppContext:
    """Aggregate root wiring settings, the event store, reminders and the controller."""

    settings: AppSettings = field(default_factory=get_settings)
    ephemeral: bool = False
    store: InMemoryEventStore = field(init=False)
    notifications: NotificationEngine = field(init=False)
    controller: CalendarController = field(init=False)

    def __post_init__(self) -> None:
        if self.ephemeral:
            self.store = InMemoryEventStore()
        else:
            self.store = JsonEventStore(self.settings.storage.events_file)
        self.notifications = NotificationEngine(
            default_lead=self.settings.notifications.reminder_lead,
            lookahead=self.settings.notifications.lookahead,
        )
        self.controller = CalendarController(
            self.store,
            self.notifications,
            sidebar_open=self.settings.ui.sidebar_open,
        )
