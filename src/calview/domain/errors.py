from __future__ import annotations

from typing import Iterable


class EventStoreError(RuntimeError):
    """Base class for failures reported by an event store."""


class ValidationError(EventStoreError):
    """Raised when a draft is rejected by the store."""

    def __init__(self, problems: Iterable[str]) -> None:
        self.problems = list(problems)
        super().__init__("; ".join(self.problems) or "Invalid event draft.")


class NotFoundError(EventStoreError):
    """Raised when an event targeted by an update or delete does not exist."""

    def __init__(self, event_id: str) -> None:
        self.event_id = event_id
        super().__init__(f"Event {event_id} not found.")


class PersistenceError(EventStoreError):
    """Raised when the store cannot read or write its backing file."""
