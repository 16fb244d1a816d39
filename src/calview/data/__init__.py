"""Data access layer."""

from __future__ import annotations

from .event_store import InMemoryEventStore, JsonEventStore, validate_draft

__all__ = ["InMemoryEventStore", "JsonEventStore", "validate_draft"]
