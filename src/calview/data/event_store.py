from __future__ import annotations

import logging
from copy import deepcopy
from datetime import time
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import orjson

from ..core.dates import parse_time
from ..domain import CalendarEvent, DateValue, EventDraft, NotFoundError, PersistenceError, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_STORE_STATE: Dict[str, Any] = {
    "events": {},
    "counters": {"evt": 0},
}


def validate_draft(draft: EventDraft) -> List[str]:
    problems: List[str] = []
    if not draft.title or not draft.title.strip():
        problems.append("Title is required.")
    if not draft.calendar or not draft.calendar.strip():
        problems.append("Calendar is required.")
    try:
        draft.date.to_date()
    except ValueError:
        problems.append(f"{draft.date.iso} is not a valid date.")

    start = end = None
    start_valid = True
    try:
        start = parse_time(draft.start_time)
    except ValueError:
        start_valid = False
        problems.append("Start time must be HH:MM.")
    try:
        end = parse_time(draft.end_time)
    except ValueError:
        problems.append("End time must be HH:MM.")
    if end is not None and start is None and start_valid:
        problems.append("End time requires a start time.")
    if start is not None and end is not None and end < start:
        problems.append("End time cannot be before start time.")

    if draft.reminder_minutes is not None and draft.reminder_minutes < 0:
        problems.append("Reminder must not be negative.")
    return problems


def _record_sort_key(record: Dict[str, Any]) -> tuple:
    start = parse_time(record.get("start_time"))
    return (start is not None, start or time.min, record.get("title", ""))


class InMemoryEventStore:
    """Event store keeping date buckets in memory.

    Buckets are keyed by ``YYYY-MM-DD`` and hold plain records; all-day
    events sort ahead of timed ones. Mutations run against a copy that only
    replaces the live state once ``persist`` returns, and subscribers run
    after that.
    """

    def __init__(self) -> None:
        self._state: Optional[Dict[str, Any]] = None
        self._subscribers: List[Callable[[], None]] = []

    # ------------------------------------------------------------------ persistence hooks

    def _load(self) -> Dict[str, Any]:
        return deepcopy(DEFAULT_STORE_STATE)

    def persist(self, state: Dict[str, Any]) -> None:
        return None

    def _ensure_materialized(self) -> None:
        if self._state is not None:
            return
        state = self._load()
        for key, value in DEFAULT_STORE_STATE.items():
            if key not in state:
                state[key] = deepcopy(value)
        self._state = state

    @property
    def data(self) -> Dict[str, Any]:
        self._ensure_materialized()
        assert self._state is not None
        return self._state

    def mutate(self, callback: Callable[[Dict[str, Any]], Any]) -> Any:
        self._ensure_materialized()
        staged = deepcopy(self._state)
        result = callback(staged)
        self.persist(staged)
        self._state = staged
        for subscriber in list(self._subscribers):
            subscriber()
        return result

    def consume_id(self, state: Dict[str, Any], prefix: str) -> str:
        counters = state.setdefault("counters", {})
        current = counters.get(prefix, 0) + 1
        counters[prefix] = current
        return f"{prefix}_{current:04d}"

    # ------------------------------------------------------------------ subscriptions

    def subscribe(self, callback: Callable[[], None]) -> Callable[[], None]:
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    # ------------------------------------------------------------------ reads

    def list_events(self) -> List[CalendarEvent]:
        events: List[CalendarEvent] = []
        for key in sorted(self.data["events"]):
            events.extend(CalendarEvent.from_record(record) for record in self.data["events"][key])
        return events

    def events_for_day(self, day: DateValue) -> List[CalendarEvent]:
        return [CalendarEvent.from_record(record) for record in self.data["events"].get(day.iso, [])]

    def events_for_month(self, year: int, month: int) -> List[CalendarEvent]:
        prefix = DateValue(year=year, month=month, day=1).iso[:8]
        events: List[CalendarEvent] = []
        for key in sorted(self.data["events"]):
            if key.startswith(prefix):
                events.extend(CalendarEvent.from_record(record) for record in self.data["events"][key])
        return events

    # ------------------------------------------------------------------ writes

    def save(self, draft: EventDraft) -> CalendarEvent:
        problems = validate_draft(draft)
        if problems:
            raise ValidationError(problems)

        def _apply(state: Dict[str, Any]) -> CalendarEvent:
            buckets: Dict[str, List[Dict[str, Any]]] = state.setdefault("events", {})
            if draft.id is None:
                event = draft.to_event(self.consume_id(state, "evt"))
            else:
                previous_key = self._locate(buckets, draft.id)
                if previous_key is None:
                    raise NotFoundError(draft.id)
                self._remove(buckets, previous_key, draft.id)
                event = draft.to_event(draft.id)
            bucket = buckets.setdefault(event.date.iso, [])
            bucket.append(event.to_record())
            bucket.sort(key=_record_sort_key)
            return event

        event = self.mutate(_apply)
        logger.info("Stored event %s (%s) on %s", event.id, event.title, event.date.iso)
        return event

    def delete(self, event_id: str, date: DateValue) -> None:
        buckets = self.data["events"]
        if not any(record["id"] == event_id for record in buckets.get(date.iso, [])):
            raise NotFoundError(event_id)

        def _apply(state: Dict[str, Any]) -> None:
            self._remove(state["events"], date.iso, event_id)

        self.mutate(_apply)
        logger.info("Removed event %s from %s", event_id, date.iso)

    @staticmethod
    def _locate(buckets: Dict[str, List[Dict[str, Any]]], event_id: str) -> Optional[str]:
        for key, records in buckets.items():
            if any(record["id"] == event_id for record in records):
                return key
        return None

    @staticmethod
    def _remove(buckets: Dict[str, List[Dict[str, Any]]], key: str, event_id: str) -> None:
        remaining = [record for record in buckets.get(key, []) if record["id"] != event_id]
        if remaining:
            buckets[key] = remaining
        else:
            buckets.pop(key, None)


class JsonEventStore(InMemoryEventStore):
    """Event store persisted to a single JSON document."""

    def __init__(self, path: Path) -> None:
        super().__init__()
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> Dict[str, Any]:
        if not self._path.exists():
            return deepcopy(DEFAULT_STORE_STATE)
        try:
            raw = self._path.read_bytes()
            if not raw.strip():
                return deepcopy(DEFAULT_STORE_STATE)
            return orjson.loads(raw)
        except (OSError, orjson.JSONDecodeError) as exc:
            logger.error("Failed to read events from %s: %s", self._path, exc)
            raise PersistenceError(f"Could not read {self._path}: {exc}") from exc

    def persist(self, state: Dict[str, Any]) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            payload = orjson.dumps(state, option=orjson.OPT_INDENT_2 | orjson.OPT_SORT_KEYS)
            self._path.write_bytes(payload + b"\n")
        except (OSError, orjson.JSONEncodeError) as exc:
            logger.error("Failed to write events to %s: %s", self._path, exc)
            raise PersistenceError(f"Could not write {self._path}: {exc}") from exc


__all__ = ["DEFAULT_STORE_STATE", "InMemoryEventStore", "JsonEventStore", "validate_draft"]
