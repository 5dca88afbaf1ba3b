"""Per-table event hooks fired around database operations."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Callable

__all__ = [
    "EventType",
    "EventRecord",
    "Event",
    "EventRepository",
    "register",
    "add_event",
    "point",
]


class EventType(IntEnum):
    BEFORE_INSERT = 1
    AFTER_INSERT = 2
    BEFORE_UPDATE = 3
    AFTER_UPDATE = 4
    BEFORE_DELETE = 5
    AFTER_DELETE = 6
    BEFORE_SELECT = 7
    AFTER_SELECT = 8
    BEFORE_COUNT = 9
    AFTER_COUNT = 10
    BEFORE_SUM = 11
    AFTER_SUM = 12
    BEFORE_RAW = 13
    AFTER_RAW = 14


@dataclass
class EventRecord:
    """What a handler is told about the operation that fired it."""

    table: str
    sql: str = ""
    args: list[Any] = field(default_factory=list)
    err: BaseException | None = None
    last_insert_id: int = 0
    rows_affected: int = 0
    result: Any = None
    tx: Any = None


@dataclass
class Event:
    """A handler bound to one event type on one table."""

    event_type: EventType
    table: str
    handler: Callable[[EventRecord], Any]

    def handle(self, data: EventRecord) -> None:
        self.handler(data)


_KEY_FORMAT = "event:{}-table:{}"


class EventRepository:
    """Thread-safe store of events; the first registration for a key wins."""

    def __init__(self) -> None:
        self._events: dict[str, Event] = {}
        self._lock = threading.Lock()

    @staticmethod
    def _key(event_type: EventType, table: str) -> str:
        return _KEY_FORMAT.format(int(event_type), table)

    def get(self, event_type: EventType, table: str) -> Event | None:
        with self._lock:
            return self._events.get(self._key(event_type, table))

    def add(self, event: Event) -> None:
        with self._lock:
            self._events.setdefault(self._key(event.event_type, event.table), event)


_events = EventRepository()


def register(event: Event) -> None:
    _events.add(event)


def add_event(
    event_type: EventType, table: str, handle: Callable[[EventRecord], Any]
) -> None:
    register(Event(event_type, table, handle))


def point(event_type: EventType, data: EventRecord) -> None:
    """Run the handler registered for ``event_type`` on ``data.table``, if any."""
    event = _events.get(event_type, data.table)
    if event is not None:
        event.handle(data)