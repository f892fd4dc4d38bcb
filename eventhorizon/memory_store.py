"""An event store that keeps aggregates' events in memory, per namespace."""

from __future__ import annotations

import dataclasses
import threading
from dataclasses import dataclass, field
from typing import Iterable

from eventhorizon.event import Event

DEFAULT_NAMESPACE = "default"

NO_EVENTS_TO_APPEND = "no events to append"
INCORRECT_EVENT_VERSION = "mismatching event version"
COULD_NOT_SAVE_AGGREGATE = "could not save aggregate"
INVALID_EVENT = "invalid event"
AGGREGATE_NOT_FOUND = "aggregate not found"


class EventStoreError(Exception):
    """A failure of an event store operation within a namespace."""

    def __init__(self, reason: str, namespace: str = DEFAULT_NAMESPACE) -> None:
        super().__init__(f"{reason} ({namespace})")
        self.reason = reason
        self.namespace = namespace


class InvalidEventError(EventStoreError):
    """An event does not belong to the aggregate or version it targets."""

    def __init__(self, namespace: str = DEFAULT_NAMESPACE) -> None:
        super().__init__(INVALID_EVENT, namespace)


class AggregateNotFoundError(EventStoreError):
    """No events are stored for the requested aggregate."""

    def __init__(self, namespace: str = DEFAULT_NAMESPACE) -> None:
        super().__init__(AGGREGATE_NOT_FOUND, namespace)


@dataclass
class _AggregateRecord:
    aggregate_id: str
    version: int
    events: list[Event] = field(default_factory=list)


class MemoryEventStore:
    """Stores event streams per aggregate, separated by namespace."""

    def __init__(self) -> None:
        self._db: dict[str, dict[str, _AggregateRecord]] = {}
        self._lock = threading.RLock()

    def _aggregates(self, namespace: str) -> dict[str, _AggregateRecord]:
        return self._db.setdefault(namespace, {})

    def save(
        self,
        events: Iterable[Event],
        original_version: int,
        namespace: str = DEFAULT_NAMESPACE,
    ) -> None:
        """Append events to an aggregate whose stored version is original_version."""
        events = list(events)
        if not events:
            raise EventStoreError(NO_EVENTS_TO_APPEND, namespace)

        aggregate_id = events[0].aggregate_id
        for expected_version, event in enumerate(events, start=original_version + 1):
            if event.aggregate_id != aggregate_id:
                raise InvalidEventError(namespace)
            if event.version != expected_version:
                raise EventStoreError(INCORRECT_EVENT_VERSION, namespace)

        with self._lock:
            aggregates = self._aggregates(namespace)
            if original_version == 0:
                aggregates[aggregate_id] = _AggregateRecord(
                    aggregate_id, len(events), events
                )
                return

            record = aggregates.get(aggregate_id)
            if record is None:
                return
            if record.version != original_version:
                raise EventStoreError(COULD_NOT_SAVE_AGGREGATE, namespace)
            record.version += len(events)
            record.events.extend(events)

    def load(self, aggregate_id: str, namespace: str = DEFAULT_NAMESPACE) -> list[Event]:
        """Return the events of an aggregate in version order, or an empty list."""
        with self._lock:
            record = self._aggregates(namespace).get(aggregate_id)
            return list(record.events) if record is not None else []

    def replace(self, event: Event, namespace: str = DEFAULT_NAMESPACE) -> None:
        """Replace the stored event that has the same aggregate and version."""
        with self._lock:
            record = self._aggregates(namespace).get(event.aggregate_id)
            if record is None:
                raise AggregateNotFoundError(namespace)
            for index, stored in enumerate(record.events):
                if stored.version == event.version:
                    record.events[index] = event
                    return
            raise InvalidEventError(namespace)

    def rename_event(
        self, from_type: str, to_type: str, namespace: str = DEFAULT_NAMESPACE
    ) -> None:
        """Change the type of every stored event of from_type to to_type."""
        with self._lock:
            for record in self._aggregates(namespace).values():
                record.events = [
                    dataclasses.replace(e, event_type=to_type)
                    if e.event_type == from_type
                    else e
                    for e in record.events
                ]