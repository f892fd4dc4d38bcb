"""An event store wrapper that records successfully saved events."""

from __future__ import annotations

import threading
from typing import Iterable

from eventhorizon.event import Event
from eventhorizon.memory_store import DEFAULT_NAMESPACE, MemoryEventStore


class TracingEventStore:
    """Wraps another event store and traces the events saved through it."""

    def __init__(self, store: MemoryEventStore) -> None:
        if store is None:
            raise ValueError("an event store to wrap is required")
        self._store = store
        self._tracing = False
        self._trace: list[Event] = []
        self._lock = threading.Lock()

    def save(
        self,
        events: Iterable[Event],
        original_version: int,
        namespace: str = DEFAULT_NAMESPACE,
    ) -> None:
        """Save through the wrapped store and trace the events if tracing is on."""
        events = list(events)
        self._store.save(events, original_version, namespace)
        with self._lock:
            if self._tracing:
                self._trace.extend(events)

    def load(self, aggregate_id: str, namespace: str = DEFAULT_NAMESPACE) -> list[Event]:
        """Load events from the wrapped store."""
        return self._store.load(aggregate_id, namespace)

    def replace(self, event: Event, namespace: str = DEFAULT_NAMESPACE) -> None:
        """Replace an event in the wrapped store."""
        self._store.replace(event, namespace)

    def rename_event(
        self, from_type: str, to_type: str, namespace: str = DEFAULT_NAMESPACE
    ) -> None:
        """Rename event types in the wrapped store."""
        self._store.rename_event(from_type, to_type, namespace)

    def start_tracing(self) -> None:
        """Start recording saved events."""
        with self._lock:
            self._tracing = True

    def stop_tracing(self) -> None:
        """Stop recording saved events."""
        with self._lock:
            self._tracing = False

    def trace(self) -> list[Event]:
        """Return the events recorded while tracing."""
        with self._lock:
            return list(self._trace)

    def reset_trace(self) -> None:
        """Forget all recorded events."""
        with self._lock:
            self._trace = []