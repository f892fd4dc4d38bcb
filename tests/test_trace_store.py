from dataclasses import dataclass
from datetime import datetime, timezone

import pytest

from eventhorizon.event import Event
from eventhorizon.memory_store import (
    INCORRECT_EVENT_VERSION,
    NO_EVENTS_TO_APPEND,
    EventStoreError,
    MemoryEventStore,
)
from eventhorizon.trace_store import TracingEventStore

EVENT_TYPE = "Event"
OTHER_EVENT_TYPE = "EventOther"
AGGREGATE_TYPE = "Aggregate"
TIMESTAMP = datetime(2009, 11, 10, 23, 0, 0, tzinfo=timezone.utc)
ID1 = "c1138e5f-f6fb-4dd0-8e79-255c6c8d3756"
ID2 = "c1138e5e-f6fb-4dd0-8e79-255c6c8d3756"


@dataclass(frozen=True)
class EventData:
    content: str


def make_event(event_type, data, aggregate_id, version):
    return Event(event_type, data, TIMESTAMP, AGGREGATE_TYPE, aggregate_id, version)


def run_acceptance(store):
    saved = []

    with pytest.raises(EventStoreError) as exc:
        store.save([], 0)
    assert exc.value.reason == NO_EVENTS_TO_APPEND

    event1 = make_event(EVENT_TYPE, EventData("event1"), ID1, 1)
    store.save([event1], 0)
    saved.append(event1)

    with pytest.raises(EventStoreError) as exc:
        store.save([event1], 1)
    assert exc.value.reason == INCORRECT_EVENT_VERSION

    event2 = make_event(EVENT_TYPE, EventData("event2"), ID1, 2)
    store.save([event2], 1)
    saved.append(event2)

    event3 = make_event(OTHER_EVENT_TYPE, None, ID1, 3)
    store.save([event3], 2)
    saved.append(event3)

    more = [make_event(OTHER_EVENT_TYPE, None, ID1, v) for v in (4, 5, 6)]
    store.save(more, 3)
    saved.extend(more)

    event7 = make_event(EVENT_TYPE, EventData("event7"), ID2, 1)
    store.save([event7], 0)
    saved.append(event7)

    assert store.load("missing-aggregate") == []

    loaded = store.load(ID1)
    assert loaded == [event1, event2, event3, *more]
    assert [e.version for e in loaded] == [1, 2, 3, 4, 5, 6]

    assert store.load(ID2) == [event7]
    return saved


def test_requires_wrapped_store():
    with pytest.raises(ValueError):
        TracingEventStore(None)


def test_event_store_tracing():
    store = TracingEventStore(MemoryEventStore())

    store.start_tracing()
    saved = run_acceptance(store)
    store.stop_tracing()

    assert store.trace() == saved

    store.reset_trace()
    assert store.trace() == []

    event1 = saved[0]
    aggregate1_events = [e for e in saved if e.aggregate_id == event1.aggregate_id]

    event7 = make_event(EVENT_TYPE, EventData("event1"), event1.aggregate_id, 7)
    store.save([event7], 6)
    aggregate1_events.append(event7)
    assert store.trace() == []

    loaded = store.load(event1.aggregate_id)
    assert loaded == aggregate1_events
    assert [e.version for e in loaded] == list(range(1, 8))


def test_failed_save_is_not_traced():
    store = TracingEventStore(MemoryEventStore())
    store.start_tracing()
    bad = make_event(EVENT_TYPE, None, ID1, 2)
    with pytest.raises(EventStoreError):
        store.save([bad], 0)
    assert store.trace() == []


def test_replace_and_rename_pass_through():
    store = TracingEventStore(MemoryEventStore())
    event1 = make_event("old", None, ID1, 1)
    store.save([event1], 0)
    modified = make_event("old", EventData("mod"), ID1, 1)
    store.replace(modified)
    assert store.load(ID1) == [modified]
    store.rename_event("old", "new")
    assert [e.event_type for e in store.load(ID1)] == ["new"]