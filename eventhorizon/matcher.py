"""Predicates that decide whether an event matches some criteria."""

from __future__ import annotations

from typing import Callable, Optional

from eventhorizon.event import Event

EventMatcher = Callable[[Optional[Event]], bool]


def match_any() -> EventMatcher:
    """Match every event, including a missing one."""

    def matcher(event: Optional[Event]) -> bool:
        return event is None or isinstance(event, Event)

    return matcher


def match_event(event_type: str) -> EventMatcher:
    """Match events of one event type; a missing event never matches."""

    def matcher(event: Optional[Event]) -> bool:
        return event is not None and event.event_type == event_type

    return matcher


def match_aggregate(aggregate_type: str) -> EventMatcher:
    """Match events of one aggregate type; a missing event never matches."""

    def matcher(event: Optional[Event]) -> bool:
        return event is not None and event.aggregate_type == aggregate_type

    return matcher


def match_any_of(*args: EventMatcher) -> EventMatcher:
    """Match when any of the given matchers matches."""

    def matcher(event: Optional[Event]) -> bool:
        return any(m(event) for m in args)

    return matcher


def match_any_event_of(*args: str) -> EventMatcher:
    """Match events whose type is any of the given event types."""

    def matcher(event: Optional[Event]) -> bool:
        return event is not None and event.event_type in args

    return matcher