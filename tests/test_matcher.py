from eventhorizon.event import Event
from eventhorizon.matcher import (
    match_aggregate,
    match_any,
    match_any_event_of,
    match_any_of,
    match_event,
)


def test_match_any():
    m = match_any()
    assert m(None) is True
    assert m(Event("test")) is True


def test_match_event():
    m = match_event("test")
    assert m(None) is False
    assert m(Event("test")) is True
    assert m(Event("other")) is False


def test_match_aggregate():
    m = match_aggregate("test")
    assert m(None) is False
    assert m(Event("test", aggregate_type="test")) is True
    assert m(Event("test", aggregate_type="other")) is False


def test_match_any_of():
    m = match_any_of(match_event("et1"), match_event("et2"))
    assert m(Event("et1")) is True
    assert m(Event("et2")) is True
    assert m(Event("et3")) is False


def test_match_any_of_without_matchers_never_matches():
    assert match_any_of()(Event("et1")) is False


def test_match_any_event_of():
    m = match_any_event_of("test", "test")
    assert m(None) is False
    assert m(Event("test")) is True
    assert m(Event("other")) is False