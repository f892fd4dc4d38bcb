import dataclasses

import pytest

from eventhorizon.event import Event
from eventhorizon.todomvc.events import (
    AGGREGATE_TYPE,
    CREATED,
    DELETED,
    EVENT_DATA,
    ITEM_ADDED,
    ITEM_CHECKED,
    ITEM_DESCRIPTION_SET,
    ITEM_REMOVED,
    ItemAddedData,
    ItemCheckedData,
    ItemDescriptionSetData,
    ItemRemovedData,
)


@pytest.mark.parametrize("event_type", [CREATED, DELETED])
def test_event_types_without_data_are_not_registered(event_type):
    event = Event(event_type, None, aggregate_type=AGGREGATE_TYPE, aggregate_id="x", version=1)
    assert event.data is None
    assert str(event) == f"{event_type}@1"
    assert event.event_type not in EVENT_DATA


@pytest.mark.parametrize(
    "event_type, cls, kwargs",
    [
        (ITEM_ADDED, ItemAddedData, {"item_id": 1, "description": "desc"}),
        (ITEM_REMOVED, ItemRemovedData, {"item_id": 2}),
        (ITEM_DESCRIPTION_SET, ItemDescriptionSetData, {"item_id": 3, "description": "new"}),
        (ITEM_CHECKED, ItemCheckedData, {"item_id": 4, "checked": True}),
    ],
)
def test_registered_factory_builds_data(event_type, cls, kwargs):
    data = EVENT_DATA[event_type](**kwargs)
    assert data == cls(**kwargs)
    assert dataclasses.asdict(data) == kwargs


def test_data_defaults_equal_explicit_zero_values():
    assert ItemAddedData() == ItemAddedData(item_id=0, description="")
    assert ItemCheckedData() == ItemCheckedData(item_id=0, checked=False)
    assert ItemRemovedData() == ItemRemovedData(item_id=0)


def test_data_is_immutable():
    data = ItemDescriptionSetData(item_id=1, description="desc")
    with pytest.raises(dataclasses.FrozenInstanceError):
        data.description = "other"  # type: ignore[misc]
    assert data.description == "desc"


def test_data_with_different_values_differ():
    assert ItemCheckedData(1, True) != ItemCheckedData(1, False)
    assert ItemAddedData(1, "a") != ItemAddedData(2, "a")


def test_event_carries_domain_data():
    data = ItemAddedData(item_id=1, description="desc")
    event = Event(ITEM_ADDED, data, aggregate_type=AGGREGATE_TYPE, aggregate_id="x", version=1)
    assert event.data is data
    assert event.aggregate_type == "todolist"
    assert str(event) == "todolist:item_added@1"