"""Event types and event data of the todo list domain."""

from __future__ import annotations

from dataclasses import dataclass

AGGREGATE_TYPE = "todolist"

CREATED = "todolist:created"
DELETED = "todolist:deleted"

ITEM_ADDED = "todolist:item_added"
ITEM_REMOVED = "todolist:item_removed"

ITEM_DESCRIPTION_SET = "todolist:item_description_set"
ITEM_CHECKED = "todolist:item_checked"


@dataclass(frozen=True)
class ItemAddedData:
    """Data of the event after a todo item is added."""

    item_id: int = 0
    description: str = ""


@dataclass(frozen=True)
class ItemRemovedData:
    """Data of the event after a todo item is removed."""

    item_id: int = 0


@dataclass(frozen=True)
class ItemDescriptionSetData:
    """Data of the event after a todo item's description is set."""

    item_id: int = 0
    description: str = ""


@dataclass(frozen=True)
class ItemCheckedData:
    """Data of the event after a todo item's checked status is changed."""

    item_id: int = 0
    checked: bool = False


# Event types that carry data, mapped to the class of that data.
EVENT_DATA = {
    ITEM_ADDED: ItemAddedData,
    ITEM_REMOVED: ItemRemovedData,
    ITEM_DESCRIPTION_SET: ItemDescriptionSetData,
    ITEM_CHECKED: ItemCheckedData,
}