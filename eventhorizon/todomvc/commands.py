"""Commands of the todo list domain and their decoding from JSON."""

from __future__ import annotations

import json
from dataclasses import dataclass, field, fields
from typing import Any, ClassVar, Mapping

from eventhorizon.todomvc.events import AGGREGATE_TYPE

CREATE_COMMAND = "todolist:create"
DELETE_COMMAND = "todolist:delete"

ADD_ITEM_COMMAND = "todolist:add_item"
REMOVE_ITEM_COMMAND = "todolist:remove_item"
REMOVE_COMPLETED_ITEMS_COMMAND = "todolist:remove_completed_items"

SET_ITEM_DESCRIPTION_COMMAND = "todolist:set_item_description"
CHECK_ITEM_COMMAND = "todolist:check_item"
CHECK_ALL_ITEMS_COMMAND = "todolist:check_all_items"


def _json(key: str, default: Any) -> Any:
    return field(default=default, metadata={"json": key})


@dataclass(frozen=True)
class _TodoCommand:
    command_type: ClassVar[str] = ""
    aggregate_type: ClassVar[str] = AGGREGATE_TYPE

    id: str = _json("id", "")

    @property
    def aggregate_id(self) -> str:
        """The ID of the todo list the command targets."""
        return self.id


@dataclass(frozen=True)
class Create(_TodoCommand):
    """Create a new todo list."""

    command_type = CREATE_COMMAND


@dataclass(frozen=True)
class Delete(_TodoCommand):
    """Delete a todo list."""

    command_type = DELETE_COMMAND


@dataclass(frozen=True)
class AddItem(_TodoCommand):
    """Add a todo item."""

    command_type = ADD_ITEM_COMMAND

    description: str = _json("desc", "")


@dataclass(frozen=True)
class RemoveItem(_TodoCommand):
    """Remove a todo item."""

    command_type = REMOVE_ITEM_COMMAND

    item_id: int = _json("item_id", 0)


@dataclass(frozen=True)
class RemoveCompletedItems(_TodoCommand):
    """Remove all completed todo items."""

    command_type = REMOVE_COMPLETED_ITEMS_COMMAND


@dataclass(frozen=True)
class SetItemDescription(_TodoCommand):
    """Set the description of a todo item."""

    command_type = SET_ITEM_DESCRIPTION_COMMAND

    item_id: int = _json("item_id", 0)
    description: str = _json("desc", "")


@dataclass(frozen=True)
class CheckItem(_TodoCommand):
    """Set the checked status of a todo item."""

    command_type = CHECK_ITEM_COMMAND

    item_id: int = _json("item_id", 0)
    checked: bool = _json("checked", False)


@dataclass(frozen=True)
class CheckAllItems(_TodoCommand):
    """Set the checked status of all todo items."""

    command_type = CHECK_ALL_ITEMS_COMMAND

    checked: bool = _json("checked", False)


COMMANDS = {
    cls.command_type: cls
    for cls in (
        Create,
        Delete,
        AddItem,
        RemoveItem,
        RemoveCompletedItems,
        SetItemDescription,
        CheckItem,
        CheckAllItems,
    )
}


def command_from_json(command_type: str, payload: Any) -> _TodoCommand:
    """Build a command of the given type from a JSON object or its text.

    Unknown keys are ignored and missing or null keys keep their defaults.
    Raises ValueError for an unregistered command type and TypeError for a
    payload or value of the wrong type.
    """
    try:
        cls = COMMANDS[command_type]
    except KeyError:
        raise ValueError(f"command type not registered: {command_type}") from None

    if isinstance(payload, (str, bytes, bytearray)):
        payload = json.loads(payload)
    if not isinstance(payload, Mapping):
        raise TypeError(f"cannot decode {type(payload).__name__} into {cls.__name__}")

    values = {}
    for f in fields(cls):
        key = f.metadata["json"]
        value = payload.get(key)
        if value is None:
            continue
        expected = type(f.default)
        if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
            raise TypeError(
                f"cannot decode {type(value).__name__} into field {key} "
                f"of type {expected.__name__}"
            )
        values[f.name] = value
    return cls(**values)