"""The todo list aggregate: validates commands and applies events."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Callable, Optional

from eventhorizon.event import Event
from eventhorizon.todomvc.commands import (
    AddItem,
    CheckAllItems,
    CheckItem,
    Create,
    Delete,
    RemoveCompletedItems,
    RemoveItem,
    SetItemDescription,
)
from eventhorizon.todomvc.events import (
    AGGREGATE_TYPE,
    CREATED,
    DELETED,
    ITEM_ADDED,
    ITEM_CHECKED,
    ITEM_DESCRIPTION_SET,
    ITEM_REMOVED,
    ItemAddedData,
    ItemCheckedData,
    ItemDescriptionSetData,
    ItemRemovedData,
)
from eventhorizon.todomvc.model import TodoItem

Clock = Callable[[], datetime]


def time_now() -> datetime:
    """Return the current local time, aware of its UTC offset."""
    return datetime.now().astimezone()


class DomainError(Exception):
    """A command or event that the todo list cannot accept."""


class TodoListAggregate:
    """A todo list aggregate that records events for the commands it accepts."""

    aggregate_type = AGGREGATE_TYPE

    def __init__(
        self,
        aggregate_id: str,
        *,
        created: bool = False,
        next_item_id: int = 0,
        items: Optional[list[TodoItem]] = None,
        version: int = 0,
        clock: Clock = time_now,
    ) -> None:
        self.id = aggregate_id
        self.version = version
        self.created = created
        self.next_item_id = next_item_id
        self.items: list[TodoItem] = list(items) if items is not None else []
        self._clock = clock
        self._events: list[Event] = []

    @property
    def events(self) -> list[Event]:
        """The events stored since the aggregate was loaded, in order."""
        return list(self._events)

    def clear_events(self) -> None:
        """Forget the stored events, typically after they have been saved."""
        self._events = []

    def store_event(
        self, event_type: str, data: Any = None, timestamp: Optional[datetime] = None
    ) -> Event:
        """Record a new event for the next version of this aggregate."""
        event = Event(
            event_type=event_type,
            data=data,
            timestamp=timestamp if timestamp is not None else self._clock(),
            aggregate_type=self.aggregate_type,
            aggregate_id=self.id,
            version=self.version + len(self._events) + 1,
        )
        self._events.append(event)
        return event

    def _find_item(self, item_id: int) -> TodoItem:
        for item in self.items:
            if item.id == item_id:
                return item
        raise DomainError(f"item does not exist: {item_id}")

    def handle_command(self, cmd: Any) -> None:
        """Validate a command and store the events it results in."""
        if isinstance(cmd, Create):
            if self.created:
                raise DomainError("already created")
        elif not self.created:
            raise DomainError("not created")

        if isinstance(cmd, Create):
            self.store_event(CREATED, None, self._clock())
        elif isinstance(cmd, Delete):
            self.store_event(DELETED, None, self._clock())
        elif isinstance(cmd, AddItem):
            self.store_event(
                ITEM_ADDED,
                ItemAddedData(item_id=self.next_item_id, description=cmd.description),
                self._clock(),
            )
        elif isinstance(cmd, RemoveItem):
            self._find_item(cmd.item_id)
            self.store_event(ITEM_REMOVED, ItemRemovedData(item_id=cmd.item_id), self._clock())
        elif isinstance(cmd, RemoveCompletedItems):
            for item in self.items:
                if item.completed:
                    self.store_event(
                        ITEM_REMOVED, ItemRemovedData(item_id=item.id), self._clock()
                    )
        elif isinstance(cmd, SetItemDescription):
            item = self._find_item(cmd.item_id)
            if item.description == cmd.description:
                return
            self.store_event(
                ITEM_DESCRIPTION_SET,
                ItemDescriptionSetData(item_id=cmd.item_id, description=cmd.description),
                self._clock(),
            )
        elif isinstance(cmd, CheckItem):
            item = self._find_item(cmd.item_id)
            if item.completed == cmd.checked:
                return
            self.store_event(
                ITEM_CHECKED,
                ItemCheckedData(item_id=cmd.item_id, checked=cmd.checked),
                self._clock(),
            )
        elif isinstance(cmd, CheckAllItems):
            for item in self.items:
                if item.completed != cmd.checked:
                    self.store_event(
                        ITEM_CHECKED,
                        ItemCheckedData(item_id=item.id, checked=cmd.checked),
                        self._clock(),
                    )
        else:
            raise DomainError(f"could not handle command: {cmd.command_type}")

    def apply_event(self, event: Event) -> None:
        """Update the aggregate's state from an event."""
        event_type = event.event_type
        data = event.data
        if event_type == CREATED:
            self.created = True
        elif event_type == DELETED:
            self.created = False
        elif event_type == ITEM_ADDED:
            if not isinstance(data, ItemAddedData):
                raise DomainError("invalid event data")
            self.items.append(TodoItem(id=data.item_id, description=data.description))
            self.next_item_id += 1
        elif event_type == ITEM_REMOVED:
            if not isinstance(data, ItemRemovedData):
                raise DomainError("invalid event data")
            for index, item in enumerate(self.items):
                if item.id == data.item_id:
                    del self.items[index]
                    break
        elif event_type == ITEM_DESCRIPTION_SET:
            if not isinstance(data, ItemDescriptionSetData):
                raise DomainError("invalid event data")
            for item in self.items:
                if item.id == data.item_id:
                    item.description = data.description
        elif event_type == ITEM_CHECKED:
            if not isinstance(data, ItemCheckedData):
                raise DomainError("invalid event data")
            for item in self.items:
                if item.id == data.item_id:
                    item.completed = data.checked
        else:
            raise DomainError(f"could not apply event: {event_type}")