"""Projects todo list events onto the TodoList read model."""

from __future__ import annotations

from typing import Any, Optional

from eventhorizon.event import Event
from eventhorizon.todomvc.aggregate import Clock, time_now
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
from eventhorizon.todomvc.model import TodoItem, TodoList


class ProjectionError(Exception):
    """An event that could not be projected; model holds the model left in place."""

    def __init__(self, message: str, model: Any = None) -> None:
        super().__init__(message)
        self.model = model


class Projector:
    """Applies todo list events to a TodoList read model."""

    projector_type = AGGREGATE_TYPE + "_projector"

    def __init__(self, clock: Clock = time_now) -> None:
        self._clock = clock

    def project(self, event: Event, model: Any) -> Optional[TodoList]:
        """Return the model updated by the event, or None when it should be deleted."""
        if not isinstance(model, TodoList):
            raise ProjectionError("model is of incorrect type")

        event_type = event.event_type
        data = event.data
        if event_type == CREATED:
            model.id = event.aggregate_id
            model.items = []
            model.created_at = self._clock()
        elif event_type == DELETED:
            return None
        elif event_type == ITEM_ADDED:
            if not isinstance(data, ItemAddedData):
                raise ProjectionError("invalid event data")
            model.items.append(TodoItem(id=data.item_id, description=data.description))
        elif event_type == ITEM_REMOVED:
            if not isinstance(data, ItemRemovedData):
                raise ProjectionError("invalid event data")
            for index, item in enumerate(model.items):
                if item.id == data.item_id:
                    del model.items[index]
                    break
        elif event_type == ITEM_DESCRIPTION_SET:
            if not isinstance(data, ItemDescriptionSetData):
                raise ProjectionError("invalid event data")
            for item in model.items:
                if item.id == data.item_id:
                    item.description = data.description
        elif event_type == ITEM_CHECKED:
            if not isinstance(data, ItemCheckedData):
                raise ProjectionError("invalid event data")
            for item in model.items:
                if item.id == data.item_id:
                    item.completed = data.checked
        else:
            raise ProjectionError(f"could not project event: {event_type}", model)

        model.version += 1
        model.updated_at = self._clock()
        return model