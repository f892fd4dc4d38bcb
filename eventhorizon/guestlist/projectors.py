"""Read models of the guest list domain, their projectors and logging helpers."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable

from eventhorizon.event import Event
from eventhorizon.guestlist.events import (
    INVITE_ACCEPTED,
    INVITE_CONFIRMED,
    INVITE_CREATED,
    INVITE_DECLINED,
    INVITE_DENIED,
    InviteCreatedData,
)

_log = logging.getLogger(__name__)

_STATUSES = {
    INVITE_ACCEPTED: "accepted",
    INVITE_DECLINED: "declined",
    INVITE_CONFIRMED: "confirmed",
    INVITE_DENIED: "denied",
}


@dataclass
class Invitation:
    """Read model of one invitation."""

    id: str = ""
    version: int = 0
    name: str = ""
    age: int = 0
    status: str = ""

    @property
    def entity_id(self) -> str:
        """The ID of the invitation."""
        return self.id

    @property
    def aggregate_version(self) -> int:
        """The aggregate version this model has been projected to."""
        return self.version


class InvitationProjector:
    """Projects invitation events onto Invitation read models."""

    projector_type = "InvitationProjector"

    def project(self, event: Event, entity: Any) -> Invitation:
        """Return the invitation updated by the event."""
        if not isinstance(entity, Invitation):
            raise TypeError("model is of incorrect type")

        if event.event_type == INVITE_CREATED:
            data = event.data
            if not isinstance(data, InviteCreatedData):
                raise TypeError(f"projector: invalid event data type: {data!r}")
            entity.id = event.aggregate_id
            entity.name = data.name
            entity.age = data.age
        elif event.event_type in _STATUSES:
            entity.status = _STATUSES[event.event_type]
        else:
            raise ValueError(f"could not handle event: {event}")

        entity.version += 1
        return entity


@dataclass
class GuestList:
    """Read model counting the guests of one event."""

    id: str = ""
    num_guests: int = 0
    num_accepted: int = 0
    num_declined: int = 0
    num_confirmed: int = 0
    num_denied: int = 0

    @property
    def entity_id(self) -> str:
        """The ID of the guest list."""
        return self.id


class GuestListProjector:
    """Keeps the guest list counts up to date in a repository.

    The repository's ``find`` raises LookupError for a missing entity, and
    ``save`` stores an entity.
    """

    handler_type = "GuestListProjector"

    def __init__(self, repo: Any, event_id: str) -> None:
        self._repo = repo
        self._event_id = event_id
        self._lock = threading.Lock()

    def handle_event(self, event: Event) -> None:
        """Count an accepted, declined, confirmed or denied invite."""
        with self._lock:
            try:
                guest_list = self._repo.find(self._event_id)
            except LookupError:
                guest_list = GuestList(id=self._event_id)
            else:
                if not isinstance(guest_list, GuestList):
                    raise TypeError("projector: incorrect entity type")

            event_type = event.event_type
            if event_type == INVITE_ACCEPTED:
                guest_list.num_accepted += 1
                guest_list.num_guests += 1
            elif event_type == INVITE_DECLINED:
                guest_list.num_declined += 1
                guest_list.num_guests += 1
            elif event_type == INVITE_CONFIRMED:
                guest_list.num_confirmed += 1
            elif event_type == INVITE_DENIED:
                guest_list.num_denied += 1
            else:
                raise ValueError(f"could not handle event: {event}")

            try:
                self._repo.save(guest_list)
            except Exception as exc:
                raise RuntimeError(f"projector: could not save: {exc}") from exc


class EventLogger:
    """An event observer that logs every event."""

    handler_type = "logger"

    def handle_event(self, event: Event) -> None:
        """Log the event."""
        _log.info("event: %s", event)


def logging_middleware(handler: Callable[[Any], None]) -> Callable[[Any], None]:
    """Wrap a command handler so that every command is logged before it is handled."""

    def handle(command: Any) -> None:
        _log.info("command: %r", command)
        handler(command)

    return handle