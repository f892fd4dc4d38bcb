"""The invitation aggregate, guarding that an invite is accepted or declined, not both."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from eventhorizon.event import Event
from eventhorizon.guestlist.commands import (
    AcceptInvite,
    ConfirmInvite,
    CreateInvite,
    DeclineInvite,
    DenyInvite,
)
from eventhorizon.guestlist.events import (
    INVITATION_AGGREGATE_TYPE,
    INVITE_ACCEPTED,
    INVITE_CONFIRMED,
    INVITE_CREATED,
    INVITE_DECLINED,
    INVITE_DENIED,
    InviteCreatedData,
)

_log = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class InvitationError(Exception):
    """A command that the invitation cannot accept."""


class InvitationAggregate:
    """An invitation that records events for the commands it accepts."""

    aggregate_type = INVITATION_AGGREGATE_TYPE

    def __init__(self, aggregate_id: str, *, version: int = 0, clock: Clock = _utc_now) -> None:
        self.id = aggregate_id
        self.version = version
        self.name = ""
        self.age = 0
        self.accepted = False
        self.declined = False
        self.confirmed = False
        self.denied = False
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

    def _require_invitee(self) -> None:
        if not self.name:
            raise InvitationError("invitee does not exist")

    def handle_command(self, cmd: Any) -> None:
        """Validate a command and store the event it results in, if any."""
        if isinstance(cmd, CreateInvite):
            self.store_event(INVITE_CREATED, InviteCreatedData(cmd.name, cmd.age))
        elif isinstance(cmd, AcceptInvite):
            self._require_invitee()
            if self.declined:
                raise InvitationError(f"{self.name} already declined")
            if not self.accepted:
                self.store_event(INVITE_ACCEPTED)
        elif isinstance(cmd, DeclineInvite):
            self._require_invitee()
            if self.accepted:
                raise InvitationError(f"{self.name} already accepted")
            if not self.declined:
                self.store_event(INVITE_DECLINED)
        elif isinstance(cmd, ConfirmInvite):
            self._require_invitee()
            if not self.accepted or self.declined:
                raise InvitationError("only accepted invites can be confirmed")
            self.store_event(INVITE_CONFIRMED)
        elif isinstance(cmd, DenyInvite):
            self._require_invitee()
            if not self.accepted or self.declined:
                raise InvitationError("only accepted invites can be denied")
            self.store_event(INVITE_DENIED)
        else:
            raise InvitationError("couldn't handle command")

    def apply_event(self, event: Event) -> None:
        """Update the invitation's state from an event."""
        event_type = event.event_type
        if event_type == INVITE_CREATED:
            if isinstance(event.data, InviteCreatedData):
                self.name = event.data.name
                self.age = event.data.age
            else:
                _log.warning("invalid event data type: %r", event.data)
        elif event_type == INVITE_ACCEPTED:
            self.accepted = True
        elif event_type == INVITE_DECLINED:
            self.declined = True
        elif event_type == INVITE_CONFIRMED:
            self.confirmed = True
        elif event_type == INVITE_DENIED:
            self.denied = True