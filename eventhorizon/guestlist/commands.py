"""Commands of the guest list domain."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from eventhorizon.guestlist.events import INVITATION_AGGREGATE_TYPE

CREATE_INVITE_COMMAND = "CreateInvite"

ACCEPT_INVITE_COMMAND = "AcceptInvite"
DECLINE_INVITE_COMMAND = "DeclineInvite"

CONFIRM_INVITE_COMMAND = "ConfirmInvite"
DENY_INVITE_COMMAND = "DenyInvite"


@dataclass(frozen=True)
class _InviteCommand:
    command_type: ClassVar[str] = ""
    aggregate_type: ClassVar[str] = INVITATION_AGGREGATE_TYPE

    id: str = ""

    @property
    def aggregate_id(self) -> str:
        """The ID of the invitation the command targets."""
        return self.id


@dataclass(frozen=True)
class CreateInvite(_InviteCommand):
    """Create an invite; the age is optional."""

    command_type = CREATE_INVITE_COMMAND

    name: str = ""
    age: int = 0


@dataclass(frozen=True)
class AcceptInvite(_InviteCommand):
    """Accept an invite."""

    command_type = ACCEPT_INVITE_COMMAND


@dataclass(frozen=True)
class DeclineInvite(_InviteCommand):
    """Decline an invite."""

    command_type = DECLINE_INVITE_COMMAND


@dataclass(frozen=True)
class ConfirmInvite(_InviteCommand):
    """Confirm an accepted invite as booked."""

    command_type = CONFIRM_INVITE_COMMAND


@dataclass(frozen=True)
class DenyInvite(_InviteCommand):
    """Deny an accepted invite a booking."""

    command_type = DENY_INVITE_COMMAND


COMMANDS = {
    cls.command_type: cls
    for cls in (CreateInvite, AcceptInvite, DeclineInvite, ConfirmInvite, DenyInvite)
}