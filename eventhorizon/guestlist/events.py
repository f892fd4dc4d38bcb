"""Event types and event data of the guest list domain."""

from __future__ import annotations

from dataclasses import dataclass

INVITATION_AGGREGATE_TYPE = "Invitation"

# An invite is created.
INVITE_CREATED = "InviteCreated"

# The guest accepted or declined the invite.
INVITE_ACCEPTED = "InviteAccepted"
INVITE_DECLINED = "InviteDeclined"

# The invite was confirmed as booked, or denied a booking.
INVITE_CONFIRMED = "InviteConfirmed"
INVITE_DENIED = "InviteDenied"


@dataclass(frozen=True)
class InviteCreatedData:
    """Data of the event for when an invite has been created."""

    name: str = ""
    age: int = 0


# Only the event for creating an invite carries data.
EVENT_DATA = {INVITE_CREATED: InviteCreatedData}