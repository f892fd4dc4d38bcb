"""A saga confirming accepted invites until a guest limit is reached."""

from __future__ import annotations

import threading
from typing import Any

from eventhorizon.event import Event
from eventhorizon.guestlist.commands import ConfirmInvite, DenyInvite
from eventhorizon.guestlist.events import INVITE_ACCEPTED

RESPONSE_SAGA_TYPE = "ResponseSaga"


class ResponseSaga:
    """Confirms accepted invites while there is room, and denies the rest."""

    saga_type = RESPONSE_SAGA_TYPE

    def __init__(self, guest_limit: int) -> None:
        self._guest_limit = guest_limit
        self._accepted: set[str] = set()
        self._lock = threading.Lock()

    def run_saga(self, event: Event) -> list[Any]:
        """Return the commands to issue in response to an event."""
        if event.event_type != INVITE_ACCEPTED:
            return []
        guest = event.aggregate_id
        with self._lock:
            if guest in self._accepted:
                return []
            if len(self._accepted) >= self._guest_limit:
                return [DenyInvite(id=guest)]
            self._accepted.add(guest)
        return [ConfirmInvite(id=guest)]