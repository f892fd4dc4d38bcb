import pytest

from eventhorizon.event import Event
from eventhorizon.guestlist.aggregate import InvitationAggregate, InvitationError
from eventhorizon.guestlist.commands import (
    AcceptInvite,
    ConfirmInvite,
    CreateInvite,
    DeclineInvite,
    DenyInvite,
)
from eventhorizon.guestlist.events import (
    INVITE_ACCEPTED,
    INVITE_CONFIRMED,
    INVITE_CREATED,
    INVITE_DECLINED,
    INVITE_DENIED,
)
from eventhorizon.guestlist.projectors import (
    GuestListProjector,
    Invitation,
    InvitationProjector,
)
from eventhorizon.guestlist.saga import ResponseSaga


def _accepted(agg_id):
    return Event(event_type=INVITE_ACCEPTED, aggregate_id=agg_id, version=2)


def test_ignores_other_events():
    saga = ResponseSaga(2)
    event = Event(event_type=INVITE_DECLINED, aggregate_id="a", version=2)
    assert saga.run_saga(event) == []


def test_confirms_until_limit_then_denies():
    saga = ResponseSaga(2)
    assert saga.run_saga(_accepted("a")) == [ConfirmInvite(id="a")]
    assert saga.run_saga(_accepted("b")) == [ConfirmInvite(id="b")]
    assert saga.run_saga(_accepted("c")) == [DenyInvite(id="c")]


def test_already_accepted_guest_gets_nothing():
    saga = ResponseSaga(1)
    saga.run_saga(_accepted("a"))
    assert saga.run_saga(_accepted("a")) == []


class _Repo:
    def __init__(self):
        self.items = {}

    def find(self, entity_id):
        try:
            return self.items[entity_id]
        except KeyError:
            raise LookupError(entity_id) from None

    def save(self, entity):
        self.items[entity.entity_id] = entity


_GUEST_LIST_EVENTS = {INVITE_ACCEPTED, INVITE_DECLINED, INVITE_CONFIRMED, INVITE_DENIED}


class _App:
    """Wires the domain together with synchronous event dispatch."""

    def __init__(self, event_id):
        self.aggregates = {}
        self.invitations = {}
        self.guest_lists = _Repo()
        self.invitation_projector = InvitationProjector()
        self.guest_list_projector = GuestListProjector(self.guest_lists, event_id)
        self.saga = ResponseSaga(2)

    def handle(self, cmd):
        if cmd.aggregate_id not in self.aggregates:
            self.aggregates[cmd.aggregate_id] = InvitationAggregate(cmd.aggregate_id)
        agg = self.aggregates[cmd.aggregate_id]
        agg.handle_command(cmd)
        events = agg.events
        agg.clear_events()
        for event in events:
            agg.apply_event(event)
            agg.version = event.version
        for event in events:
            self.publish(event)

    def publish(self, event):
        current = self.invitations.get(event.aggregate_id, Invitation())
        self.invitations[event.aggregate_id] = self.invitation_projector.project(event, current)
        if event.event_type in _GUEST_LIST_EVENTS:
            self.guest_list_projector.handle_event(event)
        if event.event_type == INVITE_ACCEPTED:
            for cmd in self.saga.run_saga(event):
                self.handle(cmd)


def test_guest_list_scenario():
    app = _App("party")
    app.handle(CreateInvite(id="athena", name="Athena", age=42))
    app.handle(CreateInvite(id="hades", name="Hades"))
    app.handle(CreateInvite(id="zeus", name="Zeus"))
    app.handle(CreateInvite(id="poseidon", name="Poseidon"))

    app.handle(AcceptInvite(id="athena"))
    with pytest.raises(InvitationError, match="Athena already accepted"):
        app.handle(DeclineInvite(id="athena"))
    app.handle(AcceptInvite(id="hades"))
    app.handle(DeclineInvite(id="zeus"))
    app.handle(AcceptInvite(id="poseidon"))

    lines = sorted(f"{i.name} - {i.status}" for i in app.invitations.values())
    assert lines == [
        "Athena - confirmed",
        "Hades - confirmed",
        "Poseidon - denied",
        "Zeus - declined",
    ]
    g = app.guest_lists.find("party")
    summary = (
        f"{g.num_guests} invited - {g.num_accepted} accepted, {g.num_declined} declined"
        f" - {g.num_confirmed} confirmed, {g.num_denied} denied"
    )
    assert summary == "4 invited - 3 accepted, 1 declined - 2 confirmed, 1 denied"
    assert app.aggregates["athena"].accepted and not app.aggregates["athena"].declined
    assert all(
        inv.version == app.aggregates[agg_id].version
        for agg_id, inv in app.invitations.items()
    )
    assert INVITE_CREATED not in _GUEST_LIST_EVENTS