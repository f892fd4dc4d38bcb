# eventhorizon

Building blocks for CQRS and event-sourced applications in Python, with no
dependencies outside the standard library.

## What is included

- `eventhorizon.event.Event`: a frozen dataclass with `event_type`, `data`,
  `timestamp` (UTC now by default), `aggregate_type`, `aggregate_id` and
  `version`. `str(event)` gives `"<event_type>@<version>"`.
- `eventhorizon.matcher`: predicates over events (a missing event is `None`):
  `match_any()`, `match_event(event_type)`, `match_aggregate(aggregate_type)`,
  `match_any_of(*matchers)` and `match_any_event_of(*event_types)`.
- `eventhorizon.memory_store.MemoryEventStore`: an in-memory event store kept
  per namespace (`"default"` unless given), with `save(events,
  original_version, namespace)`, `load(aggregate_id, namespace)`,
  `replace(event, namespace)` and `rename_event(from_type, to_type,
  namespace)`. Events saved together must belong to one aggregate and carry
  consecutive versions following `original_version`. Failures raise
  `EventStoreError` (with `reason` and `namespace`), or its subclasses
  `InvalidEventError` and `AggregateNotFoundError`. Loading an unknown
  aggregate returns an empty list.
- `eventhorizon.trace_store.TracingEventStore`: wraps an event store and, while
  tracing is on (`start_tracing()` / `stop_tracing()`), records the events that
  were saved successfully. `trace()` returns them; `reset_trace()` clears them.
- `eventhorizon.command_middleware`: middleware for command handlers (any
  callable taking a command). Each middleware takes a handler and returns a
  handler that also accepts an optional `scope`:
  - `async_middleware()` returns `(middleware, errors)`; commands are handled
    in a background thread and failures are put on the `errors` queue as
    `CommandError` (with `error`, `scope` and `command`).
  - `scheduler_middleware()` returns `(middleware, errors)`; a command wrapped
    with `command_with_execute_time(command, execute_at)` is handled in the
    background at that time, others are handled at once. A `CancelScope`
    passed as `scope` can cancel the wait (`cancel()`) or give it a deadline
    (`CancelScope(timeout=...)`); the cancellation is then reported on
    `errors`.
  - `validation_middleware()` calls a command's `validate()` before handing it
    on; `command_with_validation(command, validate)` wraps a command with a
    callable that raises when the command is invalid.
- `eventhorizon.event_middleware.async_middleware()`: handles events in a
  background thread and puts failures on its queue as `EventError`.
- `eventhorizon.wsgi`: two WSGI application factories.
  - `command_app(handler, command_factory)` accepts `POST` only, decodes the
    JSON body, builds a command with `command_factory(payload)` and passes it
    to `handler`. It answers 200 with an empty body, 405 for other methods and
    400 when the body cannot be decoded or the command cannot be created or
    handled.
  - `query_app(repo)` accepts `GET` only. A path ending in `/` returns
    `repo.find_all()` as JSON; otherwise the last path segment is passed to
    `repo.find(item_id)`, where a `LookupError` gives 404. Objects with a
    `to_dict()` method are encoded through it.
- `eventhorizon.todomvc`: an example todo list domain with commands
  (`Create`, `Delete`, `AddItem`, `RemoveItem`, `RemoveCompletedItems`,
  `SetItemDescription`, `CheckItem`, `CheckAllItems`, and
  `command_from_json(command_type, payload)`), event data classes, the
  `TodoListAggregate`, the `TodoList`/`TodoItem` read model with `to_json()`,
  and a `Projector`.
- `eventhorizon.guestlist`: an example invitation domain with commands, the
  `InvitationAggregate`, `Invitation` and `GuestList` read models with
  `InvitationProjector` and `GuestListProjector`, an `EventLogger`,
  `logging_middleware`, and a `ResponseSaga` that confirms accepted invites up
  to a guest limit and denies the rest.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Examples

Saving and loading events:

```python
from datetime import datetime, timezone

from eventhorizon.event import Event
from eventhorizon.matcher import match_event
from eventhorizon.memory_store import MemoryEventStore

store = MemoryEventStore()
when = datetime(2009, 11, 10, 23, 0, tzinfo=timezone.utc)
created = Event("todolist:created", None, when, "todolist", "list-1", 1)

store.save([created], 0)
events = store.load("list-1")

is_created = match_event("todolist:created")
assert is_created(events[0])
```

The next save for this aggregate must pass `original_version=1` and events
starting at version 2; anything else raises `EventStoreError`.

Handling a command on the todo list aggregate and projecting the result:

```python
from eventhorizon.todomvc.aggregate import TodoListAggregate
from eventhorizon.todomvc.commands import Create
from eventhorizon.todomvc.model import TodoList
from eventhorizon.todomvc.projector import Projector

aggregate = TodoListAggregate("list-1")
aggregate.handle_command(Create(id="list-1"))

model = TodoList()
for event in aggregate.events:
    model = Projector().project(event, model)

print(model.to_json())
```

Serving commands over WSGI:

```python
from functools import partial
from wsgiref.simple_server import make_server

from eventhorizon.todomvc.commands import command_from_json
from eventhorizon.wsgi import command_app

app = command_app(print, partial(command_from_json, "todolist:create"))
make_server("localhost", 8080, app).serve_forever()
```

## What this package does not do

- The only event store is in memory; nothing is written to disk or to a
  database.
- There is no event bus, command bus, aggregate store or read repository.
  Loading aggregates from the store, saving the events they record, passing
  events to projectors and sagas, and dispatching saga commands are left to
  the application. `query_app` and `GuestListProjector` work with any
  repository object that provides `find`, `find_all` and `save` as described
  above.
- There is no server or command-line program of its own; the WSGI
  applications have to be mounted in a WSGI server, and there is no
  websocket stream of events.