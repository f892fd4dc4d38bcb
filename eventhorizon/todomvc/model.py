"""The read model of a todo list."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)

_HTML_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def _rfc3339_nano(moment: datetime) -> str:
    if moment.tzinfo is None:
        moment = moment.astimezone()
    text = (
        f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d}"
        f"T{moment.hour:02d}:{moment.minute:02d}:{moment.second:02d}"
    )
    if moment.microsecond:
        text += "." + f"{moment.microsecond:06d}".rstrip("0")
    total = int(moment.utcoffset().total_seconds())
    if total == 0:
        return text + "Z"
    sign = "+" if total > 0 else "-"
    hours, rest = divmod(abs(total), 3600)
    return f"{text}{sign}{hours:02d}:{rest // 60:02d}"


@dataclass
class TodoItem:
    """One item of a todo list that can be completed."""

    id: int = 0
    description: str = ""
    completed: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Return the item as its JSON object."""
        return {"id": self.id, "desc": self.description, "completed": self.completed}


@dataclass
class TodoList:
    """The read model of a todo list."""

    id: str = ""
    version: int = 0
    items: list[TodoItem] = field(default_factory=list)
    created_at: datetime = ZERO_TIME
    updated_at: datetime = ZERO_TIME

    def to_dict(self) -> dict[str, Any]:
        """Return the list as its JSON object, with RFC 3339 timestamps."""
        return {
            "id": self.id,
            "version": self.version,
            "items": [item.to_dict() for item in self.items],
            "created_at": _rfc3339_nano(self.created_at),
            "updated_at": _rfc3339_nano(self.updated_at),
        }

    def to_json(self) -> str:
        """Return the list as compact JSON with HTML-sensitive characters escaped."""
        text = json.dumps(self.to_dict(), separators=(",", ":"), ensure_ascii=False)
        for char, escape in _HTML_ESCAPES.items():
            text = text.replace(char, escape)
        return text