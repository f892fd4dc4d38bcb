"""Immutable domain events."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Event:
    """An event, optionally bound to a specific version of an aggregate."""

    event_type: str
    data: Any = None
    timestamp: datetime = field(default_factory=_now)
    aggregate_type: str = ""
    aggregate_id: str = ""
    version: int = 0

    def __str__(self) -> str:
        return f"{self.event_type}@{self.version}"