from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Protocol

from .models import RegistryEvent

logger = logging.getLogger(__name__)


class EventSink(Protocol):
    def emit(self, event: RegistryEvent) -> None: ...


@dataclass(slots=True)
class EventLog:
    """Append-only, ordered log of registry events."""

    _events: list[RegistryEvent] = field(default_factory=list)

    def emit(self, event: RegistryEvent) -> None:
        logger.debug("Event %s for token %d", event.name, event.token_id)
        self._events.append(event)

    @property
    def events(self) -> tuple[RegistryEvent, ...]:
        return tuple(self._events)

    def named(self, name: str) -> list[RegistryEvent]:
        return [e for e in self._events if e.name == name]

    def for_token(self, token_id: int) -> list[RegistryEvent]:
        return [
            e for e in self._events if e.token_id == token_id or e.new_id == token_id
        ]

    @property
    def last(self) -> RegistryEvent | None:
        return self._events[-1] if self._events else None

    def __iter__(self) -> Iterator[RegistryEvent]:
        return iter(tuple(self._events))

    def __len__(self) -> int:
        return len(self._events)
