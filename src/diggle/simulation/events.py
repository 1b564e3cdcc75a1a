"""Events the core surfaces to outside collaborators."""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Callable

logger = logging.getLogger(__name__)


class EventKind(Enum):
    """Kinds of event emitted by the simulation."""

    # Hull reached zero (fires once per run)
    GAME_OVER = auto()
    # Vehicle crossed into the surface band (fires on the edge only)
    REACH_SURFACE = auto()
    ORE_COLLECTED = auto()
    # Ore was dug but did not fit in the cargo hold
    CARGO_FULL = auto()
    HAZARD = auto()
    LANDED = auto()
    DEPTH_RECORD = auto()


@dataclass(frozen=True)
class Event:
    kind: EventKind
    tick: int
    data: dict[str, Any] = field(default_factory=dict)


Listener = Callable[[Event], None]


class EventHub:
    """
    Synchronous publish/subscribe hub.

    Listeners run inside the tick that produced the event and must not
    mutate core state directly.
    """

    def __init__(self) -> None:
        self._listeners: defaultdict[EventKind, list[Listener]] = defaultdict(list)
        self.tick = 0

    def subscribe(self, kind: EventKind, listener: Listener) -> None:
        self._listeners[kind].append(listener)

    def unsubscribe(self, kind: EventKind, listener: Listener) -> None:
        if listener in self._listeners[kind]:
            self._listeners[kind].remove(listener)

    def emit(self, kind: EventKind, /, **data: Any) -> Event:
        event = Event(kind, self.tick, data)
        logger.debug("tick %d: %s %s", self.tick, kind.name, data)
        for listener in list(self._listeners[kind]):
            listener(event)
        return event
