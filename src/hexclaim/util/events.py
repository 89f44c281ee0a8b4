"""Typed event bus: decoupled notification of territory changes.

The territory service publishes what it changed; renderers, sound or
statistics hooks subscribe without the service knowing about them.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Callable, TypeVar, Type

from hexclaim.models.building import BuildingKind
from hexclaim.models.hex import HexCoord

T = TypeVar("T")


# -- Registry events -----------------------------------------------------

@dataclass(frozen=True)
class BuildingPlaced:
    """A building (or blank placeholder) was stored on a hex."""
    position: HexCoord
    kind: BuildingKind
    replaced: BuildingKind | None


@dataclass(frozen=True)
class BuildingEvicted:
    """A hex left the territory and its building was dropped."""
    position: HexCoord
    kind: BuildingKind


# -- Claim events --------------------------------------------------------

@dataclass(frozen=True)
class ClaimantAdded:
    """A territory-claiming building was placed and the border updated."""
    position: HexCoord
    kind: BuildingKind
    border_size: int


@dataclass(frozen=True)
class ClaimantRemoved:
    """A territory-claiming building was removed and the border updated."""
    position: HexCoord
    evicted: int
    border_size: int


# -- Event Bus -----------------------------------------------------------

class EventBus:
    """Simple synchronous event bus with typed events.

    Usage:
        bus = EventBus()
        bus.on(BuildingEvicted, lambda e: print(e.position))
        bus.emit(BuildingEvicted(position=HexCoord(0, 0), kind=BuildingKind.BLANK))
    """

    def __init__(self) -> None:
        self._handlers: dict[type, list[Callable[[Any], None]]] = defaultdict(list)

    def on(self, event_type: Type[T], handler: Callable[[T], None]) -> None:
        """Register a handler for an event type."""
        self._handlers[event_type].append(handler)

    def off(self, event_type: Type[T], handler: Callable[[T], None]) -> None:
        """Unregister a handler."""
        handlers = self._handlers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)

    def emit(self, event: object) -> None:
        """Emit an event to all registered handlers."""
        for handler in self._handlers.get(type(event), []):
            handler(event)

    def clear(self) -> None:
        """Remove all handlers."""
        self._handlers.clear()
