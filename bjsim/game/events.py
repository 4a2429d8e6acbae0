"""Engine and runner events for progress and reporting layers."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto
from typing import Any, Callable


class EventType(Enum):
    """Types of simulation events."""

    # Shoe events
    SHOE_SHUFFLED = auto()
    BLANK_DRAWN = auto()
    CARD_DEALT = auto()

    # Round flow events
    ROUND_STARTED = auto()
    BET_PLACED = auto()
    ROUND_ENDED = auto()

    # Player action events
    PLAYER_HIT = auto()
    PLAYER_STAND = auto()
    PLAYER_DOUBLE = auto()
    PLAYER_SPLIT = auto()
    PLAYER_SURRENDER = auto()
    PLAYER_NATURAL = auto()
    INSURANCE_TAKEN = auto()

    # Dealer events
    DEALER_HITS = auto()
    DEALER_STANDS = auto()

    # Outcome events
    HAND_RESOLVED = auto()

    # Runner events
    SIMULATION_CANCELLED = auto()


@dataclass(frozen=True)
class GameEvent:
    """
    Immutable simulation event.

    Events are how the engine reports progress without knowing who is
    listening.
    """

    event_type: EventType
    data: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        return f"{self.event_type.name}: {self.data}"


# Type alias for event handlers
EventHandler = Callable[[GameEvent], None]


class EventEmitter:
    """
    Simple event emitter for simulation events.

    Allows subscribing to specific event types or all events. With no
    handlers and history off, emitting is a no-op so million-round runs
    pay nothing for it.
    """

    def __init__(self, record_history: bool = False) -> None:
        """
        Initialize the event emitter.

        Args:
            record_history: Keep every emitted event in ``history``
        """
        self._handlers: dict[EventType | None, list[EventHandler]] = {}
        self._event_history: list[GameEvent] = []
        self.record_history = record_history

    def subscribe(
        self,
        handler: EventHandler,
        event_type: EventType | None = None,
    ) -> None:
        """
        Subscribe to events.

        Args:
            handler: Function to call when event occurs
            event_type: Specific event type to subscribe to, or None for all events
        """
        self._handlers.setdefault(event_type, []).append(handler)

    def unsubscribe(
        self,
        handler: EventHandler,
        event_type: EventType | None = None,
    ) -> None:
        """Remove a handler; unknown handlers are ignored."""
        handlers = self._handlers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)

    @property
    def has_listeners(self) -> bool:
        """True when an emitted event would go anywhere."""
        return self.record_history or any(self._handlers.values())

    def emit(self, event: GameEvent) -> None:
        """
        Emit an event to all subscribers.

        Args:
            event: The event to emit
        """
        if self.record_history:
            self._event_history.append(event)

        # Call type-specific handlers
        for handler in self._handlers.get(event.event_type, ()):
            handler(event)

        # Call catch-all handlers
        for handler in self._handlers.get(None, ()):
            handler(event)

    def emit_new(
        self,
        event_type: EventType,
        **data: Any,
    ) -> GameEvent | None:
        """
        Create and emit a new event.

        Returns:
            The created event, or None if nobody was listening
        """
        if not self.has_listeners:
            return None
        event = GameEvent(event_type=event_type, data=data)
        self.emit(event)
        return event

    @property
    def history(self) -> list[GameEvent]:
        """Return the event history."""
        return self._event_history.copy()

    def clear_history(self) -> None:
        """Clear the event history."""
        self._event_history.clear()
