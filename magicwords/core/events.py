"""
Typed event bus for decoupled communication.

Event types are Enum members, so subscribers and publishers agree on
names without magic strings.

Usage:
    bus = EventBus()
    bus.subscribe(DialogueEvent.LINE_REVEALED, on_line_revealed)
    bus.publish(DialogueEvent.LINE_REVEALED, index=0, speaker="Sheldon")
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Callable
from weakref import WeakMethod, ref

logger = logging.getLogger(__name__)


class EngineEvent(Enum):
    """Built-in runtime events."""
    # Lifecycle
    GAME_START = auto()
    GAME_QUIT = auto()

    # Scene
    SCENE_PUSHED = auto()
    SCENE_POPPED = auto()

    # Window
    WINDOW_RESIZED = auto()


class DialogueEvent(Enum):
    """Events published by the dialogue engine."""
    DIALOGUE_LOADED = auto()
    LOAD_FAILED = auto()
    LINE_REVEALED = auto()
    SPEAKER_UNKNOWN = auto()
    PAGE_CLEARED = auto()
    DIALOGUE_FINISHED = auto()
    DIALOGUE_STOPPED = auto()


@dataclass
class Event:
    """
    Event data container.

    Attributes:
        type: The event type (Enum member)
        data: Dictionary of event-specific data
        consumed: Whether the event has been handled
    """
    type: Enum
    data: dict[str, Any] = field(default_factory=dict)
    consumed: bool = False

    def consume(self) -> None:
        """Mark event as consumed (stops propagation)."""
        self.consumed = True

    def get(self, key: str, default: Any = None) -> Any:
        """Get event data by key."""
        return self.data.get(key, default)

    def __getitem__(self, key: str) -> Any:
        return self.data[key]


EventHandler = Callable[[Event], None]


class EventBus:
    """
    Central publish/subscribe hub.

    Handlers run in priority order (highest first). Events published
    from inside a handler are queued and dispatched once the current
    dispatch finishes, so handlers always observe events in order.
    """

    def __init__(self):
        # event type -> list of (priority, handler ref, one_shot)
        self._handlers: dict[Enum, list[tuple[int, Any, bool]]] = {}
        self._event_queue: list[Event] = []
        self._is_publishing = False

    def subscribe(
        self,
        event_type: Enum,
        handler: EventHandler,
        priority: int = 0,
        one_shot: bool = False,
        weak: bool = True,
    ) -> None:
        """
        Subscribe to an event type.

        Args:
            event_type: The event type to listen for
            handler: Callback function(event: Event)
            priority: Higher priority handlers are called first
            one_shot: If True, handler is removed after first call
            weak: If True, hold a weak reference to the handler
        """
        handlers = self._handlers.setdefault(event_type, [])

        if weak:
            if hasattr(handler, '__self__'):
                handler_ref = WeakMethod(handler)
            else:
                handler_ref = ref(handler)
        else:
            handler_ref = handler

        insert_idx = len(handlers)
        for i, (p, _, _) in enumerate(handlers):
            if priority > p:
                insert_idx = i
                break

        handlers.insert(insert_idx, (priority, handler_ref, one_shot))

    def unsubscribe(self, event_type: Enum, handler: EventHandler) -> None:
        """Remove a handler for an event type."""
        if event_type not in self._handlers:
            return

        self._handlers[event_type] = [
            (p, h, o) for p, h, o in self._handlers[event_type]
            if self._get_handler(h) != handler
        ]

    def publish(self, event_type: Enum, **data: Any) -> Event:
        """
        Publish an event.

        Returns:
            The Event object (check .consumed to see if it was handled)
        """
        event = Event(type=event_type, data=data)

        if self._is_publishing:
            self._event_queue.append(event)
        else:
            self._dispatch(event)

        return event

    def clear(self, event_type: Enum | None = None) -> None:
        """Clear handlers for one event type, or all of them."""
        if event_type is None:
            self._handlers.clear()
        elif event_type in self._handlers:
            del self._handlers[event_type]

    def _dispatch(self, event: Event) -> None:
        handlers = self._handlers.get(event.type)
        if not handlers:
            return

        self._is_publishing = True
        to_remove = []

        for i, (_, handler_ref, one_shot) in enumerate(handlers):
            handler = self._get_handler(handler_ref)

            if handler is None:
                # Weak reference was garbage collected
                to_remove.append(i)
                continue

            try:
                handler(event)
            except Exception as e:
                logger.error(f"Error in event handler for {event.type}: {e}")

            if one_shot:
                to_remove.append(i)

            if event.consumed:
                break

        for i in reversed(to_remove):
            handlers.pop(i)

        self._is_publishing = False

        while self._event_queue:
            self._dispatch(self._event_queue.pop(0))

    def _get_handler(self, handler_ref: Any) -> EventHandler | None:
        if isinstance(handler_ref, (ref, WeakMethod)):
            return handler_ref()
        return handler_ref
