"""
User activity tracking.

Interaction events refresh ``SessionContext.last_activity``. Listeners are
registered passive, once per target.
"""

import time
from typing import Any, Callable, Optional, Protocol

from .session import SessionContext

ACTIVITY_EVENTS = ("mousedown", "mousemove", "keypress", "scroll", "touchstart", "click")
VISIBILITY_EVENT = "visibilitychange"

Listener = Callable[..., Any]


class EventTarget(Protocol):
    """Something that emits named UI events."""

    def add_event_listener(self, event: str, listener: Listener, passive: bool = False) -> None:
        ...

    def remove_event_listener(self, event: str, listener: Listener) -> None:
        ...


class EventHub(EventTarget):
    """
    Minimal in-process event target.

    Hosts without a DOM (CLIs, tests) forward their own input events through
    ``dispatch``. ``visibilitychange`` carries the new visible state as its
    first argument.
    """

    def __init__(self) -> None:
        self._listeners: dict[str, list[tuple[Listener, bool]]] = {}

    def add_event_listener(self, event: str, listener: Listener, passive: bool = False) -> None:
        self._listeners.setdefault(event, []).append((listener, passive))

    def remove_event_listener(self, event: str, listener: Listener) -> None:
        self._listeners[event] = [
            (registered, passive)
            for registered, passive in self._listeners.get(event, [])
            if registered != listener
        ]

    def listeners(self, event: str) -> list[tuple[Listener, bool]]:
        return list(self._listeners.get(event, []))

    def dispatch(self, event: str, *args: Any) -> None:
        for listener, _ in self.listeners(event):
            listener(*args)


class ActivityTracker:
    """Records interaction times on a session context."""

    def __init__(
        self,
        context: SessionContext,
        clock: Callable[[], float] = time.time,
    ):
        self._context = context
        self._clock = clock
        self._target: Optional[EventTarget] = None

    @property
    def attached(self) -> bool:
        return self._target is not None

    def record(self, *_: Any) -> None:
        self._context.last_activity = self._clock()

    def has_recent_activity(self, window_seconds: float) -> bool:
        return self._clock() - self._context.last_activity < window_seconds

    def attach(self, target: EventTarget) -> bool:
        """Register passive listeners. Returns False if already attached."""
        if self._target is not None:
            return False
        for event in ACTIVITY_EVENTS:
            target.add_event_listener(event, self.record, passive=True)
        self._target = target
        return True

    def detach(self) -> None:
        if self._target is None:
            return
        for event in ACTIVITY_EVENTS:
            self._target.remove_event_listener(event, self.record)
        self._target = None
