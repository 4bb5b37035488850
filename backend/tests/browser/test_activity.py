"""Tests for browser/activity.py."""

from browser.activity import ACTIVITY_EVENTS, ActivityTracker, EventHub
from browser.session import SessionContext


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


class TestActivityTracker:
    def test_events(self):
        """The tracked interaction events."""
        assert ACTIVITY_EVENTS == ("mousedown", "mousemove", "keypress", "scroll", "touchstart", "click")

    def test_attach_registers_passive_listeners_once(self):
        """Every event gets one passive listener, even if attach is repeated."""
        hub = EventHub()
        tracker = ActivityTracker(SessionContext())
        assert tracker.attach(hub) is True
        assert tracker.attach(hub) is False
        for event in ACTIVITY_EVENTS:
            listeners = hub.listeners(event)
            assert len(listeners) == 1
            assert listeners[0][1] is True

    def test_dispatch_updates_last_activity(self):
        """An interaction records the current time."""
        clock = FakeClock()
        context = SessionContext(last_activity=0.0)
        hub = EventHub()
        ActivityTracker(context, clock).attach(hub)
        clock.now = 1234.0
        hub.dispatch("keypress", object())
        assert context.last_activity == 1234.0

    def test_recent_activity_window(self):
        """Activity counts only inside the trailing window."""
        clock = FakeClock(now=10_000.0)
        context = SessionContext(last_activity=10_000.0 - 1799)
        tracker = ActivityTracker(context, clock)
        assert tracker.has_recent_activity(1800) is True
        context.last_activity = 10_000.0 - 1800
        assert tracker.has_recent_activity(1800) is False

    def test_detach(self):
        """Detached trackers stop recording."""
        clock = FakeClock()
        context = SessionContext(last_activity=0.0)
        hub = EventHub()
        tracker = ActivityTracker(context, clock)
        tracker.attach(hub)
        tracker.detach()
        hub.dispatch("click")
        assert context.last_activity == 0.0
        assert tracker.attached is False
