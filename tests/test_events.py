"""
Tests for the EventBus
"""

from swipenav.core.events import EventBus, Events


class TestEventBus:
    """Test suite for EventBus."""

    def test_emit_passes_kwargs(self):
        bus = EventBus()
        received = []
        bus.subscribe(Events.HAND_LOST, lambda now: received.append(now))
        bus.emit(Events.HAND_LOST, now=1.5)
        assert received == [1.5]

    def test_priority_order(self):
        bus = EventBus()
        order = []
        bus.subscribe("evt", lambda: order.append("low"), priority=0)
        bus.subscribe("evt", lambda: order.append("high"), priority=10)
        bus.emit("evt")
        assert order == ["high", "low"]

    def test_failing_listener_does_not_stop_others(self):
        bus = EventBus()
        received = []

        def broken():
            raise RuntimeError("nope")

        bus.subscribe("evt", broken, priority=1)
        bus.subscribe("evt", lambda: received.append(True))
        bus.emit("evt")
        assert received == [True]

    def test_unsubscribe(self):
        bus = EventBus()
        received = []

        def handler():
            received.append(True)

        bus.subscribe("evt", handler)
        bus.unsubscribe("evt", handler)
        bus.emit("evt")
        assert received == []

    def test_disabled_bus_is_silent(self):
        bus = EventBus()
        received = []
        bus.subscribe("evt", lambda: received.append(True))
        bus.set_enabled(False)
        bus.emit("evt")
        assert received == []
        assert bus.get_history() == []

    def test_buses_are_independent(self):
        first, second = EventBus(), EventBus()
        first.subscribe("evt", lambda: None)
        assert second.listener_count == 0

    def test_history_is_bounded(self):
        bus = EventBus(max_history=3)
        for _ in range(5):
            bus.emit(Events.SWIPE_DETECTED, event=None)
        history = bus.get_history(last_n=10)
        assert len(history) == 3
        assert history[-1] == {"event": Events.SWIPE_DETECTED, "data_keys": ["event"]}

    def test_clear_and_introspection(self):
        bus = EventBus()
        bus.subscribe("a", lambda: None)
        bus.subscribe("b", lambda: None)
        assert sorted(bus.registered_events) == ["a", "b"]
        assert bus.listener_count == 2
        bus.clear("a")
        assert bus.registered_events == ["b"]
        bus.clear()
        assert bus.listener_count == 0
