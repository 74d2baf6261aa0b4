"""Tests for the deferred callback queue."""
from sheepmatch.core.timers import DeferredQueue


class TestDeferredQueue:
    """Test cases for DeferredQueue."""

    def test_runs_only_due_callbacks(self, clock):
        queue = DeferredQueue(clock)
        fired = []
        queue.call_later(1.0, 1, lambda: fired.append("late"))
        queue.call_later(0.5, 1, lambda: fired.append("early"))

        clock.advance(0.75)
        assert queue.run_due(1) == 1
        assert fired == ["early"]
        assert queue.pending == 1

    def test_runs_in_due_order(self, clock):
        queue = DeferredQueue(clock)
        fired = []
        queue.call_later(0.3, 1, lambda: fired.append("b"))
        queue.call_later(0.1, 1, lambda: fired.append("a"))
        queue.call_later(0.3, 1, lambda: fired.append("c"))

        queue.run_due(1, now=clock.now + 1)

        assert fired == ["a", "b", "c"]

    def test_stale_epoch_dropped(self, clock):
        """Test that callbacks from an older epoch never run."""
        queue = DeferredQueue(clock)
        fired = []
        queue.call_later(0.1, 1, lambda: fired.append("old"))
        queue.call_later(0.1, 2, lambda: fired.append("new"))

        clock.advance(1)

        assert queue.run_due(2) == 1
        assert fired == ["new"]
        assert queue.pending == 0

    def test_clear(self, clock):
        queue = DeferredQueue(clock)
        queue.call_later(0.1, 1, lambda: None)
        queue.clear()

        assert queue.pending == 0
