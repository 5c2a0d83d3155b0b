"""
Unit tests for transient result emphasis.
"""

from lpgview.graph.emphasis import EmphasisTracker


class TestEmphasisTracker:
    def test_start_captures_original_size(self, clock):
        tracker = EmphasisTracker(duration=1.5, clock=clock)
        tracker.start("n", 20)
        assert tracker.overrides() == {"n": {"size": 40, "highlighted": True}}

    def test_expires_after_duration(self, clock):
        tracker = EmphasisTracker(duration=1.5, clock=clock)
        tracker.start("n", 20)
        clock.advance(1.0)
        assert tracker.is_active("n")
        clock.advance(0.6)
        assert not tracker.is_active("n")
        assert tracker.overrides() == {}
        assert tracker.expire() == ["n"]
        assert len(tracker) == 0

    def test_second_start_extends_and_keeps_original(self, clock):
        tracker = EmphasisTracker(duration=1.5, clock=clock)
        tracker.start("n", 20)
        clock.advance(1.0)
        # The caller may now observe the emphasized size; it must not be captured
        tracker.start("n", 40)
        assert tracker.original_size("n") == 20

        clock.advance(1.0)
        assert tracker.is_active("n")
        assert tracker.overrides()["n"]["size"] == 40

        clock.advance(0.6)
        assert not tracker.is_active("n")

    def test_independent_nodes(self, clock):
        tracker = EmphasisTracker(duration=1.0, clock=clock)
        tracker.start("a", 10)
        clock.advance(0.5)
        tracker.start("b", 12)
        clock.advance(0.6)
        assert tracker.expire() == ["a"]
        assert tracker.is_active("b")

    def test_clear(self, clock):
        tracker = EmphasisTracker(clock=clock)
        tracker.start("a", 10)
        tracker.clear()
        assert tracker.original_size("a") is None
