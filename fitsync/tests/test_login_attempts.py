from __future__ import annotations

from fitsync.infrastructure.auth.login_attempts import LoginAttemptsTracker


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


def test_limits_after_max_failures_within_window() -> None:
    clock = FakeClock()
    tracker = LoginAttemptsTracker(max_failures=5, window_seconds=900, clock=clock)

    for _ in range(4):
        tracker.record_failure("10.0.0.1")
        clock.now += 1
    assert not tracker.is_limited("10.0.0.1")

    tracker.record_failure("10.0.0.1")
    assert tracker.is_limited("10.0.0.1")
    assert not tracker.is_limited("10.0.0.2")


def test_retry_after_counts_down_to_window_reopening() -> None:
    clock = FakeClock()
    tracker = LoginAttemptsTracker(max_failures=2, window_seconds=60, clock=clock)
    tracker.record_failure("ip")
    clock.now += 10
    tracker.record_failure("ip")

    assert tracker.retry_after("ip") == 50.0
    clock.now += 50
    assert not tracker.is_limited("ip")
    assert tracker.retry_after("ip") == 0.0


def test_failures_age_out_of_sliding_window() -> None:
    clock = FakeClock()
    tracker = LoginAttemptsTracker(max_failures=3, window_seconds=100, clock=clock)
    for _ in range(3):
        tracker.record_failure("ip")
    assert tracker.is_limited("ip")

    clock.now += 101
    assert tracker.failures("ip") == 0
    assert not tracker.is_limited("ip")


def test_reset_clears_source() -> None:
    tracker = LoginAttemptsTracker(max_failures=1, window_seconds=100, clock=FakeClock())
    tracker.record_failure("ip")
    assert tracker.is_limited("ip")

    tracker.reset("ip")
    assert tracker.failures("ip") == 0
    assert not tracker.is_limited("ip")


def test_sources_are_forgotten_once_failures_age_out() -> None:
    clock = FakeClock()
    tracker = LoginAttemptsTracker(max_failures=3, window_seconds=100, clock=clock)
    for octet in range(50):
        tracker.record_failure(f"10.0.0.{octet}")
    assert tracker.tracked_sources() == 50

    clock.now += 101
    for octet in range(50):
        assert not tracker.is_limited(f"10.0.0.{octet}")
    assert tracker.tracked_sources() == 0

    # a fresh failure after forgetting starts a new window
    tracker.record_failure("10.0.0.1")
    assert tracker.failures("10.0.0.1") == 1
    assert tracker.tracked_sources() == 1


def test_lookups_for_unseen_sources_do_not_grow_the_map() -> None:
    tracker = LoginAttemptsTracker(max_failures=3, window_seconds=100, clock=FakeClock())

    for octet in range(20):
        assert not tracker.is_limited(f"192.0.2.{octet}")
        assert tracker.retry_after(f"192.0.2.{octet}") == 0.0

    assert tracker.tracked_sources() == 0
