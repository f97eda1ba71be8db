# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import time
from collections import deque
from collections.abc import Callable
from threading import Lock

from fitsync.domain.users.repositories import LoginThrottle
from fitsync.shared.logging import logger


class LoginAttemptsTracker(LoginThrottle):
    """Sliding-window counter of failed logins per source address."""

    def __init__(
        self,
        max_failures: int = 5,
        window_seconds: float = 15 * 60,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._max_failures = max(1, int(max_failures))
        self._window = float(window_seconds)
        self._clock = clock
        self._failures: dict[str, deque[float]] = {}
        self._lock = Lock()

    def is_limited(self, key: str) -> bool:
        with self._lock:
            return len(self._prune(key)) >= self._max_failures

    def retry_after(self, key: str) -> float:
        with self._lock:
            failures = self._prune(key)
            if len(failures) < self._max_failures:
                return 0.0
            # the window reopens when enough of the oldest failures age out
            releasing = failures[len(failures) - self._max_failures]
            return max(0.0, releasing + self._window - self._clock())

    def record_failure(self, key: str) -> None:
        with self._lock:
            failures = self._prune(key)
            failures.append(self._clock())
            self._failures[key] = failures
            if len(failures) == self._max_failures:
                logger.warning(
                    f"login_attempts: source={key} limited after "
                    f"{len(failures)} failures within {self._window:.0f}s"
                )

    def reset(self, key: str) -> None:
        with self._lock:
            if self._failures.pop(key, None):
                logger.info(f"login_attempts: cleared failures for source={key}")

    def failures(self, key: str) -> int:
        with self._lock:
            return len(self._prune(key))

    def tracked_sources(self) -> int:
        with self._lock:
            return len(self._failures)

    def _prune(self, key: str) -> deque[float]:
        failures = self._failures.get(key)
        if failures is None:
            return deque()
        cutoff = self._clock() - self._window
        while failures and failures[0] <= cutoff:
            failures.popleft()
        if not failures:
            # sources whose failures all aged out are forgotten
            del self._failures[key]
        return failures


__all__ = ["LoginAttemptsTracker"]
