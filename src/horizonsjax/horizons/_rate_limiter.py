"""Request pacing for the Horizons API.

JPL asks clients not to flood the Horizons service. Every request made
through a :class:`HorizonsClient` books a send time with a shared
:class:`RateLimiter` first. The limiter keeps the booked send times per
window and places each new request at the earliest instant where every
window (one minute, one hour) still has room.

The defaults allow one request per second on average (60/min, 1800/hour),
which a sequential batch rarely reaches but a thread pool easily would.
"""

from __future__ import annotations

import threading
import time
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass

_UNLIMITED = 2**32 - 1


@dataclass
class RateLimitConfig:
    """Request budget for Horizons API calls.

    Args:
        max_per_minute: Maximum requests sent in any 60-second span.
        max_per_hour: Maximum requests sent in any 3600-second span.
    """

    max_per_minute: int = 60
    max_per_hour: int = 1800

    def __post_init__(self) -> None:
        if self.max_per_minute < 1 or self.max_per_hour < 1:
            raise ValueError(
                "Rate limits must be at least 1 request per window, got "
                f"max_per_minute={self.max_per_minute}, max_per_hour={self.max_per_hour}"
            )

    @classmethod
    def disabled(cls) -> RateLimitConfig:
        """Return a budget large enough to never delay a request."""
        return cls(max_per_minute=_UNLIMITED, max_per_hour=_UNLIMITED)

    def __str__(self) -> str:
        return (
            f"RateLimitConfig(max_per_minute={self.max_per_minute}, "
            f"max_per_hour={self.max_per_hour})"
        )

    def __repr__(self) -> str:
        return self.__str__()


class _SendWindow:
    """Booked send times for one rolling span of ``period`` seconds."""

    def __init__(self, period: float, limit: int) -> None:
        self.period = period
        self.limit = limit
        self._sends: deque[float] = deque()

    def earliest(self, now: float) -> float:
        """Earliest send time that keeps at most ``limit`` sends per span."""
        while self._sends and self._sends[0] <= now - self.period:
            self._sends.popleft()
        if len(self._sends) < self.limit:
            return now
        # The slot freed next belongs to the limit-th most recent booking
        return max(now, self._sends[-self.limit] + self.period)

    def book(self, send_time: float) -> None:
        self._sends.append(send_time)


class RateLimiter:
    """Books send times for requests against a :class:`RateLimitConfig`.

    Thread-safe, so one limiter can be shared by every worker of a
    parallel batch. Booked send times never decrease, and no span of a
    window's length ever holds more bookings than its limit.

    Args:
        config: Request budget.
        clock: Monotonic clock in seconds. Defaults to :func:`time.monotonic`.
    """

    def __init__(
        self,
        config: RateLimitConfig,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._config = config
        self._clock = clock
        self._windows = (
            _SendWindow(60.0, config.max_per_minute),
            _SendWindow(3600.0, config.max_per_hour),
        )
        self._last_send = float("-inf")
        self._lock = threading.Lock()

    @property
    def config(self) -> RateLimitConfig:
        """The active request budget."""
        return self._config

    def acquire(self) -> float:
        """Book a send time for one request.

        Returns:
            Seconds the caller must sleep before sending (0.0 means now).
        """
        with self._lock:
            now = self._clock()
            send_time = max(now, self._last_send)
            # Moving later in one window can only free room in the other,
            # so a single pass over both windows settles the send time.
            for window in self._windows:
                send_time = max(send_time, window.earliest(send_time))
            for window in self._windows:
                window.book(send_time)
            self._last_send = send_time
            return send_time - now
