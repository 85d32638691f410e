"""Observed rate-limit state of an API key.

The panel reports the key's quota in ``x-ratelimit-limit`` and
``x-ratelimit-remaining`` headers. The tracker keeps the last snapshot
seen so callers can inspect it; it never delays or rejects requests.
"""

import contextlib
import threading
from collections.abc import Iterator, Mapping
from dataclasses import dataclass

import structlog

logger = structlog.get_logger(__name__)

LIMIT_HEADER = "x-ratelimit-limit"
REMAINING_HEADER = "x-ratelimit-remaining"


@dataclass(frozen=True)
class RateLimits:
    """Quota snapshot: requests allowed per window and requests left in it."""

    limit: int
    remaining: int


class ReadWriteLock:
    """Multiple-reader, single-writer lock.

    Readers share the lock with each other; a writer holds it alone.
    Waiting writers block new readers so a steady stream of reads cannot
    starve an update.
    """

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @contextlib.contextmanager
    def read_locked(self) -> Iterator[None]:
        """Hold the lock in shared mode for the duration of the block."""
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if not self._readers:
                    self._cond.notify_all()

    @contextlib.contextmanager
    def write_locked(self) -> Iterator[None]:
        """Hold the lock exclusively for the duration of the block."""
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


def _parse_count(value: str | None) -> int | None:
    """Parse a header value as a non-negative decimal integer."""
    if value is None:
        return None
    value = value.strip()
    if not value.isascii() or not value.isdigit():
        return None
    return int(value)


class RateLimitTracker:
    """Last quota snapshot reported by the panel, shared by all calls.

    Safe to use from concurrent tasks and threads. Updates replace the
    snapshot whole; the newest completed update wins.
    """

    def __init__(self):
        self._lock = ReadWriteLock()
        self._limits: RateLimits | None = None

    def record(self, headers: Mapping[str, str]) -> bool:
        """Replace the snapshot from response headers.

        Nothing changes unless both headers are present and each parses as
        a non-negative integer.

        Args:
            headers: Response headers; lookups should be case-insensitive
                (``httpx.Headers`` is).

        Returns:
            True if the snapshot was replaced.
        """
        limit = _parse_count(headers.get(LIMIT_HEADER))
        remaining = _parse_count(headers.get(REMAINING_HEADER))
        if limit is None or remaining is None:
            return False

        snapshot = RateLimits(limit=limit, remaining=remaining)
        with self._lock.write_locked():
            self._limits = snapshot
        logger.debug("Rate limits updated", limit=limit, remaining=remaining)
        return True

    def read(self) -> RateLimits | None:
        """Return the last recorded snapshot, or None if none was seen yet."""
        with self._lock.read_locked():
            return self._limits
