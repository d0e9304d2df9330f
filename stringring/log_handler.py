"""Logging handler that keeps the tail of the log in a string ring."""

from __future__ import annotations

import logging

from stringring.const import DEFAULT_MAX_SIZE
from stringring.models import Granularity
from stringring.ring_buffer import StringRing


class RingLogHandler(logging.Handler):
    """Logging handler that stores formatted records in a :class:`StringRing`.

    Each record is written followed by ``\\n``, so with the default LINE
    granularity the retained text always starts at a line. A record whose
    message spans several lines may lose its leading lines to eviction.
    """

    def __init__(
        self,
        max_size: int = DEFAULT_MAX_SIZE,
        granularity: Granularity | str = Granularity.LINE,
        level: int = logging.NOTSET,
    ) -> None:
        """Initialize the handler and its ring.

        Args:
            max_size: Capacity of the ring in bytes.
            granularity: Eviction granularity of the ring.
            level: Minimum level of records handled.
        """
        super().__init__(level=level)
        self.ring = StringRing(max_size, granularity)

    def emit(self, record: logging.LogRecord) -> None:
        """Format ``record`` and push it into the ring."""
        try:
            msg = self.format(record)
            self.ring.push(msg + "\n")
        except Exception:
            self.handleError(record)

    def getvalue(self) -> str:
        """Return the retained log text."""
        self.acquire()
        try:
            return self.ring.make_contiguous()
        finally:
            self.release()

    def lines(self) -> list[str]:
        """Return the retained log text split on ``\\n`` only."""
        lines = self.getvalue().split("\n")
        if lines[-1] == "":
            lines.pop()
        return lines

    def clear(self) -> None:
        """Drop all retained log text."""
        self.acquire()
        try:
            self.ring.clear()
        finally:
            self.release()
