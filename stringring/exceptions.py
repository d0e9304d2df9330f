"""Exceptions raised by stringring."""


class StringRingError(Exception):
    """Base class for stringring errors."""


class InvariantViolationError(StringRingError, RuntimeError):
    """Raised when the ring buffer's internal invariants no longer hold.

    This always indicates a bug in the eviction algorithm, never bad input.
    """
