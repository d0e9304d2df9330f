"""Enums shared by the ring buffer and its configuration."""

from enum import Enum


class Granularity(str, Enum):
    """The level of precision used when evicting old content.

    CHARACTER removes as few bytes as possible without splitting a codepoint,
    which may leave a partial line at the start of the buffer. LINE removes
    whole lines, as few as possible.
    """

    CHARACTER = "character"
    LINE = "line"


class RingState(str, Enum):
    """States of the push state machine.

    State transitions:
    - NORMAL + eviction ending mid-line (LINE only) -> DISCARDING
    - DISCARDING + input containing ``\\n`` -> NORMAL
    - DISCARDING + input without ``\\n`` -> DISCARDING
    - Any + clear() -> NORMAL
    """

    NORMAL = "normal"
    DISCARDING = "discarding"
