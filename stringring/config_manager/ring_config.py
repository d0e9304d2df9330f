"""Pydantic model for string ring configuration."""

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from stringring.config_manager.helpers import parse_bytes
from stringring.const import DEFAULT_MAX_SIZE
from stringring.models import Granularity


class RingConfig(BaseModel):
    """Settings a :class:`~stringring.ring_buffer.StringRing` is built from.

    Attributes:
        max_size: capacity of the ring in bytes; unit strings such as ``"4kb"``
            are accepted.
        granularity: eviction granularity, ``"character"`` or ``"line"``.
    """

    model_config = ConfigDict(frozen=True)

    max_size: int = DEFAULT_MAX_SIZE
    granularity: Granularity = Granularity.CHARACTER

    @field_validator("max_size", mode="before")
    @classmethod
    def _parse_max_size(cls, value: Any) -> int:
        size = parse_bytes(value)
        if size < 0:
            raise ValueError(f"max_size must be non-negative, got {size}")
        return size

    @field_validator("granularity", mode="before")
    @classmethod
    def _normalize_granularity(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value
