"""Byte-budgeted circular buffer for UTF-8 text."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from itertools import chain

from stringring.boundary import ceil_char_boundary_offset
from stringring.config_manager.ring_config import RingConfig
from stringring.const import MAX_PUSH_ITERATIONS, NEWLINE, NEWLINE_BYTES
from stringring.exceptions import InvariantViolationError
from stringring.models import Granularity, RingState
from stringring.sampled_logger import make_sampled_logger

logger = logging.getLogger(__name__)


class StringRing:
    """A circular string buffer with a set maximum size in bytes.

    Strings are pushed onto the end of the buffer. If the maximum size would
    be exceeded, the oldest content is removed to make space, using the
    strategy selected by :class:`Granularity`.

    - Single owner; no internal locking.
    - Storage is a fixed ``bytearray`` that never grows.
    """

    def __init__(
        self,
        max_size: int,
        granularity: Granularity | str = Granularity.CHARACTER,
    ) -> None:
        """Initialize an empty ring.

        Args:
            max_size: Capacity in bytes. Zero is allowed and yields a ring
                that discards everything pushed into it.
            granularity: Eviction granularity, as an enum member or its value
                (case-insensitive).

        Raises:
            TypeError: If ``max_size`` is not an integer.
            ValueError: If ``max_size`` is negative or ``granularity`` is
                unknown.
        """
        if isinstance(max_size, bool) or not isinstance(max_size, int):
            raise TypeError(
                f"max_size must be an int, got {type(max_size).__name__}"
            )
        if max_size < 0:
            raise ValueError(f"max_size must be non-negative, got {max_size}")

        self._max_size = max_size
        if isinstance(granularity, str):
            granularity = granularity.strip().lower()
        self._granularity = Granularity(granularity)
        self._state = RingState.NORMAL
        self.buffer = bytearray(max_size)
        self.write_pos = 0
        self.read_pos = 0
        self.used = 0
        self._log_eviction = make_sampled_logger(
            "Eviction #%d dropped %d bytes from %s", target_logger=logger
        )

    @classmethod
    def from_config(cls, config: RingConfig) -> StringRing:
        """Create a ring from a resolved :class:`RingConfig`."""
        return cls(config.max_size, config.granularity)

    @property
    def max_size(self) -> int:
        """Capacity in bytes."""
        return self._max_size

    capacity = max_size

    @property
    def granularity(self) -> Granularity:
        """Eviction granularity fixed at construction."""
        return self._granularity

    @property
    def state(self) -> RingState:
        """Current state of the push state machine."""
        return self._state

    @property
    def discarding(self) -> bool:
        """Whether input is being dropped until the next newline."""
        return self._state is RingState.DISCARDING

    def len(self) -> int:
        """Return the number of bytes currently stored."""
        return self.used

    def __len__(self) -> int:
        return self.used

    def is_empty(self) -> bool:
        """Return True if nothing is stored."""
        return self.used == 0

    def clear(self) -> None:
        """Remove all content and reset the ring to its initial state."""
        self._reset_storage()
        self._set_state(RingState.NORMAL)

    def as_slices(self) -> tuple[memoryview, memoryview]:
        """Return the stored bytes as two runs without copying.

        The runs may not be valid UTF-8 on their own, but their concatenation
        always is. Both views alias the ring's storage and are stale after the
        next mutation.
        """
        view = memoryview(self.buffer)
        head_end = min(self.read_pos + self.used, self._max_size)
        tail_len = self.used - (head_end - self.read_pos)
        return view[self.read_pos : head_end], view[:tail_len]

    def make_contiguous(self) -> str:
        """Move the content to the start of storage and return it as text.

        Raises:
            InvariantViolationError: If the stored bytes are not valid UTF-8.
        """
        if self.read_pos:
            head, tail = self.as_slices()
            data = bytes(head) + bytes(tail)
            head.release()
            tail.release()
            self.buffer[: self.used] = data
            self.read_pos = 0
            self.write_pos = self.used % self._max_size

        try:
            return self.buffer[: self.used].decode("utf-8")
        except UnicodeDecodeError as exc:
            logger.error("Ring content is not valid UTF-8: %s", exc)
            raise InvariantViolationError("ring content is not valid UTF-8") from exc

    def __str__(self) -> str:
        return self.make_contiguous()

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(max_size={self._max_size}, "
            f"granularity={self._granularity.value!r}, used={self.used}, "
            f"state={self._state.value!r})"
        )

    def push(self, text: str) -> None:
        """Append ``text``, evicting old content to stay within ``max_size``.

        Pushing ``a`` then ``b`` is guaranteed to be equivalent to pushing
        ``a + b``. In LINE mode this means that when ``a`` does not end in a
        newline, bytes may be dropped from the start of ``b`` to finish
        evicting a line; that pending work is kept in :attr:`state`.

        Args:
            text: The string to append.

        Raises:
            InvariantViolationError: If the state machine fails to settle.
        """
        data = text.encode("utf-8")
        start: int | None = 0
        for _ in range(MAX_PUSH_ITERATIONS):
            start = self._step(data, start)
            if start is None:
                return
        logger.error(
            "Push did not settle after %d iterations: %r", MAX_PUSH_ITERATIONS, self
        )
        raise InvariantViolationError(
            f"push did not settle after {MAX_PUSH_ITERATIONS} iterations"
        )

    def write(self, text: str) -> int:
        """File-like alias for :meth:`push`.

        Returns:
            The number of characters written, as ``io.TextIOBase.write`` does.
        """
        self.push(text)
        return len(text)

    def flush(self) -> None:
        """No-op, present so the ring can stand in for a text stream."""

    def extend(self, chunks: Iterable[str]) -> None:
        """Push each chunk in order."""
        for chunk in chunks:
            self.push(chunk)

    def _step(self, data: bytes, start: int) -> int | None:
        """Apply one transition of the push state machine.

        Args:
            data: Encoded input of the current push.
            start: Offset of the first unprocessed byte of ``data``.

        Returns:
            The new offset into ``data`` when another transition is needed,
            or None once the input has been fully stored or discarded.
        """
        if self._state is RingState.DISCARDING:
            newline = data.find(NEWLINE_BYTES, start)
            if newline < 0:
                return None
            self._set_state(RingState.NORMAL)
            start = newline + 1

        view = memoryview(data)
        quota = max(0, self.used + len(data) - start - self._max_size)
        if quota == 0:
            self._append(view[start:])
            return None

        if self.used and quota >= self.used:
            last_byte = self._byte_at(self.used - 1)
            self._log_eviction(self.used, "content")
            self._reset_storage()
            if self._granularity is Granularity.LINE and last_byte != NEWLINE:
                self._set_state(RingState.DISCARDING)
        elif self.used:
            cut = quota + ceil_char_boundary_offset(
                chain(self._iter_from(quota), view[start:])
            )
            last_removed = self._byte_at(cut - 1)
            self._log_eviction(cut, "content")
            self._drop_front(cut)
            if self._granularity is Granularity.LINE and last_removed != NEWLINE:
                newline = self._find_newline()
                if newline >= 0:
                    self._drop_front(newline + 1)
                else:
                    self._reset_storage()
                    self._set_state(RingState.DISCARDING)
        else:
            cut = start + quota
            cut += ceil_char_boundary_offset(view[cut:])
            last_removed = data[cut - 1]
            self._log_eviction(cut - start, "input")
            start = cut
            if self._granularity is Granularity.LINE:
                self._set_state(
                    RingState.NORMAL
                    if last_removed == NEWLINE
                    else RingState.DISCARDING
                )
        return start

    def _set_state(self, state: RingState) -> None:
        if state is not self._state:
            logger.debug("Ring state %s -> %s", self._state.value, state.value)
            self._state = state

    def _byte_at(self, offset: int) -> int:
        return self.buffer[(self.read_pos + offset) % self._max_size]

    def _iter_from(self, offset: int) -> Iterator[int]:
        for index in range(offset, self.used):
            yield self._byte_at(index)

    def _find_newline(self) -> int:
        """Return the logical offset of the first stored newline, or -1."""
        head_end = min(self.read_pos + self.used, self._max_size)
        index = self.buffer.find(NEWLINE_BYTES, self.read_pos, head_end)
        if index >= 0:
            return index - self.read_pos

        head_len = head_end - self.read_pos
        index = self.buffer.find(NEWLINE_BYTES, 0, self.used - head_len)
        if index >= 0:
            return head_len + index
        return -1

    def _append(self, data: memoryview) -> None:
        """Copy ``data`` in at ``write_pos``; the caller guarantees it fits."""
        data_len = len(data)
        if not data_len:
            return

        end_space = self._max_size - self.write_pos
        if data_len <= end_space:
            self.buffer[self.write_pos : self.write_pos + data_len] = data
        else:
            self.buffer[self.write_pos :] = data[:end_space]
            self.buffer[: data_len - end_space] = data[end_space:]

        self.write_pos = (self.write_pos + data_len) % self._max_size
        self.used += data_len

    def _drop_front(self, count: int) -> None:
        self.used -= count
        if self.used:
            self.read_pos = (self.read_pos + count) % self._max_size
        else:
            self._reset_storage()

    def _reset_storage(self) -> None:
        self.read_pos = 0
        self.write_pos = 0
        self.used = 0

