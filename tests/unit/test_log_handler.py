"""Tests for the ring-backed logging handler."""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest

from stringring.log_handler import RingLogHandler
from stringring.models import Granularity


@pytest.fixture
def handler() -> Iterator[RingLogHandler]:
    """Attach a 40-byte line handler to an isolated logger."""
    ring_handler = RingLogHandler(max_size=40)
    ring_handler.setFormatter(logging.Formatter("%(message)s"))
    test_logger = logging.getLogger("tests.ring_log_handler")
    test_logger.setLevel(logging.INFO)
    test_logger.propagate = False
    test_logger.addHandler(ring_handler)

    yield ring_handler

    test_logger.removeHandler(ring_handler)


def test_records_are_newline_terminated(handler: RingLogHandler) -> None:
    """Each record becomes one line."""
    logging.getLogger("tests.ring_log_handler").info("hello %s", "ring")

    assert handler.getvalue() == "hello ring\n"
    assert handler.lines() == ["hello ring"]


def test_oldest_records_are_evicted_whole(handler: RingLogHandler) -> None:
    """With line granularity the tail always starts at a record."""
    log = logging.getLogger("tests.ring_log_handler")
    for word in ["one", "two", "three", "four", "five"]:
        log.info("line %s", word)

    assert handler.lines() == ["line two", "line three", "line four", "line five"]


def test_level_filtering(handler: RingLogHandler) -> None:
    """Records below the logger level never reach the ring."""
    log = logging.getLogger("tests.ring_log_handler")
    log.debug("hidden")
    log.warning("shown")

    assert handler.getvalue() == "shown\n"


def test_clear(handler: RingLogHandler) -> None:
    """clear() drops retained records."""
    logging.getLogger("tests.ring_log_handler").info("something")

    handler.clear()

    assert handler.getvalue() == ""


def test_format_errors_go_to_handle_error(
    handler: RingLogHandler, monkeypatch: pytest.MonkeyPatch
) -> None:
    """A record that fails to format is reported, not raised."""
    failed: list[logging.LogRecord] = []
    monkeypatch.setattr(handler, "handleError", failed.append)

    handler.handle(
        logging.LogRecord(
            "x", logging.INFO, __file__, 1, "%d", ("not a number",), None
        )
    )

    assert len(failed) == 1
    assert handler.getvalue() == ""


def test_character_granularity_option() -> None:
    """The handler's ring can evict by character instead."""
    ring_handler = RingLogHandler(max_size=8, granularity=Granularity.CHARACTER)
    ring_handler.setFormatter(logging.Formatter("%(message)s"))

    ring_handler.handle(
        logging.LogRecord("x", logging.INFO, __file__, 1, "abcdefghij", None, None)
    )

    assert ring_handler.getvalue() == "defghij\n"


def test_lines_split_on_newline_only(handler: RingLogHandler) -> None:
    """Carriage returns and other separators stay inside a line."""
    log = logging.getLogger("tests.ring_log_handler")
    log.info("progress 10%\r20%")
    log.info("tab\x0bbed text")

    assert handler.lines() == ["progress 10%\r20%", "tab\x0bbed text"]


def test_lines_on_empty_handler(handler: RingLogHandler) -> None:
    """No records means no lines."""
    assert handler.lines() == []


def test_multiline_record_tail_starts_at_a_line(handler: RingLogHandler) -> None:
    """Eviction may cut between the lines of one record."""
    log = logging.getLogger("tests.ring_log_handler")
    log.info("header line that is long\nsecond part\nthird")

    assert handler.getvalue() == "second part\nthird\n"
