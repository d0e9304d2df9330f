"""Tests for the sampled logger helper."""

from __future__ import annotations

import logging

import pytest

from stringring.sampled_logger import make_sampled_logger


def test_logs_first_and_every_nth_call(caplog: pytest.LogCaptureFixture) -> None:
    """Only call 1 and multiples of the interval are emitted."""
    target = logging.getLogger("tests.sampled")
    log_sampled = make_sampled_logger(
        "call #%d: %s", log_interval=3, target_logger=target, level=logging.INFO
    )

    with caplog.at_level(logging.INFO, logger="tests.sampled"):
        for index in range(7):
            log_sampled(f"item-{index}")

    assert [record.getMessage() for record in caplog.records] == [
        "call #1: item-0",
        "call #3: item-2",
        "call #6: item-5",
    ]


def test_disabled_level_emits_nothing(caplog: pytest.LogCaptureFixture) -> None:
    """Nothing is logged when the target level is disabled."""
    target = logging.getLogger("tests.sampled.quiet")
    log_sampled = make_sampled_logger("call #%d", target_logger=target)

    with caplog.at_level(logging.WARNING, logger="tests.sampled.quiet"):
        log_sampled()

    assert caplog.records == []


def test_rejects_non_positive_interval() -> None:
    """An interval of zero would never log again."""
    with pytest.raises(ValueError):
        make_sampled_logger("call #%d", log_interval=0)
