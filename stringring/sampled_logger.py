"""Sampled logger for high-frequency log messages.

Pushing into a ring is a hot path; this keeps per-eviction logging from
flooding the log by only emitting at configurable intervals.
"""

import logging
from collections.abc import Callable

from stringring.const import DEFAULT_EVICTION_LOG_INTERVAL

logger = logging.getLogger(__name__)


def make_sampled_logger(
    log_format: str,
    log_interval: int = DEFAULT_EVICTION_LOG_INTERVAL,
    target_logger: logging.Logger | None = None,
    level: int = logging.DEBUG,
) -> Callable[..., None]:
    """Create a logger function that logs the first and every Nth call.

    Args:
        log_format: Format string for the log message. The first placeholder
                    receives the call number, remaining placeholders receive
                    the arguments passed to the returned function.
        log_interval: Log every Nth call (default 1000).
        target_logger: Logger instance to use (default: module logger)
        level: Log level to use (default: DEBUG)

    Returns:
        A function: (*format_args) -> None

    Raises:
        ValueError: If ``log_interval`` is not positive.
    """
    if log_interval <= 0:
        raise ValueError(f"log_interval must be positive, got {log_interval}")

    call_counter = 0
    _logger = target_logger or logger

    def log_sampled(*format_args: object) -> None:
        nonlocal call_counter
        call_counter += 1

        if call_counter != 1 and call_counter % log_interval != 0:
            return
        if _logger.isEnabledFor(level):
            _logger.log(level, log_format, call_counter, *format_args)

    return log_sampled
