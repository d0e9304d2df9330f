"""Constants for the string ring buffer."""

NEWLINE = 0x0A  # b"\n" as an int, the only line terminator
NEWLINE_BYTES = b"\n"

# A UTF-8 encoded codepoint is at most four bytes long, so a character
# boundary is always found within the first four bytes of valid input.
MAX_UTF8_SEQUENCE_LEN = 4
CONTINUATION_MASK = 0xC0
CONTINUATION_TAG = 0x80

# One pass to leave discarding mode, one for the budget math and one to
# resolve a discard triggered by that same pass.
MAX_PUSH_ITERATIONS = 3

DEFAULT_MAX_SIZE = 65536  # (64kb)
DEFAULT_EVICTION_LOG_INTERVAL = 1000

MAX_SIZE_ENV_VAR = "STRINGRING_MAX_SIZE"
GRANULARITY_ENV_VAR = "STRINGRING_GRANULARITY"
