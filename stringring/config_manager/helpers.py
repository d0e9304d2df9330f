"""Helpers for parsing byte-sized configuration values."""


def parse_bytes(value: int | str) -> int:
    """Parse a byte quantity from an integer or unit-suffixed string.

    Supported string units (case-insensitive, 1024-based):
        b, k, kb, m, mb, g, gb

    Args:
        value: Raw byte value as an ``int`` or string with an optional unit
            suffix, e.g. ``"4096"``, ``"64kb"`` or ``"1M"``.

    Returns:
        The parsed value in bytes.

    Raises:
        ValueError: If the input cannot be parsed or contains an unknown unit.
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid byte value: {value!r}")
    if isinstance(value, int):
        return value

    normalized_value = str(value).strip().lower()

    if normalized_value.isdigit():
        return int(normalized_value)

    numeric_part = normalized_value.rstrip("bkmg")
    unit_suffix = normalized_value[len(numeric_part) :]
    numeric_part = numeric_part.strip()

    if not numeric_part.isdigit() or not unit_suffix:
        raise ValueError(f"Invalid byte value: {value!r}")

    multipliers = {
        "b": 1,
        "k": 1024,
        "kb": 1024,
        "m": 1024**2,
        "mb": 1024**2,
        "g": 1024**3,
        "gb": 1024**3,
    }
    try:
        multiplier = multipliers[unit_suffix]
    except KeyError as exc:
        raise ValueError(f"Unknown byte unit in value: {value!r}") from exc

    return int(numeric_part) * multiplier
