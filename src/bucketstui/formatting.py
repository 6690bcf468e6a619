"""Human-readable formatting helpers."""

SECONDS_PER_MINUTE = 60
SECONDS_PER_HOUR = 60 * SECONDS_PER_MINUTE
SECONDS_PER_DAY = 24 * SECONDS_PER_HOUR

_UNITS = (
    ("day", SECONDS_PER_DAY),
    ("hour", SECONDS_PER_HOUR),
    ("minute", SECONDS_PER_MINUTE),
    ("second", 1),
)


def _pluralize(count: int, unit: str) -> str:
    return f"{count} {unit}" if count == 1 else f"{count} {unit}s"


def rule_to_string(seconds: int) -> str:
    """Format a retention interval in seconds as a duration string.

    Args:
        seconds: Non-negative expiration interval

    Returns:
        Duration such as "1 hour" or "7 days 12 hours"; "0 seconds" for zero
    """
    seconds = int(seconds)
    if seconds < 0:
        raise ValueError(f"Retention interval cannot be negative: {seconds}")
    if seconds == 0:
        return _pluralize(0, "second")

    parts = []
    remaining = seconds
    for unit, size in _UNITS:
        count, remaining = divmod(remaining, size)
        if count:
            parts.append(_pluralize(count, unit))

    return " ".join(parts)


def days_to_seconds(days: int) -> int:
    return int(days) * SECONDS_PER_DAY
