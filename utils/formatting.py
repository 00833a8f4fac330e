"""
Shared formatting helpers for user-facing messages.
"""

import math

_UNITS = (
    ("day", 86_400),
    ("hour", 3_600),
    ("minute", 60),
    ("second", 1),
)


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}" if count == 1 else f"{count} {unit}s"


def format_duration(ms: int | float, max_units: int = 2) -> str:
    """
    Render a millisecond duration as a coarse human string.

    Uses the largest non-zero units, at most max_units of them. Sub-second
    remainders round up so a pending wait never reads as zero.

        >>> format_duration(120_000)
        '2 minutes'
        >>> format_duration(90_000)
        '1 minute 30 seconds'
        >>> format_duration(250)
        '1 second'
    """
    if ms <= 0:
        return "0 seconds"

    remaining = math.ceil(ms / 1000)
    parts: list[str] = []
    for unit, size in _UNITS:
        if len(parts) >= max_units:
            break
        amount, remaining = divmod(remaining, size)
        if amount:
            parts.append(_plural(amount, unit))
        elif parts:
            # Only adjacent units, so 3605s renders as "1 hour"
            break
    return " ".join(parts)


def format_user(user_tag: str, user_id: int) -> str:
    """Log-friendly caller label, e.g. 'name (1234)'."""
    return f"{user_tag} ({user_id})" if user_tag else str(user_id)
