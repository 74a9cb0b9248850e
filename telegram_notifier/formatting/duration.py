"""Duration formatting for build messages."""

MILLIS_PER_SECOND = 1_000
MILLIS_PER_MINUTE = 60 * MILLIS_PER_SECOND
MILLIS_PER_HOUR = 60 * MILLIS_PER_MINUTE

UNKNOWN_DURATION = "N/A"


def format_duration(duration_ms: int) -> str:
    """
    Format a build duration in a compact human-readable form.

    Leading zero units are dropped, seconds are always shown.

    Args:
        duration_ms: Duration in milliseconds (negative means unknown)

    Returns:
        Formatted duration, or "N/A" for a negative duration

    Examples:
        >>> format_duration(5000)
        '5s'
        >>> format_duration(65000)
        '1m 5s'
        >>> format_duration(3723000)
        '1h 2m 3s'
        >>> format_duration(-1)
        'N/A'
    """
    if duration_ms < 0:
        return UNKNOWN_DURATION

    hours = duration_ms // MILLIS_PER_HOUR
    minutes = (duration_ms // MILLIS_PER_MINUTE) % 60
    seconds = (duration_ms // MILLIS_PER_SECOND) % 60

    if hours > 0:
        return f"{hours}h {minutes}m {seconds}s"
    if minutes > 0:
        return f"{minutes}m {seconds}s"
    return f"{seconds}s"
