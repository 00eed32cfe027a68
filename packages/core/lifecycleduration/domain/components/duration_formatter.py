"""DurationFormatter component for human-readable lifecycle durations."""

import structlog

logger = structlog.get_logger(__name__)

MILLIS_PER_SECOND = 1000
SECONDS_PER_MINUTE = 60
MINUTES_PER_HOUR = 60
HOURS_PER_DAY = 24


class DurationFormatter:
    """Formats a millisecond duration as 'd:hh:mm:ss', dropping leading zero units.

    Minutes and seconds are kept as soon as any minute has elapsed; a duration
    under a minute is rendered as seconds only.

    Example:
        ```python
        formatter = DurationFormatter()
        formatter.format(500000)   # "08m:20s"
        formatter.format(7329000)  # "02h:02m:09s"
        ```
    """

    SECONDS_FORMAT = "%02ds"
    """Two digit seconds. Example: 08s."""

    MINUTES_SECONDS_FORMAT = "%02dm:%02ds"
    """Two digit minutes and seconds. Example: 01m:23s."""

    HOURS_MINUTES_SECONDS_FORMAT = "%02dh:%02dm:%02ds"
    """Two digit hours, minutes and seconds. Example: 07h:12m:09s."""

    DAYS_HOURS_MINUTES_SECONDS_FORMAT = "%dd:%02dh:%02dm:%02ds"
    """Unpadded days, two digit hours, minutes and seconds. Example: 3d:07h:12m:09s."""

    def format(self, duration_millis: int) -> str:
        """Format a duration.

        Args:
            duration_millis: Elapsed time in milliseconds.

        Returns:
            Formatted duration. Negative input is clamped to zero.
        """
        if duration_millis < 0:
            logger.warning(
                "Negative lifecycle state duration clamped to zero",
                duration_millis=duration_millis,
            )
            duration_millis = 0

        total_seconds = duration_millis // MILLIS_PER_SECOND
        total_minutes, seconds = divmod(total_seconds, SECONDS_PER_MINUTE)
        total_hours, minutes = divmod(total_minutes, MINUTES_PER_HOUR)
        days, hours = divmod(total_hours, HOURS_PER_DAY)

        if days > 0:
            return self.DAYS_HOURS_MINUTES_SECONDS_FORMAT % (days, hours, minutes, seconds)
        if hours > 0:
            return self.HOURS_MINUTES_SECONDS_FORMAT % (hours, minutes, seconds)
        if minutes > 0:
            return self.MINUTES_SECONDS_FORMAT % (minutes, seconds)
        return self.SECONDS_FORMAT % seconds


def format_duration(duration_millis: int) -> str:
    """Format a millisecond duration with the default DurationFormatter."""
    return DurationFormatter().format(duration_millis)
