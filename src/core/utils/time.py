"""Timestamps stamped on entry rows and error responses."""

from datetime import datetime, timezone


def iso_timestamp(moment: datetime | None = None) -> str:
    """Render a moment (default: now) as an ISO-8601 UTC string.

    Naive datetimes are taken to be UTC already.

    Example:
        2024-01-15T10:42:31.123+00:00
    """
    if moment is None:
        moment = datetime.now(timezone.utc)
    elif moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)

    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds")
