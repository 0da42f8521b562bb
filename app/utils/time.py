"""Time helpers for stored timestamps and printed dates"""

from datetime import date, datetime, timezone


def get_utc_now() -> datetime:
    """Naive UTC datetime for TIMESTAMP WITHOUT TIME ZONE columns."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def get_local_today() -> date:
    """Server-local calendar date, printed as the invoice date."""
    return datetime.now().date()
