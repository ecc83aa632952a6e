"""Check-in models for the badge engine."""

from datetime import datetime
from zoneinfo import ZoneInfo

from pydantic import ConfigDict

from pubcheckin_badges.database.models.base import BaseDBModel


def to_local_time(timestamp: datetime, tz: ZoneInfo) -> datetime:
    """Convert a check-in timestamp to the reference timezone.

    Naive timestamps are assumed to already be local wall-clock time.
    """
    if timestamp.tzinfo is None:
        return timestamp
    return timestamp.astimezone(tz)


def to_aware_time(timestamp: datetime, tz: ZoneInfo) -> datetime:
    """Attach the reference timezone to naive timestamps so all compare."""
    if timestamp.tzinfo is None:
        return timestamp.replace(tzinfo=tz)
    return timestamp


def make_date_key(timestamp: datetime, tz: ZoneInfo) -> str:
    """Calendar-day key (YYYY-MM-DD) for a timestamp in the reference timezone."""
    return to_local_time(timestamp, tz).date().isoformat()


class CheckIn(BaseDBModel):
    """A user visiting a pub at a point in time. Never mutated."""

    user_id: str
    pub_id: str
    timestamp: datetime
    date_key: str

    model_config = ConfigDict(from_attributes=True, frozen=True)

