"""Check-in repository for the pub check-in badge engine."""

from zoneinfo import ZoneInfo

from asyncpg import Record

from pubcheckin_badges.config.settings import get_badge_settings
from pubcheckin_badges.database.models.checkin import CheckIn
from pubcheckin_badges.database.models.checkin import make_date_key
from pubcheckin_badges.database.repositories.base import BaseRepository


class CheckInRepository(BaseRepository[CheckIn]):
    """Read-only access to check-ins; they are written by the check-in flow."""

    def __init__(self, timezone: str | None = None):
        super().__init__("check_ins", order_by="timestamp ASC")
        self._tz = ZoneInfo(timezone or get_badge_settings().timezone)

    def _record_to_model(self, record: Record) -> CheckIn:
        """Convert database record to CheckIn model."""
        data = dict(record)
        if not data.get("date_key"):
            data["date_key"] = make_date_key(data["timestamp"], self._tz)
        return CheckIn.model_validate(data)

    async def get_user_check_ins(self, user_id: str) -> list[CheckIn]:
        """Get a user's check-ins, oldest first."""
        return await self.find_by(user_id=user_id)
