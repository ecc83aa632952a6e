"""Badge repositories for the pub check-in badge engine."""

import json
import logging

from typing import Any

from asyncpg import Record

from pubcheckin_badges.database.connection import get_db_connection
from pubcheckin_badges.database.models.badge import Badge
from pubcheckin_badges.database.models.badge import EarnedBadge
from pubcheckin_badges.database.models.badge import EarnedBadgeCreate
from pubcheckin_badges.database.models.badge import earned_badge_key
from pubcheckin_badges.database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class DuplicateBadgeAwardError(Exception):
    """Raised when a user already holds the badge being awarded."""

    def __init__(self, user_id: str, badge_id: str):
        super().__init__(f"User {user_id} already has badge {badge_id}")
        self.user_id = user_id
        self.badge_id = badge_id


class BadgeRepository(BaseRepository[Badge]):
    """Repository for badge definitions."""

    def __init__(self):
        super().__init__("badges", order_by="name ASC")

    def _record_to_model(self, record: Record) -> Badge:
        """Convert database record to Badge model."""
        return Badge.model_validate(dict(record))

    async def get_active_badges(self) -> list[Badge]:
        """Get all active badges."""
        return await self.find_by(is_active=True)

    async def get_by_category(self, category: str) -> list[Badge]:
        """Get active badges in a category."""
        return await self.find_by(category=category, is_active=True)


class EarnedBadgeRepository(BaseRepository[EarnedBadge]):
    """Repository for badges awarded to users.

    Each award is stored under ``earned_badge_key(user_id, badge_id)``, so the
    primary key is what keeps a user from holding the same badge twice.
    """

    def __init__(self):
        super().__init__("earned_badges", order_by="awarded_at ASC")

    def _record_to_model(self, record: Record) -> EarnedBadge:
        """Convert database record to EarnedBadge model."""
        data = dict(record)
        if isinstance(data.get("metadata"), str):
            data["metadata"] = json.loads(data["metadata"])
        return EarnedBadge.model_validate(data)

    async def get_earned_badges(self, user_id: str) -> list[EarnedBadge]:
        """Get all badges a user has earned, oldest first."""
        return await self.find_by(user_id=user_id)

    async def has_earned_badge(self, user_id: str, badge_id: str) -> bool:
        """Check if user already has a specific badge."""
        query = f"SELECT EXISTS(SELECT 1 FROM {self.table_name} WHERE id = $1)"

        async with get_db_connection() as connection:
            result = await connection.fetchval(
                query, earned_badge_key(user_id, badge_id)
            )
            return bool(result)

    async def create_earned_badge(
        self, user_id: str, badge_id: str, metadata: dict[str, Any] | None = None
    ) -> EarnedBadge:
        """Award a badge to a user if they do not hold it yet.

        Raises:
            DuplicateBadgeAwardError: the (user, badge) record already exists.
        """
        data = EarnedBadgeCreate(
            user_id=user_id, badge_id=badge_id, metadata=metadata or {}
        )

        query = f"""
            INSERT INTO {self.table_name} (id, user_id, badge_id, awarded_at, metadata)
            VALUES ($1, $2, $3, $4, $5)
            ON CONFLICT (id) DO NOTHING
            RETURNING *
        """

        async with get_db_connection() as connection:
            record = await connection.fetchrow(
                query,
                data.id,
                data.user_id,
                data.badge_id,
                data.awarded_at,
                data.metadata,
            )

        if record is None:
            raise DuplicateBadgeAwardError(user_id, badge_id)

        logger.info(f"Badge {badge_id} awarded to user {user_id}")
        return self._record_to_model(record)

    async def revoke_badge(self, user_id: str, badge_id: str) -> bool:
        """Remove a badge from a user."""
        return await self.delete_by_id(earned_badge_key(user_id, badge_id))

    async def get_all_earned_badges(self) -> list[EarnedBadge]:
        """Get every earned badge record (for admin statistics)."""
        query = f"SELECT * FROM {self.table_name} ORDER BY {self.order_by}"

        async with get_db_connection() as connection:
            records = await connection.fetch(query)
            return [self._record_to_model(record) for record in records]

    async def get_badge_award_counts(self) -> dict[str, int]:
        """Count how many users hold each badge."""
        query = f"""
            SELECT badge_id, COUNT(*) AS count
            FROM {self.table_name}
            GROUP BY badge_id
        """

        async with get_db_connection() as connection:
            records = await connection.fetch(query)
            return {record["badge_id"]: record["count"] for record in records}
