"""Badge service for the pub check-in badge engine."""

import logging

from pubcheckin_badges.database.models.badge import Badge
from pubcheckin_badges.database.models.badge import BadgeCreate
from pubcheckin_badges.database.models.badge import BadgeUpdate
from pubcheckin_badges.database.models.badge import EarnedBadge
from pubcheckin_badges.database.models.badge import UserBadgeSummary
from pubcheckin_badges.database.repositories.badge import BadgeRepository
from pubcheckin_badges.database.repositories.badge import EarnedBadgeRepository
from pubcheckin_badges.services.badge_award_service import BadgeAwardService

logger = logging.getLogger(__name__)


class BadgeService:
    """Service for badge catalog management and manual awarding."""

    def __init__(self, award_service: BadgeAwardService | None = None):
        self.badge_repo = BadgeRepository()
        self.earned_badge_repo = EarnedBadgeRepository()
        self.award_service = award_service or BadgeAwardService(
            earned_badge_repo=self.earned_badge_repo
        )

    # Badge Management
    async def get_all_badges(self) -> list[Badge]:
        """Get all active badges."""
        return await self.badge_repo.get_active_badges()

    async def get_badge_by_id(self, badge_id: str) -> Badge | None:
        """Get badge by ID."""
        return await self.badge_repo.get_by_id(badge_id)

    async def create_badge(self, badge_data: BadgeCreate) -> Badge:
        """Create a new badge."""
        badge_dict = badge_data.model_dump(mode="json")
        return await self.badge_repo.create_from_dict(badge_dict)

    async def update_badge(
        self, badge_id: str, badge_data: BadgeUpdate
    ) -> Badge | None:
        """Update a badge."""
        update_dict = badge_data.model_dump(mode="json", exclude_none=True)
        if not update_dict:
            return await self.badge_repo.get_by_id(badge_id)
        return await self.badge_repo.update_from_dict(badge_id, update_dict)

    async def delete_badge(self, badge_id: str) -> bool:
        """Delete a badge (soft delete by setting is_active=False)."""
        return (
            await self.badge_repo.update_from_dict(badge_id, {"is_active": False})
            is not None
        )

    # Earned Badge Management
    async def get_user_badges(self, user_id: str) -> list[EarnedBadge]:
        """Get all badges for a user."""
        return await self.earned_badge_repo.get_earned_badges(user_id)

    async def get_user_badge_summary(self, user_id: str) -> UserBadgeSummary:
        """Get badge summary for a user."""
        badges = await self.earned_badge_repo.get_earned_badges(user_id)
        newest_first = sorted(
            badges, key=lambda earned: earned.awarded_at, reverse=True
        )

        return UserBadgeSummary(
            user_id=user_id,
            total_badges=len(badges),
            badge_ids=[earned.badge_id for earned in badges],
            recent_badges=newest_first[:3],
        )

    async def manually_award_badge(
        self, user_id: str, badge_id: str, awarded_by_user_id: str
    ) -> EarnedBadge | None:
        """Manually award a badge to a user (admin function)."""
        badge = await self.badge_repo.get_by_id(badge_id)
        if not badge or not badge.is_active:
            logger.warning(f"Cannot award unknown or inactive badge {badge_id}")
            return None

        awarded = await self.award_service.award_badges(
            user_id,
            [badge_id],
            {"triggered_by": "manual", "awarded_by": awarded_by_user_id},
        )
        return awarded[0] if awarded else None

    async def revoke_badge(self, user_id: str, badge_id: str) -> bool:
        """Revoke a badge from a user."""
        revoked = await self.earned_badge_repo.revoke_badge(user_id, badge_id)
        if revoked:
            logger.info(f"Badge {badge_id} revoked from user {user_id}")
        return revoked

    async def get_badge_award_counts(self) -> dict[str, int]:
        """Number of users holding each badge."""
        return await self.earned_badge_repo.get_badge_award_counts()
