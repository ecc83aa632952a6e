"""Tests for BadgeService."""

from datetime import UTC
from datetime import datetime
from datetime import timedelta
from unittest.mock import AsyncMock

import pytest

from pubcheckin_badges.database.models.badge import Badge
from pubcheckin_badges.database.models.badge import BadgeCreate
from pubcheckin_badges.database.models.badge import BadgeUpdate
from pubcheckin_badges.services.badge_service import BadgeService


class TestBadgeService:
    """Tests for BadgeService with mocked repositories."""

    @pytest.fixture
    def badge_service(self, award_service, earned_badge_repo):
        """Create BadgeService with mocked repositories."""
        service = BadgeService(award_service=award_service)
        service.badge_repo = AsyncMock()
        service.earned_badge_repo = earned_badge_repo
        return service

    @pytest.mark.asyncio
    async def test_get_all_badges(self, badge_service):
        badge_service.badge_repo.get_active_badges.return_value = []

        result = await badge_service.get_all_badges()

        badge_service.badge_repo.get_active_badges.assert_called_once()
        assert result == []

    @pytest.mark.asyncio
    async def test_get_badge_by_id(self, badge_service):
        badge_service.badge_repo.get_by_id.return_value = None

        result = await badge_service.get_badge_by_id("night-owl")

        badge_service.badge_repo.get_by_id.assert_called_once_with("night-owl")
        assert result is None

    @pytest.mark.asyncio
    async def test_create_badge(self, badge_service):
        badge_data = BadgeCreate(
            id="weather-warrior",
            name="Weather Warrior",
            description="Checked in during proper British weather",
            emoji="⛈️",
        )
        badge_service.badge_repo.create_from_dict.return_value = "created"

        result = await badge_service.create_badge(badge_data)

        payload = badge_service.badge_repo.create_from_dict.call_args.args[0]
        assert payload["id"] == "weather-warrior"
        assert payload["badge_type"] == "achievement"
        assert result == "created"

    @pytest.mark.asyncio
    async def test_update_badge_only_sends_set_fields(self, badge_service):
        await badge_service.update_badge("night-owl", BadgeUpdate(emoji="🌙"))

        badge_service.badge_repo.update_from_dict.assert_called_once_with(
            "night-owl", {"emoji": "🌙"}
        )

    @pytest.mark.asyncio
    async def test_update_badge_without_changes(self, badge_service):
        await badge_service.update_badge("night-owl", BadgeUpdate())

        badge_service.badge_repo.update_from_dict.assert_not_called()
        badge_service.badge_repo.get_by_id.assert_called_once_with("night-owl")

    @pytest.mark.asyncio
    async def test_delete_badge(self, badge_service):
        badge_service.badge_repo.update_from_dict.return_value = object()

        result = await badge_service.delete_badge("night-owl")

        badge_service.badge_repo.update_from_dict.assert_called_once_with(
            "night-owl", {"is_active": False}
        )
        assert result is True

    @pytest.mark.asyncio
    async def test_manually_award_badge(self, badge_service, user_id):
        badge_service.badge_repo.get_by_id.return_value = Badge(
            id="night-owl", name="Night Owl", description="Late one"
        )

        result = await badge_service.manually_award_badge(user_id, "night-owl", "admin-1")

        assert result.badge_id == "night-owl"
        assert result.metadata["triggered_by"] == "manual"
        assert result.metadata["awarded_by"] == "admin-1"

    @pytest.mark.asyncio
    async def test_manually_award_held_badge(self, badge_service, user_id):
        badge_service.badge_repo.get_by_id.return_value = Badge(
            id="night-owl", name="Night Owl", description="Late one"
        )
        await badge_service.manually_award_badge(user_id, "night-owl", "admin-1")

        result = await badge_service.manually_award_badge(user_id, "night-owl", "admin-1")

        assert result is None

    @pytest.mark.asyncio
    async def test_manually_award_inactive_badge(
        self, badge_service, earned_badge_repo, user_id
    ):
        badge_service.badge_repo.get_by_id.return_value = Badge(
            id="old", name="Old", description="Retired", is_active=False
        )

        result = await badge_service.manually_award_badge(user_id, "old", "admin-1")

        assert result is None
        earned_badge_repo.create_earned_badge.assert_not_called()

    @pytest.mark.asyncio
    async def test_revoke_badge(self, badge_service, earned_badge_repo, user_id):
        earned_badge_repo.revoke_badge.return_value = True

        assert await badge_service.revoke_badge(user_id, "night-owl") is True
        earned_badge_repo.revoke_badge.assert_called_once_with(user_id, "night-owl")

    @pytest.mark.asyncio
    async def test_get_user_badge_summary(
        self, badge_service, earned_badge_repo, make_earned_badge, user_id
    ):
        now = datetime.now(UTC)
        for age, badge_id in enumerate(["a", "b", "c", "d"]):
            earned = make_earned_badge(badge_id).model_copy(
                update={"awarded_at": now - timedelta(days=age)}
            )
            earned_badge_repo.records[earned.id] = earned

        summary = await badge_service.get_user_badge_summary(user_id)

        assert summary.total_badges == 4
        assert summary.badge_ids == ["a", "b", "c", "d"]
        assert [earned.badge_id for earned in summary.recent_badges] == ["a", "b", "c"]

    @pytest.mark.asyncio
    async def test_get_badge_award_counts(self, badge_service, earned_badge_repo):
        earned_badge_repo.get_badge_award_counts.return_value = {"night-owl": 2}

        assert await badge_service.get_badge_award_counts() == {"night-owl": 2}
