"""Badge models for the pub check-in badge engine."""

from datetime import UTC
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field

from pubcheckin_badges.database.models.base import BaseDBModel
from pubcheckin_badges.database.models.base import TimestampMixin
from pubcheckin_badges.database.models.checkin import CheckIn


def earned_badge_key(user_id: str, badge_id: str) -> str:
    """Document id of the single award of ``badge_id`` to ``user_id``."""
    return f"{user_id}_{badge_id}"


class BadgeType(str, Enum):
    """Badge type enumeration."""

    ACHIEVEMENT = "achievement"
    MISSION = "mission"
    LEGENDARY = "legendary"


class Badge(BaseDBModel, TimestampMixin):
    """Badge definition from the catalog."""

    name: str
    description: str
    badge_type: BadgeType = BadgeType.ACHIEVEMENT
    category: str | None = None
    emoji: str | None = None
    icon_url: str | None = None
    icon: str | None = None
    criteria: str | None = None
    is_active: bool = True

    model_config = ConfigDict(from_attributes=True, use_enum_values=True)


class BadgeCreate(BaseModel):
    """Badge creation model."""

    id: str
    name: str
    description: str
    badge_type: BadgeType = BadgeType.ACHIEVEMENT
    category: str | None = None
    emoji: str | None = None
    icon_url: str | None = None
    icon: str | None = None
    criteria: str | None = None
    is_active: bool = True


class BadgeUpdate(BaseModel):
    """Badge update model."""

    name: str | None = None
    description: str | None = None
    badge_type: BadgeType | None = None
    category: str | None = None
    emoji: str | None = None
    icon_url: str | None = None
    icon: str | None = None
    criteria: str | None = None
    is_active: bool | None = None


class EarnedBadge(BaseDBModel):
    """A badge awarded to a user."""

    user_id: str
    badge_id: str
    awarded_at: datetime
    metadata: dict[str, Any] = Field(default_factory=dict)


class EarnedBadgeCreate(BaseModel):
    """Earned badge creation model."""

    user_id: str
    badge_id: str
    awarded_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def id(self) -> str:
        return earned_badge_key(self.user_id, self.badge_id)


class BadgeTriggerContext(BaseModel):
    """Everything a single evaluation run looks at.

    Built fresh for every evaluation and never persisted. ``check_in`` is the
    event that triggered the run and is expected to be part of
    ``user_check_ins``.
    """

    user_id: str
    check_in: CheckIn
    user_check_ins: list[CheckIn]
    user_badges: list[EarnedBadge] = Field(default_factory=list)

    @property
    def held_badge_ids(self) -> set[str]:
        return {earned.badge_id for earned in self.user_badges}

    def has_earned_badge(self, badge_id: str) -> bool:
        """Check if the user already holds ``badge_id``."""
        return badge_id in self.held_badge_ids


class AwardOutcome(str, Enum):
    """Lifecycle of a single award attempt."""

    PENDING = "pending"
    AWARDED = "awarded"
    SKIPPED_ALREADY_HELD = "skipped_already_held"
    FAILED = "failed"


class AwardAttempt(BaseModel):
    """Result of trying to award one badge to one user."""

    badge_id: str
    outcome: AwardOutcome = AwardOutcome.PENDING
    earned_badge: EarnedBadge | None = None
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.outcome == AwardOutcome.AWARDED


class BadgeEligibilityCheck(BaseModel):
    """Badge eligibility check result."""

    badge_id: str
    badge_name: str
    is_eligible: bool
    already_held: bool = False
    reason: str | None = None


class BadgeDebugInfo(BaseModel):
    """Per-rule evaluation results for troubleshooting."""

    user_id: str
    total_check_ins: int
    unique_pubs: int
    current_badges: list[str] = Field(default_factory=list)
    badge_checks: dict[str, bool] = Field(default_factory=dict)


class BadgeDebugReport(BaseModel):
    """Debug output for a user, or an error when there is nothing to evaluate."""

    context: BadgeTriggerContext | None = None
    debug_info: BadgeDebugInfo | None = None
    error: str | None = None


class UserBadgeSummary(BaseModel):
    """Summary of a user's badges for display."""

    user_id: str
    total_badges: int
    badge_ids: list[str] = Field(default_factory=list)
    recent_badges: list[EarnedBadge] = Field(default_factory=list)
