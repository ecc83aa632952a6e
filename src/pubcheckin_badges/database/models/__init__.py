"""Database models for the pub check-in badge engine."""

from pubcheckin_badges.database.models.badge import AwardAttempt
from pubcheckin_badges.database.models.badge import AwardOutcome
from pubcheckin_badges.database.models.badge import Badge
from pubcheckin_badges.database.models.badge import BadgeCreate
from pubcheckin_badges.database.models.badge import BadgeDebugInfo
from pubcheckin_badges.database.models.badge import BadgeDebugReport
from pubcheckin_badges.database.models.badge import BadgeEligibilityCheck
from pubcheckin_badges.database.models.badge import BadgeTriggerContext
from pubcheckin_badges.database.models.badge import BadgeType
from pubcheckin_badges.database.models.badge import BadgeUpdate
from pubcheckin_badges.database.models.badge import EarnedBadge
from pubcheckin_badges.database.models.badge import EarnedBadgeCreate
from pubcheckin_badges.database.models.badge import UserBadgeSummary
from pubcheckin_badges.database.models.badge import earned_badge_key
from pubcheckin_badges.database.models.base import BaseDBModel
from pubcheckin_badges.database.models.base import TimestampMixin
from pubcheckin_badges.database.models.checkin import CheckIn
from pubcheckin_badges.database.models.checkin import make_date_key

__all__ = [
    "AwardAttempt",
    "AwardOutcome",
    "Badge",
    "BadgeCreate",
    "BadgeDebugInfo",
    "BadgeDebugReport",
    "BadgeEligibilityCheck",
    "BadgeTriggerContext",
    "BadgeType",
    "BadgeUpdate",
    "BaseDBModel",
    "CheckIn",
    "EarnedBadge",
    "EarnedBadgeCreate",
    "TimestampMixin",
    "UserBadgeSummary",
    "earned_badge_key",
    "make_date_key",
]
