"""Database repositories for the pub check-in badge engine."""

from pubcheckin_badges.database.repositories.badge import BadgeRepository
from pubcheckin_badges.database.repositories.badge import DuplicateBadgeAwardError
from pubcheckin_badges.database.repositories.badge import EarnedBadgeRepository
from pubcheckin_badges.database.repositories.base import BaseRepository
from pubcheckin_badges.database.repositories.checkin import CheckInRepository

__all__ = [
    "BadgeRepository",
    "BaseRepository",
    "CheckInRepository",
    "DuplicateBadgeAwardError",
    "EarnedBadgeRepository",
]
