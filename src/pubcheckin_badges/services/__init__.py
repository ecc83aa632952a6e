"""Service layer for the pub check-in badge engine."""

from pubcheckin_badges.services.badge_award_service import BadgeAwardService
from pubcheckin_badges.services.badge_catalog import BadgeCatalog
from pubcheckin_badges.services.badge_evaluator import BadgeEvaluator
from pubcheckin_badges.services.badge_service import BadgeService

__all__ = [
    "BadgeAwardService",
    "BadgeCatalog",
    "BadgeEvaluator",
    "BadgeService",
]
