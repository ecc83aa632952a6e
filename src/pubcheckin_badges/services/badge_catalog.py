"""Badge catalog lookup for the pub check-in badge engine."""

import logging

from collections.abc import Iterable

from pubcheckin_badges.database.models.badge import Badge
from pubcheckin_badges.database.models.badge import BadgeType
from pubcheckin_badges.database.repositories.badge import BadgeRepository

logger = logging.getLogger(__name__)

UNKNOWN_BADGE_NAME = "Unknown badge"

DEFAULT_BADGES: tuple[Badge, ...] = (
    Badge(
        id="first-timer",
        name="First Timer",
        description=(
            "Popped your Spoons cherry - Welcome to the most ridiculous "
            "competition you'll care about"
        ),
        emoji="🌟",
        criteria="first-checkin",
    ),
    Badge(
        id="local-legend",
        name="Local Legend",
        description=(
            "Neighborhood regular - Same pub 25 times, "
            "you're practically part of the furniture"
        ),
        emoji="🏠",
        criteria="tenth-checkin",
    ),
    Badge(
        id="regional-champion",
        name="Regional Champion",
        description=(
            "County conqueror - Completed your first regional mission, "
            "one of many to come"
        ),
        emoji="🏆",
        criteria="five-unique-pubs",
    ),
    Badge(
        id="early-bird",
        name="Early Bird",
        description=(
            "Pre-noon pioneer - Drinking before the sun reaches its peak, "
            "absolute legend"
        ),
        emoji="🌅",
        criteria="checkin-before-noon",
    ),
    Badge(
        id="night-owl",
        name="Night Owl",
        description=(
            "After-hours enthusiast - When sensible people go home, "
            "you're just getting started"
        ),
        emoji="🦉",
        criteria="checkin-after-21",
    ),
    Badge(
        id="hat-trick",
        name="Hat Trick",
        description="Three check-ins in a single day",
        emoji="🎩",
        criteria="three-checkins-one-day",
    ),
)


class BadgeCatalog:
    """In-memory lookup table of badge definitions."""

    def __init__(self, badges: Iterable[Badge]):
        self._badges: dict[str, Badge] = {badge.id: badge for badge in badges}

    @classmethod
    def default(cls) -> "BadgeCatalog":
        """Catalog of the badges the built-in rules can award."""
        return cls(DEFAULT_BADGES)

    @classmethod
    async def load(cls, repository: BadgeRepository | None = None) -> "BadgeCatalog":
        """Load active badges from the store, filling gaps with the defaults."""
        repository = repository or BadgeRepository()
        stored = await repository.get_active_badges()
        stored_ids = {badge.id for badge in stored}
        defaults = [badge for badge in DEFAULT_BADGES if badge.id not in stored_ids]
        logger.debug(
            f"Loaded {len(stored)} badges from the store, {len(defaults)} defaults"
        )
        return cls([*stored, *defaults])

    def __contains__(self, badge_id: object) -> bool:
        return badge_id in self._badges

    def __len__(self) -> int:
        return len(self._badges)

    @property
    def badge_ids(self) -> list[str]:
        return list(self._badges)

    def get(self, badge_id: str) -> Badge | None:
        """Get a badge definition by id."""
        return self._badges.get(badge_id)

    def lookup(self, badge_id: str) -> Badge:
        """Get a badge definition, or an "unknown" placeholder if it is missing."""
        badge = self._badges.get(badge_id)
        if badge is not None:
            return badge

        logger.warning(f"Badge {badge_id} has no catalog entry")
        return Badge(
            id=badge_id,
            name=UNKNOWN_BADGE_NAME,
            description=f"No catalog entry for {badge_id}",
            badge_type=BadgeType.ACHIEVEMENT,
            is_active=False,
        )

    def missing_from(self, badge_ids: Iterable[str]) -> list[str]:
        """Ids from ``badge_ids`` that have no catalog entry."""
        return [badge_id for badge_id in badge_ids if badge_id not in self._badges]
