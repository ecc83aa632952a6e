"""Badge eligibility rules.

Every rule is a pure function of a ``BadgeTriggerContext``. Milestone badges
(first check-in, tenth check-in, three in a day) compare counts for equality
so they fire once at the crossing point. Cumulative badges whose condition
stays true once reached (five distinct pubs) guard on the badges the context
already holds instead.
"""

from collections.abc import Callable
from dataclasses import dataclass
from zoneinfo import ZoneInfo

from pubcheckin_badges.config.settings import BadgeSettings
from pubcheckin_badges.config.settings import get_badge_settings
from pubcheckin_badges.database.models.badge import BadgeTriggerContext
from pubcheckin_badges.database.models.checkin import to_local_time

FIRST_TIMER = "first-timer"
LOCAL_LEGEND = "local-legend"
REGIONAL_CHAMPION = "regional-champion"
EARLY_BIRD = "early-bird"
NIGHT_OWL = "night-owl"
HAT_TRICK = "hat-trick"

BadgePredicate = Callable[[BadgeTriggerContext], bool]


@dataclass(frozen=True)
class BadgeRule:
    """A badge id paired with the predicate that decides eligibility."""

    badge_id: str
    check: BadgePredicate
    description: str = ""


def unique_pub_count(context: BadgeTriggerContext) -> int:
    """Number of distinct pubs in the user's history."""
    return len({check_in.pub_id for check_in in context.user_check_ins})


def same_day_count(context: BadgeTriggerContext) -> int:
    """Number of check-ins on the trigger check-in's calendar day."""
    date_key = context.check_in.date_key
    return sum(
        1 for check_in in context.user_check_ins if check_in.date_key == date_key
    )


def is_first_check_in(context: BadgeTriggerContext) -> bool:
    return len(context.user_check_ins) == 1


def has_check_in_count(count: int) -> BadgePredicate:
    """Fires only when the history is exactly ``count`` long."""

    def check(context: BadgeTriggerContext) -> bool:
        return len(context.user_check_ins) == count

    return check


def has_unique_pubs(minimum: int, badge_id: str) -> BadgePredicate:
    """Fires once ``minimum`` distinct pubs are reached, unless already held."""

    def check(context: BadgeTriggerContext) -> bool:
        if unique_pub_count(context) < minimum:
            return False
        return not context.has_earned_badge(badge_id)

    return check


def has_check_in_before(hour: int, tz: ZoneInfo) -> BadgePredicate:
    def check(context: BadgeTriggerContext) -> bool:
        return any(
            to_local_time(check_in.timestamp, tz).hour < hour
            for check_in in context.user_check_ins
        )

    return check


def has_check_in_from(hour: int, tz: ZoneInfo) -> BadgePredicate:
    def check(context: BadgeTriggerContext) -> bool:
        return any(
            to_local_time(check_in.timestamp, tz).hour >= hour
            for check_in in context.user_check_ins
        )

    return check


def has_same_day_count(count: int) -> BadgePredicate:
    def check(context: BadgeTriggerContext) -> bool:
        return same_day_count(context) == count

    return check


def build_badge_rules(settings: BadgeSettings | None = None) -> tuple[BadgeRule, ...]:
    """Build the ordered rule table.

    Rules run, and badges are awarded, in the order returned here.
    """
    settings = settings or get_badge_settings()
    tz = ZoneInfo(settings.timezone)

    rules = (
        BadgeRule(FIRST_TIMER, is_first_check_in, "First ever check-in"),
        BadgeRule(
            LOCAL_LEGEND,
            has_check_in_count(settings.local_legend_check_ins),
            f"Check-in number {settings.local_legend_check_ins}",
        ),
        BadgeRule(
            REGIONAL_CHAMPION,
            has_unique_pubs(settings.regional_champion_unique_pubs, REGIONAL_CHAMPION),
            f"At least {settings.regional_champion_unique_pubs} different pubs",
        ),
        BadgeRule(
            EARLY_BIRD,
            has_check_in_before(settings.early_bird_cutoff_hour, tz),
            f"A check-in before {settings.early_bird_cutoff_hour}:00",
        ),
        BadgeRule(
            NIGHT_OWL,
            has_check_in_from(settings.night_owl_start_hour, tz),
            f"A check-in at or after {settings.night_owl_start_hour}:00",
        ),
        BadgeRule(
            HAT_TRICK,
            has_same_day_count(settings.hat_trick_check_ins),
            f"Check-in number {settings.hat_trick_check_ins} of the day",
        ),
    )

    disabled = set(settings.disabled_badges)
    return tuple(rule for rule in rules if rule.badge_id not in disabled)
