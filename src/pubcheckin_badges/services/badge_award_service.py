"""Badge evaluation and awarding after check-ins."""

import logging

from datetime import UTC
from datetime import datetime
from typing import Any
from zoneinfo import ZoneInfo

from pubcheckin_badges.config.settings import get_badge_settings
from pubcheckin_badges.database.models.badge import AwardAttempt
from pubcheckin_badges.database.models.badge import AwardOutcome
from pubcheckin_badges.database.models.badge import BadgeDebugReport
from pubcheckin_badges.database.models.badge import BadgeTriggerContext
from pubcheckin_badges.database.models.badge import EarnedBadge
from pubcheckin_badges.database.models.checkin import CheckIn
from pubcheckin_badges.database.models.checkin import to_aware_time
from pubcheckin_badges.database.repositories.badge import DuplicateBadgeAwardError
from pubcheckin_badges.database.repositories.badge import EarnedBadgeRepository
from pubcheckin_badges.database.repositories.checkin import CheckInRepository
from pubcheckin_badges.services.badge_catalog import BadgeCatalog
from pubcheckin_badges.services.badge_evaluator import BadgeEvaluator

logger = logging.getLogger(__name__)

NO_CHECK_INS_ERROR = "No check-ins found for user"


def latest_check_in(check_ins: list[CheckIn], tz: ZoneInfo | None = None) -> CheckIn:
    """Most recent check-in; ties keep the later list position.

    Naive timestamps are read as local time in ``tz``.
    """
    tz = tz or ZoneInfo(get_badge_settings().timezone)
    return max(
        reversed(check_ins),
        key=lambda check_in: to_aware_time(check_in.timestamp, tz),
    )


class BadgeAwardService:
    """Evaluates badge rules for a check-in and awards what the user earned.

    Awards are attempted one at a time in rule order. A failed award is logged
    and left out of the result; it never stops the remaining awards and never
    raises to the caller.
    """

    def __init__(
        self,
        evaluator: BadgeEvaluator | None = None,
        catalog: BadgeCatalog | None = None,
        earned_badge_repo: EarnedBadgeRepository | None = None,
        check_in_repo: CheckInRepository | None = None,
    ):
        self.evaluator = evaluator or BadgeEvaluator()
        self.catalog = catalog or BadgeCatalog.default()
        self.earned_badge_repo = earned_badge_repo or EarnedBadgeRepository()
        self.check_in_repo = check_in_repo or CheckInRepository()

    async def build_trigger_context(
        self, user_id: str, check_in: CheckIn, all_check_ins: list[CheckIn]
    ) -> BadgeTriggerContext:
        """Bundle the trigger, the history and the user's current badges."""
        user_badges = await self.earned_badge_repo.get_earned_badges(user_id)

        logger.debug(
            f"Trigger context for user {user_id}: {len(all_check_ins)} check-ins, "
            f"{len(user_badges)} badges held, trigger pub {check_in.pub_id}"
        )
        return BadgeTriggerContext(
            user_id=user_id,
            check_in=check_in,
            user_check_ins=all_check_ins,
            user_badges=user_badges,
        )

    async def award_badge(
        self, user_id: str, badge_id: str, metadata: dict[str, Any] | None = None
    ) -> AwardAttempt:
        """Try to award one badge. Failures are reported, not raised."""
        attempt = AwardAttempt(badge_id=badge_id)

        try:
            if await self.earned_badge_repo.has_earned_badge(user_id, badge_id):
                logger.debug(f"User {user_id} already has badge {badge_id}, skipping")
                attempt.outcome = AwardOutcome.SKIPPED_ALREADY_HELD
                return attempt

            attempt.earned_badge = await self.earned_badge_repo.create_earned_badge(
                user_id, badge_id, metadata
            )
            attempt.outcome = AwardOutcome.AWARDED
        except DuplicateBadgeAwardError as e:
            # Another evaluation awarded it between the check and the write
            logger.warning(f"Lost award race for badge {badge_id}: {e}")
            attempt.outcome = AwardOutcome.SKIPPED_ALREADY_HELD
        except Exception as e:
            logger.error(f"Failed to award badge {badge_id} to user {user_id}: {e}")
            attempt.outcome = AwardOutcome.FAILED
            attempt.error = str(e)

        return attempt

    async def award_badges(
        self,
        user_id: str,
        badge_ids: list[str],
        metadata: dict[str, Any] | None = None,
    ) -> list[EarnedBadge]:
        """Award each badge independently and return the ones that succeeded."""
        awarded: list[EarnedBadge] = []
        attempted: set[str] = set()

        for badge_id in badge_ids:
            if badge_id in attempted:
                continue
            attempted.add(badge_id)

            badge_metadata = {
                **(metadata or {}),
                "badge_name": self.catalog.lookup(badge_id).name,
            }
            attempt = await self.award_badge(user_id, badge_id, badge_metadata)
            if attempt.succeeded and attempt.earned_badge is not None:
                awarded.append(attempt.earned_badge)

        logger.info(
            f"Awarded {len(awarded)}/{len(attempted)} badges to user {user_id}: "
            f"{[earned.badge_id for earned in awarded]}"
        )
        return awarded

    async def evaluate_and_award(
        self,
        user_id: str,
        trigger_check_in: CheckIn,
        all_user_check_ins: list[CheckIn],
    ) -> list[EarnedBadge]:
        """Evaluate every rule for a new check-in and award the eligible badges.

        Errors while evaluating propagate; errors while awarding do not.
        """
        if not all_user_check_ins:
            logger.debug(f"{NO_CHECK_INS_ERROR} {user_id}")
            return []

        logger.info(
            f"Evaluating badges for user {user_id} after check-in "
            f"{trigger_check_in.id} at pub {trigger_check_in.pub_id}"
        )

        context = await self.build_trigger_context(
            user_id, trigger_check_in, all_user_check_ins
        )
        eligible_badge_ids = self.evaluator.evaluate_all(context)

        if not eligible_badge_ids:
            logger.debug(f"No badges eligible for check-in {trigger_check_in.id}")
            return []

        metadata = {
            "triggered_by": "check-in",
            "check_in_id": trigger_check_in.id,
            "pub_id": trigger_check_in.pub_id,
            "awarded_at": datetime.now(UTC).isoformat(),
        }
        return await self.award_badges(user_id, eligible_badge_ids, metadata)

    async def evaluate_only(
        self, user_id: str, all_user_check_ins: list[CheckIn]
    ) -> list[str]:
        """Dry run against the most recent check-in; awards nothing."""
        if not all_user_check_ins:
            logger.debug(f"{NO_CHECK_INS_ERROR} {user_id}")
            return []

        context = await self.build_trigger_context(
            user_id, latest_check_in(all_user_check_ins), all_user_check_ins
        )
        return self.evaluator.evaluate_all(context)

    async def get_debug_info(
        self, user_id: str, all_user_check_ins: list[CheckIn]
    ) -> BadgeDebugReport:
        """Context and per-rule results for the most recent check-in."""
        if not all_user_check_ins:
            return BadgeDebugReport(error=NO_CHECK_INS_ERROR)

        context = await self.build_trigger_context(
            user_id, latest_check_in(all_user_check_ins), all_user_check_ins
        )
        return BadgeDebugReport(
            context=context, debug_info=self.evaluator.get_debug_info(context)
        )

    async def evaluate_and_award_for_user(self, user_id: str) -> list[EarnedBadge]:
        """Catch up a user from their stored history.

        Uses the most recent stored check-in as the trigger.
        """
        check_ins = await self.check_in_repo.get_user_check_ins(user_id)
        if not check_ins:
            logger.debug(f"{NO_CHECK_INS_ERROR} {user_id}")
            return []

        return await self.evaluate_and_award(
            user_id, latest_check_in(check_ins), check_ins
        )
