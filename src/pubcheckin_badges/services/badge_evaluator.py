"""Badge evaluation for the pub check-in badge engine."""

import logging

from collections.abc import Sequence

from pubcheckin_badges.database.models.badge import BadgeDebugInfo
from pubcheckin_badges.database.models.badge import BadgeEligibilityCheck
from pubcheckin_badges.database.models.badge import BadgeTriggerContext
from pubcheckin_badges.services.badge_catalog import BadgeCatalog
from pubcheckin_badges.services.badge_rules import BadgeRule
from pubcheckin_badges.services.badge_rules import build_badge_rules
from pubcheckin_badges.services.badge_rules import unique_pub_count

logger = logging.getLogger(__name__)


class BadgeEvaluator:
    """Runs every badge rule against a trigger context.

    Evaluation is read-only. Exceptions raised by a rule are not caught: if a
    rule cannot be evaluated, no badge can be decided reliably.
    """

    def __init__(self, rules: Sequence[BadgeRule] | None = None):
        self.rules = tuple(rules) if rules is not None else build_badge_rules()

    @property
    def badge_ids(self) -> list[str]:
        return [rule.badge_id for rule in self.rules]

    def check_all(self, context: BadgeTriggerContext) -> dict[str, bool]:
        """Raw result of every rule, in rule order."""
        return {rule.badge_id: rule.check(context) for rule in self.rules}

    def evaluate_all(self, context: BadgeTriggerContext) -> list[str]:
        """Badge ids the user newly qualifies for, in rule order."""
        logger.debug(
            f"Evaluating {len(self.rules)} badge rules for user {context.user_id}"
        )

        held = context.held_badge_ids
        eligible: list[str] = []

        for rule in self.rules:
            if rule.badge_id in held or rule.badge_id in eligible:
                continue
            if rule.check(context):
                eligible.append(rule.badge_id)

        logger.debug(f"User {context.user_id} eligible for badges: {eligible}")
        return eligible

    def explain(
        self, context: BadgeTriggerContext, catalog: BadgeCatalog
    ) -> list[BadgeEligibilityCheck]:
        """Per-rule eligibility with catalog names and rule descriptions."""
        held = context.held_badge_ids
        checks = []

        for rule in self.rules:
            passed = rule.check(context)
            already_held = rule.badge_id in held
            checks.append(
                BadgeEligibilityCheck(
                    badge_id=rule.badge_id,
                    badge_name=catalog.lookup(rule.badge_id).name,
                    is_eligible=passed and not already_held,
                    already_held=already_held,
                    reason=rule.description,
                )
            )

        return checks

    def get_debug_info(self, context: BadgeTriggerContext) -> BadgeDebugInfo:
        """Counts and per-rule results for troubleshooting."""
        return BadgeDebugInfo(
            user_id=context.user_id,
            total_check_ins=len(context.user_check_ins),
            unique_pubs=unique_pub_count(context),
            current_badges=[earned.badge_id for earned in context.user_badges],
            badge_checks=self.check_all(context),
        )
