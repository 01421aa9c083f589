from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog

from ethics_engine.errors import PolicyConfigurationError
from ethics_engine.models import CategoryFlag, Flag

if TYPE_CHECKING:
    from ethics_engine.checks.base import RiskCheckResult
    from ethics_engine.policy.models import PolicyThresholds

logger = structlog.get_logger(__name__)

CATEGORY_SPLIT = 50


@dataclass(frozen=True)
class CategoryRule:
    """Local flag rule for one category: below ``split`` is ``below``, else ``at_or_above``."""

    name: str
    reason: str
    below: Flag
    at_or_above: Flag
    split: int = CATEGORY_SPLIT

    def classify(self, score: int) -> Flag:
        return self.below if score < self.split else self.at_or_above


CATEGORY_RULES: dict[str, CategoryRule] = {
    "sanctions": CategoryRule(
        name="Sanctions/PEP",
        reason="Sanctions or Politically Exposed Person indications",
        below=Flag.BLOCK,
        at_or_above=Flag.CAUTION,
    ),
    "corruption": CategoryRule(
        name="Procurement / Corruption",
        reason="Corruption risk indicators",
        below=Flag.BLOCK,
        at_or_above=Flag.CAUTION,
    ),
    "env": CategoryRule(
        name="Environmental",
        reason="Environmental sensitivity",
        below=Flag.CAUTION,
        at_or_above=Flag.OK,
    ),
    "human_rights": CategoryRule(
        name="Human Rights",
        reason="Human rights risk",
        below=Flag.BLOCK,
        at_or_above=Flag.CAUTION,
    ),
    "fraud": CategoryRule(
        name="Fraud",
        reason="Fraud indicators",
        below=Flag.CAUTION,
        at_or_above=Flag.OK,
    ),
    "data_privacy": CategoryRule(
        name="Data Privacy",
        reason="Data privacy exposure",
        below=Flag.CAUTION,
        at_or_above=Flag.OK,
    ),
}


class FlagClassifier:
    """Maps scores to BLOCK / CAUTION / OK.

    The overall flag depends only on the overall score and the policy
    thresholds. Category flags are classified locally and are not reconciled
    with the overall flag unless ``hard_veto`` is enabled.
    """

    def __init__(self, thresholds: PolicyThresholds, hard_veto: bool = False) -> None:
        if thresholds.block > thresholds.caution:
            msg = (
                f"Policy thresholds are inverted: block={thresholds.block} "
                f"must not exceed caution={thresholds.caution}"
            )
            raise PolicyConfigurationError(msg)
        self.thresholds = thresholds
        self.hard_veto = hard_veto

    def classify_overall(self, score: float) -> Flag:
        if score < self.thresholds.block:
            return Flag.BLOCK
        if score < self.thresholds.caution:
            return Flag.CAUTION
        return Flag.OK

    def classify_categories(
        self,
        results: list[RiskCheckResult],
        scores: dict[str, int],
    ) -> list[CategoryFlag]:
        flags: list[CategoryFlag] = []
        for result in results:
            rule = CATEGORY_RULES.get(result.category)
            if rule is None or not result.evidence:
                continue
            reason = rule.reason
            if result.degraded:
                unavailable = f"{rule.name} check unavailable"
                reason = f"{rule.reason}; {unavailable}" if result.matched else unavailable
            flags.append(
                CategoryFlag(
                    name=rule.name,
                    flag=rule.classify(scores[result.category]),
                    reason=reason,
                    evidence=list(result.evidence),
                )
            )
        return flags

    def reconcile(self, overall: Flag, category_flags: list[CategoryFlag]) -> Flag:
        if not self.hard_veto:
            return overall
        worst = max(
            (f.flag for f in category_flags), key=lambda flag: flag.severity, default=Flag.OK
        )
        if worst is Flag.BLOCK and worst.severity > overall.severity:
            logger.info("hard_veto_applied", weighted_flag=overall.value)
            return worst
        return overall
