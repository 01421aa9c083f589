from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any

import structlog

from ethics_engine.checks import CONTEXT_CHECKS, SanctionsCheck
from ethics_engine.config.settings import EngineConfig, ScreeningConfig
from ethics_engine.engine.case import CaseContext
from ethics_engine.engine.report import ReportAssembler
from ethics_engine.errors import ScreeningUnavailableError
from ethics_engine.models import ScoreBreakdown
from ethics_engine.policy.store import StaticPolicyStore
from ethics_engine.scoring.aggregator import PolicyWeightedAggregator
from ethics_engine.scoring.classifier import FlagClassifier
from ethics_engine.scoring.mitigation import MitigationPlanner
from ethics_engine.scoring.normalizer import score_from_risk

if TYPE_CHECKING:
    from ethics_engine.checks.base import RiskCheck, RiskCheckResult
    from ethics_engine.models import EthicsReport
    from ethics_engine.policy.models import PolicyConfig
    from ethics_engine.policy.store import PolicyStore
    from ethics_engine.screening.client import ScreeningLookup

logger = structlog.get_logger(__name__)

OTHER_SCORE = 100


class EthicsEngine:
    """Evaluates a case payload into an ``EthicsReport``.

    All checks run concurrently and are joined before aggregation. Each check
    sits behind its own timeout; a check that raises or times out is replaced
    by a degraded result instead of aborting the evaluation. The only error
    that escapes from the checks is ``ScreeningUnavailableError`` when total
    screening outage is configured to fail.
    """

    def __init__(
        self,
        lookup: ScreeningLookup,
        policy_store: PolicyStore | None = None,
        engine_config: EngineConfig | None = None,
        screening_config: ScreeningConfig | None = None,
        checks: list[RiskCheck] | None = None,
        assembler: ReportAssembler | None = None,
    ) -> None:
        self.config = engine_config or EngineConfig()
        screening_config = screening_config or ScreeningConfig()
        self.policy_store = policy_store or StaticPolicyStore()
        if checks is None and self.config.check_timeout_seconds <= screening_config.timeout_seconds:
            msg = (
                f"check_timeout_seconds={self.config.check_timeout_seconds} must exceed the "
                f"screening timeout_seconds={screening_config.timeout_seconds}"
            )
            raise ValueError(msg)
        self.checks = checks or [
            SanctionsCheck(
                lookup,
                timeout_seconds=screening_config.timeout_seconds,
                degraded_risk=self.config.degraded_risk,
                fail_on_outage=self.config.fail_on_screening_outage,
            ),
            *(check_class() for check_class in CONTEXT_CHECKS),
        ]
        self.aggregator = PolicyWeightedAggregator()
        self.planner = MitigationPlanner()
        self.assembler = assembler or ReportAssembler()

    async def evaluate(
        self,
        case_payload: Any,
        policy: PolicyConfig | None = None,
    ) -> EthicsReport:
        if policy is None:
            policy = self.policy_store.read_policy()
        classifier = FlagClassifier(policy.thresholds, hard_veto=self.config.hard_veto)

        case = CaseContext.from_payload(case_payload)
        logger.info("ethics_evaluation_start", targets=len(case.targets), checks=len(self.checks))

        results = await asyncio.gather(*(self._run_isolated(check, case) for check in self.checks))

        scores = {result.category: score_from_risk(result.risk) for result in results}
        breakdown = ScoreBreakdown(
            sanctions_score=scores.get("sanctions", 100),
            pep_score=scores.get("sanctions", 100),
            corruption_score=scores.get("corruption", 100),
            env_score=scores.get("env", 100),
            human_rights_score=scores.get("human_rights", 100),
            fraud_score=scores.get("fraud", 100),
            data_privacy_score=scores.get("data_privacy", 100),
            other_score=OTHER_SCORE,
        )
        category_scores = breakdown.category_scores()

        overall_score = self.aggregator.aggregate(category_scores, policy.weights)
        category_flags = classifier.classify_categories(list(results), category_scores)
        overall_flag = classifier.reconcile(
            classifier.classify_overall(overall_score),
            category_flags,
        )
        degraded = [result.category for result in results if result.degraded]

        report = self.assembler.assemble(
            overall_score=overall_score,
            overall_flag=overall_flag,
            breakdown=breakdown,
            flags=category_flags,
            mitigation=self.planner.plan(overall_flag),
            policy_version=policy.version,
            degraded_categories=degraded,
        )

        logger.info(
            "ethics_evaluation_complete",
            overall_score=overall_score,
            overall_flag=overall_flag.value,
            category_flags=len(category_flags),
            degraded=degraded,
        )
        return report

    async def _run_isolated(self, check: RiskCheck, case: CaseContext) -> RiskCheckResult:
        try:
            return await asyncio.wait_for(check.run(case), timeout=self.config.check_timeout_seconds)
        except ScreeningUnavailableError:
            raise
        except Exception as exc:
            reason = "timed out" if isinstance(exc, TimeoutError) else (str(exc) or type(exc).__name__)
            logger.warning(
                "check_degraded", check=check.name, check_version=check.version, reason=reason
            )
            return check.result(
                risk=self.config.degraded_risk,
                evidence=[f"{check.name} check unavailable: {reason}"],
                degraded=True,
            )


async def evaluate(
    case_payload: Any,
    policy: PolicyConfig,
    lookup: ScreeningLookup,
    engine_config: EngineConfig | None = None,
    screening_config: ScreeningConfig | None = None,
) -> EthicsReport:
    engine = EthicsEngine(lookup, engine_config=engine_config, screening_config=screening_config)
    return await engine.evaluate(case_payload, policy=policy)
