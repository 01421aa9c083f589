from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import structlog

from ethics_engine.checks.base import RiskCheck, RiskCheckResult
from ethics_engine.errors import ScreeningUnavailableError

if TYPE_CHECKING:
    from ethics_engine.engine.case import CaseContext
    from ethics_engine.screening.client import ScreeningLookup, ScreeningMatch

logger = structlog.get_logger(__name__)


class SanctionsCheck(RiskCheck):
    """Sanctions and PEP screening of every target identity.

    Lookups run concurrently, one per identity. A failed or timed-out lookup
    does not abort the check: it is recorded as evidence and lifts the risk to
    ``degraded_risk`` so the case cannot silently pass as clean. When every
    lookup fails and ``fail_on_outage`` is set, ``ScreeningUnavailableError``
    is raised instead.
    """

    name = "Sanctions/PEP"
    category = "sanctions"

    def __init__(
        self,
        lookup: ScreeningLookup,
        timeout_seconds: float = 5.0,
        degraded_risk: float = 0.5,
        fail_on_outage: bool = False,
    ) -> None:
        self.lookup = lookup
        self.timeout_seconds = timeout_seconds
        self.degraded_risk = degraded_risk
        self.fail_on_outage = fail_on_outage

    async def run(self, case: CaseContext) -> RiskCheckResult:
        if not case.targets:
            return self.result()

        outcomes = await asyncio.gather(
            *(self._screen(name) for name in case.targets),
            return_exceptions=True,
        )

        evidence: list[str] = []
        max_risk = 0.0
        failures = 0
        matched = False
        for name, outcome in zip(case.targets, outcomes):
            if isinstance(outcome, BaseException):
                if not isinstance(outcome, Exception):
                    raise outcome
                failures += 1
                logger.warning(
                    "screening_lookup_failed",
                    target=name,
                    error=str(outcome) or type(outcome).__name__,
                )
                evidence.append(f'Screening unavailable for "{name}"')
                max_risk = max(max_risk, self.degraded_risk)
                continue
            if outcome.matched:
                evidence.append(f'Matched screening list for "{name}" (Score: {outcome.score})')
                max_risk = max(max_risk, outcome.score)
                matched = True

        if failures == len(case.targets) and self.fail_on_outage:
            msg = f"All {failures} screening lookups failed"
            raise ScreeningUnavailableError(msg)

        return self.result(
            risk=max_risk, evidence=evidence, degraded=failures > 0, matched=matched
        )

    async def _screen(self, name: str) -> ScreeningMatch:
        return await asyncio.wait_for(self.lookup.lookup(name), timeout=self.timeout_seconds)
