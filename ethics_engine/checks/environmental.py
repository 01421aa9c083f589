from __future__ import annotations

from typing import TYPE_CHECKING

from ethics_engine.checks.base import RiskCheck, RiskCheckResult
from ethics_engine.checks.signals import HIGH_IMPACT_INDUSTRIES, KeywordSignalSource

if TYPE_CHECKING:
    from ethics_engine.checks.signals import SignalSource
    from ethics_engine.engine.case import CaseContext

HIGH_IMPACT_RISK = 0.7


class EnvironmentalCheck(RiskCheck):
    name = "Environmental"
    category = "env"

    def __init__(self, industry_signal: SignalSource | None = None) -> None:
        self.industry_signal = industry_signal or KeywordSignalSource(HIGH_IMPACT_INDUSTRIES)

    async def run(self, case: CaseContext) -> RiskCheckResult:
        industry = case.industry
        if not self.industry_signal.detect(industry):
            return self.result()
        return self.result(
            risk=HIGH_IMPACT_RISK,
            evidence=[f"High-impact industry detected: {industry}"],
        )
