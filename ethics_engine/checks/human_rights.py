from __future__ import annotations

from typing import TYPE_CHECKING

from ethics_engine.checks.base import RiskCheck, RiskCheckResult
from ethics_engine.checks.signals import ELEVATED_RISK_REGIONS, KeywordSignalSource

if TYPE_CHECKING:
    from ethics_engine.checks.signals import SignalSource
    from ethics_engine.engine.case import CaseContext

REGION_RISK = 0.6


class HumanRightsCheck(RiskCheck):
    name = "Human Rights"
    category = "human_rights"

    def __init__(self, region_signal: SignalSource | None = None) -> None:
        self.region_signal = region_signal or KeywordSignalSource(ELEVATED_RISK_REGIONS)

    async def run(self, case: CaseContext) -> RiskCheckResult:
        if not self.region_signal.detect(case.region):
            return self.result()
        return self.result(
            risk=REGION_RISK,
            evidence=["Region flagged for enhanced human rights diligence"],
        )
