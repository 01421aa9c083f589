from __future__ import annotations

from typing import TYPE_CHECKING

from ethics_engine.checks.base import RiskCheck, RiskCheckResult
from ethics_engine.checks.signals import CONSTRUCTION_SECTOR, KeywordSignalSource

if TYPE_CHECKING:
    from ethics_engine.checks.signals import SignalSource
    from ethics_engine.engine.case import CaseContext

SINGLE_SOURCE_RISK = 0.75
SECTOR_RISK = 0.4


class CorruptionCheck(RiskCheck):
    """Procurement and sector corruption indicators.

    The sector heuristic raises the risk floor but records no evidence, so on
    its own it never produces a category flag.
    """

    name = "Procurement / Corruption"
    category = "corruption"

    def __init__(self, sector_signal: SignalSource | None = None) -> None:
        self.sector_signal = sector_signal or KeywordSignalSource(CONSTRUCTION_SECTOR)

    async def run(self, case: CaseContext) -> RiskCheckResult:
        evidence: list[str] = []
        risk = 0.0

        if case.single_source_procurement:
            evidence.append("Procurement flagged: single-source vendor")
            risk = max(risk, SINGLE_SOURCE_RISK)

        if any(self.sector_signal.detect(name) for name in case.targets):
            risk = max(risk, SECTOR_RISK)

        return self.result(risk=risk, evidence=evidence)
