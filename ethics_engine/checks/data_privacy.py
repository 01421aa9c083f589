from __future__ import annotations

from typing import TYPE_CHECKING

from ethics_engine.checks.base import RiskCheck, RiskCheckResult

if TYPE_CHECKING:
    from ethics_engine.engine.case import CaseContext


class DataPrivacyCheck(RiskCheck):
    """No data-privacy signal sources are wired in yet; always reports zero risk."""

    name = "Data Privacy"
    category = "data_privacy"

    async def run(self, case: CaseContext) -> RiskCheckResult:
        return self.result()
