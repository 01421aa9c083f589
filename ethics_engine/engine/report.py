from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from ethics_engine.models import EthicsReport

if TYPE_CHECKING:
    from ethics_engine.models import CategoryFlag, Flag, MitigationStep, ScoreBreakdown

ENGINE_VERSION = "ethics-v1.2.0-policy-aware"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ReportAssembler:
    def __init__(
        self,
        version: str = ENGINE_VERSION,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self.version = version
        self.clock = clock

    def assemble(
        self,
        *,
        overall_score: int,
        overall_flag: Flag,
        breakdown: ScoreBreakdown,
        flags: list[CategoryFlag],
        mitigation: list[MitigationStep],
        policy_version: str | None = None,
        degraded_categories: list[str] | None = None,
    ) -> EthicsReport:
        return EthicsReport(
            overall_score=overall_score,
            overall_flag=overall_flag,
            breakdown=breakdown,
            flags=flags,
            mitigation=mitigation,
            timestamp=self.clock().isoformat(),
            version=self.version,
            policy_version=policy_version,
            degraded_categories=degraded_categories or [],
        )
