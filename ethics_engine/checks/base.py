from __future__ import annotations

import abc
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ethics_engine.engine.case import CaseContext


@dataclass(frozen=True)
class RiskCheckResult:
    category: str
    risk: float = 0.0
    evidence: tuple[str, ...] = field(default_factory=tuple)
    degraded: bool = False
    matched: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "risk", max(0.0, min(1.0, float(self.risk))))
        object.__setattr__(self, "evidence", tuple(self.evidence))


class RiskCheck(abc.ABC):
    name = ""
    category = ""
    version = 1

    @abc.abstractmethod
    async def run(self, case: CaseContext) -> RiskCheckResult:
        """Evaluate one risk dimension of the case.

        Must not raise for any payload shape: absent fields mean no signal.
        """
        ...

    def result(
        self,
        *,
        risk: float = 0.0,
        evidence: list[str] | None = None,
        degraded: bool = False,
        matched: bool = False,
    ) -> RiskCheckResult:
        return RiskCheckResult(
            category=self.category,
            risk=risk,
            evidence=tuple(evidence or ()),
            degraded=degraded,
            matched=matched,
        )
