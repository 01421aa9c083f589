from __future__ import annotations

from ethics_engine.models import Flag, MitigationStep

PLAYBOOKS: dict[Flag, tuple[MitigationStep, ...]] = {
    Flag.BLOCK: (
        MitigationStep(
            step="Manual Review",
            detail="Case requires Ethics Committee review. Automated processing halted.",
        ),
        MitigationStep(
            step="Enhanced Due Diligence",
            detail="Provide UBO (Ultimate Beneficial Owner) registry documents.",
        ),
    ),
    Flag.CAUTION: (
        MitigationStep(
            step="Enhanced Monitoring",
            detail="Proceed with caution. Periodic reviews recommended.",
        ),
    ),
    Flag.OK: (
        MitigationStep(
            step="Standard Procedure",
            detail="No immediate ethics blockers. Proceed with standard flow.",
        ),
    ),
}


class MitigationPlanner:
    def plan(self, overall_flag: Flag) -> list[MitigationStep]:
        return list(PLAYBOOKS[overall_flag])
