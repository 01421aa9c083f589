from __future__ import annotations

import asyncio
from typing import Any

import pytest
from structlog.testing import capture_logs

from ethics_engine.checks.base import RiskCheck, RiskCheckResult
from ethics_engine.config.settings import EngineConfig, ScreeningConfig
from ethics_engine.engine.case import CaseContext
from ethics_engine.engine.report import ENGINE_VERSION
from ethics_engine.engine.runner import EthicsEngine, evaluate
from ethics_engine.errors import PolicyConfigurationError, ScreeningUnavailableError
from ethics_engine.models import Flag
from ethics_engine.policy.models import PolicyConfig, PolicyThresholds, PolicyWeights
from ethics_engine.screening.client import StaticScreeningLookup


class ExplodingCheck(RiskCheck):
    name = "Fraud"
    category = "fraud"

    async def run(self, case: CaseContext) -> RiskCheckResult:
        msg = "feed offline"
        raise RuntimeError(msg)


class HangingCheck(RiskCheck):
    name = "Data Privacy"
    category = "data_privacy"

    async def run(self, case: CaseContext) -> RiskCheckResult:
        await asyncio.sleep(10)
        return self.result()


class TestScenarios:
    @pytest.mark.asyncio  # type: ignore[misc]
    async def test_clean_case(self, make_engine: Any) -> None:
        report = await make_engine().evaluate({})

        assert report.overall_score == 100
        assert report.overall_flag is Flag.OK
        assert set(report.breakdown.model_dump().values()) == {100}
        assert report.flags == []
        assert [m.step for m in report.mitigation] == ["Standard Procedure"]
        assert report.version == ENGINE_VERSION
        assert report.degraded_categories == []
        assert not report.requires_manual_review

    @pytest.mark.asyncio  # type: ignore[misc]
    async def test_high_sanctions_risk_diverges_from_overall(
        self,
        make_engine: Any,
        sanctioned_case: dict[str, Any],
    ) -> None:
        engine = make_engine(StaticScreeningLookup({"Acme Holdings Ltd": 0.8}))
        report = await engine.evaluate(sanctioned_case)

        assert report.breakdown.sanctions_score == 20
        assert report.breakdown.pep_score == 20
        assert report.breakdown.corruption_score == 100
        assert report.overall_score == 84
        assert report.overall_flag is Flag.OK

        (sanctions_flag,) = report.flags
        assert sanctions_flag.name == "Sanctions/PEP"
        assert sanctions_flag.flag is Flag.BLOCK
        assert sanctions_flag.evidence == ['Matched screening list for "Acme Holdings Ltd" (Score: 0.8)']

    @pytest.mark.asyncio  # type: ignore[misc]
    async def test_single_source_procurement(self, make_engine: Any) -> None:
        report = await make_engine().evaluate({"context": {"procurement": {"singleSource": True}}})

        assert report.breakdown.corruption_score == 25
        (flag,) = report.flags
        assert flag.name == "Procurement / Corruption"
        assert flag.flag is Flag.BLOCK
        assert "Procurement flagged: single-source vendor" in flag.evidence

    @pytest.mark.asyncio  # type: ignore[misc]
    async def test_high_impact_industry(self, make_engine: Any) -> None:
        report = await make_engine().evaluate({"context": {"project": {"industry": "mining"}}})

        assert report.breakdown.env_score == 30
        (flag,) = report.flags
        assert flag.name == "Environmental"
        assert flag.flag is Flag.CAUTION

    @pytest.mark.asyncio  # type: ignore[misc]
    async def test_combined_risks_block(self, make_engine: Any, full_case: dict[str, Any]) -> None:
        engine = make_engine(StaticScreeningLookup({"Acme Holdings Ltd": 0.9}))
        report = await engine.evaluate(full_case)

        # 0.2*10 + 0.15*25 + 0.15*30 + 0.1*40 + 0.15*100 + 0.1*100 + 0.15*100 = 54.25
        assert report.overall_score == 54
        assert report.overall_flag is Flag.CAUTION
        assert [f.name for f in report.flags] == [
            "Sanctions/PEP",
            "Procurement / Corruption",
            "Environmental",
            "Human Rights",
        ]
        assert [m.step for m in report.mitigation] == ["Enhanced Monitoring"]

    @pytest.mark.asyncio  # type: ignore[misc]
    async def test_block_mitigation(self, make_engine: Any, full_case: dict[str, Any]) -> None:
        engine = make_engine(StaticScreeningLookup({"Acme Holdings Ltd": 0.9}))
        policy = PolicyConfig(
            weights=PolicyWeights(
                sanctions=1, corruption=1, env=1, human_rights=1, fraud=0, data_privacy=0, other=0
            ),
            thresholds=PolicyThresholds(block=50, caution=70),
        )
        report = await engine.evaluate(full_case, policy=policy)

        # (10 + 25 + 30 + 40) / 4 = 26.25
        assert report.overall_score == 26
        assert report.overall_flag is Flag.BLOCK
        assert [m.step for m in report.mitigation] == ["Manual Review", "Enhanced Due Diligence"]
        assert report.requires_manual_review


class TestEngineBehaviour:
    @pytest.mark.asyncio  # type: ignore[misc]
    async def test_idempotent(self, make_engine: Any, full_case: dict[str, Any]) -> None:
        engine = make_engine(StaticScreeningLookup({"Acme Holdings Ltd": 0.35}))
        first = await engine.evaluate(full_case)
        second = await engine.evaluate(full_case)

        assert first.overall_score == second.overall_score
        assert first.overall_flag == second.overall_flag
        assert first.breakdown == second.breakdown

    @pytest.mark.asyncio  # type: ignore[misc]
    async def test_explicit_policy_overrides_store(self, make_engine: Any) -> None:
        policy = PolicyConfig(thresholds=PolicyThresholds(block=90, caution=95), version="strict-2")
        report = await make_engine().evaluate(
            {"context": {"project": {"region": "frontier"}}}, policy=policy
        )

        assert report.overall_score == 94
        assert report.overall_flag is Flag.CAUTION
        assert report.policy_version == "strict-2"

    @pytest.mark.asyncio  # type: ignore[misc]
    async def test_inverted_thresholds_surface(self, make_engine: Any) -> None:
        policy = PolicyConfig(thresholds=PolicyThresholds(block=80, caution=40))
        with pytest.raises(PolicyConfigurationError):
            await make_engine().evaluate({}, policy=policy)

    @pytest.mark.asyncio  # type: ignore[misc]
    async def test_screening_failure_degrades_instead_of_aborting(
        self,
        make_engine: Any,
        recording_lookup: Any,
    ) -> None:
        engine = make_engine(recording_lookup(failing={"Acme Holdings Ltd"}))
        report = await engine.evaluate({"target": "Acme Holdings Ltd"})

        assert report.breakdown.sanctions_score == 50
        assert report.degraded_categories == ["sanctions"]
        assert report.requires_manual_review
        (flag,) = report.flags
        assert flag.flag is Flag.CAUTION
        assert flag.reason == "Sanctions/PEP check unavailable"

    @pytest.mark.asyncio  # type: ignore[misc]
    async def test_total_outage_raises_when_configured(
        self,
        make_engine: Any,
        recording_lookup: Any,
    ) -> None:
        engine = make_engine(
            recording_lookup(failing={"Acme Holdings Ltd"}),
            fail_on_screening_outage=True,
        )
        with pytest.raises(ScreeningUnavailableError):
            await engine.evaluate({"target": "Acme Holdings Ltd"})

    @pytest.mark.asyncio  # type: ignore[misc]
    async def test_real_match_survives_partial_screening_failure(
        self,
        make_engine: Any,
        recording_lookup: Any,
    ) -> None:
        lookup = recording_lookup(matches={"Acme Holdings Ltd": 0.9}, failing={"Beta Trading"})
        report = await make_engine(lookup).evaluate(
            {"target": "Acme Holdings Ltd", "context": {"target": "Beta Trading"}}
        )

        assert report.breakdown.sanctions_score == 10
        assert report.degraded_categories == ["sanctions"]
        (flag,) = report.flags
        assert flag.flag is Flag.BLOCK
        assert flag.reason.startswith("Sanctions or Politically Exposed Person indications")
        assert 'Matched screening list for "Acme Holdings Ltd" (Score: 0.9)' in flag.evidence

    @pytest.mark.asyncio  # type: ignore[misc]
    async def test_stalled_lookup_keeps_per_identity_evidence(
        self,
        make_engine: Any,
        recording_lookup: Any,
    ) -> None:
        report = await make_engine(recording_lookup(stalling={"Slow Ltd"})).evaluate(
            {"target": "Slow Ltd"}
        )

        (flag,) = report.flags
        assert flag.evidence == ['Screening unavailable for "Slow Ltd"']

    @pytest.mark.asyncio  # type: ignore[misc]
    async def test_stalled_outage_raises_when_configured(
        self,
        make_engine: Any,
        recording_lookup: Any,
    ) -> None:
        engine = make_engine(
            recording_lookup(stalling={"Slow Ltd"}),
            fail_on_screening_outage=True,
        )
        with pytest.raises(ScreeningUnavailableError):
            await engine.evaluate({"target": "Slow Ltd"})

    @pytest.mark.parametrize("check_timeout", [0.5, 1.0])  # type: ignore[misc]
    def test_check_timeout_must_exceed_screening_timeout(self, check_timeout: float) -> None:
        with pytest.raises(ValueError, match="must exceed"):
            EthicsEngine(
                StaticScreeningLookup(),
                engine_config=EngineConfig(check_timeout_seconds=check_timeout),
                screening_config=ScreeningConfig(timeout_seconds=1.0),
            )

    @pytest.mark.asyncio  # type: ignore[misc]
    async def test_failing_check_is_isolated(self, policy: PolicyConfig) -> None:
        engine = EthicsEngine(
            StaticScreeningLookup(),
            checks=[ExplodingCheck()],
        )
        report = await engine.evaluate({}, policy=policy)

        assert report.breakdown.fraud_score == 50
        assert report.degraded_categories == ["fraud"]
        (flag,) = report.flags
        assert flag.evidence == ["Fraud check unavailable: feed offline"]

    @pytest.mark.asyncio  # type: ignore[misc]
    async def test_degraded_check_logged_with_version(self, policy: PolicyConfig) -> None:
        engine = EthicsEngine(StaticScreeningLookup(), checks=[ExplodingCheck()])
        with capture_logs() as logs:
            await engine.evaluate({}, policy=policy)

        (event,) = [e for e in logs if e["event"] == "check_degraded"]
        assert event["check"] == "Fraud"
        assert event["check_version"] == 1

    @pytest.mark.asyncio  # type: ignore[misc]
    async def test_hanging_check_times_out(self, policy: PolicyConfig, engine_config: Any) -> None:
        engine = EthicsEngine(
            StaticScreeningLookup(),
            engine_config=engine_config.model_copy(update={"check_timeout_seconds": 0.05}),
            checks=[HangingCheck()],
        )
        report = await engine.evaluate({}, policy=policy)

        assert report.degraded_categories == ["data_privacy"]
        assert report.flags[0].evidence == ["Data Privacy check unavailable: timed out"]

    @pytest.mark.asyncio  # type: ignore[misc]
    async def test_hard_veto_option(self, make_engine: Any, sanctioned_case: dict[str, Any]) -> None:
        engine = make_engine(StaticScreeningLookup({"Acme Holdings Ltd": 0.8}), hard_veto=True)
        report = await engine.evaluate(sanctioned_case)

        assert report.overall_score == 84
        assert report.overall_flag is Flag.BLOCK
        assert [m.step for m in report.mitigation] == ["Manual Review", "Enhanced Due Diligence"]

    @pytest.mark.asyncio  # type: ignore[misc]
    async def test_report_serializes_with_camel_case(self, make_engine: Any) -> None:
        report = await make_engine().evaluate({})
        data = report.model_dump(mode="json", by_alias=True)

        assert data["overallScore"] == 100
        assert data["overallFlag"] == "OK"
        assert data["breakdown"]["humanRightsScore"] == 100
        assert data["timestamp"].startswith("2025-03-01T12:00:00")

    @pytest.mark.asyncio  # type: ignore[misc]
    async def test_module_level_evaluate(self, policy: PolicyConfig) -> None:
        report = await evaluate({"target": "X"}, policy, StaticScreeningLookup({"x": 1.0}))
        assert report.breakdown.sanctions_score == 0
        assert report.overall_score == 80
