from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

import pytest
import structlog

from ethics_engine.config.settings import EngineConfig, ScreeningConfig
from ethics_engine.engine.report import ReportAssembler
from ethics_engine.engine.runner import EthicsEngine
from ethics_engine.errors import ScreeningLookupError
from ethics_engine.policy.models import PolicyConfig, PolicyThresholds
from ethics_engine.policy.store import StaticPolicyStore
from ethics_engine.screening.client import ScreeningMatch, StaticScreeningLookup

if TYPE_CHECKING:
    from collections.abc import Iterator

FIXED_TIME = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)


class RecordingLookup:
    """Screening stub that records calls and can fail or stall per name."""

    def __init__(
        self,
        matches: dict[str, float] | None = None,
        failing: set[str] | None = None,
        stalling: set[str] | None = None,
    ) -> None:
        self.matches = matches or {}
        self.failing = failing or set()
        self.stalling = stalling or set()
        self.calls: list[str] = []

    async def lookup(self, name: str) -> ScreeningMatch:
        self.calls.append(name)
        if name in self.failing:
            raise ScreeningLookupError(name, "connection refused")
        if name in self.stalling:
            await asyncio.sleep(10)
        if name in self.matches:
            return ScreeningMatch(matched=True, score=self.matches[name])
        return ScreeningMatch(matched=False)


@pytest.fixture(autouse=True)  # type: ignore[misc]
def _reset_structlog() -> Iterator[None]:
    yield
    structlog.reset_defaults()


@pytest.fixture  # type: ignore[misc]
def recording_lookup() -> type[RecordingLookup]:
    return RecordingLookup


@pytest.fixture  # type: ignore[misc]
def policy() -> PolicyConfig:
    return PolicyConfig(thresholds=PolicyThresholds(block=50, caution=70))


@pytest.fixture  # type: ignore[misc]
def engine_config() -> EngineConfig:
    return EngineConfig(check_timeout_seconds=1.0, degraded_risk=0.5)


@pytest.fixture  # type: ignore[misc]
def screening_config() -> ScreeningConfig:
    return ScreeningConfig(timeout_seconds=0.2)


@pytest.fixture  # type: ignore[misc]
def assembler() -> ReportAssembler:
    return ReportAssembler(clock=lambda: FIXED_TIME)


@pytest.fixture  # type: ignore[misc]
def make_engine(
    policy: PolicyConfig,
    engine_config: EngineConfig,
    screening_config: ScreeningConfig,
    assembler: ReportAssembler,
) -> Any:
    def _make(lookup: Any = None, **config_overrides: Any) -> EthicsEngine:
        config = engine_config.model_copy(update=config_overrides)
        return EthicsEngine(
            lookup or StaticScreeningLookup(),
            policy_store=StaticPolicyStore(policy),
            engine_config=config,
            screening_config=screening_config,
            assembler=assembler,
        )

    return _make


@pytest.fixture  # type: ignore[misc]
def sanctioned_case() -> dict[str, Any]:
    return {"target": "Acme Holdings Ltd"}


@pytest.fixture  # type: ignore[misc]
def full_case() -> dict[str, Any]:
    return {
        "target": "Acme Holdings Ltd",
        "context": {
            "target": "Northern Construction Group",
            "procurement": {"singleSource": True},
            "project": {"industry": "Open-pit Mining", "region": "Post-conflict border zone"},
        },
    }
