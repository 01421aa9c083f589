from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from ethics_engine.engine.runner import EthicsEngine
from ethics_engine.policy.store import FilePolicyStore, StaticPolicyStore
from ethics_engine.screening.client import HttpScreeningClient, StaticScreeningLookup

if TYPE_CHECKING:
    from ethics_engine.config.settings import Settings
    from ethics_engine.policy.store import PolicyStore
    from ethics_engine.screening.client import ScreeningLookup

logger = structlog.get_logger(__name__)


def build_lookup(settings: Settings) -> ScreeningLookup:
    if settings.screening.base_url:
        logger.info("screening_backend", backend="http", base_url=settings.screening.base_url)
        return HttpScreeningClient(settings.screening)
    if settings.screening_table_path is not None:
        logger.info("screening_backend", backend="table", path=str(settings.screening_table_path))
        return StaticScreeningLookup.from_file(settings.screening_table_path)
    logger.warning("screening_backend", backend="empty")
    return StaticScreeningLookup()


def build_policy_store(settings: Settings) -> PolicyStore:
    if settings.policy_path is not None:
        return FilePolicyStore(settings.policy_path)
    return StaticPolicyStore()


def build_engine(settings: Settings, lookup: ScreeningLookup | None = None) -> EthicsEngine:
    return EthicsEngine(
        lookup or build_lookup(settings),
        policy_store=build_policy_store(settings),
        engine_config=settings.engine,
        screening_config=settings.screening,
    )
