from ethics_engine.engine.case import CaseContext
from ethics_engine.engine.factory import build_engine, build_lookup, build_policy_store
from ethics_engine.engine.report import ENGINE_VERSION, ReportAssembler
from ethics_engine.engine.runner import EthicsEngine, evaluate

__all__ = [
    "ENGINE_VERSION",
    "CaseContext",
    "EthicsEngine",
    "ReportAssembler",
    "build_engine",
    "build_lookup",
    "build_policy_store",
    "evaluate",
]
