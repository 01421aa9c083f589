from ethics_engine.checks.base import RiskCheck, RiskCheckResult
from ethics_engine.checks.corruption import CorruptionCheck
from ethics_engine.checks.data_privacy import DataPrivacyCheck
from ethics_engine.checks.environmental import EnvironmentalCheck
from ethics_engine.checks.fraud import FraudCheck
from ethics_engine.checks.human_rights import HumanRightsCheck
from ethics_engine.checks.sanctions import SanctionsCheck
from ethics_engine.checks.signals import KeywordSignalSource, SignalSource

CONTEXT_CHECKS = [
    CorruptionCheck,
    EnvironmentalCheck,
    HumanRightsCheck,
    FraudCheck,
    DataPrivacyCheck,
]

__all__ = [
    "CONTEXT_CHECKS",
    "CorruptionCheck",
    "DataPrivacyCheck",
    "EnvironmentalCheck",
    "FraudCheck",
    "HumanRightsCheck",
    "KeywordSignalSource",
    "RiskCheck",
    "RiskCheckResult",
    "SanctionsCheck",
    "SignalSource",
]
