from ethics_engine.policy.models import (
    CATEGORIES,
    DEFAULT_WEIGHTS,
    PolicyConfig,
    PolicyThresholds,
    PolicyWeights,
)
from ethics_engine.policy.store import FilePolicyStore, PolicyStore, StaticPolicyStore, parse_policy

__all__ = [
    "CATEGORIES",
    "DEFAULT_WEIGHTS",
    "FilePolicyStore",
    "PolicyConfig",
    "PolicyStore",
    "PolicyThresholds",
    "PolicyWeights",
    "StaticPolicyStore",
    "parse_policy",
]
