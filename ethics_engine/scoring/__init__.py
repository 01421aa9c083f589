from ethics_engine.scoring.aggregator import PolicyWeightedAggregator
from ethics_engine.scoring.classifier import CATEGORY_RULES, FlagClassifier
from ethics_engine.scoring.mitigation import MitigationPlanner
from ethics_engine.scoring.normalizer import score_from_risk

__all__ = [
    "CATEGORY_RULES",
    "FlagClassifier",
    "MitigationPlanner",
    "PolicyWeightedAggregator",
    "score_from_risk",
]
