from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
import structlog

from ethics_engine.policy.models import CATEGORIES, DEFAULT_WEIGHTS
from ethics_engine.scoring.normalizer import round_half_up

if TYPE_CHECKING:
    from ethics_engine.policy.models import PolicyWeights

logger = structlog.get_logger(__name__)


class PolicyWeightedAggregator:
    def normalized_weights(self, weights: PolicyWeights) -> dict[str, float]:
        resolved = weights.resolved()
        largest = max(resolved.values())
        if largest <= 0:
            logger.warning("policy_zero_weight_sum", fallback="default_weights")
            resolved = dict(DEFAULT_WEIGHTS)
            largest = max(resolved.values())
        # scaled into [0, 1] first so the sum stays finite for huge weights
        scaled = {category: resolved[category] / largest for category in CATEGORIES}
        total = sum(scaled.values())
        return {category: scaled[category] / total for category in CATEGORIES}

    def aggregate(self, scores: dict[str, float], weights: PolicyWeights) -> int:
        normalized = self.normalized_weights(weights)

        w = np.array([normalized[c] for c in CATEGORIES])
        s = np.array([scores[c] for c in CATEGORIES], dtype=float)

        combined = float(np.dot(w, s))
        return int(np.clip(round_half_up(combined), 0, 100))

    def decompose(self, scores: dict[str, float], weights: PolicyWeights) -> dict[str, float]:
        normalized = self.normalized_weights(weights)
        result: dict[str, float] = {}
        for category in CATEGORIES:
            result[f"{category}_contribution"] = round(normalized[category] * scores[category], 2)
            result[f"{category}_weight"] = round(normalized[category], 4)
        return result
