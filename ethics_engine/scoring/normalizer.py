from __future__ import annotations

import math


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def score_from_risk(risk: float) -> int:
    """Map a risk in [0, 1] to a 0-100 score where higher means safer."""
    clamped = max(0.0, min(1.0, risk))
    return round_half_up((1.0 - clamped) * 100.0)
