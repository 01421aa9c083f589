from __future__ import annotations

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str
    version: str
    engine_version: str


class PolicyResponse(BaseModel):
    version: str | None
    weights: dict[str, float]
    normalized_weights: dict[str, float]
    thresholds: dict[str, float]
