from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

CATEGORIES = (
    "sanctions",
    "corruption",
    "env",
    "human_rights",
    "fraud",
    "data_privacy",
    "other",
)

DEFAULT_WEIGHTS: dict[str, float] = {
    "sanctions": 0.20,
    "corruption": 0.15,
    "env": 0.15,
    "human_rights": 0.10,
    "fraud": 0.15,
    "data_privacy": 0.10,
    "other": 0.15,
}


class PolicyWeights(BaseModel):
    """Raw category weights as authored in the policy store.

    Missing entries stay ``None`` and are replaced by ``DEFAULT_WEIGHTS`` at
    aggregation time. Weights do not need to sum to 1 but must be finite.
    """

    model_config = ConfigDict(
        frozen=True, populate_by_name=True, extra="ignore", allow_inf_nan=False
    )

    sanctions: float | None = Field(default=None, ge=0.0)
    corruption: float | None = Field(default=None, ge=0.0)
    env: float | None = Field(default=None, ge=0.0)
    human_rights: float | None = Field(default=None, ge=0.0, alias="humanRights")
    fraud: float | None = Field(default=None, ge=0.0)
    data_privacy: float | None = Field(default=None, ge=0.0, alias="dataPrivacy")
    other: float | None = Field(default=None, ge=0.0)

    def resolved(self) -> dict[str, float]:
        values = self.model_dump()
        return {
            category: DEFAULT_WEIGHTS[category] if values[category] is None else values[category]
            for category in CATEGORIES
        }


class PolicyThresholds(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    block: float = Field(default=50.0, ge=0.0, le=100.0)
    caution: float = Field(default=70.0, ge=0.0, le=100.0)


class PolicyConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    weights: PolicyWeights = Field(default_factory=PolicyWeights)
    thresholds: PolicyThresholds = Field(default_factory=PolicyThresholds)
    version: str | None = Field(default=None)
