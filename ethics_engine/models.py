from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel


class Flag(str, Enum):
    BLOCK = "BLOCK"
    CAUTION = "CAUTION"
    OK = "OK"

    @property
    def severity(self) -> int:
        return {Flag.OK: 0, Flag.CAUTION: 1, Flag.BLOCK: 2}[self]


class _ReportModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class CategoryFlag(_ReportModel):
    name: str
    flag: Flag
    reason: str
    evidence: list[str] = Field(default_factory=list)


class MitigationStep(_ReportModel):
    step: str
    detail: str


class ScoreBreakdown(_ReportModel):
    sanctions_score: int = Field(ge=0, le=100)
    pep_score: int = Field(ge=0, le=100)
    corruption_score: int = Field(ge=0, le=100)
    env_score: int = Field(ge=0, le=100)
    human_rights_score: int = Field(ge=0, le=100)
    fraud_score: int = Field(ge=0, le=100)
    data_privacy_score: int = Field(ge=0, le=100)
    other_score: int = Field(ge=0, le=100)

    def category_scores(self) -> dict[str, int]:
        """Scores of the seven weighted categories; PEP mirrors sanctions and is not weighted."""
        return {
            "sanctions": self.sanctions_score,
            "corruption": self.corruption_score,
            "env": self.env_score,
            "human_rights": self.human_rights_score,
            "fraud": self.fraud_score,
            "data_privacy": self.data_privacy_score,
            "other": self.other_score,
        }


class EthicsReport(_ReportModel):
    overall_score: int = Field(ge=0, le=100)
    overall_flag: Flag
    breakdown: ScoreBreakdown
    flags: list[CategoryFlag] = Field(default_factory=list)
    mitigation: list[MitigationStep] = Field(default_factory=list)
    timestamp: str
    version: str
    policy_version: str | None = None
    degraded_categories: list[str] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def requires_manual_review(self) -> bool:
        return self.overall_flag is Flag.BLOCK or bool(self.degraded_categories)
