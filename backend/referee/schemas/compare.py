from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ConstraintsIn(BaseModel):
    model_config = ConfigDict(extra="allow")

    maxCost: float | None = Field(default=None, ge=0)
    requiredFeatures: list[str] | None = None
    weights: dict[str, float] | None = None

    def to_engine(self) -> dict:
        return self.model_dump(include={"maxCost", "requiredFeatures", "weights"}, exclude_none=True)


class CloudConstraintsIn(ConstraintsIn):
    maxMonthlyCost: float | None = Field(default=None, ge=0)
    requiredCompliance: list[str] | None = None

    def to_engine(self) -> dict:
        d = super().to_engine()
        if self.maxMonthlyCost is not None and "maxCost" not in d:
            d["maxCost"] = self.maxMonthlyCost
        if self.requiredCompliance:
            d["requiredFeatures"] = [*d.get("requiredFeatures", []), *self.requiredCompliance]
        return d


class GeneralCompareRequest(BaseModel):
    options: list[dict[str, Any]]
    criteria: list[str]
    constraints: ConstraintsIn | None = None


class CompareOptions(BaseModel):
    criteria: list[str] | None = None
    constraints: ConstraintsIn | None = None


class CloudCompareOptions(BaseModel):
    criteria: list[str] | None = None
    constraints: CloudConstraintsIn | None = None


class ApiCompareRequest(BaseModel):
    apis: list[dict[str, Any]]
    options: CompareOptions | None = None


class CloudCompareRequest(BaseModel):
    services: list[dict[str, Any]]
    options: CloudCompareOptions | None = None


class TechStackRequest(BaseModel):
    """Project requirements; budget and teamSize shape the key factors and plan."""

    projectType: str
    teamExperience: str | None = None
    timeline: str | None = None
    budget: str | None = None
    teamSize: int | None = None
    criteria: list[str] | None = None
    weights: dict[str, float] | None = None
