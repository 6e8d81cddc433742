"""Pydantic models for the assessment input contract."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .air import TacticalSelection
from .assessment import RiskAssessment
from .ground import GroundMitigationSelection
from .oso import OSOStatus


class GroundMitigationModel(BaseModel):
    model_config = ConfigDict(extra="ignore")

    enabled: bool = False
    robustness: str = "none"


class TacticalMitigationModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    enabled: bool = False
    method: str | None = Field(default=None, alias="type")
    robustness: str = "none"


class OSOStatusModel(BaseModel):
    model_config = ConfigDict(extra="ignore")

    robustness: str = "none"
    evidence: str = ""


class RiskAssessmentModel(BaseModel):
    """Validated assessment input.

    Field shapes are enforced here; unknown category strings are kept as-is
    and resolved to out-of-scope results by the engine.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    population_category: str | None = Field(default=None, alias="populationCategory")
    ua_class: str | None = Field(default=None, alias="uaClass")
    ground_mitigations: dict[str, GroundMitigationModel] = Field(default_factory=dict, alias="groundMitigations")
    initial_arc: str | None = Field(default=None, alias="initialARC")
    tmpr: TacticalMitigationModel | None = Field(default=None)
    adjacent_area_population: str | None = Field(default=None, alias="adjacentAreaPopulation")
    oso_statuses: dict[str, OSOStatusModel] = Field(default_factory=dict, alias="osoStatuses")

    def to_assessment(self) -> RiskAssessment:
        tmpr = None
        if self.tmpr is not None:
            tmpr = TacticalSelection(
                enabled=self.tmpr.enabled,
                method=self.tmpr.method,
                robustness=self.tmpr.robustness,
            )
        return RiskAssessment(
            population=self.population_category,
            ua_class=self.ua_class,
            ground_mitigations={
                key: GroundMitigationSelection(enabled=value.enabled, robustness=value.robustness)
                for key, value in self.ground_mitigations.items()
            },
            initial_arc=self.initial_arc,
            tmpr=tmpr,
            adjacent_population=self.adjacent_area_population,
            oso_statuses={
                key: OSOStatus(robustness=value.robustness, evidence=value.evidence)
                for key, value in self.oso_statuses.items()
            },
        )
