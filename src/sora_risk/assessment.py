"""Risk assessment aggregate and the end-to-end classification pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .air import TacticalSelection, residual_arc
from .containment import adjacent_area_distance, resolve_containment
from .ground import GroundMitigationSelection, Invalid, MitigationConflict, final_grc, intrinsic_grc
from .oso import OSOComplianceReport, OSOStatus, check_all_oso_compliance
from .sail import GRCBand, grc_band, sail, within_scope
from .tables import (
    GROUND_MITIGATIONS,
    UA_CLASSES,
    ARCLevel,
    GroundMitigationId,
    PopulationCategory,
    RobustnessLevel,
    SAILLevel,
    UAClass,
)


@dataclass
class RiskAssessment:
    """Selections made by the user while working through an assessment.

    Plain input data: every field may be filled in gradually and the
    calculators never mutate it.
    """

    population: PopulationCategory | str | None = None
    ua_class: UAClass | str | None = None
    ground_mitigations: dict[str, GroundMitigationSelection] = field(default_factory=dict)
    initial_arc: ARCLevel | str | None = None
    tmpr: TacticalSelection | None = None
    adjacent_population: PopulationCategory | str | None = None
    oso_statuses: dict[str, OSOStatus] = field(default_factory=dict)


@dataclass(frozen=True)
class RiskSummary:
    """Outputs of the classification pipeline."""

    intrinsic_grc: int | None
    final_grc: int | None
    residual_arc: ARCLevel | None
    sail: SAILLevel | None
    within_scope: bool
    adjacent_area_distance_m: float | None
    required_containment_robustness: RobustnessLevel
    containment_fallback: bool
    grc_band: GRCBand
    applied_mitigations: tuple[str, ...] = ()
    mitigation_conflicts: tuple[MitigationConflict, ...] = ()

    @property
    def valid(self) -> bool:
        return not self.mitigation_conflicts

    def to_dict(self) -> dict[str, Any]:
        return {
            "intrinsicGRC": self.intrinsic_grc,
            "finalGRC": self.final_grc,
            "residualARC": self.residual_arc.value if self.residual_arc else None,
            "sail": self.sail.value if self.sail else None,
            "withinScope": self.within_scope,
            "adjacentAreaDistanceMeters": self.adjacent_area_distance_m,
            "requiredContainmentRobustness": self.required_containment_robustness.value,
            "containmentFallback": self.containment_fallback,
            "grcBand": self.grc_band.value,
            "appliedMitigations": list(self.applied_mitigations),
            "mitigationConflicts": [
                {
                    "mitigation": conflict.mitigation.value,
                    "excludes": conflict.excludes.value,
                    "reason": conflict.reason,
                }
                for conflict in self.mitigation_conflicts
            ],
        }


def _applied_mitigations(assessment: RiskAssessment) -> tuple[str, ...]:
    names = []
    for key, selection in assessment.ground_mitigations.items():
        try:
            mitigation = GROUND_MITIGATIONS[GroundMitigationId(key)]
        except ValueError:
            continue
        robustness = RobustnessLevel.parse(selection.robustness)
        if selection.enabled and robustness is not None and mitigation.reduction_for(robustness) > 0:
            names.append(mitigation.name)
    return tuple(names)


def assess(assessment: RiskAssessment) -> RiskSummary:
    """Run ground risk, air risk, SAIL and containment in sequence."""

    igrc = intrinsic_grc(assessment.population, assessment.ua_class) if assessment.population else None
    outcome = final_grc(igrc, assessment.ground_mitigations, ua_class=assessment.ua_class)
    conflicts = outcome.conflicts if isinstance(outcome, Invalid) else ()
    fgrc = None if isinstance(outcome, Invalid) else outcome.value

    arc = residual_arc(assessment.initial_arc, assessment.tmpr) if assessment.initial_arc else None
    level = sail(fgrc, arc) if arc is not None else None

    ua_key = UAClass.parse(assessment.ua_class)
    distance = adjacent_area_distance(UA_CLASSES[ua_key].max_speed_ms) if ua_key else None
    containment = resolve_containment(assessment.adjacent_population, level)

    return RiskSummary(
        intrinsic_grc=igrc,
        final_grc=fgrc,
        residual_arc=arc,
        sail=level,
        within_scope=within_scope(fgrc),
        adjacent_area_distance_m=distance,
        required_containment_robustness=containment.robustness,
        containment_fallback=containment.fallback,
        grc_band=grc_band(fgrc),
        applied_mitigations=() if conflicts else _applied_mitigations(assessment),
        mitigation_conflicts=conflicts,
    )


def assess_osos(assessment: RiskAssessment, summary: RiskSummary) -> OSOComplianceReport | None:
    """OSO report at the assessed SAIL; None when no SAIL could be determined."""

    if summary.sail is None:
        return None
    return check_all_oso_compliance(summary.sail, assessment.oso_statuses)


@dataclass(frozen=True)
class ChecklistItem:
    key: str
    label: str
    complete: bool
    required: bool


@dataclass(frozen=True)
class ValidationChecklist:
    items: tuple[ChecklistItem, ...]

    @property
    def percentage(self) -> int:
        required = [item for item in self.items if item.required]
        if not required:
            return 100
        done = sum(1 for item in required if item.complete)
        return round(done * 100 / len(required))

    @property
    def complete(self) -> bool:
        return all(item.complete for item in self.items if item.required)

    def missing(self) -> list[ChecklistItem]:
        return [item for item in self.items if item.required and not item.complete]


def validation_checklist(assessment: RiskAssessment, summary: RiskSummary) -> ValidationChecklist:
    """Report which assessment steps are still incomplete."""

    return ValidationChecklist(
        (
            ChecklistItem("population", "Population category selected", bool(assessment.population), True),
            ChecklistItem("ua_class", "UA characteristics defined", bool(assessment.ua_class), True),
            ChecklistItem("intrinsic_grc", "iGRC determined", summary.intrinsic_grc is not None, True),
            ChecklistItem("mitigations", "Ground mitigations reviewed", bool(assessment.ground_mitigations), False),
            ChecklistItem("initial_arc", "Initial ARC assessed", bool(assessment.initial_arc), True),
            ChecklistItem("tmpr", "TMPR evaluated", assessment.tmpr is not None, False),
            ChecklistItem("sail", "SAIL determined", summary.sail is not None, True),
            ChecklistItem("within_scope", "Within SORA scope", summary.within_scope and summary.valid, True),
        )
    )
