"""OSO Compliance Checker.

Compares the robustness achieved for each Operational Safety Objective with
the robustness Annex E requires at the assessed SAIL.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

import logging

from .tables import (
    OSO_DEFINITIONS,
    OSOCategory,
    OSODefinition,
    RequirementLevel,
    Responsibility,
    RobustnessLevel,
    SAILLevel,
)

logger = logging.getLogger(__name__)

REQUIREMENT_LABELS = {
    RequirementLevel.O: "Optional",
    RequirementLevel.L: "Low",
    RequirementLevel.M: "Medium",
    RequirementLevel.H: "High",
}


@dataclass(frozen=True)
class OSOStatus:
    """Achieved robustness and supporting evidence for one objective."""

    robustness: RobustnessLevel | str = RobustnessLevel.NONE
    evidence: str = ""


@dataclass(frozen=True)
class OSOCompliance:
    oso_id: str
    category: OSOCategory
    required: RequirementLevel
    achieved: RobustnessLevel
    compliant: bool
    gap: int
    evidence: str = ""
    name: str = ""
    description: str = ""
    responsibility: Responsibility | None = None

    @property
    def optional(self) -> bool:
        return self.required is RequirementLevel.O

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.oso_id,
            "category": self.category.value,
            "name": self.name,
            "description": self.description,
            "responsibility": self.responsibility.value if self.responsibility else None,
            "required": self.required.value,
            "requiredLabel": REQUIREMENT_LABELS[self.required],
            "achieved": self.achieved.value,
            "compliant": self.compliant,
            "gap": self.gap,
            "evidence": self.evidence,
        }


@dataclass(frozen=True)
class OSOComplianceSummary:
    total: int
    compliant: int
    non_compliant: int
    optional: int
    overall_compliant: bool


@dataclass(frozen=True)
class OSOComplianceReport:
    """Per-objective results at one SAIL.

    ``sail`` is None when the requested SAIL was not recognised; such a
    report is never overall compliant.
    """

    results: tuple[OSOCompliance, ...]
    sail: SAILLevel | None
    summary: OSOComplianceSummary = field(init=False)

    def __post_init__(self) -> None:
        compliant = sum(1 for result in self.results if result.compliant)
        # Optional objectives are always compliant, so they never count as gaps.
        non_compliant = sum(1 for result in self.results if not result.compliant and not result.optional)
        optional = sum(1 for result in self.results if result.optional)
        summary = OSOComplianceSummary(
            total=len(self.results),
            compliant=compliant,
            non_compliant=non_compliant,
            optional=optional,
            overall_compliant=non_compliant == 0 and self.sail is not None,
        )
        object.__setattr__(self, "summary", summary)

    @property
    def sail_unknown(self) -> bool:
        return self.sail is None

    def gaps(self) -> list[OSOCompliance]:
        return [result for result in self.results if result.gap > 0]

    def by_category(self) -> dict[OSOCategory, list[OSOCompliance]]:
        grouped: dict[OSOCategory, list[OSOCompliance]] = {}
        for result in self.results:
            grouped.setdefault(result.category, []).append(result)
        return grouped

    def to_dict(self) -> dict[str, Any]:
        return {
            "sail": self.sail.value if self.sail else None,
            "sailUnknown": self.sail_unknown,
            "results": [result.to_dict() for result in self.results],
            "summary": {
                "total": self.summary.total,
                "compliant": self.summary.compliant,
                "nonCompliant": self.summary.non_compliant,
                "optional": self.summary.optional,
                "overallCompliant": self.summary.overall_compliant,
            },
        }


def _required(oso: OSODefinition, sail: SAILLevel | None) -> RequirementLevel:
    # An unrecognised SAIL demands the highest robustness.
    if sail is None:
        return RequirementLevel.H
    return oso.required_for(sail)


def _compare(
    oso: OSODefinition,
    sail: SAILLevel | None,
    achieved: RobustnessLevel | str | None,
    evidence: str,
) -> OSOCompliance:
    required = _required(oso, sail)
    achieved_level = RobustnessLevel.parse(achieved) or RobustnessLevel.NONE
    shortfall = required.rank - achieved_level.rank
    return OSOCompliance(
        oso_id=oso.oso_id,
        category=oso.category,
        required=required,
        achieved=achieved_level,
        compliant=shortfall <= 0,
        gap=max(0, shortfall),
        evidence=evidence,
        name=oso.name,
        description=oso.description,
        responsibility=oso.responsibility,
    )


def _parse_sail(sail: SAILLevel | str | None) -> SAILLevel | None:
    sail_key = SAILLevel.parse(sail)
    if sail_key is None:
        logger.warning("unknown_table_key", extra={"sail": str(sail)})
    return sail_key


def check_oso_compliance(
    oso: OSODefinition,
    sail: SAILLevel | str | None,
    achieved: RobustnessLevel | str | None,
    evidence: str = "",
) -> OSOCompliance:
    """Compare achieved robustness with the requirement at ``sail``.

    An unknown SAIL fails closed: the objective is checked against ``H``.
    """

    return _compare(oso, _parse_sail(sail), achieved, evidence)


def check_all_oso_compliance(
    sail: SAILLevel | str | None,
    statuses: Mapping[str, OSOStatus] | None = None,
    definitions: Iterable[OSODefinition] = OSO_DEFINITIONS,
) -> OSOComplianceReport:
    """Check every objective; objectives without a status count as ``none``."""

    sail_key = _parse_sail(sail)
    statuses = statuses or {}
    results = []
    for oso in definitions:
        status = statuses.get(oso.oso_id, OSOStatus())
        results.append(_compare(oso, sail_key, status.robustness, status.evidence))
    return OSOComplianceReport(tuple(results), sail_key)
