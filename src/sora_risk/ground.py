"""Ground Risk Calculator.

Resolves the intrinsic Ground Risk Class from the population and UA class
columns of SORA 2.5 Table 2, then applies the Annex B ground mitigations to
produce the final GRC.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Union

import logging

from .tables import (
    GROUND_MITIGATIONS,
    INTRINSIC_GRC_MATRIX,
    MITIGATION_EXCLUSIONS,
    GroundMitigationId,
    PopulationCategory,
    RobustnessLevel,
    UAClass,
)

logger = logging.getLogger(__name__)

MIN_GRC = 1


@dataclass(frozen=True)
class GroundMitigationSelection:
    """User selection for one ground mitigation."""

    enabled: bool = False
    robustness: RobustnessLevel | str = RobustnessLevel.NONE


@dataclass(frozen=True)
class MitigationConflict:
    """Two enabled mitigations that may not both reduce the GRC."""

    mitigation: GroundMitigationId
    excludes: GroundMitigationId
    reason: str


@dataclass(frozen=True)
class Ok:
    """Successful final GRC computation; ``value`` is None when out of scope."""

    value: int | None

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Invalid:
    """Rejected final GRC computation listing the offending combinations."""

    conflicts: tuple[MitigationConflict, ...]

    @property
    def ok(self) -> bool:
        return False

    @property
    def reason(self) -> str:
        return "; ".join(conflict.reason for conflict in self.conflicts)


GRCResult = Union[Ok, Invalid]
Selections = Mapping[Any, GroundMitigationSelection]


def intrinsic_grc(population: PopulationCategory | str, ua_class: UAClass | str) -> int | None:
    """Look up the intrinsic GRC; unknown keys and non-SORA cells give None."""

    population_key = PopulationCategory.parse(population)
    ua_key = UAClass.parse(ua_class)
    if population_key is None or ua_key is None:
        logger.warning("unknown_table_key", extra={"population": str(population), "ua_class": str(ua_class)})
        return None
    return INTRINSIC_GRC_MATRIX[population_key][ua_key]


def _parse_mitigation_id(key: Any) -> GroundMitigationId | None:
    try:
        return GroundMitigationId(key)
    except ValueError:
        return None


def _active(mitigations: Selections) -> dict[GroundMitigationId, RobustnessLevel]:
    # Enabled selections keyed by known mitigation id with a known robustness.
    active: dict[GroundMitigationId, RobustnessLevel] = {}
    for key, selection in mitigations.items():
        mitigation_id = _parse_mitigation_id(key)
        if mitigation_id is None:
            logger.warning("unknown_table_key", extra={"mitigation": str(key)})
            continue
        if not selection.enabled:
            continue
        robustness = RobustnessLevel.parse(selection.robustness)
        if robustness is None:
            logger.warning(
                "unknown_table_key",
                extra={"mitigation": mitigation_id.value, "robustness": str(selection.robustness)},
            )
            continue
        active[mitigation_id] = robustness
    return active


def _reduction(mitigation_id: GroundMitigationId, robustness: RobustnessLevel) -> int:
    mitigation = GROUND_MITIGATIONS[mitigation_id]
    if not mitigation.supports(robustness):
        logger.debug(
            "robustness_not_defined",
            extra={"mitigation": mitigation_id.value, "robustness": robustness.value},
        )
    return mitigation.reduction_for(robustness)


def _conflicts(active: Mapping[GroundMitigationId, RobustnessLevel]) -> tuple[MitigationConflict, ...]:
    conflicts = []
    for rule in MITIGATION_EXCLUSIONS:
        if active.get(rule.mitigation) != rule.robustness:
            continue
        excluded = active.get(rule.excludes)
        # The excluded mitigation only conflicts when it would actually reduce the GRC.
        if excluded is not None and _reduction(rule.excludes, excluded) > 0:
            conflicts.append(MitigationConflict(rule.mitigation, rule.excludes, rule.reason))
    return tuple(conflicts)


def mitigation_conflicts(mitigations: Selections) -> tuple[MitigationConflict, ...]:
    """Return every exclusion rule violated by the enabled selections."""

    return _conflicts(_active(mitigations))


def controlled_area_floor(ua_class: UAClass | str | None) -> int:
    """GRC of the same UA flown over a controlled ground area."""

    ua_key = UAClass.parse(ua_class) if ua_class is not None else None
    if ua_key is None:
        return MIN_GRC
    return max(MIN_GRC, INTRINSIC_GRC_MATRIX[PopulationCategory.CONTROLLED][ua_key] or MIN_GRC)


def final_grc(
    intrinsic: int | None,
    mitigations: Selections | None = None,
    ua_class: UAClass | str | None = None,
) -> GRCResult:
    """Apply ground mitigations to an intrinsic GRC.

    Args:
        intrinsic: Intrinsic GRC, or None when the operation is outside SORA.
        mitigations: Selections keyed by mitigation id (enum or string).
        ua_class: Optional UA class; when given the result never drops below
            the controlled ground area GRC for that class.

    Returns:
        ``Ok(value)`` with the mitigated GRC (``Ok(None)`` when ``intrinsic``
        is None), or ``Invalid`` when mutually exclusive mitigations are both
        claimed.
    """

    if intrinsic is None:
        return Ok(None)

    active = _active(mitigations or {})
    conflicts = _conflicts(active)
    if conflicts:
        for conflict in conflicts:
            logger.warning(
                "mitigation_conflict",
                extra={"mitigation": conflict.mitigation.value, "excludes": conflict.excludes.value},
            )
        return Invalid(conflicts)

    reduction = sum(_reduction(mitigation_id, robustness) for mitigation_id, robustness in active.items())
    floor = max(MIN_GRC, min(intrinsic, controlled_area_floor(ua_class)))
    value = max(floor, intrinsic - reduction)
    logger.debug("final_grc", extra={"intrinsic": intrinsic, "reduction": reduction, "final": value})
    return Ok(value)
