"""Air Risk Calculator: residual ARC after a tactical mitigation."""

from __future__ import annotations

from dataclasses import dataclass

import logging

from .tables import TACTICAL_MITIGATIONS, ARCLevel, RobustnessLevel, TacticalMethod

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TacticalSelection:
    """Tactical mitigation (TMPR) claimed for the operation."""

    enabled: bool = False
    method: TacticalMethod | str | None = None
    robustness: RobustnessLevel | str = RobustnessLevel.NONE


def _parse_method(method: TacticalMethod | str | None) -> TacticalMethod | None:
    if method is None:
        return None
    try:
        return TacticalMethod(method)
    except ValueError:
        return None


def residual_arc(initial_arc: ARCLevel | str, tmpr: TacticalSelection | None = None) -> ARCLevel:
    """Step the initial ARC down by the TMPR reduction when its robustness is met.

    No partial credit is given: an achieved robustness below the method's
    minimum leaves the ARC unchanged. The result never goes below ARC-a and
    never rises above ``initial_arc``. An unrecognised initial ARC is treated
    as ARC-d.
    """

    initial = ARCLevel.parse(initial_arc)
    if initial is None:
        logger.warning("unknown_table_key", extra={"initial_arc": str(initial_arc)})
        initial = ARCLevel.ARC_D

    if tmpr is None or not tmpr.enabled:
        return initial

    method = _parse_method(tmpr.method)
    if method is None:
        logger.warning("unknown_table_key", extra={"tmpr": str(tmpr.method)})
        return initial

    definition = TACTICAL_MITIGATIONS[method]
    achieved = RobustnessLevel.parse(tmpr.robustness) or RobustnessLevel.NONE
    if achieved < definition.min_robustness:
        logger.info(
            "tmpr_robustness_insufficient",
            extra={
                "tmpr": method.value,
                "achieved": achieved.value,
                "required": definition.min_robustness.value,
            },
        )
        return initial

    return initial.step_down(definition.arc_reduction)
