"""Containment Resolver (SORA 2.5 Step #8)."""

from __future__ import annotations

from dataclasses import dataclass

import logging

from .tables import CONTAINMENT_ROBUSTNESS, PopulationCategory, RobustnessLevel, SAILLevel

logger = logging.getLogger(__name__)

# Regulatory constants: 3 minutes of flight, bounded to 5 km .. 35 km.
ADJACENT_AREA_FLIGHT_TIME_S = 180
ADJACENT_AREA_MIN_M = 5_000
ADJACENT_AREA_MAX_M = 35_000

FALLBACK_CONTAINMENT = RobustnessLevel.LOW


@dataclass(frozen=True)
class ContainmentRequirement:
    """Required containment robustness.

    ``fallback`` is True when the (population, SAIL) pair had no table entry
    and ``robustness`` is the default rather than a real determination.
    """

    robustness: RobustnessLevel
    fallback: bool = False


def adjacent_area_distance(max_speed: float) -> float:
    """Adjacent area extent in metres for a UA maximum speed in m/s."""

    distance = max_speed * ADJACENT_AREA_FLIGHT_TIME_S
    return min(ADJACENT_AREA_MAX_M, max(ADJACENT_AREA_MIN_M, distance))


def resolve_containment(
    adjacent_population: PopulationCategory | str | None,
    sail: SAILLevel | str | None,
) -> ContainmentRequirement:
    population_key = PopulationCategory.parse(adjacent_population)
    sail_key = SAILLevel.parse(sail)
    if population_key is None or sail_key is None:
        logger.warning(
            "containment_fallback",
            extra={"adjacent_population": str(adjacent_population), "sail": str(sail)},
        )
        return ContainmentRequirement(FALLBACK_CONTAINMENT, fallback=True)
    return ContainmentRequirement(CONTAINMENT_ROBUSTNESS[population_key][sail_key])


def containment_requirement(
    adjacent_population: PopulationCategory | str | None,
    sail: SAILLevel | str | None,
) -> RobustnessLevel:
    """Required containment robustness; ``low`` is only a fallback for absent pairs."""

    return resolve_containment(adjacent_population, sail).robustness
