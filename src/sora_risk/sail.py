"""SAIL Resolver."""

from __future__ import annotations

from enum import Enum

import logging

from .tables import MAX_SORA_GRC, SAIL_DESCRIPTIONS, SAIL_MATRIX, ARCLevel, SAILLevel

logger = logging.getLogger(__name__)

OUT_OF_SCOPE_MESSAGE = "Outside SORA scope - certified category required"


class GRCBand(Enum):
    """Qualitative band used when presenting a final GRC."""

    NOT_AVAILABLE = "N/A"
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    OUTSIDE_SCOPE = "Outside Scope"


def within_scope(final_grc: int | None) -> bool:
    return final_grc is not None and final_grc <= MAX_SORA_GRC


def grc_band(final_grc: int | None) -> GRCBand:
    if final_grc is None:
        return GRCBand.NOT_AVAILABLE
    if final_grc <= 3:
        return GRCBand.LOW
    if final_grc <= 5:
        return GRCBand.MEDIUM
    if final_grc <= MAX_SORA_GRC:
        return GRCBand.HIGH
    return GRCBand.OUTSIDE_SCOPE


def sail(final_grc: int | None, residual_arc: ARCLevel | str) -> SAILLevel | None:
    """Map final GRC and residual ARC to a SAIL.

    Returns None when the final GRC is missing or above 7: such operations
    belong to the certified category and receive no default SAIL.
    """

    if not within_scope(final_grc):
        logger.info("grc_out_of_scope", extra={"final_grc": final_grc})
        return None
    arc = ARCLevel.parse(residual_arc)
    if arc is None:
        logger.warning("unknown_table_key", extra={"residual_arc": str(residual_arc)})
        return None
    grc = min(MAX_SORA_GRC, max(1, final_grc))
    return SAIL_MATRIX[grc][arc]


def sail_description(level: SAILLevel | None) -> str:
    if level is None:
        return OUT_OF_SCOPE_MESSAGE
    return SAIL_DESCRIPTIONS[level]
