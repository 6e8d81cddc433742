import pytest

from sora_risk.sail import GRCBand, grc_band, sail, sail_description, within_scope
from sora_risk.tables import ARCLevel, SAILLevel


def test_low_grc_arc_a_is_sail_one() -> None:
    assert sail(2, "ARC-a") is SAILLevel.I


def test_matrix_lookups() -> None:
    assert sail(4, ARCLevel.ARC_B) is SAILLevel.III
    assert sail(6, "ARC-c") is SAILLevel.V
    assert sail(1, "ARC-d") is SAILLevel.VI


@pytest.mark.parametrize("grc", [None, 8, 10])
def test_out_of_scope_has_no_sail(grc: int | None) -> None:
    assert sail(grc, "ARC-a") is None
    assert not within_scope(grc)


def test_low_grc_is_clamped() -> None:
    assert sail(0, "ARC-b") is SAILLevel.II


def test_unknown_arc_has_no_sail() -> None:
    assert sail(3, "ARC-q") is None


def test_grc_band() -> None:
    assert grc_band(None) is GRCBand.NOT_AVAILABLE
    assert grc_band(3) is GRCBand.LOW
    assert grc_band(5) is GRCBand.MEDIUM
    assert grc_band(7) is GRCBand.HIGH
    assert grc_band(9) is GRCBand.OUTSIDE_SCOPE


def test_sail_description() -> None:
    assert sail_description(SAILLevel.I).startswith("Lowest")
    assert "certified category" in sail_description(None)
