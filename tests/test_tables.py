import pytest

from sora_risk.tables import (
    GROUND_MITIGATIONS,
    INTRINSIC_GRC_MATRIX,
    OSO_BY_ID,
    OSO_DEFINITIONS,
    SAIL_MATRIX,
    ARCLevel,
    GroundMitigationId,
    PopulationCategory,
    RequirementLevel,
    RobustnessLevel,
    SAILLevel,
    UAClass,
)


def test_robustness_total_order() -> None:
    assert RobustnessLevel.NONE < RobustnessLevel.LOW < RobustnessLevel.MEDIUM < RobustnessLevel.HIGH
    assert RobustnessLevel.HIGH >= RobustnessLevel.MEDIUM
    assert max(RobustnessLevel) is RobustnessLevel.HIGH


def test_parse_fails_closed() -> None:
    assert ARCLevel.parse("ARC-c") is ARCLevel.ARC_C
    assert ARCLevel.parse(ARCLevel.ARC_A) is ARCLevel.ARC_A
    assert ARCLevel.parse("ARC-z") is None
    assert PopulationCategory.parse(None) is None


def test_arc_step_down_floors_at_arc_a() -> None:
    assert ARCLevel.ARC_D.step_down(2) is ARCLevel.ARC_B
    assert ARCLevel.ARC_B.step_down(5) is ARCLevel.ARC_A
    assert ARCLevel.ARC_C.step_down(0) is ARCLevel.ARC_C


def test_intrinsic_matrix_monotonic() -> None:
    populations = list(PopulationCategory)
    classes = list(UAClass)
    for population in populations:
        row = [INTRINSIC_GRC_MATRIX[population][ua] for ua in classes]
        in_scope = [value for value in row if value is not None]
        assert in_scope == sorted(in_scope)
    for ua in classes:
        column = [INTRINSIC_GRC_MATRIX[population][ua] for population in populations]
        in_scope = [value for value in column if value is not None]
        assert in_scope == sorted(in_scope)


def test_out_of_scope_cells() -> None:
    assert INTRINSIC_GRC_MATRIX[PopulationCategory.ASSEMBLY][UAClass.UA_8M_75MS] is None
    assert INTRINSIC_GRC_MATRIX[PopulationCategory.ASSEMBLY][UAClass.UA_3M_35MS] == 8


def test_mitigation_subsets() -> None:
    m1a = GROUND_MITIGATIONS[GroundMitigationId.M1A]
    assert not m1a.supports(RobustnessLevel.HIGH)
    assert m1a.reduction_for(RobustnessLevel.HIGH) == 0
    assert GROUND_MITIGATIONS[GroundMitigationId.M1B].reduction_for(RobustnessLevel.LOW) == 0


def test_sail_matrix_rows() -> None:
    assert set(SAIL_MATRIX) == set(range(1, 8))
    assert SAIL_MATRIX[7][ARCLevel.ARC_A] is SAILLevel.VI


def test_oso_catalogue() -> None:
    assert len(OSO_DEFINITIONS) == 22
    assert "OSO-14" not in OSO_BY_ID
    assert OSO_BY_ID["OSO-04"].required_for(SAILLevel.IV) is RequirementLevel.L


def test_tables_are_read_only() -> None:
    with pytest.raises(TypeError):
        SAIL_MATRIX[8] = {}  # type: ignore[index]
