from sora_risk.air import TacticalSelection
from sora_risk.assessment import RiskAssessment, assess, assess_osos, validation_checklist
from sora_risk.ground import GroundMitigationSelection
from sora_risk.oso import OSOStatus
from sora_risk.sail import GRCBand
from sora_risk.tables import ARCLevel, RobustnessLevel, SAILLevel


def _rural_vlos() -> RiskAssessment:
    return RiskAssessment(
        population="sparsely",
        ua_class="1m_25ms",
        ground_mitigations={"M1A": GroundMitigationSelection(enabled=True, robustness="medium")},
        initial_arc="ARC-b",
        tmpr=TacticalSelection(enabled=True, method="VLOS", robustness="low"),
        adjacent_population="lightly",
    )


def test_full_pipeline() -> None:
    summary = assess(_rural_vlos())
    assert summary.intrinsic_grc == 4
    assert summary.final_grc == 2
    assert summary.residual_arc is ARCLevel.ARC_A
    assert summary.sail is SAILLevel.I
    assert summary.within_scope
    assert summary.adjacent_area_distance_m == 5000
    assert summary.required_containment_robustness is RobustnessLevel.LOW
    assert not summary.containment_fallback
    assert summary.grc_band is GRCBand.LOW
    assert summary.applied_mitigations == ("M1(A) - Strategic Mitigation: Sheltering",)


def test_pipeline_is_deterministic() -> None:
    assessment = _rural_vlos()
    assert assess(assessment) == assess(assessment)


def test_out_of_scope_pipeline() -> None:
    summary = assess(RiskAssessment(population="assembly", ua_class="8m_75ms", initial_arc="ARC-a"))
    assert summary.intrinsic_grc is None
    assert summary.final_grc is None
    assert summary.sail is None
    assert not summary.within_scope
    assert summary.containment_fallback
    assert summary.to_dict()["sail"] is None


def test_high_grc_is_out_of_scope() -> None:
    summary = assess(RiskAssessment(population="suburban", ua_class="40m_200ms", initial_arc="ARC-b"))
    assert summary.final_grc == 9
    assert summary.sail is None
    assert summary.grc_band is GRCBand.OUTSIDE_SCOPE


def test_conflicting_mitigations_block_result() -> None:
    assessment = _rural_vlos()
    assessment.ground_mitigations["M1B"] = GroundMitigationSelection(enabled=True, robustness="medium")
    summary = assess(assessment)
    assert not summary.valid
    assert summary.final_grc is None
    assert summary.sail is None
    assert summary.applied_mitigations == ()
    data = summary.to_dict()
    assert data["mitigationConflicts"][0]["excludes"] == "M1B"


def test_to_dict_output_contract() -> None:
    data = assess(_rural_vlos()).to_dict()
    assert data["intrinsicGRC"] == 4
    assert data["finalGRC"] == 2
    assert data["residualARC"] == "ARC-a"
    assert data["sail"] == "I"
    assert data["withinScope"] is True
    assert data["adjacentAreaDistanceMeters"] == 5000
    assert data["requiredContainmentRobustness"] == "low"


def test_oso_report_uses_assessed_sail() -> None:
    assessment = _rural_vlos()
    assessment.oso_statuses["OSO-03"] = OSOStatus(robustness="low", evidence="maintenance log")
    summary = assess(assessment)
    report = assess_osos(assessment, summary)
    assert report is not None
    oso03 = next(result for result in report.results if result.oso_id == "OSO-03")
    assert oso03.compliant
    assert oso03.evidence == "maintenance log"


def test_no_oso_report_without_sail() -> None:
    assessment = RiskAssessment(population="assembly", ua_class="20m_120ms", initial_arc="ARC-a")
    assert assess_osos(assessment, assess(assessment)) is None


def test_validation_checklist() -> None:
    empty = RiskAssessment()
    checklist = validation_checklist(empty, assess(empty))
    assert checklist.percentage == 0
    assert not checklist.complete

    assessment = _rural_vlos()
    checklist = validation_checklist(assessment, assess(assessment))
    assert checklist.complete
    assert checklist.percentage == 100
    assert checklist.missing() == []
