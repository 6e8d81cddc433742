import pytest
from pydantic import ValidationError

from sora_risk.assessment import assess
from sora_risk.models import RiskAssessmentModel
from sora_risk.tables import SAILLevel

PAYLOAD = {
    "populationCategory": "sparsely",
    "uaClass": "1m_25ms",
    "groundMitigations": {"M1A": {"enabled": True, "robustness": "medium"}},
    "initialARC": "ARC-b",
    "tmpr": {"enabled": True, "type": "VLOS", "robustness": "low"},
    "adjacentAreaPopulation": "lightly",
    "osoStatuses": {"OSO-01": {"robustness": "low", "evidence": "operator manual"}},
    "siteName": "ignored",
}


def test_payload_converts_to_assessment() -> None:
    assessment = RiskAssessmentModel.model_validate(PAYLOAD).to_assessment()
    assert assessment.population == "sparsely"
    assert assessment.tmpr is not None
    assert assessment.tmpr.method == "VLOS"
    assert assessment.oso_statuses["OSO-01"].evidence == "operator manual"
    assert assess(assessment).sail is SAILLevel.I


def test_empty_payload_is_accepted() -> None:
    assessment = RiskAssessmentModel.model_validate({}).to_assessment()
    assert assessment.tmpr is None
    assert assessment.ground_mitigations == {}


def test_malformed_payload_rejected() -> None:
    with pytest.raises(ValidationError):
        RiskAssessmentModel.model_validate({"groundMitigations": ["M1A"]})
