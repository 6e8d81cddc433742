"""Public API facade for the SORA risk engine.

Accepts the plain-data input contract and returns plain data, so callers
such as report renderers never handle engine types directly.
"""

from __future__ import annotations

from typing import Any, Mapping

import logging

from .assessment import assess, assess_osos, validation_checklist
from .config import SoraSettings
from .models import RiskAssessmentModel
from .sail import OUT_OF_SCOPE_MESSAGE, sail_description

logger = logging.getLogger(__name__)


def run_assessment(payload: Mapping[str, Any], settings: SoraSettings | None = None) -> dict[str, Any]:
    """Validate ``payload`` and run the full classification pipeline.

    Raises:
        pydantic.ValidationError: If the payload does not match the input contract.
    """

    settings = settings or SoraSettings()
    assessment = RiskAssessmentModel.model_validate(payload).to_assessment()
    summary = assess(assessment)
    checklist = validation_checklist(assessment, summary)

    result: dict[str, Any] = summary.to_dict()
    result["sailDescription"] = sail_description(summary.sail)
    if not summary.within_scope:
        result["scopeMessage"] = OUT_OF_SCOPE_MESSAGE
    result["checklist"] = {
        "percentage": checklist.percentage,
        "missing": [item.key for item in checklist.missing()],
    }
    if settings.output.include_oso:
        report = assess_osos(assessment, summary)
        result["oso"] = report.to_dict() if report else None

    logger.info(
        "assessment_completed",
        extra={"sail": result["sail"], "final_grc": summary.final_grc, "within_scope": summary.within_scope},
    )
    return result
