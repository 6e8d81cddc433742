"""JARUS SORA 2.5 ground/air risk, SAIL and OSO compliance engine."""

from .air import TacticalSelection, residual_arc
from .api import run_assessment
from .assessment import (
    ChecklistItem,
    RiskAssessment,
    RiskSummary,
    ValidationChecklist,
    assess,
    assess_osos,
    validation_checklist,
)
from .config import LoggingConfig, OutputConfig, SoraSettings
from .containment import (
    ContainmentRequirement,
    adjacent_area_distance,
    containment_requirement,
    resolve_containment,
)
from .ground import GroundMitigationSelection, Invalid, MitigationConflict, Ok, final_grc, intrinsic_grc
from .logging_utils import JsonFormatter, configure_logging
from .models import RiskAssessmentModel
from .oso import OSOCompliance, OSOComplianceReport, OSOStatus, check_all_oso_compliance, check_oso_compliance
from .sail import GRCBand, grc_band, sail, sail_description, within_scope
from .tables import (
    ARCLevel,
    GroundMitigationId,
    OSODefinition,
    PopulationCategory,
    RequirementLevel,
    RobustnessLevel,
    SAILLevel,
    TacticalMethod,
    UAClass,
)

__all__ = [
    "ARCLevel",
    "ChecklistItem",
    "ContainmentRequirement",
    "GRCBand",
    "GroundMitigationId",
    "GroundMitigationSelection",
    "Invalid",
    "JsonFormatter",
    "LoggingConfig",
    "MitigationConflict",
    "OSOCompliance",
    "OSOComplianceReport",
    "OSODefinition",
    "OSOStatus",
    "Ok",
    "OutputConfig",
    "PopulationCategory",
    "RequirementLevel",
    "RiskAssessment",
    "RiskAssessmentModel",
    "RiskSummary",
    "RobustnessLevel",
    "SAILLevel",
    "SoraSettings",
    "TacticalMethod",
    "TacticalSelection",
    "UAClass",
    "ValidationChecklist",
    "adjacent_area_distance",
    "assess",
    "assess_osos",
    "check_all_oso_compliance",
    "check_oso_compliance",
    "configure_logging",
    "containment_requirement",
    "final_grc",
    "grc_band",
    "intrinsic_grc",
    "residual_arc",
    "resolve_containment",
    "run_assessment",
    "sail",
    "sail_description",
    "validation_checklist",
    "within_scope",
]
