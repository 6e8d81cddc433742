"""JARUS SORA 2.5 reference tables.

Every table in this module is immutable and is checked for completeness when
the module is imported, so a missing matrix cell surfaces as an import error
instead of a silent lookup miss at assessment time.

Sources:
- JAR_doc_25 (SORA 2.5 main body): Table 2 (iGRC), Table 7 (SAIL), Step #8.
- JAR_doc_27 (Annex B): Table 11 (ground risk mitigations).
- JAR_doc_28 (Annex E): Table 14 (OSO robustness per SAIL).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Iterable, Mapping, TypeVar

E = TypeVar("E", bound="OrderedEnum")


class OrderedEnum(Enum):
    """Enum whose members are totally ordered by declaration order."""

    @property
    def rank(self) -> int:
        return list(type(self)).index(self)

    @classmethod
    def parse(cls: type[E], value: Any) -> E | None:
        """Return the member for ``value`` or ``None`` for an unknown key."""

        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None

    def __lt__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.rank >= other.rank


class PopulationCategory(OrderedEnum):
    """Population density descriptors, least to most dense."""

    CONTROLLED = "controlled"
    REMOTE = "remote"
    LIGHTLY = "lightly"
    SPARSELY = "sparsely"
    SUBURBAN = "suburban"
    HIGHDENSITY = "highdensity"
    ASSEMBLY = "assembly"


class UAClass(OrderedEnum):
    """Maximum characteristic dimension / maximum speed columns."""

    UA_1M_25MS = "1m_25ms"
    UA_3M_35MS = "3m_35ms"
    UA_8M_75MS = "8m_75ms"
    UA_20M_120MS = "20m_120ms"
    UA_40M_200MS = "40m_200ms"


class RobustnessLevel(OrderedEnum):
    NONE = "none"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class RequirementLevel(OrderedEnum):
    """OSO requirement letters: Optional, Low, Medium, High."""

    O = "O"
    L = "L"
    M = "M"
    H = "H"


class ARCLevel(OrderedEnum):
    """Air Risk Classes in increasing encounter risk."""

    ARC_A = "ARC-a"
    ARC_B = "ARC-b"
    ARC_C = "ARC-c"
    ARC_D = "ARC-d"

    def step_down(self, steps: int) -> "ARCLevel":
        members = list(ARCLevel)
        return members[max(0, self.rank - max(0, steps))]


class SAILLevel(OrderedEnum):
    I = "I"
    II = "II"
    III = "III"
    IV = "IV"
    V = "V"
    VI = "VI"


class GroundMitigationId(Enum):
    M1A = "M1A"
    M1B = "M1B"
    M1C = "M1C"
    M2 = "M2"


class TacticalMethod(Enum):
    VLOS = "VLOS"
    EVLOS = "EVLOS"
    DAA = "DAA"


class OSOCategory(Enum):
    TECHNICAL = "technical"
    EXTERNAL = "external"
    HUMAN = "human"
    OPERATING = "operating"


class Responsibility(Enum):
    OPERATOR = "operator"
    DESIGNER = "designer"


@dataclass(frozen=True)
class PopulationInfo:
    label: str
    density: int
    description: str


@dataclass(frozen=True)
class UAClassInfo:
    label: str
    max_dimension_m: float
    max_speed_ms: float
    description: str


@dataclass(frozen=True)
class GroundMitigation:
    """Ground risk mitigation with its per-robustness GRC reduction.

    Attributes:
        mitigation_id: Annex B identifier.
        name: Human readable title.
        description: Short summary of the mitigation.
        reductions: GRC reduction per robustness level. Only the levels Annex B
            defines for this mitigation are present.
        criteria: Integrity/assurance criteria text per defined level.
        notes: Free text caveats.
    """

    mitigation_id: GroundMitigationId
    name: str
    description: str
    reductions: Mapping[RobustnessLevel, int]
    criteria: Mapping[RobustnessLevel, str] = field(default_factory=dict)
    notes: str = ""

    def supports(self, robustness: RobustnessLevel) -> bool:
        return robustness in self.reductions

    def reduction_for(self, robustness: RobustnessLevel) -> int:
        # Levels outside the defined subset reduce nothing.
        return self.reductions.get(robustness, 0)


@dataclass(frozen=True)
class MitigationExclusion:
    """Two mitigations that cannot both reduce the GRC in one computation."""

    mitigation: GroundMitigationId
    robustness: RobustnessLevel
    excludes: GroundMitigationId
    reason: str


@dataclass(frozen=True)
class ARCInfo:
    description: str
    encounters: str
    notes: str


@dataclass(frozen=True)
class TacticalMitigation:
    method: TacticalMethod
    description: str
    arc_reduction: int
    min_robustness: RobustnessLevel
    max_residual_arc: ARCLevel


@dataclass(frozen=True)
class OSODefinition:
    """Operational Safety Objective with its required robustness per SAIL."""

    oso_id: str
    category: OSOCategory
    name: str
    description: str
    requirements: Mapping[SAILLevel, RequirementLevel]
    responsibility: Responsibility

    def required_for(self, sail: SAILLevel) -> RequirementLevel:
        # A SAIL missing from a partial requirement map imposes nothing.
        return self.requirements.get(sail, RequirementLevel.O)


def _require_complete(table: Mapping[Any, Any], keys: Iterable[Any], name: str) -> None:
    missing = [key for key in keys if key not in table]
    if missing:
        raise ValueError(f"{name} is missing entries for {missing}")


def _freeze(table: Mapping[Any, Any]) -> Mapping[Any, Any]:
    return MappingProxyType(
        {key: _freeze(value) if isinstance(value, dict) else value for key, value in table.items()}
    )


def _letters(*values: str) -> dict[SAILLevel, RequirementLevel]:
    return {sail: RequirementLevel(letter) for sail, letter in zip(SAILLevel, values, strict=True)}


_P = PopulationCategory
_U = UAClass
_R = RobustnessLevel
_A = ARCLevel
_S = SAILLevel

POPULATION_CATEGORIES: Mapping[PopulationCategory, PopulationInfo] = _freeze(
    {
        _P.CONTROLLED: PopulationInfo(
            "Controlled Ground Area", 0, "Areas controlled where unauthorized people are not allowed to enter"
        ),
        _P.REMOTE: PopulationInfo(
            "Remote (< 5 ppl/km2)", 5, "Areas where people may be, such as forests, deserts, large farm parcels"
        ),
        _P.LIGHTLY: PopulationInfo(
            "Lightly Populated (< 50 ppl/km2)",
            50,
            "Areas of small farms, residential areas with very large lots (~4 acres)",
        ),
        _P.SPARSELY: PopulationInfo(
            "Sparsely Populated (< 500 ppl/km2)",
            500,
            "Areas of homes and small businesses with large lot sizes (~1 acre)",
        ),
        _P.SUBURBAN: PopulationInfo(
            "Suburban (< 5,000 ppl/km2)",
            5000,
            "Single-family homes on small lots, apartment complexes, commercial buildings",
        ),
        _P.HIGHDENSITY: PopulationInfo(
            "High Density Metro (< 50,000 ppl/km2)", 50000, "Areas of mostly large multistory buildings, downtown areas"
        ),
        _P.ASSEMBLY: PopulationInfo(
            "Assembly of People (> 50,000 ppl/km2)",
            100000,
            "Large gatherings such as professional sporting events, large concerts",
        ),
    }
)

UA_CLASSES: Mapping[UAClass, UAClassInfo] = _freeze(
    {
        _U.UA_1M_25MS: UAClassInfo("<=1m / <=25 m/s", 1, 25, "Small consumer drones"),
        _U.UA_3M_35MS: UAClassInfo("<=3m / <=35 m/s", 3, 35, "Medium commercial UAS"),
        _U.UA_8M_75MS: UAClassInfo("<=8m / <=75 m/s", 8, 75, "Large industrial UAS"),
        _U.UA_20M_120MS: UAClassInfo("<=20m / <=120 m/s", 20, 120, "Large fixed-wing UAS"),
        _U.UA_40M_200MS: UAClassInfo("<=40m / <=200 m/s", 40, 200, "Very large UAS"),
    }
)

# None marks combinations that are not part of SORA (certified category).
INTRINSIC_GRC_MATRIX: Mapping[PopulationCategory, Mapping[UAClass, int | None]] = _freeze(
    {
        population: dict(zip(UAClass, row, strict=True))
        for population, row in {
            _P.CONTROLLED: (1, 1, 2, 3, 3),
            _P.REMOTE: (2, 3, 4, 5, 6),
            _P.LIGHTLY: (3, 4, 5, 6, 7),
            _P.SPARSELY: (4, 5, 6, 7, 8),
            _P.SUBURBAN: (5, 6, 7, 8, 9),
            _P.HIGHDENSITY: (6, 7, 8, 9, 10),
            _P.ASSEMBLY: (7, 8, None, None, None),
        }.items()
    }
)

GROUND_MITIGATIONS: Mapping[GroundMitigationId, GroundMitigation] = _freeze(
    {
        GroundMitigationId.M1A: GroundMitigation(
            mitigation_id=GroundMitigationId.M1A,
            name="M1(A) - Strategic Mitigation: Sheltering",
            description="People on ground are sheltered by structures",
            reductions=MappingProxyType({_R.NONE: 0, _R.LOW: 1, _R.MEDIUM: 2}),
            criteria=MappingProxyType(
                {
                    _R.LOW: "Sheltering is claimed for a majority of people at risk, operator declares",
                    _R.MEDIUM: "Sheltering is substantiated by data or analysis, validated by a competent third party",
                }
            ),
            notes="Cannot be combined with M1(B) at medium robustness",
        ),
        GroundMitigationId.M1B: GroundMitigation(
            mitigation_id=GroundMitigationId.M1B,
            name="M1(B) - Strategic Mitigation: Operational Restrictions",
            description="Spacetime-based restrictions reduce exposure",
            reductions=MappingProxyType({_R.NONE: 0, _R.MEDIUM: 1, _R.HIGH: 2}),
            criteria=MappingProxyType(
                {
                    _R.MEDIUM: "Restrictions reduce people at risk by at least 90%, supported by data",
                    _R.HIGH: "Restrictions reduce people at risk by at least 99%, validated by a competent third party",
                }
            ),
            notes="Cannot be combined with M1(A) at medium robustness",
        ),
        GroundMitigationId.M1C: GroundMitigation(
            mitigation_id=GroundMitigationId.M1C,
            name="M1(C) - Tactical Mitigation: Ground Observation",
            description="Observers can warn people in operational area",
            reductions=MappingProxyType({_R.NONE: 0, _R.LOW: 1}),
            criteria=MappingProxyType(
                {_R.LOW: "Ground observers or equivalent means can alert people before the UA arrives"}
            ),
            notes="Limited to -1 reduction at low robustness only",
        ),
        GroundMitigationId.M2: GroundMitigation(
            mitigation_id=GroundMitigationId.M2,
            name="M2 - Effects of UA Impact Dynamics Reduced",
            description="Parachute, autorotation, or frangibility reduces impact energy",
            reductions=MappingProxyType({_R.NONE: 0, _R.MEDIUM: 1, _R.HIGH: 2}),
            criteria=MappingProxyType(
                {
                    _R.MEDIUM: "Impact effects reduced by one order of magnitude, supported by test data",
                    _R.HIGH: "Impact effects reduced by two orders of magnitude, validated by a competent third party",
                }
            ),
            notes="Can claim additional reduction with demonstrated 3+ orders of magnitude risk reduction",
        ),
    }
)

MITIGATION_EXCLUSIONS: tuple[MitigationExclusion, ...] = (
    MitigationExclusion(
        mitigation=GroundMitigationId.M1A,
        robustness=_R.MEDIUM,
        excludes=GroundMitigationId.M1B,
        reason="M1(A) at medium robustness and M1(B) are strategic alternatives and cannot be combined",
    ),
)

ARC_LEVELS: Mapping[ARCLevel, ARCInfo] = _freeze(
    {
        _A.ARC_A: ARCInfo(
            "Atypical airspace (segregated, restricted)",
            "Negligible",
            "Risk acceptably low without tactical mitigation",
        ),
        _A.ARC_B: ARCInfo(
            "Uncontrolled airspace, rural, low altitude", "Low", "Typical for rural VLOS operations below 400ft"
        ),
        _A.ARC_C: ARCInfo(
            "Controlled airspace or urban uncontrolled",
            "Medium",
            "Requires coordination with ANSP in controlled airspace",
        ),
        _A.ARC_D: ARCInfo(
            "Airport/heliport environment or high traffic", "High", "Requires specific approval and coordination"
        ),
    }
)

TACTICAL_MITIGATIONS: Mapping[TacticalMethod, TacticalMitigation] = _freeze(
    {
        TacticalMethod.VLOS: TacticalMitigation(
            TacticalMethod.VLOS, "Visual Line of Sight - See and avoid by remote pilot", 1, _R.LOW, _A.ARC_B
        ),
        TacticalMethod.EVLOS: TacticalMitigation(
            TacticalMethod.EVLOS, "Extended VLOS - Visual observers provide separation", 1, _R.LOW, _A.ARC_B
        ),
        TacticalMethod.DAA: TacticalMitigation(
            TacticalMethod.DAA, "Detect and Avoid system onboard", 2, _R.MEDIUM, _A.ARC_A
        ),
    }
)

# Rows are final GRC 1..7; GRC above 7 is the certified category.
SAIL_MATRIX: Mapping[int, Mapping[ARCLevel, SAILLevel]] = _freeze(
    {
        grc: dict(zip(ARCLevel, (SAILLevel(value) for value in row), strict=True))
        for grc, row in {
            1: ("I", "II", "IV", "VI"),
            2: ("I", "II", "IV", "VI"),
            3: ("II", "II", "IV", "VI"),
            4: ("III", "III", "IV", "VI"),
            5: ("IV", "IV", "IV", "VI"),
            6: ("V", "V", "V", "VI"),
            7: ("VI", "VI", "VI", "VI"),
        }.items()
    }
)

MAX_SORA_GRC = 7

SAIL_DESCRIPTIONS: Mapping[SAILLevel, str] = _freeze(
    {
        _S.I: "Lowest assurance - Declaration may be sufficient",
        _S.II: "Low assurance - Standard operating procedures",
        _S.III: "Medium assurance - Validated procedures required",
        _S.IV: "Medium-High assurance - Comprehensive safety case",
        _S.V: "High assurance - Extensive demonstration required",
        _S.VI: "Highest assurance - Full airworthiness demonstration",
    }
)

# Adjacent area population x SAIL, simplified from Annex E Step #8.
CONTAINMENT_ROBUSTNESS: Mapping[PopulationCategory, Mapping[SAILLevel, RobustnessLevel]] = _freeze(
    {
        population: dict(zip(SAILLevel, (RobustnessLevel(value) for value in row), strict=True))
        for population, row in {
            _P.CONTROLLED: ("low", "low", "low", "low", "low", "medium"),
            _P.REMOTE: ("low", "low", "low", "low", "low", "medium"),
            _P.LIGHTLY: ("low", "low", "low", "low", "medium", "medium"),
            _P.SPARSELY: ("low", "low", "low", "medium", "medium", "high"),
            _P.SUBURBAN: ("low", "low", "medium", "medium", "high", "high"),
            _P.HIGHDENSITY: ("low", "medium", "medium", "high", "high", "high"),
            _P.ASSEMBLY: ("medium", "medium", "high", "high", "high", "high"),
        }.items()
    }
)

OSO_CATEGORY_LABELS: Mapping[OSOCategory, str] = _freeze(
    {
        OSOCategory.TECHNICAL: "Technical Issue with UAS",
        OSOCategory.EXTERNAL: "Deterioration of External Systems",
        OSOCategory.HUMAN: "Human Error",
        OSOCategory.OPERATING: "Adverse Operating Conditions",
    }
)

_T = OSOCategory.TECHNICAL
_X = OSOCategory.EXTERNAL
_H = OSOCategory.HUMAN
_OP = OSOCategory.OPERATING
_OPR = Responsibility.OPERATOR
_DES = Responsibility.DESIGNER

# OSO-14 and OSO-15 were removed in SORA 2.5.
OSO_DEFINITIONS: tuple[OSODefinition, ...] = tuple(
    OSODefinition(oso_id, category, name, description, MappingProxyType(_letters(*letters)), responsibility)
    for oso_id, category, name, description, letters, responsibility in (
        ("OSO-01", _T, "Ensure the Operator is competent and/or proven",
         "Operator demonstrates competency for the operation", "OLMHHH", _OPR),
        ("OSO-02", _T, "UAS manufactured by competent and/or proven entity",
         "Manufacturer has documented quality and design processes", "OOLMHH", _DES),
        ("OSO-03", _T, "UAS maintained by competent and/or proven entity",
         "Maintenance performed by trained personnel per procedures", "LLMMHH", _OPR),
        ("OSO-04", _T, "UAS developed to Airworthiness Design Standard (ADS)",
         "UAS components essential to safe ops designed to ADS", "OOOLMH", _DES),
        ("OSO-05", _T, "UAS designed considering system safety and reliability",
         "System safety and reliability analysis performed", "OOLMHH", _DES),
        ("OSO-06", _T, "C3 link characteristics appropriate for operation",
         "Command, control, communication link meets operational needs", "OLLMHH", _DES),
        ("OSO-07", _T, "Conformity check of UAS configuration",
         "Inspection of UAS to ensure condition for safe operation", "LLMMHH", _OPR),
        ("OSO-08", _X, "Operational procedures defined, validated and adhered to",
         "Procedures exist, are validated, and crew adheres to them", "LMHHHH", _OPR),
        ("OSO-09", _H, "Remote crew trained and current",
         "Crew training for normal and emergency procedures", "LLMMHH", _OPR),
        ("OSO-10", _T, "Safe recovery from technical issue",
         "Procedures exist to safely recover from a technical failure", "LLMMHH", _OPR),
        ("OSO-11", _T, "Safe recovery from C3 link issues",
         "Procedures and systems to recover from communication failures", "LLMMHH", _OPR),
        ("OSO-12", _H, "Remote crew trained to handle technical emergencies",
         "Crew competent to manage technical failures and degraded modes", "LLMMHH", _OPR),
        ("OSO-13", _X, "External services supporting UAS operations are adequate",
         "CNS, UTM, weather services adequate for operation", "LLMHHH", _OPR),
        ("OSO-16", _H, "Multi-crew coordination",
         "Coordination between multiple crew members", "LLMMHH", _OPR),
        ("OSO-17", _H, "Remote crew fit to operate",
         "Crew fitness-for-duty (medical, fatigue, substances)", "LLMMHH", _OPR),
        ("OSO-18", _H, "Automatic protection of flight envelope from human error",
         "Automatic systems prevent exceeding flight envelope", "OOLMHH", _DES),
        ("OSO-19", _H, "Safe recovery from human error",
         "Procedures and systems for recovery from human error", "OOLMMH", _DES),
        ("OSO-20", _H, "Human Factors evaluation performed, HMI appropriate",
         "HMI assessed and found appropriate for the mission", "OLLMMH", _DES),
        ("OSO-21", _OP, "Automatic protection of flight envelope from adverse conditions",
         "Automatic systems protect operation from adverse environmental conditions", "OOLMHH", _DES),
        ("OSO-22", _OP, "Remote crew able to control UAS in adverse conditions",
         "Crew can safely manage UAS when faced with adverse conditions", "LLMMHH", _OPR),
        ("OSO-23", _OP, "Environmental conditions defined, measurable and adhered to",
         "Weather and environmental limits documented and followed", "LLMMHH", _OPR),
        ("OSO-24", _OP, "UAS designed and qualified for adverse environmental conditions",
         "UAS can handle defined adverse environmental conditions", "OOMHHH", _DES),
    )
)

OSO_BY_ID: Mapping[str, OSODefinition] = MappingProxyType({oso.oso_id: oso for oso in OSO_DEFINITIONS})


def _validate_tables() -> None:
    _require_complete(POPULATION_CATEGORIES, PopulationCategory, "POPULATION_CATEGORIES")
    _require_complete(UA_CLASSES, UAClass, "UA_CLASSES")
    _require_complete(INTRINSIC_GRC_MATRIX, PopulationCategory, "INTRINSIC_GRC_MATRIX")
    for population, row in INTRINSIC_GRC_MATRIX.items():
        _require_complete(row, UAClass, f"INTRINSIC_GRC_MATRIX[{population.value}]")
    _require_complete(GROUND_MITIGATIONS, GroundMitigationId, "GROUND_MITIGATIONS")
    _require_complete(ARC_LEVELS, ARCLevel, "ARC_LEVELS")
    _require_complete(TACTICAL_MITIGATIONS, TacticalMethod, "TACTICAL_MITIGATIONS")
    _require_complete(SAIL_MATRIX, range(1, MAX_SORA_GRC + 1), "SAIL_MATRIX")
    for grc, row in SAIL_MATRIX.items():
        _require_complete(row, ARCLevel, f"SAIL_MATRIX[{grc}]")
    _require_complete(SAIL_DESCRIPTIONS, SAILLevel, "SAIL_DESCRIPTIONS")
    _require_complete(CONTAINMENT_ROBUSTNESS, PopulationCategory, "CONTAINMENT_ROBUSTNESS")
    for population, row in CONTAINMENT_ROBUSTNESS.items():
        _require_complete(row, SAILLevel, f"CONTAINMENT_ROBUSTNESS[{population.value}]")
    _require_complete(OSO_CATEGORY_LABELS, OSOCategory, "OSO_CATEGORY_LABELS")
    for oso in OSO_DEFINITIONS:
        _require_complete(oso.requirements, SAILLevel, oso.oso_id)
    if len(OSO_BY_ID) != len(OSO_DEFINITIONS):
        raise ValueError("OSO identifiers must be unique")


_validate_tables()
