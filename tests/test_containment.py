from sora_risk.containment import adjacent_area_distance, containment_requirement, resolve_containment
from sora_risk.tables import PopulationCategory, RobustnessLevel, SAILLevel


def test_adjacent_distance_clamped() -> None:
    assert adjacent_area_distance(25) == 5000
    assert adjacent_area_distance(300) == 35000
    assert adjacent_area_distance(100) == 18000


def test_containment_lookup() -> None:
    assert containment_requirement("suburban", "V") is RobustnessLevel.HIGH
    assert containment_requirement(PopulationCategory.ASSEMBLY, SAILLevel.I) is RobustnessLevel.MEDIUM


def test_containment_fallback_is_flagged() -> None:
    real = resolve_containment("remote", "I")
    assert real.robustness is RobustnessLevel.LOW
    assert not real.fallback

    fallback = resolve_containment("remote", None)
    assert fallback.robustness is RobustnessLevel.LOW
    assert fallback.fallback
    assert resolve_containment("nowhere", "II").fallback
