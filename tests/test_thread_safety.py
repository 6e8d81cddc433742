import threading

from sora_risk.air import TacticalSelection
from sora_risk.assessment import RiskAssessment, RiskSummary, assess
from sora_risk.ground import GroundMitigationSelection


def _assessment(index: int) -> RiskAssessment:
    populations = ["remote", "sparsely", "suburban", "assembly"]
    return RiskAssessment(
        population=populations[index % len(populations)],
        ua_class="3m_35ms",
        ground_mitigations={"M2": GroundMitigationSelection(enabled=True, robustness="high")},
        initial_arc="ARC-c",
        tmpr=TacticalSelection(enabled=True, method="EVLOS", robustness="medium"),
        adjacent_population="lightly",
    )


def test_concurrent_assessments_are_deterministic() -> None:
    expected = [assess(_assessment(index)) for index in range(4)]
    errors: list[Exception] = []
    mismatches: list[RiskSummary] = []

    def worker() -> None:
        try:
            for step in range(200):
                result = assess(_assessment(step))
                if result != expected[step % 4]:
                    mismatches.append(result)
        except Exception as exc:  # noqa: BLE001
            errors.append(exc)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert not errors
    assert not mismatches
