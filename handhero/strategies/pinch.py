"""
Pinch Strategy.
Bring two fingertips together. Only the tip-to-tip distance is graded; the
remaining fingers are checked for MAJOR intrusions only and the thumb is
treated leniently when it is not part of the pair.
"""
from typing import Optional, Sequence

from handhero.config import ALL_TIPS, CONFIG, FINGER_NAMES
from handhero.core.boundaries import build_boundaries
from handhero.core.classifiers import evaluate_non_target, evaluate_thumb
from handhero.core.types import EvaluationResult, ExerciseType, FingerResult, Severity, Violation, Zone
from handhero.hand_utils import distance
from handhero.strategies import StrategyContext


def pinch_band(normalized_distance: float):
    """Returns (Zone, score) for a tip distance measured in hand widths."""
    for upper, zone, score in CONFIG["PINCH_BANDS"]:
        if normalized_distance < upper:
            return Zone[zone], score
    zone, score = CONFIG["PINCH_FAIL"]
    return Zone[zone], score


def evaluate_pinch(ctx: StrategyContext, pinch_pair: Optional[Sequence[int]] = None) -> EvaluationResult:
    tip_a, tip_b = pinch_pair if pinch_pair is not None else CONFIG["PINCH_DEFAULT_PAIR"]

    # 1. Distance band
    normalized = distance(ctx.coords[tip_a], ctx.coords[tip_b]) / ctx.hand_width
    zone, score = pinch_band(normalized)

    # 2. Fence built from the involved fingers (thumb dropped inside)
    involved = [ALL_TIPS.index(tip_a), ALL_TIPS.index(tip_b)]
    boundaries = build_boundaries(involved, ctx.coords, ctx.frame)

    # 3. Non-involved fingers: MAJOR violations only
    checks, violations = {}, []
    for finger_idx in range(1, 5):
        if finger_idx in involved:
            continue
        result = evaluate_non_target(finger_idx, ctx.coords, boundaries, ctx.frame)
        checks[finger_idx] = result
        if result.violation and result.severity is Severity.MAJOR:
            violations.append(Violation(finger_idx, result.finger, Severity.MAJOR))

    if violations:
        score *= CONFIG["PINCH_VIOLATION_PENALTY"]
        if zone is Zone.GREEN:
            zone = Zone.BLUE

    # 4. Per-finger breakdown
    fingers = []
    for finger_idx in range(5):
        if finger_idx in involved:
            fingers.append(FingerResult(
                finger_index=finger_idx,
                finger=FINGER_NAMES[finger_idx],
                zone=zone,
                score=score,
                is_target=True,
                passed=score >= CONFIG["PINCH_PASS_SCORE"],
                detail=f"pinch distance {normalized:.3f}",
            ))
        elif finger_idx == 0:
            fingers.append(evaluate_thumb(ctx.coords, ctx.frame, is_target=False))
        else:
            fingers.append(checks[finger_idx])

    return EvaluationResult(
        zone=zone,
        score=score,
        passed=score >= CONFIG["PINCH_PASS_SCORE"],
        exercise_type=ExerciseType.PINCH,
        fingers=tuple(fingers),
        violations=tuple(violations),
        metrics={
            "distance": normalized,
            "pinchPair": [tip_a, tip_b],
            "involvedFingers": involved,
            "thumbHandling": "lenient",
        },
    )
