"""
Isolation Strategy.
Raise only the target fingers and keep everything else out of their zone.
"""
import logging
from typing import Iterable

from handhero.config import CONFIG
from handhero.core.boundaries import build_boundaries
from handhero.core.classifiers import evaluate_non_target, evaluate_target_finger, evaluate_thumb
from handhero.core.types import EvaluationResult, ExerciseType, Severity, Violation, Zone
from handhero.strategies import StrategyContext


def evaluate_isolation(ctx: StrategyContext, target_fingers: Iterable[int]) -> EvaluationResult:
    targets = set(target_fingers)
    boundaries = build_boundaries(targets, ctx.coords, ctx.frame)

    fingers, violations = [], []
    target_sum, target_count = 0.0, 0
    all_targets_ok = True
    has_major = False

    for finger_idx in range(5):
        is_target = finger_idx in targets

        # 1. Thumb: its own policy, target or not
        if finger_idx == 0:
            result = evaluate_thumb(ctx.coords, ctx.frame, is_target)
            if is_target:
                target_sum += result.score
                target_count += 1
                all_targets_ok = all_targets_ok and result.passed

        # 2. Target: graded extension
        elif is_target:
            result = evaluate_target_finger(finger_idx, ctx.coords, ctx.frame)
            target_sum += result.score
            target_count += 1
            if result.zone is Zone.RED:
                all_targets_ok = False

        # 3. Non-target: violations only
        else:
            result = evaluate_non_target(finger_idx, ctx.coords, boundaries, ctx.frame)
            if result.violation:
                violations.append(Violation(finger_idx, result.finger, result.severity))
                has_major = has_major or result.severity is Severity.MAJOR

        fingers.append(result)

    score = target_sum / target_count if target_count else 0.0

    if has_major:
        score *= CONFIG["ISOLATION_MAJOR_PENALTY"]
    elif violations:
        score *= CONFIG["ISOLATION_MINOR_PENALTY"]

    if violations:
        logging.debug(f"Isolation violations: {[v.finger for v in violations]}")

    return EvaluationResult(
        zone=Zone.from_score(score, CONFIG["ISOLATION_ZONES"]),
        score=score,
        passed=all_targets_ok and not has_major and score >= CONFIG["ISOLATION_PASS_SCORE"],
        exercise_type=ExerciseType.ISOLATION,
        fingers=tuple(fingers),
        violations=tuple(violations),
        metrics={
            "targetFingers": sorted(targets),
            "targetCount": target_count,
            "allTargetsOk": all_targets_ok,
        },
    )
