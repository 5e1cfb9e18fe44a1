"""
Fist Strategy.
All five fingers curled: tip below its base and pulled in toward the wrist.
The thumb is measured from its CMC joint (node 1).
"""
from handhero.config import CONFIG, FINGER_NAMES, FINGER_NODES
from handhero.core.types import EvaluationResult, ExerciseType, FingerResult, Zone
from handhero.hand_utils import distance, safe_ratio
from handhero.strategies import StrategyContext, mean_score


def evaluate_curl(finger_idx: int, ctx: StrategyContext) -> FingerResult:
    nodes = FINGER_NODES[finger_idx]
    tip, mcp, wrist = ctx.coords[nodes["tip"]], ctx.coords[nodes["mcp"]], ctx.coords[0]

    curl = float(tip[1] - mcp[1]) / ctx.hand_length
    ratio = safe_ratio(distance(tip, wrist), distance(mcp, wrist))

    zone, score, curled = Zone.RED, CONFIG["FIST_RED_SCORE"], False
    for min_curl, max_ratio, tier_zone, tier_score in CONFIG["FIST_TIERS"]:
        if curl > min_curl and ratio < max_ratio:
            zone, score, curled = Zone[tier_zone], tier_score, True
            break

    return FingerResult(
        finger_index=finger_idx,
        finger=FINGER_NAMES[finger_idx],
        zone=zone,
        score=score,
        is_target=True,
        curled=curled,
        passed=curled,
        detail=f"curl {curl:.3f}, ratio {ratio:.2f}",
    )


def evaluate_fist(ctx: StrategyContext) -> EvaluationResult:
    fingers = [evaluate_curl(i, ctx) for i in range(5)]
    score = mean_score(fingers)

    return EvaluationResult(
        zone=Zone.from_score(score, CONFIG["FIST_ZONES"]),
        score=score,
        passed=score >= CONFIG["FIST_PASS_SCORE"],
        exercise_type=ExerciseType.FIST,
        fingers=tuple(fingers),
        metrics={"curledCount": sum(1 for f in fingers if f.curled)},
    )
