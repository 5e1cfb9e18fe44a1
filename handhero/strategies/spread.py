"""
Spread Strategy (Starfish).
Every finger extended AND fanned apart: half extension, half gap width.
"""
from handhero.config import CONFIG
from handhero.core.types import EvaluationResult, ExerciseType, Zone
from handhero.strategies import StrategyContext, band_score, extension_results, mean_score, tip_gaps


def evaluate_spread(ctx: StrategyContext) -> EvaluationResult:
    fingers = extension_results(ctx)
    extension_score = mean_score(fingers)

    gaps = tip_gaps(ctx)
    gap_score = sum(
        band_score(g, CONFIG["SPREAD_GAP_BANDS"], CONFIG["SPREAD_GAP_FLOOR"], wider_is_better=True)
        for g in gaps
    ) / len(gaps)

    w_ext, w_gap = CONFIG["SPREAD_WEIGHTS"]
    score = extension_score * w_ext + gap_score * w_gap

    return EvaluationResult(
        zone=Zone.from_score(score, CONFIG["SPREAD_ZONES"]),
        score=score,
        passed=score >= CONFIG["SPREAD_PASS_SCORE"],
        exercise_type=ExerciseType.SPREAD,
        fingers=tuple(fingers),
        metrics={"extensionScore": extension_score, "gapScore": gap_score, "gaps": gaps},
    )
