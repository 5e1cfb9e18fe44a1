"""
Flat Hand Strategy.
Every finger extended but held TOGETHER, the opposite of the spread.
"""
from handhero.config import CONFIG
from handhero.core.types import EvaluationResult, ExerciseType, Zone
from handhero.strategies import StrategyContext, band_score, extension_results, mean_score, tip_gaps


def evaluate_flat(ctx: StrategyContext) -> EvaluationResult:
    fingers = extension_results(ctx)
    extension_score = mean_score(fingers)

    # Smaller gap = better
    gaps = tip_gaps(ctx)
    together_score = sum(
        band_score(g, CONFIG["FLAT_GAP_BANDS"], CONFIG["FLAT_GAP_FLOOR"], wider_is_better=False)
        for g in gaps
    ) / len(gaps)

    w_ext, w_together = CONFIG["FLAT_WEIGHTS"]
    score = extension_score * w_ext + together_score * w_together

    return EvaluationResult(
        zone=Zone.from_score(score, CONFIG["FLAT_ZONES"]),
        score=score,
        passed=score >= CONFIG["FLAT_PASS_SCORE"],
        exercise_type=ExerciseType.FLAT,
        fingers=tuple(fingers),
        metrics={"extensionScore": extension_score, "togetherScore": together_score, "gaps": gaps},
    )
