"""
Strategy Context Definition.
Defines the Data Transfer Object (DTO) shared by every exercise strategy,
plus the small scoring helpers more than one strategy needs.
"""
from typing import Any, List, Sequence, Tuple

import numpy as np

from handhero.config import ALL_TIPS
from handhero.core.classifiers import evaluate_target_finger, evaluate_thumb
from handhero.core.types import FingerResult, HandFrame
from handhero.hand_utils import compute_frame, distance, to_coords


class StrategyContext:
    """
    A unified context object containing everything a strategy needs for one frame.
    Built once per `evaluate` call and discarded afterwards.
    """
    def __init__(self, coords: np.ndarray, frame: HandFrame):
        # 1. Landmark matrix (21, 3)
        self.coords = coords

        # 2. Per-frame rulers
        self.frame = frame

    @classmethod
    def from_landmarks(cls, landmarks: Any) -> "StrategyContext":
        coords = to_coords(landmarks)
        return cls(coords, compute_frame(coords))

    # Convenience aliases
    @property
    def hand_length(self) -> float: return self.frame.hand_length
    @property
    def hand_width(self) -> float: return self.frame.hand_width


def extension_results(ctx: StrategyContext) -> List[FingerResult]:
    """All five fingers scored as targets (thumb via its own policy)."""
    results = [evaluate_thumb(ctx.coords, ctx.frame, is_target=True)]
    for finger_idx in range(1, 5):
        results.append(evaluate_target_finger(finger_idx, ctx.coords, ctx.frame))
    return results


def mean_score(results: Sequence[FingerResult]) -> float:
    if not results:
        return 0.0
    return sum(r.score for r in results) / len(results)


def tip_gaps(ctx: StrategyContext) -> List[float]:
    """The 4 adjacent fingertip gaps (thumb-index ... ring-pinky) in hand widths."""
    return [
        distance(ctx.coords[a], ctx.coords[b]) / ctx.hand_width
        for a, b in zip(ALL_TIPS, ALL_TIPS[1:])
    ]


def band_score(value: float, bands: Sequence[Tuple[float, float]], floor: float, wider_is_better: bool) -> float:
    """
    Scores a value against ordered (cutoff, score) bands, first match wins.
    wider_is_better=True matches `value > cutoff`, otherwise `value < cutoff`.
    """
    for cutoff, score in bands:
        if (value > cutoff) if wider_is_better else (value < cutoff):
            return score
    return floor
