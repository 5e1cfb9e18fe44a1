"""
HandHero Evaluation Engine (The Referee).
=========================================

This module maps Raw Skeletal Data + an Exercise Descriptor to a graded verdict.

Pipeline per call:
1. **Validate:** 21 landmarks, finite numbers. Short input is rejected, never padded.
2. **Normalize:** hand length / width rulers (see hand_utils).
3. **Dispatch:** one strategy per exercise type.
4. **Report:** a fresh, frozen EvaluationResult owned by the caller.

The engine is stateless. There is no temporal smoothing here; a caller that
wants hysteresis must build it on top of successive results.
"""

import logging
from collections.abc import Mapping
from dataclasses import replace
from numbers import Integral
from typing import Any, Iterable, Optional

import numpy as np

from handhero.config import ALL_TIPS, CONFIG, FINGER_NODES
from handhero.core.boundaries import build_boundaries
from handhero.core.errors import HandHeroError, InvalidInputError, UnknownExerciseError
from handhero.core.types import Boundaries, EvaluationResult, ExerciseDescriptor, ExerciseType, Zone
from handhero.strategies import StrategyContext
from handhero.strategies.fist import evaluate_fist
from handhero.strategies.flat import evaluate_flat
from handhero.strategies.isolation import evaluate_isolation
from handhero.strategies.pinch import evaluate_pinch
from handhero.strategies.spread import evaluate_spread


def _is_int(value: Any) -> bool:
    """Python and numpy integers; bools are rejected."""
    return isinstance(value, Integral) and not isinstance(value, (bool, np.bool_))


def _as_tuple(value: Any, field_name: str) -> tuple:
    if isinstance(value, (str, bytes)):
        raise InvalidInputError(f"{field_name} must be a sequence, got {value!r}")
    try:
        return tuple(value)
    except TypeError:
        raise InvalidInputError(f"{field_name} must be a sequence, got {value!r}") from None


def normalize_exercise(exercise: Any) -> ExerciseDescriptor:
    """
    Accepts an ExerciseDescriptor, a plain dict (camelCase or snake_case keys),
    or anything exposing `.descriptor()` (catalog entries).

    Raises:
        UnknownExerciseError: missing or unrecognised type.
        InvalidInputError: targets outside 0-4 or a pinch pair that is not two tip nodes.
    """
    if exercise is None:
        raise UnknownExerciseError("No exercise supplied")

    if isinstance(exercise, Mapping):
        try:
            exercise = ExerciseDescriptor.from_dict(exercise)
        except TypeError:
            raise InvalidInputError("targetFingers / pinchPair must be sequences") from None
    elif hasattr(exercise, "descriptor"):
        exercise = exercise.descriptor()

    if not isinstance(exercise, ExerciseDescriptor):
        raise UnknownExerciseError(f"Unsupported exercise object: {type(exercise).__name__}")

    if ExerciseType.from_label(exercise.type) is None:
        raise UnknownExerciseError(f"Unknown exercise type: {exercise.type!r}")

    # None means "no targets", the same as a missing dict key
    targets = _as_tuple(exercise.target_fingers, "target_fingers") if exercise.target_fingers is not None else ()
    for finger in targets:
        if not _is_int(finger) or not 0 <= finger <= 4:
            raise InvalidInputError(f"Target finger out of range: {finger!r}")

    pair = None
    if exercise.pinch_pair is not None:
        pair = _as_tuple(exercise.pinch_pair, "pinch_pair")
        if len(pair) != 2 or not all(_is_int(node) and node in ALL_TIPS for node in pair):
            raise InvalidInputError(f"Pinch pair must be two tip nodes, got {exercise.pinch_pair!r}")
        pair = tuple(int(node) for node in pair)

    return replace(
        exercise,
        target_fingers=tuple(int(f) for f in targets),
        pinch_pair=pair,
    )


def _dispatch(ctx: StrategyContext, exercise: ExerciseDescriptor) -> EvaluationResult:
    kind = ExerciseType.from_label(exercise.type)

    if kind is ExerciseType.ISOLATION:
        return evaluate_isolation(ctx, exercise.target_fingers)
    if kind is ExerciseType.PINCH:
        return evaluate_pinch(ctx, exercise.pinch_pair)
    if kind is ExerciseType.SPREAD:
        return evaluate_spread(ctx)
    if kind is ExerciseType.FIST:
        return evaluate_fist(ctx)
    if kind is ExerciseType.FLAT:
        return evaluate_flat(ctx)
    raise UnknownExerciseError(f"Unknown exercise type: {exercise.type!r}")


def error_result(exc: HandHeroError) -> EvaluationResult:
    return EvaluationResult(
        zone=Zone.RED,
        score=0.0,
        passed=False,
        error=str(exc) or exc.code,
        error_code=exc.code,
    )


def evaluate(landmarks: Any, exercise: Any) -> EvaluationResult:
    """
    Universal entry point: handles any exercise type.

    Args:
        landmarks: 21 hand points (MediaPipe list, dicts, tuples or an ndarray).
        exercise: descriptor, dict or catalog Exercise.

    Returns:
        EvaluationResult. Invalid input and unknown exercises come back as a
        failing result with `error` set; they are never raised to the caller.
    """
    try:
        # 1. Landmarks first: a short array fails the same way for every type
        ctx = StrategyContext.from_landmarks(landmarks)
        # 2. Descriptor
        descriptor = normalize_exercise(exercise)
        # 3. Strategy
        return _dispatch(ctx, descriptor)
    except InvalidInputError as e:
        # Routine while the hand is half out of frame; one per rejected frame
        logging.debug(f"Evaluation rejected ({e.code}): {e}")
        return error_result(e)
    except UnknownExerciseError as e:
        logging.warning(f"⚠️ Evaluation rejected ({e.code}): {e}")
        return error_result(e)


def is_valid_fist(landmarks: Any) -> bool:
    """Quick fist check for the reset phase between exercises."""
    try:
        ctx = StrategyContext.from_landmarks(landmarks)
    except InvalidInputError:
        return False
    return evaluate_fist(ctx).passed


def zone_from_score(score: float) -> Zone:
    """Maps a score onto the isolation zone scale (0.85 / 0.65 / 0.40)."""
    return Zone.from_score(score, CONFIG["ISOLATION_ZONES"])


def get_tip_node(finger_index: int) -> int:
    nodes = FINGER_NODES.get(finger_index)
    return nodes["tip"] if nodes else 8


def debug_get_boundaries(landmarks: Any, target_fingers: Optional[Iterable[int]] = None) -> Boundaries:
    """
    Returns the boundary triple `evaluate` would build for these targets.
    For overlays and tests only. Raises InvalidInputError on bad landmarks.
    """
    ctx = StrategyContext.from_landmarks(landmarks)
    return build_boundaries(target_fingers or (), ctx.coords, ctx.frame)
