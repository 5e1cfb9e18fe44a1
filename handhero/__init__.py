"""
HandHero: per-frame hand-pose evaluation for finger mobility exercises.
"""
from handhero.core.errors import HandHeroError, InvalidInputError, UnknownExerciseError
from handhero.core.types import (
    Boundaries,
    BoundaryLine,
    EvaluationResult,
    ExerciseDescriptor,
    ExerciseType,
    FingerResult,
    Zone,
)
from handhero.evaluator import debug_get_boundaries, evaluate, get_tip_node, is_valid_fist, zone_from_score

__version__ = "0.1.0"
