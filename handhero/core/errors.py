"""
HandHero Error Kinds.
Both are recoverable: the dispatcher turns them into a failing result for the frame.
"""


class HandHeroError(Exception):
    code = "error"


class InvalidInputError(HandHeroError):
    """Fewer than 21 landmarks, a malformed point, or an out-of-range descriptor value."""
    code = "invalid_input"


class UnknownExerciseError(HandHeroError):
    code = "unknown_exercise"
