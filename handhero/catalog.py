"""
HandHero Exercise Library.
==========================

Static exercise descriptors plus session builders.

FINGER INDEX: 0 = Thumb, 1 = Index, 2 = Middle, 3 = Ring, 4 = Pinky
TIP NODES:    4 = Thumb, 8 = Index, 12 = Middle, 16 = Ring, 20 = Pinky

Every builder takes an optional `random.Random` so sessions can be reproduced.
"""
import random
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from handhero.core.types import ExerciseDescriptor


@dataclass(frozen=True)
class Exercise:
    id: str
    name: str
    icon: str
    category: str
    description: str
    difficulty: int  # 1-4
    type: str
    target_fingers: Tuple[int, ...] = ()
    pinch_pair: Optional[Tuple[int, int]] = None

    def descriptor(self) -> ExerciseDescriptor:
        return ExerciseDescriptor(self.type, self.target_fingers, self.pinch_pair)


def _isolation(id, name, icon, category, description, difficulty, targets) -> Exercise:
    return Exercise(id, name, icon, category, description, difficulty, "isolation", tuple(targets))


def _pinch(id, name, icon, description, difficulty, pair) -> Exercise:
    return Exercise(id, name, icon, "Precision", description, difficulty, "pinch", pinch_pair=pair)


_ENTRIES: List[Exercise] = [
    # --- SINGLE FINGER ISOLATION ---
    _isolation("thumbs_up", "Thumbs Up", "👍", "Isolation", "Extend only your thumb", 2, [0]),
    _isolation("pointer", "Pointer Finger", "☝️", "Isolation", "Extend only your index finger", 2, [1]),
    _isolation("middle_finger_lift", "Middle Finger Lift", "🖕", "Isolation", "Extend only your middle finger", 3, [2]),
    _isolation("ring_finger_lift", "Ring Finger Lift", "💍", "Advanced", "Extend only your ring finger", 4, [3]),
    _isolation("pinky_out", "Pinky Extension", "🤙", "Isolation", "Extend only your pinky finger", 3, [4]),

    # --- TWO FINGER ISOLATION ---
    _isolation("peace", "Peace Sign", "✌️", "Coordination", "Extend index and middle fingers", 2, [1, 2]),
    _isolation("rock_on", "Rock On", "🤘", "Advanced", "Extend index and pinky only", 4, [1, 4]),
    _isolation("hang_loose", "Hang Loose", "🤙", "Coordination", "Extend thumb and pinky only", 3, [0, 4]),
    _isolation("bunny_ears", "Bunny Ears", "🐰", "Coordination", "Extend index and middle fingers", 2, [1, 2]),

    # --- THREE+ FINGER ISOLATION ---
    _isolation("three_fingers", "Scout Salute", "🖖", "Coordination", "Extend index, middle, and ring", 3, [1, 2, 3]),
    _isolation("four_fingers", "Four Up", "🖐️", "Coordination", "Extend all fingers except thumb", 2, [1, 2, 3, 4]),

    # --- PINCH (Thumb to Fingertip) ---
    _pinch("ok_sign", "OK Sign", "👌", "Touch thumb to index tip", 2, (4, 8)),
    _pinch("thumb_to_middle", "Thumb to Middle", "🤌", "Touch thumb to middle fingertip", 2, (4, 12)),
    _pinch("thumb_to_ring", "Thumb to Ring", "🤏", "Touch thumb to ring fingertip", 3, (4, 16)),
    _pinch("thumb_to_pinky", "Thumb to Pinky", "🤙", "Touch thumb to pinky tip", 3, (4, 20)),

    # --- FULL HAND ---
    Exercise("starfish", "Starfish Spread", "🖐️", "Stretch", "Spread all fingers wide", 1, "spread"),
    Exercise("flat_hand", "Flat Hand", "🤚", "Stretch", "Fingers together, fully extended", 1, "flat"),
    Exercise("fist", "Gentle Fist", "✊", "Strength", "Curl all fingers into a fist", 1, "fist"),
]

EXERCISES: Dict[str, Exercise] = {e.id: e for e in _ENTRIES}

CATEGORIES: Dict[str, Dict[str, str]] = {
    "Isolation": {"name": "Isolation", "description": "Single finger control exercises", "color": "#68c896"},
    "Coordination": {"name": "Coordination", "description": "Multi-finger coordination exercises", "color": "#64b4e6"},
    "Precision": {"name": "Precision", "description": "Fine motor control exercises", "color": "#f0c864"},
    "Stretch": {"name": "Stretch", "description": "Flexibility exercises", "color": "#a8c99b"},
    "Strength": {"name": "Strength", "description": "Grip and strength exercises", "color": "#e8998d"},
    "Advanced": {"name": "Advanced", "description": "Challenging exercises", "color": "#c9a8d9"},
}

# Standard session mix: (difficulty, how many)
_STANDARD_MIX = ((1, 2), (2, 3), (3, 2), (4, 1))
_SHORT_MIX = ((1, 1), (2, 2), (3, 2))
_PROGRESSIVE_ORDER = (1, 1, 2, 2, 2, 3, 3, 4)


# --- GETTERS ---
def get_all_exercises() -> List[Exercise]:
    return list(_ENTRIES)


def get_exercise(exercise_id: str) -> Optional[Exercise]:
    return EXERCISES.get(exercise_id)


def get_by_category(category: str) -> List[Exercise]:
    return [e for e in _ENTRIES if e.category == category]


def get_by_difficulty(difficulty: int) -> List[Exercise]:
    return [e for e in _ENTRIES if e.difficulty == difficulty]


def get_by_type(exercise_type: str) -> List[Exercise]:
    return [e for e in _ENTRIES if e.type == exercise_type]


def shuffle(items: Iterable, rng: Optional[random.Random] = None) -> list:
    """Returns a shuffled copy. The input is never mutated."""
    rng = rng or random.Random()
    out = list(items)
    rng.shuffle(out)
    return out


# --- SESSION BUILDERS ---
def build_session(count: int = 8, rng: Optional[random.Random] = None) -> List[Exercise]:
    """
    Balanced session.
    >= 8: 2 easy, 3 medium, 2 hard, 1 advanced.
    >= 5: 1 easy, 2 medium, 2 hard.
    Otherwise a random variety.
    """
    rng = rng or random.Random()

    if count >= 8:
        mix = _STANDARD_MIX
    elif count >= 5:
        mix = _SHORT_MIX
    else:
        return shuffle(_ENTRIES, rng)[:count]

    selected = []
    for difficulty, take in mix:
        selected += shuffle(get_by_difficulty(difficulty), rng)[:take]
    return shuffle(selected, rng)[:count]


def build_category_session(category: str, count: int = 6, rng: Optional[random.Random] = None) -> List[Exercise]:
    pool = get_by_category(category)
    if not pool:
        return build_session(count, rng)
    return shuffle(pool, rng)[:count]


def build_type_session(exercise_type: str, count: int = 6, rng: Optional[random.Random] = None) -> List[Exercise]:
    pool = get_by_type(exercise_type)
    if not pool:
        return build_session(count, rng)
    return shuffle(pool, rng)[:count]


def build_progressive_session(count: int = 8, rng: Optional[random.Random] = None) -> List[Exercise]:
    """Easy to hard, no repeats. A difficulty with nothing left is skipped."""
    rng = rng or random.Random()
    session: List[Exercise] = []

    for difficulty in _PROGRESSIVE_ORDER[:count]:
        available = [e for e in get_by_difficulty(difficulty) if e not in session]
        if available:
            session.append(rng.choice(available))
    return session


def build_custom_session(exercise_ids: Sequence[str]) -> List[Exercise]:
    """Unknown ids are skipped."""
    return [EXERCISES[i] for i in exercise_ids if i in EXERCISES]
