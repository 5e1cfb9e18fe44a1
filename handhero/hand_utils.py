"""
HandHero Landmark Processing Utilities.
=======================================

Handles the spatial normalization of hand data.
Raw camera coordinates are useless for scoring because they depend on:
1. Where the hand is in the frame (Translation).
2. How close the hand is to the camera (Scale).

Every threshold in the engine is expressed as a fraction of the hand's own
length or width, so this module derives those two rulers per frame.
"""

import math
from numbers import Real
from typing import Any, Mapping

import numpy as np

from handhero.config import CONFIG, NUM_LANDMARKS
from handhero.core.errors import InvalidInputError
from handhero.core.types import HandFrame, Landmark, Point2D


def _point_to_xyz(point: Any, idx: int):
    # 1. Attribute access (MediaPipe NormalizedLandmark / Landmark dataclass)
    if hasattr(point, "x") and hasattr(point, "y"):
        return point.x, point.y, getattr(point, "z", 0.0) or 0.0
    # 2. Mapping ({"x": .., "y": .., "z": ..})
    if isinstance(point, Mapping):
        if "x" not in point or "y" not in point:
            raise InvalidInputError(f"Landmark {idx} is missing x/y")
        return point["x"], point["y"], point.get("z", 0.0) or 0.0
    # 3. Plain sequence (x, y[, z])
    try:
        values = list(point)
    except TypeError:
        raise InvalidInputError(f"Landmark {idx} is not a point: {point!r}") from None
    if len(values) == 2:
        return values[0], values[1], 0.0
    if len(values) == 3:
        return values[0], values[1], values[2]
    raise InvalidInputError(f"Landmark {idx} has {len(values)} components")


def to_coords(landmarks: Any) -> np.ndarray:
    """
    Converts any supported landmark container into a (21, 3) float matrix.

    Accepts a MediaPipe NormalizedLandmarkList (anything exposing `.landmark`),
    a list of point objects / dicts / tuples, or an (N, 2|3) numpy array.
    Short inputs are rejected, never padded.
    """
    if landmarks is None:
        raise InvalidInputError("No landmarks supplied")

    # MediaPipe Object -> landmark list
    if hasattr(landmarks, "landmark"):
        landmarks = landmarks.landmark

    if isinstance(landmarks, np.ndarray):
        if landmarks.ndim != 2 or landmarks.shape[1] not in (2, 3):
            raise InvalidInputError(f"Expected an (N, 2|3) array, got shape {landmarks.shape}")
        if landmarks.shape[0] < NUM_LANDMARKS:
            raise InvalidInputError(
                f"Expected {NUM_LANDMARKS} landmarks, got {landmarks.shape[0]}"
            )
        coords = np.zeros((NUM_LANDMARKS, 3), dtype=np.float64)
        try:
            coords[:, : landmarks.shape[1]] = landmarks[:NUM_LANDMARKS]
        except (TypeError, ValueError):
            raise InvalidInputError("Landmark array is not numeric") from None
    else:
        try:
            count = len(landmarks)
        except TypeError:
            raise InvalidInputError("Landmarks must be a sequence") from None
        if count < NUM_LANDMARKS:
            raise InvalidInputError(f"Expected {NUM_LANDMARKS} landmarks, got {count}")

        rows = []
        for idx in range(NUM_LANDMARKS):
            x, y, z = _point_to_xyz(landmarks[idx], idx)
            for value in (x, y, z):
                if isinstance(value, bool) or not isinstance(value, (Real, np.number)):
                    raise InvalidInputError(f"Landmark {idx} has a non-numeric coordinate")
            rows.append((x, y, z))
        coords = np.array(rows, dtype=np.float64)

    if not np.all(np.isfinite(coords)):
        raise InvalidInputError("Landmarks contain NaN or infinite coordinates")
    return coords


def distance(a: np.ndarray, b: np.ndarray) -> float:
    """3D Euclidean distance between two landmark rows."""
    return float(np.linalg.norm(a - b))


def distance_2d(a, b) -> float:
    return math.hypot(a[0] - b[0], a[1] - b[1])


def safe_ratio(numerator: float, denominator: float) -> float:
    """Division with the denominator clamped away from zero."""
    return numerator / max(denominator, CONFIG["MIN_FRAME_EXTENT"])


def compute_frame(landmarks: Any) -> HandFrame:
    """
    Derives the per-frame reference rulers.

    - hand_length: wrist (0) -> middle fingertip (12), 3D.
    - hand_width: index MCP (5) -> pinky MCP (17), 2D.
    - palm_center: mean of the wrist and the four finger bases.

    Both rulers are clamped to MIN_FRAME_EXTENT so a collapsed hand never
    divides by zero downstream.
    """
    coords = to_coords(landmarks)
    eps = CONFIG["MIN_FRAME_EXTENT"]

    wrist = coords[0]
    hand_length = max(distance(wrist, coords[12]), eps)
    hand_width = max(distance_2d(coords[5], coords[17]), eps)

    palm = coords[[0, 5, 9, 13, 17], :2].mean(axis=0)

    return HandFrame(
        wrist=Landmark(float(wrist[0]), float(wrist[1]), float(wrist[2])),
        hand_length=hand_length,
        hand_width=hand_width,
        palm_center=Point2D(float(palm[0]), float(palm[1])),
    )

