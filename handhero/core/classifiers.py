"""
HandHero Finger Classifiers.
============================

Three independent policies, one FingerResult per call:

1. TARGET finger     -> how well is it extended? (graded, 4 tiers + RED)
2. NON-TARGET finger -> did its tip cross into the target's zone? (violations only)
3. THUMB             -> own geometry; maximum leniency when it is not a target.

Philosophy: human logic to measure human accuracy. Non-target fingers get full
credit unless they intrude; we never measure their curl precisely.
"""
import numpy as np

from handhero.config import CONFIG, FINGER_NAMES, FINGER_NODES
from handhero.core.boundaries import is_above_line
from handhero.core.types import Boundaries, FingerResult, HandFrame, Severity, Zone
from handhero.hand_utils import distance, distance_2d, safe_ratio


def _check_finger(finger_idx: int) -> None:
    if finger_idx not in (1, 2, 3, 4):
        raise ValueError(f"Finger index must be 1-4 (thumb has its own policy), got {finger_idx}")


def extension_metrics(finger_idx: int, coords: np.ndarray, frame: HandFrame):
    """
    Returns (normalized_extension, extension_ratio) for a finger.

    extension: (MCP.y - TIP.y) / hand length. Positive = tip above base.
    ratio: tip-to-wrist / MCP-to-wrist. Above 1 = straight, not curled.
    """
    nodes = FINGER_NODES[finger_idx]
    tip, mcp, wrist = coords[nodes["tip"]], coords[nodes["mcp"]], coords[0]

    extension = (mcp[1] - tip[1]) / frame.hand_length
    ratio = safe_ratio(distance(tip, wrist), distance(mcp, wrist))
    return float(extension), ratio


def evaluate_target_finger(finger_idx: int, coords: np.ndarray, frame: HandFrame) -> FingerResult:
    """
    Checks whether a TARGET finger is properly extended.

    Tiers are evaluated in strict order and BOTH conditions of a tier must
    hold. A finger that clears the extension bar but not the ratio bar falls
    through to a lower tier.
    """
    _check_finger(finger_idx)
    extension, ratio = extension_metrics(finger_idx, coords, frame)

    if extension > CONFIG["TARGET_GREEN_EXTENSION"] and ratio > CONFIG["TARGET_GREEN_RATIO"]:
        zone, score, extended, detail = (
            Zone.GREEN, min(1.0, CONFIG["TARGET_GREEN_BASE"] + extension), True, "fully extended"
        )
    elif extension > CONFIG["TARGET_BLUE_EXTENSION"] and ratio > CONFIG["TARGET_BLUE_RATIO"]:
        zone, score, extended, detail = Zone.BLUE, CONFIG["TARGET_BLUE_SCORE"], True, "well extended"
    elif extension > CONFIG["TARGET_YELLOW_EXTENSION"] and ratio > CONFIG["TARGET_YELLOW_RATIO"]:
        zone, score, extended, detail = (
            Zone.YELLOW, CONFIG["TARGET_YELLOW_SCORE"], True, "partially extended"
        )
    elif extension > CONFIG["TARGET_MINIMAL_EXTENSION"]:
        zone, score, extended, detail = (
            Zone.YELLOW, CONFIG["TARGET_MINIMAL_SCORE"], False, "minimal extension"
        )
    else:
        zone, score, extended, detail = Zone.RED, CONFIG["TARGET_RED_SCORE"], False, "not extended"

    return FingerResult(
        finger_index=finger_idx,
        finger=FINGER_NAMES[finger_idx],
        zone=zone,
        score=float(score),
        is_target=True,
        extended=extended,
        passed=zone is not Zone.RED,
        detail=detail,
    )


def evaluate_non_target(
    finger_idx: int, coords: np.ndarray, boundaries: Boundaries, frame: HandFrame
) -> FingerResult:
    """Checks whether a NON-TARGET finger stayed out of the target's zone."""
    _check_finger(finger_idx)
    tip = coords[FINGER_NODES[finger_idx]["tip"]]

    common = dict(finger_index=finger_idx, finger=FINGER_NAMES[finger_idx], is_target=False)

    # Major violation: the finger is in the target zone
    if is_above_line(tip, boundaries.green):
        return FingerResult(
            zone=Zone.RED,
            score=CONFIG["NON_TARGET_VIOLATION_SCORE"],
            extended=True,
            passed=False,
            violation=True,
            severity=Severity.MAJOR,
            in_safe_zone=False,
            detail="finger extended into target zone",
            **common,
        )

    # Raised but acceptable. YELLOW is not a failure here.
    if is_above_line(tip, boundaries.acceptable):
        return FingerResult(
            zone=Zone.YELLOW,
            score=CONFIG["NON_TARGET_RAISED_SCORE"],
            detail="finger slightly raised but acceptable",
            **common,
        )

    return FingerResult(
        zone=Zone.GREEN,
        score=CONFIG["NON_TARGET_SAFE_SCORE"],
        curled=True,
        detail="in safe zone",
        **common,
    )


def evaluate_thumb(coords: np.ndarray, frame: HandFrame, is_target: bool) -> FingerResult:
    thumb_tip, thumb_mcp = coords[4], coords[2]
    index_mcp, wrist = coords[5], coords[0]

    if is_target:
        ratio = safe_ratio(distance(thumb_tip, wrist), distance(thumb_mcp, wrist))
        palm = (frame.palm_center.x, frame.palm_center.y)
        away = distance_2d(thumb_tip, palm) / frame.hand_width

        if ratio > CONFIG["THUMB_GREEN_RATIO"] and away > CONFIG["THUMB_GREEN_AWAY"]:
            zone, score, detail = Zone.GREEN, 1.0, "thumb fully extended"
        elif ratio > CONFIG["THUMB_BLUE_RATIO"] and away > CONFIG["THUMB_BLUE_AWAY"]:
            zone, score, detail = Zone.BLUE, CONFIG["THUMB_BLUE_SCORE"], "thumb well extended"
        elif ratio > CONFIG["THUMB_YELLOW_RATIO"]:
            zone, score, detail = Zone.YELLOW, CONFIG["THUMB_YELLOW_SCORE"], "thumb partially extended"
        else:
            zone, score, detail = Zone.RED, CONFIG["THUMB_RED_SCORE"], "thumb not extended"

        return FingerResult(
            finger_index=0,
            finger=FINGER_NAMES[0],
            zone=zone,
            score=float(score),
            is_target=True,
            extended=zone is not Zone.RED,
            passed=zone is not Zone.RED,
            detail=detail,
        )

    # Not a target: only flag extreme, unambiguous interference, and even
    # then it is never a failure or a violation.
    past_index = thumb_tip[0] < index_mcp[0] - frame.hand_width * CONFIG["THUMB_LATERAL_LIMIT"]
    far_reach = distance(thumb_tip, wrist) > frame.hand_length * CONFIG["THUMB_REACH_LIMIT"]

    if past_index and far_reach:
        return FingerResult(
            finger_index=0,
            finger=FINGER_NAMES[0],
            zone=Zone.YELLOW,
            score=CONFIG["THUMB_INTERFERENCE_SCORE"],
            is_target=False,
            extended=True,
            detail="thumb extended but acceptable",
        )

    return FingerResult(
        finger_index=0,
        finger=FINGER_NAMES[0],
        zone=Zone.GREEN,
        score=1.0,
        is_target=False,
        ignored=True,
        detail="thumb in safe zone (lenient)",
    )
