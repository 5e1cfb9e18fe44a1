"""
HandHero Boundary Construction (The Fence).
===========================================

Boundary lines are DYNAMIC: they are rebuilt every frame from the joints of
the exercise's TARGET fingers.

- GREEN line:      through the target PIP joints. A non-target tip above it
                   has intruded into the target's working zone.
- ACCEPTABLE line: through the target DIP joints.
- LOW line:        through the target MCP joints (used by the debug overlay).

"Above" follows screen coordinates: lower y = higher on screen.
"""
from typing import Iterable, List

import numpy as np

from handhero.config import CONFIG, FINGER_NODES
from handhero.core.types import Boundaries, BoundaryLevel, BoundaryLine, HandFrame, Point2D
from handhero.hand_utils import distance_2d

_TIERS = (
    (BoundaryLevel.GREEN, "pip"),
    (BoundaryLevel.ACCEPTABLE, "dip"),
    (BoundaryLevel.LOW, "mcp"),
)


def _point(row) -> Point2D:
    return Point2D(float(row[0]), float(row[1]))


def _xy(point):
    if hasattr(point, "x"):
        return float(point.x), float(point.y)
    return float(point[0]), float(point[1])


def boundary_fingers(target_fingers: Iterable[int]) -> List[int]:
    """Sorted, de-duplicated targets with the thumb removed."""
    return sorted({f for f in target_fingers if f != 0})


def boundary_for_finger(finger_idx: int, coords: np.ndarray, frame: HandFrame) -> Boundaries:
    """Three horizontal lines through one finger's PIP / DIP / MCP."""
    nodes = FINGER_NODES[finger_idx]
    extent = frame.hand_width * CONFIG["BOUNDARY_EXTENT"]

    lines = {}
    for level, joint in _TIERS:
        node = nodes[joint]
        x, y = float(coords[node][0]), float(coords[node][1])
        lines[level] = BoundaryLine(
            start=Point2D(x - extent, y),
            end=Point2D(x + extent, y),
            level=level,
            reference_node=node,
        )
    return Boundaries(
        green=lines[BoundaryLevel.GREEN],
        acceptable=lines[BoundaryLevel.ACCEPTABLE],
        low=lines[BoundaryLevel.LOW],
    )


def build_boundaries(target_fingers: Iterable[int], coords: np.ndarray, frame: HandFrame) -> Boundaries:
    """
    Builds the GREEN / ACCEPTABLE / LOW boundary triple for a target set.

    Args:
        target_fingers: finger indices 0-4. The thumb is always ignored here,
            it is scored by its own policy.
        coords: (21, 3) landmark matrix from `to_coords`.
        frame: the matching HandFrame.
    """
    fingers = boundary_fingers(target_fingers)

    # 1. No usable targets -> middle finger reference
    if not fingers:
        return boundary_for_finger(CONFIG["FALLBACK_FINGER"], coords, frame)

    # 2. Single target -> horizontal lines
    if len(fingers) == 1:
        return boundary_for_finger(fingers[0], coords, frame)

    # 3. Multiple targets -> connect the outermost targets joint-to-joint,
    # so the fence tilts with the hand.
    left_nodes = FINGER_NODES[fingers[0]]
    right_nodes = FINGER_NODES[fingers[-1]]

    lines = {}
    for level, joint in _TIERS:
        lines[level] = BoundaryLine(
            start=_point(coords[left_nodes[joint]]),
            end=_point(coords[right_nodes[joint]]),
            level=level,
        )
    return Boundaries(
        green=lines[BoundaryLevel.GREEN],
        acceptable=lines[BoundaryLevel.ACCEPTABLE],
        low=lines[BoundaryLevel.LOW],
    )


def y_on_line(x: float, line: BoundaryLine) -> float:
    start, end = line.start, line.end
    if abs(end.x - start.x) < CONFIG["VERTICAL_LINE_EPS"]:
        return (start.y + end.y) / 2
    slope = (end.y - start.y) / (end.x - start.x)
    return start.y + slope * (x - start.x)


def is_above_line(point, line: BoundaryLine) -> bool:
    """True when the point sits higher on screen (smaller y) than the line at its x."""
    x, y = _xy(point)
    return y < y_on_line(x, line)


def distance_to_line(point, line: BoundaryLine, hand_length: float) -> float:
    """Distance from a point to the line segment, in hand lengths."""
    px, py = _xy(point)
    sx, sy = line.start.x, line.start.y
    dx, dy = line.end.x - sx, line.end.y - sy

    len_sq = dx * dx + dy * dy
    if len_sq == 0:
        return distance_2d((px, py), (sx, sy)) / hand_length

    t = max(0.0, min(1.0, ((px - sx) * dx + (py - sy) * dy) / len_sq))
    nearest = (sx + t * dx, sy + t * dy)
    return distance_2d((px, py), nearest) / hand_length
