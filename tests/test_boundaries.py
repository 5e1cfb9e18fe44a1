import math
import unittest

from handhero.core.boundaries import (
    boundary_fingers,
    build_boundaries,
    distance_to_line,
    is_above_line,
    y_on_line,
)
from handhero.core.types import BoundaryLevel, BoundaryLine, Point2D
from handhero.evaluator import debug_get_boundaries
from handhero.hand_utils import compute_frame, to_coords
from hand_fixtures import index_up_hand, peace_hand, spread_hand


def _line(x1, y1, x2, y2, level=BoundaryLevel.GREEN):
    return BoundaryLine(Point2D(x1, y1), Point2D(x2, y2), level)


class TestBuildBoundaries(unittest.TestCase):
    def setUp(self):
        self.hand = index_up_hand()
        self.coords = to_coords(self.hand)
        self.frame = compute_frame(self.hand)

    def test_single_target_is_horizontal(self):
        """One target -> three flat lines through its PIP / DIP / MCP."""
        b = build_boundaries([1], self.coords, self.frame)

        for line, y, node in ((b.green, 0.54, 6), (b.acceptable, 0.50, 7), (b.low, 0.60, 5)):
            self.assertAlmostEqual(line.start.y, y)
            self.assertAlmostEqual(line.end.y, y)
            self.assertEqual(line.reference_node, node)

        self.assertEqual(b.green.level, BoundaryLevel.GREEN)
        self.assertEqual(b.acceptable.level, BoundaryLevel.ACCEPTABLE)
        self.assertEqual(b.low.level, BoundaryLevel.LOW)

    def test_single_target_extent(self):
        b = build_boundaries([1], self.coords, self.frame)
        reach = 1.5 * math.hypot(0.18, 0.03)
        self.assertAlmostEqual(b.green.start.x, 0.44 - reach)
        self.assertAlmostEqual(b.green.end.x, 0.44 + reach)

    def test_thumb_is_removed_first(self):
        self.assertEqual(
            build_boundaries([0, 1], self.coords, self.frame),
            build_boundaries([1], self.coords, self.frame),
        )
        self.assertEqual(boundary_fingers([4, 0, 1, 1]), [1, 4])

    def test_no_targets_fall_back_to_middle(self):
        for targets in ([], [0]):
            b = build_boundaries(targets, self.coords, self.frame)
            self.assertEqual(b.green.reference_node, 10)
            self.assertEqual(b.acceptable.reference_node, 11)

    def test_multi_target_connects_outermost(self):
        """[1, 3] and [3, 1, 2] both span index -> ring."""
        hand = spread_hand()
        coords, frame = to_coords(hand), compute_frame(hand)

        b = build_boundaries([3, 1, 2], coords, frame)
        self.assertEqual(b, build_boundaries([1, 3], coords, frame))

        self.assertAlmostEqual(b.green.start.x, coords[6][0])
        self.assertAlmostEqual(b.green.start.y, coords[6][1])
        self.assertAlmostEqual(b.green.end.x, coords[14][0])
        self.assertAlmostEqual(b.green.end.y, coords[14][1])
        self.assertAlmostEqual(b.low.end.y, coords[13][1])
        self.assertIsNone(b.green.reference_node)

    def test_multi_target_tilts_with_hand(self):
        hand = peace_hand()
        b = build_boundaries([1, 2], to_coords(hand), compute_frame(hand))
        self.assertNotAlmostEqual(b.green.start.y, b.green.end.y)

    def test_debug_accessor_matches(self):
        self.assertEqual(
            debug_get_boundaries(self.hand, [1]),
            build_boundaries([1], self.coords, self.frame),
        )

    def test_boundaries_iterate_in_tier_order(self):
        b = build_boundaries([1], self.coords, self.frame)
        self.assertEqual([line.level for line in b],
                         [BoundaryLevel.GREEN, BoundaryLevel.ACCEPTABLE, BoundaryLevel.LOW])


class TestLineGeometry(unittest.TestCase):
    def test_interpolation(self):
        line = _line(0.0, 0.0, 1.0, 1.0)
        self.assertAlmostEqual(y_on_line(0.25, line), 0.25)
        self.assertAlmostEqual(y_on_line(2.0, line), 2.0)

    def test_vertical_line_uses_average_y(self):
        line = _line(0.5, 0.2, 0.50005, 0.6)
        self.assertAlmostEqual(y_on_line(0.9, line), 0.4)

    def test_above_is_smaller_y(self):
        line = _line(0.0, 0.5, 1.0, 0.5)
        self.assertTrue(is_above_line(Point2D(0.3, 0.4), line))
        self.assertFalse(is_above_line(Point2D(0.3, 0.6), line))
        self.assertFalse(is_above_line((0.3, 0.5), line))  # on the line is not above

    def test_distance_to_line(self):
        line = _line(0.0, 0.5, 1.0, 0.5)
        self.assertAlmostEqual(distance_to_line((0.5, 0.4), line, 0.5), 0.2)
        # Past the segment end -> distance to the endpoint
        self.assertAlmostEqual(distance_to_line((2.0, 0.5), line, 1.0), 1.0)

    def test_distance_to_degenerate_line(self):
        line = _line(0.5, 0.5, 0.5, 0.5)
        self.assertAlmostEqual(distance_to_line(Point2D(0.5, 0.8), line, 1.0), 0.3)


if __name__ == '__main__':
    unittest.main()
