import unittest

import numpy as np

from handhero.catalog import get_all_exercises, get_exercise
from handhero.config import CONFIG
from handhero.core.errors import InvalidInputError, UnknownExerciseError
from handhero.core.types import ExerciseDescriptor, ExerciseType, Severity, Zone
from handhero.evaluator import (
    evaluate,
    get_tip_node,
    is_valid_fist,
    normalize_exercise,
    zone_from_score,
)
from hand_fixtures import (
    ALL_POSES,
    MockHand,
    build_points,
    extended,
    build_hand,
    fist_hand,
    index_up_hand,
    pinch_hand,
    spread_hand,
)

ALL_TYPES = [
    {"type": "isolation", "targetFingers": [1]},
    {"type": "pinch", "pinchPair": [4, 8]},
    {"type": "spread"},
    {"type": "fist"},
    {"type": "flat"},
]


class TestDispatch(unittest.TestCase):
    def test_dispatches_by_type(self):
        for exercise in ALL_TYPES:
            r = evaluate(spread_hand(), exercise)
            self.assertIsNone(r.error)
            self.assertEqual(r.exercise_type, ExerciseType(exercise["type"]))

    def test_descriptor_shapes(self):
        """Dataclass, camelCase dict, snake_case dict and catalog entry agree."""
        hand = index_up_hand()
        results = [
            evaluate(hand, ExerciseDescriptor("isolation", (1,))),
            evaluate(hand, {"type": "isolation", "targetFingers": [1]}),
            evaluate(hand, {"type": "isolation", "target_fingers": [1]}),
            evaluate(hand, get_exercise("pointer")),
        ]
        for r in results[1:]:
            self.assertEqual(r, results[0])

    def test_type_label_is_case_insensitive(self):
        self.assertIsNone(evaluate(fist_hand(), {"type": " FIST "}).error)

    def test_pinch_default_pair(self):
        r = evaluate(pinch_hand(), {"type": "pinch"})
        self.assertEqual(r.zone, Zone.GREEN)
        self.assertAlmostEqual(r.score, 1.0)

    def test_numpy_descriptor_values(self):
        """numpy integer targets / pinch nodes behave like plain ints."""
        hand = index_up_hand()
        as_list = evaluate(hand, {"type": "isolation", "targetFingers": [1, 2]})
        as_array = evaluate(hand, {"type": "isolation", "targetFingers": np.array([1, 2])})
        self.assertIsNone(as_array.error)
        self.assertEqual(as_array, as_list)

        pinch = evaluate(pinch_hand(), ExerciseDescriptor("pinch", (), np.array([4, 8])))
        self.assertIsNone(pinch.error)
        self.assertEqual(pinch.metrics["pinchPair"], [4, 8])

    def test_mediapipe_wrapper(self):
        r = evaluate(MockHand(index_up_hand()), {"type": "isolation", "targetFingers": [1]})
        self.assertTrue(r.passed)


class TestErrors(unittest.TestCase):
    def test_short_landmarks_fail_every_type(self):
        short = build_points()[:20]
        for exercise in ALL_TYPES:
            with self.assertLogs(level="DEBUG"):
                r = evaluate(short, exercise)
            self.assertTrue(r.is_error)
            self.assertEqual(r.error_code, "invalid_input")
            self.assertFalse(r.passed)
            self.assertEqual(r.score, 0)
            self.assertEqual(r.zone, Zone.RED)

    def test_landmarks_checked_before_exercise(self):
        with self.assertLogs(level="DEBUG"):
            r = evaluate(None, {"type": "wave"})
        self.assertEqual(r.error_code, "invalid_input")

    def test_unknown_type(self):
        for exercise in ({"type": "wave"}, {"type": None}, {}, None, 42):
            with self.assertLogs(level="WARNING"):
                r = evaluate(fist_hand(), exercise)
            self.assertEqual(r.error_code, "unknown_exercise")
            self.assertFalse(r.passed)

    def test_out_of_range_descriptor(self):
        bad = [
            {"type": "isolation", "targetFingers": [5]},
            {"type": "isolation", "targetFingers": [-1]},
            {"type": "isolation", "targetFingers": ["1"]},
            {"type": "isolation", "targetFingers": 1},
            {"type": "pinch", "pinchPair": [4, 9]},
            {"type": "pinch", "pinchPair": [4]},
            {"type": "pinch", "pinchPair": 4},
        ]
        for exercise in bad:
            with self.assertLogs(level="DEBUG"):
                r = evaluate(fist_hand(), exercise)
            self.assertEqual(r.error_code, "invalid_input", exercise)

    def test_malformed_dataclass_descriptor(self):
        """Non-sequence fields on the dataclass come back as results, never raise."""
        bad = [
            ExerciseDescriptor("isolation", 1),
            ExerciseDescriptor("isolation", "12"),
            ExerciseDescriptor("pinch", (), 4),
            ExerciseDescriptor("pinch", (), (4, 9)),
        ]
        for exercise in bad:
            with self.assertLogs(level="DEBUG"):
                r = evaluate(index_up_hand(), exercise)
            self.assertEqual(r.error_code, "invalid_input", exercise)
            self.assertFalse(r.passed)

    def test_none_targets_mean_no_targets(self):
        r = evaluate(index_up_hand(), ExerciseDescriptor("isolation", None))
        self.assertIsNone(r.error)
        self.assertEqual(r.score, 0.0)
        self.assertFalse(r.passed)

    def test_bad_landmarks_log_quietly(self):
        """Rejected frames log at DEBUG; only unknown exercises warn."""
        with self.assertLogs(level="DEBUG") as logs:
            evaluate(build_points()[:20], {"type": "fist"})
        self.assertEqual([rec.levelname for rec in logs.records], ["DEBUG"])

        with self.assertLogs(level="DEBUG") as logs:
            evaluate(fist_hand(), {"type": "wave"})
        self.assertEqual([rec.levelname for rec in logs.records], ["WARNING"])

    def test_normalize_raises(self):
        with self.assertRaises(UnknownExerciseError):
            normalize_exercise({"type": "wave"})
        with self.assertRaises(InvalidInputError):
            normalize_exercise(ExerciseDescriptor("isolation", (7,)))

    def test_error_to_dict(self):
        with self.assertLogs(level="DEBUG"):
            d = evaluate([], {"type": "fist"}).to_dict()
        self.assertEqual(set(d), {"error", "errorCode", "passed", "score", "zone"})
        self.assertEqual(d["zone"], "RED")
        self.assertFalse(d["passed"])


class TestHelpers(unittest.TestCase):
    def test_is_valid_fist(self):
        self.assertTrue(is_valid_fist(fist_hand()))
        self.assertFalse(is_valid_fist(spread_hand()))
        self.assertFalse(is_valid_fist(build_points()[:10]))
        self.assertFalse(is_valid_fist(None))

    def test_zone_from_score(self):
        self.assertEqual(zone_from_score(0.85), Zone.GREEN)
        self.assertEqual(zone_from_score(0.65), Zone.BLUE)
        self.assertEqual(zone_from_score(0.40), Zone.YELLOW)
        self.assertEqual(zone_from_score(0.39), Zone.RED)

    def test_get_tip_node(self):
        self.assertEqual([get_tip_node(i) for i in range(5)], [4, 8, 12, 16, 20])
        self.assertEqual(get_tip_node(9), 8)


class TestProperties(unittest.TestCase):
    def test_scores_bounded_for_every_pose_and_exercise(self):
        for pose_name, pose in ALL_POSES.items():
            hand = pose()
            for exercise in get_all_exercises():
                r = evaluate(hand, exercise)
                self.assertIsNone(r.error, (pose_name, exercise.id))
                self.assertGreaterEqual(r.score, 0.0)
                self.assertLessEqual(r.score, 1.0)
                self.assertIn(r.zone, list(Zone))
                for f in r.fingers:
                    self.assertGreaterEqual(f.score, 0.0)
                    self.assertLessEqual(f.score, 1.0)

    def test_zone_scales_are_monotonic(self):
        scales = [CONFIG["ISOLATION_ZONES"], CONFIG["SPREAD_ZONES"], CONFIG["FLAT_ZONES"], CONFIG["FIST_ZONES"]]
        for cuts in scales:
            ranks = [Zone.from_score(s, cuts).rank for s in np.linspace(0.0, 1.0, 201)]
            self.assertEqual(ranks, sorted(ranks))

    def test_isolation_idempotent(self):
        hand = build_hand(fingers={1: extended(1), 2: extended(2)})
        exercise = {"type": "isolation", "targetFingers": [1]}
        self.assertEqual(evaluate(hand, exercise), evaluate(hand, exercise))

    def test_safe_non_targets_never_violate(self):
        """Curled non-targets sit below every GREEN line they are tested against."""
        for exercise in get_all_exercises():
            if exercise.type != "isolation":
                continue
            r = evaluate(fist_hand(), exercise)
            self.assertEqual(r.violations, (), exercise.id)

    def test_non_target_thumb_never_major(self):
        for pose in ALL_POSES.values():
            for targets in ([1], [1, 2], [2, 3, 4]):
                r = evaluate(pose(), {"type": "isolation", "targetFingers": targets})
                self.assertNotEqual(r.thumb.severity, Severity.MAJOR)

    def test_result_is_json_friendly(self):
        d = evaluate(index_up_hand(), get_exercise("pointer")).to_dict()
        self.assertEqual(d["type"], "isolation")
        self.assertEqual(len(d["fingerResults"]), 5)
        self.assertEqual(d["fingerResults"][1]["finger"], "index")
        self.assertIn("pass", d["fingerResults"][1])


if __name__ == '__main__':
    unittest.main()
