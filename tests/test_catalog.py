import random
import unittest
from collections import Counter

from handhero import catalog
from handhero.core.types import ExerciseDescriptor, ExerciseType


class TestCatalog(unittest.TestCase):
    def setUp(self):
        """Seeded RNG so every session below is reproducible."""
        self.rng = random.Random(1234)

    def test_library_contents(self):
        exercises = catalog.get_all_exercises()
        self.assertEqual(len(exercises), 18)
        self.assertEqual(len({e.id for e in exercises}), 18)
        for e in exercises:
            self.assertIn(e.category, catalog.CATEGORIES)
            self.assertIn(e.difficulty, (1, 2, 3, 4))
            self.assertIsNotNone(ExerciseType.from_label(e.type))

    def test_descriptor(self):
        d = catalog.get_exercise("rock_on").descriptor()
        self.assertEqual(d, ExerciseDescriptor("isolation", (1, 4), None))
        self.assertEqual(catalog.get_exercise("thumb_to_ring").descriptor().pinch_pair, (4, 16))

    def test_lookups(self):
        self.assertIsNone(catalog.get_exercise("jazz_hands"))
        self.assertEqual(len(catalog.get_by_type("pinch")), 4)
        self.assertEqual(len(catalog.get_by_category("Stretch")), 2)
        self.assertEqual({e.id for e in catalog.get_by_difficulty(4)}, {"ring_finger_lift", "rock_on"})

    def test_shuffle_does_not_mutate(self):
        items = list(range(10))
        out = catalog.shuffle(items, self.rng)
        self.assertEqual(items, list(range(10)))
        self.assertEqual(sorted(out), items)

    def test_standard_session_mix(self):
        """8+: 2 easy, 3 medium, 2 hard, 1 advanced."""
        session = catalog.build_session(8, self.rng)
        self.assertEqual(len(session), 8)
        self.assertEqual(Counter(e.difficulty for e in session), {1: 2, 2: 3, 3: 2, 4: 1})

    def test_short_session_mix(self):
        session = catalog.build_session(5, self.rng)
        self.assertEqual(Counter(e.difficulty for e in session), {1: 1, 2: 2, 3: 2})

    def test_mini_session(self):
        session = catalog.build_session(3, self.rng)
        self.assertEqual(len(session), 3)
        self.assertEqual(len({e.id for e in session}), 3)

    def test_sessions_are_reproducible(self):
        a = catalog.build_session(8, random.Random(7))
        b = catalog.build_session(8, random.Random(7))
        self.assertEqual(a, b)

    def test_category_and_type_sessions(self):
        self.assertTrue(all(e.category == "Precision" for e in catalog.build_category_session("Precision", 6, self.rng)))
        self.assertEqual(len(catalog.build_type_session("pinch", 6, self.rng)), 4)
        self.assertEqual(len(catalog.build_type_session("flat", 6, self.rng)), 1)

    def test_unknown_keys_fall_back(self):
        self.assertTrue(catalog.build_category_session("Juggling", 6, self.rng))
        self.assertTrue(catalog.build_type_session("wave", 6, self.rng))

    def test_progressive_session(self):
        session = catalog.build_progressive_session(8, self.rng)
        self.assertEqual([e.difficulty for e in session], [1, 1, 2, 2, 2, 3, 3, 4])
        self.assertEqual(len({e.id for e in session}), 8)

        self.assertEqual(len(catalog.build_progressive_session(3, self.rng)), 3)

    def test_custom_session_skips_unknown(self):
        session = catalog.build_custom_session(["pointer", "nope", "fist"])
        self.assertEqual([e.id for e in session], ["pointer", "fist"])


if __name__ == '__main__':
    unittest.main()
