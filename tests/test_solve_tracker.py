# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""Unit tests for solve_tracker module."""

import os
import sys
import unittest

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from models import Category, Coord, Language, SolveKey, SolveRecord, Word
from solve_tracker import SolveStateTracker
from word_catalog import WordCatalog

from sample_catalog import make_catalog, make_collision_catalog


EGYPT = "Ancient Egypt"
PATH = [Coord(0, 0), Coord(1, 0), Coord(2, 0), Coord(2, 1),
        Coord(2, 2), Coord(1, 2), Coord(0, 2)]


def make_reordered_catalog():
    """EN and TR list the same four words in different orders."""
    words = [
        Word("NILE", {Language.EN: "NILE", Language.TR: "NİL"}),
        Word("PYRAMID", {Language.EN: "PYRAMID", Language.TR: "PİRAMİT"}),
        Word("SPHINX", {Language.EN: "SPHINX", Language.TR: "SFENKS"}),
        Word("MUMMY", {Language.EN: "MUMMY", Language.TR: "MUMYA"}),
    ]
    orders = {
        (Language.EN, EGYPT): ["NILE", "PYRAMID", "SPHINX", "MUMMY"],
        (Language.TR, EGYPT): ["MUMMY", "SPHINX", "NILE", "PYRAMID"],
    }
    category = Category(EGYPT, {Language.EN: EGYPT, Language.TR: "Antik Mısır"})
    return WordCatalog([category], {EGYPT: words}, orders)


class TestRecordSolved(unittest.TestCase):

    def setUp(self):
        self.tracker = SolveStateTracker(make_catalog())

    def test_record_and_query(self):
        self.assertFalse(self.tracker.is_solved(EGYPT, "PYRAMID"))
        self.assertTrue(self.tracker.record_solved(EGYPT, "PYRAMID", PATH))

        self.assertTrue(self.tracker.is_solved(EGYPT, "PYRAMID"))
        self.assertEqual(self.tracker.path_for(EGYPT, "PYRAMID"), PATH)

    def test_recording_twice_is_idempotent(self):
        self.tracker.record_solved(EGYPT, "PYRAMID", PATH)
        self.tracker.record_solved(EGYPT, "PYRAMID", PATH)

        self.assertEqual(self.tracker.solved_count(), 1)
        self.assertEqual(self.tracker.path_for(EGYPT, "PYRAMID"), PATH)

    def test_recording_again_replaces_path(self):
        other = list(reversed(PATH))
        self.tracker.record_solved(EGYPT, "PYRAMID", PATH)
        self.tracker.record_solved(EGYPT, "PİRAMİT", other)

        self.assertEqual(self.tracker.solved_count(), 1)
        self.assertEqual(self.tracker.path_for(EGYPT, "PYRAMID"), other)

    def test_turkish_solve_visible_in_english(self):
        """Solving PİRAMİT marks PYRAMID solved under the same base word."""
        self.tracker.record_solved(EGYPT, "PİRAMİT", PATH)

        self.assertTrue(self.tracker.is_solved(EGYPT, "PYRAMID"))
        self.assertTrue(self.tracker.is_solved("Antik Mısır", "piramit"))
        self.assertIn(0, self.tracker.solved_indices_for_category(EGYPT, Language.EN))
        self.assertEqual(self.tracker.records()[0].key, SolveKey(EGYPT, "PYRAMID"))

    def test_unknown_word_is_not_recorded(self):
        self.assertFalse(self.tracker.record_solved(EGYPT, "OBELISK", PATH))
        self.assertIsNone(self.tracker.resolve(EGYPT, "OBELISK"))
        self.assertEqual(self.tracker.solved_count(), 0)

    def test_word_from_another_category_is_not_resolved(self):
        self.assertIsNone(self.tracker.resolve(EGYPT, "CASTLE"))
        self.assertIsNotNone(self.tracker.resolve("Medieval Europe", "CASTLE"))

    def test_solved_count_per_category(self):
        self.tracker.record_solved(EGYPT, "NILE", PATH[:4])
        self.tracker.record_solved("Medieval Europe", "KALE", PATH[:4])

        self.assertEqual(self.tracker.solved_count(), 2)
        self.assertEqual(self.tracker.solved_count(EGYPT), 1)
        self.assertEqual(self.tracker.solved_count("Orta Çağ Avrupası"), 1)

    def test_reset_all(self):
        self.tracker.record_solved(EGYPT, "PYRAMID", PATH)
        self.tracker.record_solved(EGYPT, "NILE", PATH[:4])
        self.tracker.reset_all()

        self.assertFalse(self.tracker.is_solved(EGYPT, "PYRAMID"))
        self.assertEqual(self.tracker.solved_indices_for_category(EGYPT, Language.EN), set())
        self.assertIsNone(self.tracker.path_for(EGYPT, "PYRAMID"))


class TestSolvedIndices(unittest.TestCase):

    def test_indices_follow_each_language_order(self):
        tracker = SolveStateTracker(make_reordered_catalog())
        tracker.record_solved(EGYPT, "PİRAMİT", PATH)

        self.assertEqual(tracker.solved_indices_for_category(EGYPT, Language.TR), {3})
        self.assertEqual(tracker.solved_indices_for_category(EGYPT, Language.EN), {1})

    def test_unknown_category_has_no_indices(self):
        tracker = SolveStateTracker(make_catalog())
        self.assertEqual(tracker.solved_indices_for_category("Atlantis", Language.EN), set())

    def test_custom_resolver(self):
        tracker = SolveStateTracker(resolver=lambda category, word, language: word.lower())
        tracker.record_solved("any", "Word", [Coord(0, 0)])

        self.assertEqual(tracker.records()[0].base_word, "WORD")


class TestSharedSpellings(unittest.TestCase):

    def setUp(self):
        self.tracker = SolveStateTracker(make_collision_catalog())

    def test_turkish_kale_records_castle(self):
        self.assertTrue(self.tracker.record_solved("Garden", "KALE", PATH[:4], Language.TR))

        self.assertTrue(self.tracker.is_solved("Garden", "CASTLE"))
        self.assertFalse(self.tracker.is_solved("Garden", "KALE"))
        self.assertFalse(self.tracker.is_solved("Garden", "KALE", Language.EN))
        self.assertTrue(self.tracker.is_solved("Garden", "KALE", Language.TR))
        self.assertEqual(self.tracker.records()[0].base_word, "CASTLE")

    def test_english_kale_records_the_vegetable(self):
        self.tracker.record_solved("Garden", "KALE", PATH[:4], Language.EN)

        self.assertTrue(self.tracker.is_solved("Garden", "KARALAHANA", Language.TR))
        self.assertFalse(self.tracker.is_solved("Garden", "CASTLE"))
        self.assertEqual(
            self.tracker.solved_indices_for_category("Garden", Language.TR), {0}
        )
        self.assertEqual(
            self.tracker.solved_indices_for_category("Garden", Language.EN), {0}
        )

    def test_dotted_i_word_leaves_dotless_one_unsolved(self):
        self.tracker.record_solved("Garden", "KİR", PATH[:3], Language.TR)

        self.assertTrue(self.tracker.is_solved("Garden", "DIRT"))
        self.assertFalse(self.tracker.is_solved("Garden", "FIELD"))
        self.assertFalse(self.tracker.is_solved("Garden", "KIR", Language.TR))
        self.assertEqual(
            self.tracker.solved_indices_for_category("Garden", Language.TR), {3}
        )


class TestPersistence(unittest.TestCase):

    def test_to_data_shape(self):
        tracker = SolveStateTracker(make_catalog())
        tracker.record_solved(EGYPT, "NİL", PATH[:3])

        self.assertEqual(tracker.to_data(), [{
            'category': EGYPT,
            'baseWord': 'NILE',
            'path': [[0, 0], [1, 0], [2, 0]],
        }])

    def test_load_data_restores_records(self):
        source = SolveStateTracker(make_catalog())
        source.record_solved(EGYPT, "PYRAMID", PATH)

        target = SolveStateTracker(make_catalog())
        self.assertEqual(target.load_data(source.to_data()), 1)
        self.assertTrue(target.is_solved(EGYPT, "PİRAMİT"))
        self.assertEqual(target.path_for(EGYPT, "PYRAMID"), PATH)

    def test_load_data_skips_malformed_entries(self):
        tracker = SolveStateTracker(make_catalog())
        loaded = tracker.load_data([
            {'category': EGYPT, 'baseWord': 'NILE', 'path': [[0, 0]]},
            {'category': EGYPT},
            {'category': EGYPT, 'baseWord': 'SPHINX', 'path': [['x', 1]]},
            "not a record",
        ])

        self.assertEqual(loaded, 1)
        self.assertTrue(tracker.is_solved(EGYPT, "NILE"))
        self.assertFalse(tracker.is_solved(EGYPT, "SPHINX"))

    def test_load_records_last_duplicate_wins(self):
        tracker = SolveStateTracker(make_catalog())
        tracker.load_records([
            SolveRecord(EGYPT, "NILE", [Coord(0, 0)]),
            SolveRecord(EGYPT, "NILE", [Coord(5, 5)]),
            SolveRecord(EGYPT, "MUMMY", [Coord(1, 1)], solved=False),
        ])

        self.assertEqual(tracker.path_for(EGYPT, "NILE"), [Coord(5, 5)])
        self.assertFalse(tracker.is_solved(EGYPT, "MUMMY"))

    def test_records_returns_copies(self):
        tracker = SolveStateTracker(make_catalog())
        tracker.record_solved(EGYPT, "NILE", PATH[:4])
        tracker.records()[0].path.clear()

        self.assertEqual(len(tracker.path_for(EGYPT, "NILE")), 4)


if __name__ == "__main__":
    unittest.main()
