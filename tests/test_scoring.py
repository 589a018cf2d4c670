# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""Unit tests for scoring module."""

import os
import sys
import unittest

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from models import SolveKey
from scoring import Scoreboard, HINT_COST, POINTS_PER_WORD, SECOND_HINT_COST


KEY = SolveKey("Ancient Egypt", "PYRAMID")


class TestScoreboard(unittest.TestCase):

    def test_award_solve(self):
        changes = []
        board = Scoreboard(on_points_changed=changes.append)
        board.award_solve()
        board.award_solve()

        self.assertEqual(board.points, 2 * POINTS_PER_WORD)
        self.assertEqual(changes, [POINTS_PER_WORD, 2 * POINTS_PER_WORD])

    def test_spend_requires_balance(self):
        board = Scoreboard(points=40)
        self.assertFalse(board.spend(50))
        self.assertEqual(board.points, 40)
        self.assertTrue(board.spend(40))
        self.assertEqual(board.points, 0)

    def test_hints_unlock_in_order(self):
        board = Scoreboard(points=1000)
        self.assertTrue(board.is_hint_available(KEY, 1))
        self.assertFalse(board.is_hint_available(KEY, 2))

        board.use_hint(KEY, 1)
        self.assertTrue(board.is_hint_available(KEY, 2))
        self.assertFalse(board.is_hint_available(KEY, 3))

        board.use_hint(KEY, 2)
        self.assertEqual(board.hint_level(KEY), 2)
        self.assertEqual(board.points, 1000 - HINT_COST - SECOND_HINT_COST)

    def test_unaffordable_hint_not_recorded(self):
        board = Scoreboard(points=10)
        self.assertFalse(board.can_use_hint(1))
        self.assertFalse(board.use_hint(KEY, 1))
        self.assertFalse(board.has_used_hint(KEY, 1))
        self.assertEqual(board.points, 10)

    def test_category_unlock(self):
        board = Scoreboard(points=999)
        self.assertTrue(board.is_category_unlocked("Ancient Egypt"))
        self.assertFalse(board.is_category_unlocked("Renaissance"))
        board.award_solve()
        self.assertTrue(board.is_category_unlocked("Renaissance"))
        self.assertTrue(board.is_category_unlocked("Unpriced Era"))

    def test_reset(self):
        board = Scoreboard(points=500)
        board.use_hint(KEY, 1)
        board.reset()

        self.assertEqual(board.points, 0)
        self.assertEqual(board.hint_level(KEY), 0)

    def test_dict_round_trip(self):
        board = Scoreboard(points=300)
        board.use_hint(KEY, 1)

        data = board.to_dict()
        self.assertEqual(data['points'], 250)
        self.assertEqual(data['hints'], [
            {'category': 'Ancient Egypt', 'baseWord': 'PYRAMID', 'levels': [1]},
        ])

        restored = Scoreboard()
        restored.load_dict(data)
        self.assertEqual(restored.points, 250)
        self.assertTrue(restored.has_used_hint(KEY, 1))

    def test_load_dict_skips_bad_hint_entries(self):
        board = Scoreboard()
        board.load_dict({
            'points': 80,
            'hints': [{'category': 'X'}, {'category': 'X', 'baseWord': 'Y', 'levels': [2]}],
            'extra': True,
        })

        self.assertEqual(board.points, 80)
        self.assertTrue(board.has_used_hint(SolveKey('X', 'Y'), 2))


if __name__ == "__main__":
    unittest.main()
