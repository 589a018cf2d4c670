# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
Scoreboard for the word trail game.

Tracks points earned from solved words, points spent on hints, which hints
were used for each word, and which categories the player can afford to
unlock.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Set

from models import SolveKey


logger = logging.getLogger(__name__)

POINTS_PER_WORD = 100
HINT_COST = 50
SECOND_HINT_COST = 100
MAX_HINT_LEVEL = 2

DEFAULT_CATEGORY_PRICES = {
    "Ancient Egypt": 0,
    "Medieval Europe": 0,
    "Renaissance": 1000,
    "Industrial Revolution": 2000,
    "Ancient Greece": 3000,
}


@dataclass
class Scoreboard:
    """
    Points and hint bookkeeping.

    Attributes:
        points: Current balance
        points_per_word: Reward for a newly solved word
        hint_costs: Cost per hint level
        category_prices: Points needed to unlock each category
        hints_used: Hint levels used per (category, base word)
        on_points_changed: Optional callback receiving the new balance

    Usage:
        board = Scoreboard()
        board.award_solve()
        if board.can_use_hint(1):
            board.use_hint(key, 1)
    """
    points: int = 0
    points_per_word: int = POINTS_PER_WORD
    hint_costs: Dict[int, int] = field(default_factory=lambda: {
        1: HINT_COST,
        2: SECOND_HINT_COST,
    })
    category_prices: Dict[str, int] = field(
        default_factory=lambda: dict(DEFAULT_CATEGORY_PRICES)
    )
    hints_used: Dict[SolveKey, Set[int]] = field(default_factory=dict)
    on_points_changed: Optional[Callable[[int], None]] = None

    def award_solve(self) -> int:
        """Credit the reward for one newly solved word."""
        self._set_points(self.points + self.points_per_word)
        return self.points_per_word

    def can_afford(self, cost: int) -> bool:
        return self.points >= cost

    def spend(self, cost: int) -> bool:
        """Deduct points if the balance covers them."""
        if not self.can_afford(cost):
            return False
        self._set_points(self.points - cost)
        return True

    def set_points(self, points: int):
        self._set_points(points)

    def _set_points(self, points: int):
        self.points = points
        if self.on_points_changed:
            self.on_points_changed(points)

    def hint_cost(self, level: int) -> int:
        return self.hint_costs.get(level, self.hint_costs.get(MAX_HINT_LEVEL, 0))

    def can_use_hint(self, level: int) -> bool:
        return self.can_afford(self.hint_cost(level))

    def hint_level(self, key: SolveKey) -> int:
        """Number of hint levels already used for a word."""
        return len(self.hints_used.get(key, ()))

    def has_used_hint(self, key: SolveKey, level: int) -> bool:
        return level in self.hints_used.get(key, ())

    def is_hint_available(self, key: SolveKey, level: int) -> bool:
        """Hints unlock in order: level 1 first, level 2 only after it."""
        if level < 1 or level > MAX_HINT_LEVEL:
            return False
        return self.hint_level(key) == level - 1

    def use_hint(self, key: SolveKey, level: int) -> bool:
        """
        Charge for a hint and remember it was used.

        Returns:
            False if the player cannot afford it
        """
        cost = self.hint_cost(level)
        if not self.spend(cost):
            logger.info(f"Cannot afford hint level {level} ({cost} points)")
            return False
        self.hints_used.setdefault(key, set()).add(level)
        logger.debug(
            f"Used hint level {level} for {key.base_word}, deducted {cost} points"
        )
        return True

    def category_price(self, category: str) -> int:
        return self.category_prices.get(category, 0)

    def is_category_unlocked(self, category: str) -> bool:
        return self.points >= self.category_price(category)

    def reset(self):
        self.hints_used.clear()
        self._set_points(0)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'points': self.points,
            'hints': [
                {
                    'category': key.category,
                    'baseWord': key.base_word,
                    'levels': sorted(levels),
                }
                for key, levels in self.hints_used.items() if levels
            ],
        }

    def load_dict(self, data: Dict[str, Any]):
        """Restore balance and hint usage; unknown fields are ignored."""
        self.points = int(data.get('points', self.points) or 0)
        for entry in data.get('hints') or []:
            try:
                key = SolveKey(str(entry['category']), str(entry['baseWord']))
                levels = [int(level) for level in entry.get('levels', [])]
                self.hints_used.setdefault(key, set()).update(levels)
            except (KeyError, TypeError, ValueError) as e:
                logger.warning(f"Skipping malformed hint entry {entry!r}: {e}")
