"""
Grid Generator

Embeds a word into a square letter grid as a self-avoiding walk:
- Consecutive letters sit in orthogonally adjacent cells
- No cell is used twice
- Every other cell is filled with a noise letter from the language's alphabet

Placement is a randomized search with a bounded number of attempts; a word
that cannot be placed yields a PlacementFailure instead of a grid.
"""

import logging
import random
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple, Union

from models import (
    Coord, Grid, Language, Placement, PlacementFailure, PlacementPath,
    DEFAULT_ALPHABETS, DEFAULT_GRID_SIZE, ORTHOGONAL_DIRECTIONS,
)
from validator import validate_placement


logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 300

# What to do when the random walk never completes
FAILURE_POLICY_SKIP = "skip"
FAILURE_POLICY_SERPENTINE = "serpentine"
FAILURE_POLICIES = [FAILURE_POLICY_SKIP, FAILURE_POLICY_SERPENTINE]

PlacementResult = Union[Placement, PlacementFailure]


@dataclass
class CachedGrid:
    """A generated grid remembered for one (word, language) pair."""
    word: str
    language: Language
    grid: Grid
    path: PlacementPath


def serpentine_path(length: int, size: int) -> PlacementPath:
    """
    Boustrophedon walk from the top-left corner.

    Always orthogonally connected, so it fits any word with
    length <= size * size.
    """
    path = []
    for row in range(size):
        cols = range(size) if row % 2 == 0 else range(size - 1, -1, -1)
        for col in cols:
            if len(path) == length:
                return path
            path.append(Coord(col, row))
    return path


class GridGenerator:
    """Generates letter grids with a word hidden along a connected path."""

    def __init__(
        self,
        size: int = DEFAULT_GRID_SIZE,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        rng: Optional[random.Random] = None,
        alphabets: Optional[Dict[Language, str]] = None,
        on_placement_failure: str = FAILURE_POLICY_SKIP,
    ):
        """
        Initialize generator.

        Args:
            size: Grid edge length
            max_attempts: Retries of the full start-cell sweep before giving up
            rng: Random source (unseeded by default)
            alphabets: Noise alphabet per language
            on_placement_failure: 'skip' or 'serpentine'
        """
        if size < 1:
            raise ValueError(f"Grid size must be positive, got {size}")
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be positive, got {max_attempts}")
        if on_placement_failure not in FAILURE_POLICIES:
            raise ValueError(
                f"Unknown placement failure policy '{on_placement_failure}'. "
                f"Must be one of: {FAILURE_POLICIES}"
            )

        self.size = size
        self.max_attempts = max_attempts
        self.rng = rng or random.Random()
        self.alphabets = dict(DEFAULT_ALPHABETS)
        if alphabets:
            self.alphabets.update(alphabets)
        self.on_placement_failure = on_placement_failure
        self._cache: Dict[Tuple[str, Language], CachedGrid] = {}

    def generate(
        self,
        word: str,
        alphabet: str,
        size: Optional[int] = None
    ) -> PlacementResult:
        """
        Embed a word in a fresh grid.

        Args:
            word: Uppercase-normalized target word
            alphabet: Characters used for noise cells
            size: Grid edge length (defaults to the generator's size)

        Returns:
            Placement(grid, path) or PlacementFailure
        """
        size = size or self.size
        if not word:
            raise ValueError("Cannot place an empty word")
        if not alphabet:
            raise ValueError("Noise alphabet must not be empty")

        if len(word) > size * size:
            return PlacementFailure(
                word=word, size=size, attempts=0,
                reason=f"word is longer than the {size * size} available cells",
            )

        path = self._find_path(len(word), size)
        if path is None:
            if self.on_placement_failure == FAILURE_POLICY_SERPENTINE:
                logger.info(
                    f"Random walk failed for '{word}', using serpentine placement"
                )
                path = serpentine_path(len(word), size)
            else:
                failure = PlacementFailure(
                    word=word, size=size, attempts=self.max_attempts
                )
                logger.warning(str(failure))
                return failure

        grid = Grid(size=size)
        for letter, coord in zip(word, path):
            grid.set_letter(coord, letter)

        on_path = set(path)
        for cell in grid.iter_cells():
            if cell.coord not in on_path:
                cell.letter = self.rng.choice(alphabet)

        logger.debug(f"Placed '{word}' along {[tuple(c) for c in path]}")
        return Placement(grid=grid, path=path)

    def _find_path(self, length: int, size: int) -> Optional[PlacementPath]:
        """Try every start cell in shuffled order, up to max_attempts sweeps."""
        starts = [Coord(col, row) for row in range(size) for col in range(size)]

        for attempt in range(self.max_attempts):
            self.rng.shuffle(starts)
            for start in starts:
                path = self._grow_path(start, length, size)
                if path is not None:
                    if attempt:
                        logger.debug(f"Path found on attempt {attempt + 1}")
                    return path
        return None

    def _grow_path(
        self,
        start: Coord,
        length: int,
        size: int
    ) -> Optional[PlacementPath]:
        """Extend a walk from start, taking the first free neighbour in random order."""
        path = [start]
        visited = {start}

        while len(path) < length:
            current = path[-1]
            directions = list(ORTHOGONAL_DIRECTIONS)
            self.rng.shuffle(directions)

            for dc, dr in directions:
                nxt = Coord(current.col + dc, current.row + dr)
                if 0 <= nxt.col < size and 0 <= nxt.row < size and nxt not in visited:
                    path.append(nxt)
                    visited.add(nxt)
                    break
            else:
                return None

        return path

    def alphabet_for(self, language: Language) -> str:
        return self.alphabets.get(language, DEFAULT_ALPHABETS[Language.EN])

    def grid_for(self, word: str, language: Language) -> PlacementResult:
        """
        Get the grid for a word in a language, generating it on first use.

        Failures are not cached, so a later call retries the placement.
        """
        key = (word, language)
        cached = self._cache.get(key)
        if cached is not None:
            return Placement(grid=cached.grid, path=cached.path)

        result = self.generate(word, self.alphabet_for(language))
        if isinstance(result, Placement):
            self._cache[key] = CachedGrid(
                word=word, language=language, grid=result.grid, path=result.path
            )
        return result

    def is_cached(self, word: str, language: Language) -> bool:
        return (word, language) in self._cache

    def cached_entries(self) -> List[CachedGrid]:
        return list(self._cache.values())

    def seed_cache(self, entries: List[CachedGrid]) -> int:
        """
        Restore previously generated grids.

        Entries that no longer hold their word along a valid path (or were
        built for another grid size) are dropped and will be regenerated.

        Returns:
            Number of entries accepted
        """
        accepted = 0
        for entry in entries:
            if entry.grid.size != self.size:
                logger.info(
                    f"Discarding cached grid for '{entry.word}': size "
                    f"{entry.grid.size} != {self.size}"
                )
                continue
            result = validate_placement(
                entry.grid, entry.word, entry.path,
                self.alphabet_for(entry.language),
            )
            if not result.valid:
                logger.warning(
                    f"Discarding cached grid for '{entry.word}': "
                    f"{'; '.join(result.errors)}"
                )
                continue
            entry.grid.clear_solved()
            self._cache[(entry.word, entry.language)] = entry
            accepted += 1
        logger.debug(f"Seeded {accepted}/{len(entries)} cached grids")
        return accepted

    def forget(self, word: str, language: Language):
        self._cache.pop((word, language), None)

    def clear_cache(self):
        self._cache.clear()
