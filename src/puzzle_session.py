# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
Puzzle session orchestrating one player's game.

Workflow:
1. Pick a category and a word index in the current language
2. Fetch (or generate) the word's grid
3. Feed gesture events to the selection controller
4. Compare the candidate with the target word
5. Record solves, mark solved cells, award points and autosave
"""

import logging
import os
import random
import sys
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Set, Tuple

# Add src to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from config import GameConfig
from grid_generator import GridGenerator
from logging_config import get_logger, setup_logging
from models import (
    Cell, Grid, Language, PlacementFailure, PlacementPath, SolveKey, Word,
    WordKey, normalize_word,
)
from progress_store import ProgressSnapshot, ProgressStore, ProgressStoreError
from scoring import MAX_HINT_LEVEL, Scoreboard
from selection import PENDING_MARKER, SelectionController
from solve_tracker import SolveStateTracker
from word_catalog import BLANK, WordCatalog


class SelectionOutcome(Enum):
    CORRECT = "correct"
    INCORRECT = "incorrect"
    ALREADY_SOLVED = "already_solved"
    NO_SELECTION = "no_selection"
    UNPLAYABLE = "unplayable"


@dataclass
class SelectionResult:
    """What happened when a gesture ended."""
    outcome: SelectionOutcome
    candidate: str = ""
    path: PlacementPath = field(default_factory=list)
    points_awarded: int = 0


@dataclass
class HintResult:
    """A granted hint: its level and the cells to highlight (level 1)."""
    level: int
    cells: List[Cell] = field(default_factory=list)
    charged: int = 0


class PuzzleSession:
    """
    Wires the catalog, grid generator, selection controller, solve tracker
    and scoreboard into a playable session.

    Usage:
        session = PuzzleSession.from_config(load_config(), catalog)
        session.load_word(0)
        result = session.trace([(0, 0), (1, 0), (2, 0)])
    """

    def __init__(
        self,
        catalog: WordCatalog,
        generator: Optional[GridGenerator] = None,
        tracker: Optional[SolveStateTracker] = None,
        selection: Optional[SelectionController] = None,
        scoreboard: Optional[Scoreboard] = None,
        store: Optional[ProgressStore] = None,
        language: Language = Language.EN,
        category: Optional[str] = None,
        autosave: bool = True,
        rng: Optional[random.Random] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize the session.

        Args:
            catalog: Parsed word catalog
            generator: Grid generator (default 6x6)
            tracker: Solve state tracker (defaults to one backed by catalog)
            selection: Selection controller
            scoreboard: Points and hints
            store: Progress store used by save() and autosave
            language: Display language
            category: Category id or localized name (defaults to the first)
            autosave: Save after every solve when a store is set
            rng: Random source for sentence choice
            logger: Logger (defaults to this module's)
        """
        self.logger = logger if logger else get_logger(__name__)
        self.catalog = catalog
        self.generator = generator or GridGenerator(rng=rng)
        self.tracker = tracker or SolveStateTracker(catalog)
        self.selection = selection or SelectionController()
        self.scoreboard = scoreboard or Scoreboard()
        self.store = store
        self.autosave = autosave
        self.rng = rng or random.Random()

        self.language = Language.from_code(language)
        self.category = self._resolve_category(category)

        self.current: Optional[WordKey] = None
        self.word: Optional[Word] = None
        self.target_word = ""
        self.grid: Optional[Grid] = None
        self.placement_path: PlacementPath = []
        self.sentence = ""
        self.hint_level = 0
        self._unplayable: Set[WordKey] = set()

    @classmethod
    def from_config(
        cls,
        config: GameConfig,
        catalog: WordCatalog,
        rng: Optional[random.Random] = None,
    ) -> 'PuzzleSession':
        """
        Build a session from configuration and restore saved progress.

        A progress file that cannot be read leaves the session as a fresh
        game.
        """
        if config.logging.directory:
            setup_logging(
                output_dir=config.logging.directory,
                log_level=config.logging.level,
                log_file_prefix=config.logging.file_prefix,
                enable_console=config.logging.console,
            )

        rng = rng or random.Random()
        if config.shuffle_words:
            catalog = catalog.shuffled(rng)

        generator = GridGenerator(
            size=config.grid.size,
            max_attempts=config.grid.max_attempts,
            rng=rng,
            alphabets=config.alphabet_map(),
            on_placement_failure=config.grid.on_placement_failure,
        )
        scoreboard = Scoreboard(
            points=config.scoring.starting_points,
            points_per_word=config.scoring.points_per_word,
            hint_costs=config.hint_costs(),
            category_prices=dict(config.scoring.category_prices),
        )
        store = None
        if config.storage.progress_path:
            store = ProgressStore(config.storage.progress_path)

        session = cls(
            catalog=catalog,
            generator=generator,
            scoreboard=scoreboard,
            store=store,
            language=config.language_enum(),
            category=config.start_category,
            autosave=config.storage.autosave,
            rng=rng,
        )

        if store is not None and store.exists():
            session.restore(store.load())
        session.load_word(0)
        return session

    def _resolve_category(self, category: Optional[str]) -> str:
        if category:
            resolved = self.catalog.category_id_for(category)
            if resolved is None:
                raise ValueError(f"Unknown category: {category}")
            return resolved
        categories = self.catalog.categories()
        if not categories:
            raise ValueError("Catalog has no categories")
        return categories[0].id

    def words(self) -> List[Word]:
        return self.catalog.words_for_category(self.language, self.category)

    @property
    def base_word(self) -> Optional[str]:
        return self.word.base if self.word else None

    @property
    def solve_key(self) -> Optional[SolveKey]:
        if self.word is None:
            return None
        return SolveKey(self.category, self.word.base)

    @property
    def word_index(self) -> int:
        """Index of the shown word in the current language's ordering."""
        return self.current.index if self.current else 0

    @property
    def unplayable_indices(self) -> Set[int]:
        """Indices in the current language and category that could not be placed."""
        return {
            key.index for key in self._unplayable
            if key.language == self.language and key.category == self.category
        }

    def load_word(self, index: int) -> bool:
        """
        Show the word at an index of the current language's ordering.

        Returns:
            False if the index is out of range or the word could not be placed
        """
        word = self.catalog.word_at(self.language, self.category, index)
        if word is None:
            self.logger.warning(
                f"No word at index {index} in {self.language.value}/{self.category}"
            )
            return False

        key = WordKey(self.language, self.category, index)
        self.selection.cancel_selection()
        self.current = key
        self.word = word
        self.target_word = word.surface(self.language) or word.base
        self.hint_level = 0
        self.sentence = self.catalog.random_sentence(
            word.base, self.language, self.category, self.rng
        )

        result = self.generator.grid_for(self.target_word, self.language)
        if isinstance(result, PlacementFailure):
            self._unplayable.add(key)
            self.grid = None
            self.placement_path = []
            self.logger.warning(f"Word {index} is unplayable: {result}")
            return False

        self._unplayable.discard(key)
        self.grid = result.grid
        self.placement_path = result.path
        self._refresh_solved_cells()
        self.logger.info(
            f"Loaded word {index + 1}/{len(self.words())} in {self.category}"
        )
        self.logger.debug(f"Grid for '{self.target_word}':\n{self.grid.to_string()}")
        return True

    def _refresh_solved_cells(self):
        """Redraw the stored winning path, only once the tracker confirms it."""
        if self.grid is None or self.word is None:
            return
        self.grid.clear_solved()
        if not self.tracker.is_solved(self.category, self.word.base):
            return

        path = self.tracker.path_for(self.category, self.word.base) or []
        # A path recorded on another language's grid does not spell this word
        if not self._spells_target(path):
            path = self.placement_path
        self.grid.mark_solved(path)

    def _spells_target(self, path: PlacementPath) -> bool:
        if self.grid is None or len(path) != len(self.target_word):
            return False
        if not all(self.grid.is_valid_position(c.col, c.row) for c in path):
            return False
        return self.grid.read_path(path) == self.target_word

    def next_word(self) -> bool:
        if self.word_index + 1 >= len(self.words()):
            return False
        return self.load_word(self.word_index + 1)

    def previous_word(self) -> bool:
        if self.word_index <= 0:
            return False
        return self.load_word(self.word_index - 1)

    def cell_at(self, col: int, row: int) -> Optional[Cell]:
        if self.grid is None or not self.grid.is_valid_position(col, row):
            return None
        return self.grid.get_cell(col, row)

    def begin_selection(self, cell: Cell) -> bool:
        return self.selection.begin_selection(cell)

    def extend_selection(self, cell: Cell) -> bool:
        return self.selection.extend_selection(cell)

    def cancel_selection(self):
        self.selection.cancel_selection()

    @property
    def forming_word(self) -> str:
        return self.selection.forming_word

    @property
    def display_text(self) -> str:
        return self.selection.display_text

    def end_selection(self) -> SelectionResult:
        """Finish the gesture and check the candidate against the target."""
        candidate = self.selection.end_selection()
        if candidate is None:
            return SelectionResult(SelectionOutcome.NO_SELECTION)

        path = self.selection.last_path
        if self.grid is None or self.word is None:
            return SelectionResult(SelectionOutcome.UNPLAYABLE, candidate, path)

        if normalize_word(candidate, self.language) != self.target_word:
            self.logger.debug(f"Wrong candidate '{candidate}'")
            return SelectionResult(SelectionOutcome.INCORRECT, candidate, path)

        if self.tracker.is_solved(self.category, self.word.base):
            return SelectionResult(SelectionOutcome.ALREADY_SOLVED, candidate, path)

        if not self.tracker.record_solved(self.category, self.word.base, path):
            return SelectionResult(SelectionOutcome.INCORRECT, candidate, path)

        self.grid.mark_solved(path)
        awarded = self.scoreboard.award_solve()
        self.logger.info(
            f"Solved '{self.target_word}' ({self.word.base}), +{awarded} points"
        )
        if self.autosave:
            self.save()
        return SelectionResult(SelectionOutcome.CORRECT, candidate, path, awarded)

    def trace(self, coords: List[Tuple[int, int]]) -> SelectionResult:
        """Run a whole gesture over grid coordinates (col, row)."""
        self.selection.cancel_selection()
        for position, (col, row) in enumerate(coords):
            cell = self.cell_at(col, row)
            if cell is None:
                continue
            if position == 0:
                self.selection.begin_selection(cell)
            else:
                self.selection.extend_selection(cell)
        return self.end_selection()

    def is_solved(self, word: Optional[str] = None) -> bool:
        """Whether a word (spelled in the display language) or the shown word is solved."""
        if word is not None:
            return self.tracker.is_solved(self.category, word, self.language)
        if self.word is None:
            return False
        return self.tracker.is_solved(self.category, self.word.base)

    def solved_indices(self) -> Set[int]:
        return self.tracker.solved_indices_for_category(self.category, self.language)

    def progress(self) -> Tuple[int, int]:
        """(solved, total) for the current category."""
        return len(self.solved_indices()), len(self.words())

    def display_sentence(self) -> str:
        """The example sentence with its blank filled for the current state."""
        if BLANK not in self.sentence:
            return self.sentence
        if self.word is not None and self.is_solved():
            fill = self.target_word
        elif self.forming_word:
            fill = self.forming_word + PENDING_MARKER
        elif self.hint_level >= MAX_HINT_LEVEL:
            fill = "_" * len(self.target_word)
        else:
            fill = PENDING_MARKER
        return self.sentence.replace(BLANK, fill)

    def give_hint(self) -> Optional[HintResult]:
        """
        Advance to the next hint level.

        Level 1 highlights unsolved cells holding the first letter, level 2
        reveals the word length, and the next call clears hints again.
        Returns None when the word is solved or the hint is unaffordable.
        """
        key = self.solve_key
        if key is None or self.grid is None or self.is_solved():
            return None

        level = self.hint_level + 1
        if level > MAX_HINT_LEVEL:
            self.hint_level = 0
            return HintResult(level=0)

        charged = 0
        if self.scoreboard.is_hint_available(key, level):
            if not self.scoreboard.use_hint(key, level):
                return None
            charged = self.scoreboard.hint_cost(level)
        elif not self.scoreboard.has_used_hint(key, level):
            return None
        self.hint_level = level

        cells = []
        if level == 1:
            first = self.target_word[0]
            cells = [
                cell for cell in self.grid.iter_cells()
                if cell.letter == first and not cell.solved
            ]
        if self.autosave and charged:
            self.save()
        return HintResult(level=level, cells=cells, charged=charged)

    def set_language(self, language: Language) -> bool:
        """Switch display language, staying on the same word when it exists."""
        language = Language.from_code(language)
        if language == self.language:
            return True
        base = self.base_word
        self.language = language
        index = 0
        if base is not None:
            found = self.catalog.index_of(language, self.category, base)
            index = found if found is not None else 0
        self.logger.info(f"Language changed to {language.value}")
        return self.load_word(index)

    def switch_category(self, category: str) -> bool:
        """Move to another category if it exists and is unlocked."""
        category_id = self.catalog.category_id_for(category)
        if category_id is None:
            self.logger.warning(f"Unknown category: {category}")
            return False
        if not self.scoreboard.is_category_unlocked(category_id):
            self.logger.info(
                f"Category '{category_id}' is locked "
                f"({self.scoreboard.category_price(category_id)} points needed)"
            )
            return False
        self.category = category_id
        return self.load_word(0)

    def reset_progress(self):
        """Clear all solves, hints and points."""
        self.selection.cancel_selection()
        self.tracker.reset_all()
        self.scoreboard.reset()
        self.hint_level = 0
        if self.grid is not None:
            self.grid.clear_solved()
        if self.autosave:
            self.save()

    def snapshot(self) -> ProgressSnapshot:
        return ProgressSnapshot(
            solved=self.tracker.records(),
            grids=self.generator.cached_entries(),
            scoreboard=self.scoreboard.to_dict(),
            language=self.language.value,
            category=self.category,
        )

    def restore(self, snapshot: ProgressSnapshot):
        """Seed tracker, grid cache and scoreboard from a snapshot."""
        self.tracker.load_records(snapshot.solved)
        self.generator.seed_cache(snapshot.grids)
        if snapshot.scoreboard:
            self.scoreboard.load_dict(snapshot.scoreboard)
        if snapshot.language:
            try:
                self.language = Language.from_code(snapshot.language)
            except ValueError:
                self.logger.warning(f"Ignoring saved language {snapshot.language!r}")
        if snapshot.category and self.catalog.category_id_for(snapshot.category):
            self.category = self.catalog.category_id_for(snapshot.category)

    def save(self) -> bool:
        """Persist progress. Failures are logged and play continues."""
        if self.store is None:
            return False
        try:
            self.store.save(self.snapshot())
        except ProgressStoreError as e:
            self.logger.error(str(e))
            return False
        return True
