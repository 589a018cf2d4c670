# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
YAML progress store for the word trail game.

Persists solve records, generated grids, points and hint usage so a
reloaded game redraws solved paths without regenerating or re-solving.
A failed load never blocks play: the lenient loader returns an empty
snapshot and the game starts fresh.
"""

import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from grid_generator import CachedGrid
from models import (
    Grid, Language, SolveRecord, normalize_word, path_to_data, to_path,
)


logger = logging.getLogger(__name__)

FORMAT_VERSION = 1


class ProgressStoreError(Exception):
    """Raised when progress cannot be read or written."""
    pass


@dataclass
class ProgressSnapshot:
    """Everything the game persists between sessions."""
    solved: List[SolveRecord] = field(default_factory=list)
    grids: List[CachedGrid] = field(default_factory=list)
    scoreboard: Dict[str, Any] = field(default_factory=dict)
    language: Optional[str] = None
    category: Optional[str] = None

    def is_empty(self) -> bool:
        return not (self.solved or self.grids or self.scoreboard)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to dictionary for YAML serialization.

        Returns:
            Dictionary with one flat entry per solved word and cached grid
        """
        return {
            'version': FORMAT_VERSION,
            'language': self.language,
            'category': self.category,
            'points': self.scoreboard.get('points', 0),
            'hints': self.scoreboard.get('hints', []),
            'solved': [record.to_dict() for record in self.solved],
            'grids': [
                {
                    'word': entry.word,
                    'language': entry.language.value,
                    'size': entry.grid.size,
                    'letters': entry.grid.letters(),
                    'path': path_to_data(entry.path),
                }
                for entry in self.grids
            ],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ProgressSnapshot':
        """
        Parse a stored document. Malformed entries are skipped; unknown
        fields are ignored.
        """
        snapshot = cls(
            language=data.get('language'),
            category=data.get('category'),
            scoreboard={
                'points': data.get('points', 0),
                'hints': data.get('hints') or [],
            },
        )

        # Later duplicates of (category, baseWord) replace earlier ones
        solved: Dict[Any, SolveRecord] = {}
        for entry in data.get('solved') or []:
            try:
                record = SolveRecord.from_dict(entry)
            except (KeyError, TypeError, ValueError, IndexError) as e:
                logger.warning(f"Skipping malformed solve record {entry!r}: {e}")
                continue
            solved[record.key] = record
        snapshot.solved = list(solved.values())

        for entry in data.get('grids') or []:
            try:
                language = Language.from_code(entry['language'])
                grid = Grid.from_letters(
                    int(entry['size']), [str(l) for l in entry['letters']]
                )
                snapshot.grids.append(CachedGrid(
                    word=normalize_word(str(entry['word']), language),
                    language=language,
                    grid=grid,
                    path=to_path(entry['path']),
                ))
            except (KeyError, TypeError, ValueError, IndexError) as e:
                logger.warning(f"Skipping malformed grid entry: {e}")

        return snapshot


class ProgressStore:
    """
    Reads and writes a ProgressSnapshot as YAML.

    A lock keeps a save and a load from interleaving.

    Usage:
        store = ProgressStore('progress.yaml')
        snapshot = store.load()
        store.save(snapshot)
    """

    def __init__(self, path: str):
        """
        Initialize the store.

        Args:
            path: YAML file holding the progress
        """
        self.path = Path(path)
        self._lock = threading.Lock()

    def exists(self) -> bool:
        return self.path.exists()

    def save(self, snapshot: ProgressSnapshot) -> str:
        """
        Write the snapshot.

        Returns:
            Path to saved file

        Raises:
            ProgressStoreError: If the file cannot be written
        """
        header = "# Word trail progress\n"
        header += "# Solved words, generated grids, points and hints\n\n"
        content = yaml.safe_dump(
            snapshot.to_dict(),
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
            indent=2,
            width=80,
        )

        with self._lock:
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                # Write beside the target first so a crash keeps the old file
                tmp_path = self.path.with_name(self.path.name + ".tmp")
                with open(tmp_path, 'w', encoding='utf-8') as f:
                    f.write(header + content)
                tmp_path.replace(self.path)
            except OSError as e:
                raise ProgressStoreError(f"Could not save progress to {self.path}: {e}")

        logger.info(
            f"Saved progress: {len(snapshot.solved)} solved, "
            f"{len(snapshot.grids)} grids -> {self.path}"
        )
        return str(self.path)

    def load_strict(self) -> ProgressSnapshot:
        """
        Read the snapshot.

        Returns:
            Stored snapshot, or an empty one if no file exists yet

        Raises:
            ProgressStoreError: If the file exists but cannot be parsed
        """
        with self._lock:
            if not self.path.exists():
                logger.info(f"No progress file at {self.path}, starting new game")
                return ProgressSnapshot()

            try:
                with open(self.path, 'r', encoding='utf-8') as f:
                    data = yaml.safe_load(f)
            except (OSError, yaml.YAMLError) as e:
                raise ProgressStoreError(f"Invalid progress file {self.path}: {e}")

        if data is None:
            return ProgressSnapshot()
        if not isinstance(data, dict):
            raise ProgressStoreError(
                f"Progress file must contain a YAML mapping, got {type(data)}"
            )
        return ProgressSnapshot.from_dict(data)

    def load(self) -> ProgressSnapshot:
        """Read the snapshot, falling back to an empty one on any failure."""
        try:
            snapshot = self.load_strict()
        except ProgressStoreError as e:
            logger.warning(f"{e}; starting with empty progress")
            return ProgressSnapshot()

        logger.info(
            f"Loaded progress: {len(snapshot.solved)} solved, "
            f"{len(snapshot.grids)} grids from {self.path}"
        )
        return snapshot

    def delete(self):
        """Remove the stored progress."""
        with self._lock:
            if self.path.exists():
                self.path.unlink()
                logger.info(f"Deleted progress file {self.path}")
