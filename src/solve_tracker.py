# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
Solve state tracking across languages.

Solve progress is keyed by (category, base word) rather than by the word's
index, because every language orders a category independently. Any
spelling of a word, in any language, resolves to the same record.
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Set

from models import (
    Language, PlacementPath, SolveKey, SolveRecord, normalize_word, to_path,
)
from word_catalog import WordCatalog


logger = logging.getLogger(__name__)

# (category id, surface word, display language) -> base word, or None when unknown
BaseWordResolver = Callable[[str, str, Optional[Language]], Optional[str]]


class SolveStateTracker:
    """
    Owns every SolveRecord. The only mutations are record_solved,
    load_records and reset_all.

    Usage:
        tracker = SolveStateTracker(catalog)
        tracker.record_solved("Ancient Egypt", "PİRAMİT", path)
        tracker.is_solved("Ancient Egypt", "PYRAMID")  # True
    """

    def __init__(
        self,
        catalog: Optional[WordCatalog] = None,
        resolver: Optional[BaseWordResolver] = None,
    ):
        """
        Initialize the tracker.

        Args:
            catalog: Catalog used to resolve spellings and category names
            resolver: Overrides the catalog's base word lookup
        """
        self.catalog = catalog
        if resolver is not None:
            self._resolver = resolver
        elif catalog is not None:
            self._resolver = (
                lambda category, word, language:
                catalog.base_word_of(word, category, language)
            )
        else:
            self._resolver = (
                lambda category, word, language:
                normalize_word(word, language) or None
            )
        self._records: Dict[SolveKey, SolveRecord] = {}

    def category_id(self, category: str) -> str:
        """Canonical id for a category id or localized name."""
        if self.catalog is not None:
            resolved = self.catalog.category_id_for(category)
            if resolved is not None:
                return resolved
        return category

    def resolve(
        self,
        category: str,
        word: str,
        language: Optional[Language] = None
    ) -> Optional[SolveKey]:
        """
        Map a word to its record key, or None if unknown.

        Args:
            category: Category id or localized name
            word: Base word, or its spelling in any language
            language: Language the word is displayed in; its spellings win
                when a surface form is shared between languages
        """
        category_id = self.category_id(category)
        base = self._resolver(category_id, word, language)
        if not base:
            logger.debug(f"Could not resolve '{word}' in category '{category}'")
            return None
        return SolveKey(category_id, normalize_word(base))

    def record_solved(
        self,
        category: str,
        word: str,
        path: PlacementPath,
        language: Optional[Language] = None
    ) -> bool:
        """
        Mark a word solved and remember its winning path.

        Recording an already solved word replaces the path.

        Returns:
            False if the word could not be resolved (nothing recorded)
        """
        key = self.resolve(category, word, language)
        if key is None:
            logger.warning(
                f"Ignoring solve for unknown word '{word}' in '{category}'"
            )
            return False

        self._records[key] = SolveRecord(
            category=key.category,
            base_word=key.base_word,
            path=to_path(path),
        )
        logger.info(f"Recorded solve: {key.category} / {key.base_word}")
        return True

    def is_solved(
        self,
        category: str,
        word: str,
        language: Optional[Language] = None
    ) -> bool:
        key = self.resolve(category, word, language)
        return key is not None and key in self._records

    def path_for(
        self,
        category: str,
        word: str,
        language: Optional[Language] = None
    ) -> Optional[PlacementPath]:
        key = self.resolve(category, word, language)
        if key is None or key not in self._records:
            return None
        return list(self._records[key].path)

    def solved_indices_for_category(self, category: str, language: Language) -> Set[int]:
        """
        Indices, in the language's ordering, of the category's solved words.

        Each index's word carries its base identity, so progress made in one
        language shows up in every other.
        """
        if self.catalog is None:
            return set()

        category_id = self.category_id(category)
        words = self.catalog.words_for_category(language, category_id)
        return {
            index for index, word in enumerate(words)
            if SolveKey(category_id, word.base) in self._records
        }

    def solved_count(self, category: Optional[str] = None) -> int:
        if category is None:
            return len(self._records)
        category_id = self.category_id(category)
        return sum(1 for key in self._records if key.category == category_id)

    def reset_all(self):
        """Forget every solve. Irreversible."""
        count = len(self._records)
        self._records.clear()
        logger.info(f"Cleared {count} solve records")

    def records(self) -> List[SolveRecord]:
        return [
            SolveRecord(r.category, r.base_word, list(r.path), r.solved)
            for r in self._records.values()
        ]

    def load_records(self, records: List[SolveRecord]) -> int:
        """
        Seed the tracker from persisted records (last duplicate wins).

        Returns:
            Number of records loaded
        """
        loaded = 0
        for record in records:
            if not record.solved:
                continue
            key = SolveKey(self.category_id(record.category), record.base_word)
            self._records[key] = SolveRecord(
                key.category, key.base_word, list(record.path)
            )
            loaded += 1
        logger.debug(f"Loaded {loaded} solve records")
        return loaded

    def to_data(self) -> List[Dict[str, Any]]:
        """Flat list of {category, baseWord, path} entries."""
        return [record.to_dict() for record in self._records.values()]

    def load_data(self, data: List[Dict[str, Any]]) -> int:
        """Load persisted entries, skipping any that cannot be parsed."""
        records = []
        for entry in data or []:
            try:
                records.append(SolveRecord.from_dict(entry))
            except (KeyError, TypeError, ValueError, IndexError) as e:
                logger.warning(f"Skipping malformed solve record {entry!r}: {e}")
        return self.load_records(records)
