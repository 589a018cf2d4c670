# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
Word catalog for the word trail game.

Holds the already-parsed word content: categories (eras), the words in each
category with their base identity and per-language spellings, and the
example sentences shown while a word is being solved. Each language keeps
its own ordering of a category's words.
"""

import logging
import random
from typing import Any, Dict, List, Optional, Tuple

from models import Category, Language, Word, fold_word, normalize_word


logger = logging.getLogger(__name__)

# Placeholder in sentences that the target word fills in
BLANK = "_____"

MISSING_SENTENCE = {
    Language.EN: f"{BLANK} sentence not found",
    Language.TR: f"{BLANK} için cümle bulunamadı",
}


# language -> normalized surface spelling -> base word
SurfaceIndex = Dict[Language, Dict[str, str]]


class CatalogError(Exception):
    """Raised when catalog data is malformed."""
    pass


def _add_candidate(index: Dict[str, List[str]], key: str, base: str):
    candidates = index.setdefault(key, [])
    if base not in candidates:
        candidates.append(base)


class WordCatalog:
    """
    Read-only lookup over categories and their words.

    Usage:
        catalog = WordCatalog.from_dict(parsed_words)
        words = catalog.words_for_category(Language.TR, "Ancient Egypt")
        base = catalog.base_word_of("piramit")  # -> "PYRAMID"
    """

    def __init__(
        self,
        categories: List[Category],
        words: Dict[str, List[Word]],
        orders: Optional[Dict[Tuple[Language, str], List[str]]] = None,
    ):
        """
        Initialize the catalog.

        Args:
            categories: Categories in display order
            words: Words per category id
            orders: Optional base-word ordering per (language, category);
                defaults to catalog order filtered to translated words
        """
        self._categories: Dict[str, Category] = {c.id: c for c in categories}
        self._words: Dict[str, Dict[str, Word]] = {}
        # Exact spellings per language, then the I-folded fallback
        self._surface_index: Dict[str, SurfaceIndex] = {}
        self._loose_index: Dict[str, Dict[str, List[str]]] = {}
        self._global_surfaces: SurfaceIndex = {language: {} for language in Language}
        self._global_loose: Dict[str, List[str]] = {}
        self._global_bases: Dict[str, str] = {}
        self._orders: Dict[Tuple[Language, str], List[str]] = {}

        for category in categories:
            by_base: Dict[str, Word] = {}
            surfaces: SurfaceIndex = {language: {} for language in Language}
            loose: Dict[str, List[str]] = {}
            for word in words.get(category.id, []):
                if word.base in by_base:
                    raise CatalogError(
                        f"Duplicate base word '{word.base}' in '{category.id}'"
                    )
                by_base[word.base] = word
                self._global_bases.setdefault(word.base, word.base)
                for language, surface in word.translations.items():
                    existing = surfaces[language].setdefault(surface, word.base)
                    if existing != word.base:
                        logger.warning(
                            f"'{surface}' spells both '{existing}' and "
                            f"'{word.base}' in {language.value}/{category.id}"
                        )
                    self._global_surfaces[language].setdefault(surface, word.base)
                for key in [word.base] + list(word.translations.values()):
                    folded = fold_word(key)
                    _add_candidate(loose, folded, word.base)
                    _add_candidate(self._global_loose, folded, word.base)
            self._words[category.id] = by_base
            self._surface_index[category.id] = surfaces
            self._loose_index[category.id] = loose

            for language in Language:
                key = (language, category.id)
                if orders and key in orders:
                    order = [normalize_word(b) for b in orders[key]]
                    unknown = [b for b in order if b not in by_base]
                    if unknown:
                        raise CatalogError(
                            f"Ordering for {language.value}/{category.id} "
                            f"names unknown words: {unknown}"
                        )
                else:
                    order = [
                        w.base for w in by_base.values()
                        if w.surface(language)
                    ]
                self._orders[key] = order

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'WordCatalog':
        """
        Build a catalog from parsed data.

        Expected shape:
            categories:
              - id: Ancient Egypt
                names: {en: Ancient Egypt, tr: Antik Mısır}
                words:
                  - base: PYRAMID
                    translations: {en: PYRAMID, tr: PİRAMİT}
                    sentences: {en: [...], tr: [...]}

        Raises:
            CatalogError: If an entry is missing required fields
        """
        if not isinstance(data, dict) or 'categories' not in data:
            raise CatalogError("Catalog data must be a mapping with 'categories'")

        categories = []
        words: Dict[str, List[Word]] = {}
        for cat_data in data['categories']:
            cat_id = str(cat_data.get('id') or '').strip()
            if not cat_id:
                raise CatalogError(f"Category without an id: {cat_data!r}")

            names = {
                Language.from_code(code): str(name)
                for code, name in (cat_data.get('names') or {}).items()
            }
            categories.append(Category(id=cat_id, names=names))
            words[cat_id] = [
                cls._parse_word(entry, cat_id)
                for entry in cat_data.get('words') or []
            ]

        return cls(categories, words)

    @staticmethod
    def _parse_word(entry: Dict[str, Any], category_id: str) -> Word:
        try:
            translations = {
                Language.from_code(code): str(text)
                for code, text in (entry.get('translations') or {}).items()
            }
            sentences = {
                Language.from_code(code): [str(s) for s in items or []]
                for code, items in (entry.get('sentences') or {}).items()
            }
        except ValueError as e:
            raise CatalogError(f"Invalid word entry in '{category_id}': {e}")

        base = str(entry.get('base') or translations.get(Language.EN) or '')
        if not normalize_word(base):
            raise CatalogError(f"Word entry without a base word in '{category_id}'")
        empty = [lang.value for lang, text in translations.items()
                 if not normalize_word(text)]
        if empty:
            raise CatalogError(
                f"Word '{base}' in '{category_id}' has empty translations: {empty}"
            )

        translations.setdefault(Language.EN, base)
        return Word(base=base, translations=translations, sentences=sentences)

    def categories(self) -> List[Category]:
        return list(self._categories.values())

    def category(self, category_id: str) -> Optional[Category]:
        return self._categories.get(category_id)

    def category_id_for(self, name: str) -> Optional[str]:
        """Resolve a category id or any localized category name to its id."""
        if name in self._categories:
            return name
        folded = fold_word(name)
        for category in self._categories.values():
            candidates = [category.id] + list(category.names.values())
            if any(fold_word(c) == folded for c in candidates):
                return category.id
        return None

    def words_for_category(self, language: Language, category: str) -> List[Word]:
        """Words of a category in the language's ordering."""
        category_id = self.category_id_for(category)
        if category_id is None:
            return []
        by_base = self._words[category_id]
        return [by_base[b] for b in self._orders[(language, category_id)]]

    def word(self, category: str, base_word: str) -> Optional[Word]:
        category_id = self.category_id_for(category)
        if category_id is None:
            return None
        return self._words[category_id].get(normalize_word(base_word))

    def word_at(self, language: Language, category: str, index: int) -> Optional[Word]:
        words = self.words_for_category(language, category)
        if 0 <= index < len(words):
            return words[index]
        return None

    def index_of(self, language: Language, category: str, base_word: str) -> Optional[int]:
        category_id = self.category_id_for(category)
        if category_id is None:
            return None
        order = self._orders[(language, category_id)]
        base_word = normalize_word(base_word)
        return order.index(base_word) if base_word in order else None

    def translation(
        self,
        base_word: str,
        language: Language,
        category: Optional[str] = None
    ) -> Optional[str]:
        """Spelling of a base word in a language."""
        base_word = normalize_word(base_word)
        if category is not None:
            word = self.word(category, base_word)
            return word.surface(language) if word else None
        for by_base in self._words.values():
            if base_word in by_base:
                return by_base[base_word].surface(language)
        return None

    def base_word_of(
        self,
        surface: str,
        category: Optional[str] = None,
        language: Optional[Language] = None
    ) -> Optional[str]:
        """
        Recover the base identity of a word written in any language.

        Lookup order:
        1. The spelling in the given language (cased by that language's rules)
        2. A base word spelled exactly
        3. The spelling in every other language
        4. The I-folded spelling, only when it names a single word

        Args:
            surface: Word as displayed or typed, any case
            category: Restrict the lookup to one category (id or localized name)
            language: Language the word is displayed in, tried first

        Returns:
            The base word, or None when the word is unknown or ambiguous
        """
        if category is not None:
            category_id = self.category_id_for(category)
            if category_id is None:
                return None
            surfaces = self._surface_index[category_id]
            bases = self._words[category_id]
            loose = self._loose_index[category_id]
        else:
            surfaces = self._global_surfaces
            bases = self._global_bases
            loose = self._global_loose

        if language is not None:
            base = surfaces[language].get(normalize_word(surface, language))
            if base is not None:
                return base

        if normalize_word(surface) in bases:
            return normalize_word(surface)

        for other in Language:
            if other == language:
                continue
            base = surfaces[other].get(normalize_word(surface, other))
            if base is not None:
                return base

        candidates = loose.get(fold_word(surface), [])
        if len(candidates) == 1:
            return candidates[0]
        if candidates:
            logger.debug(f"'{surface}' is ambiguous between {candidates}")
        return None

    def sentences_for(
        self,
        base_word: str,
        language: Language,
        category: str
    ) -> List[str]:
        word = self.word(category, base_word)
        if word is None:
            return []
        return list(word.sentences.get(language, []))

    def random_sentence(
        self,
        base_word: str,
        language: Language,
        category: str,
        rng: Optional[random.Random] = None
    ) -> str:
        """Pick one example sentence, or a placeholder when none exist."""
        sentences = self.sentences_for(base_word, language, category)
        if not sentences:
            logger.warning(
                f"No sentences for '{base_word}' in {language.value}/{category}"
            )
            return MISSING_SENTENCE.get(language, MISSING_SENTENCE[Language.EN])
        return (rng or random).choice(sentences)

    def shuffled(self, rng: Optional[random.Random] = None) -> 'WordCatalog':
        """Copy of the catalog with every (language, category) order shuffled independently."""
        rng = rng or random.Random()
        orders = {}
        for key, order in self._orders.items():
            order = list(order)
            rng.shuffle(order)
            orders[key] = order
        return WordCatalog(
            self.categories(),
            {cid: list(by_base.values()) for cid, by_base in self._words.items()},
            orders,
        )
