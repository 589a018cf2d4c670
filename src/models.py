"""
Data models for the word trail puzzle engine.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, NamedTuple, Optional, Any


DEFAULT_GRID_SIZE = 6


class Language(Enum):
    EN = "en"
    TR = "tr"

    @classmethod
    def from_code(cls, code: Any) -> 'Language':
        """Resolve a language from its code ('en', 'TR', ...) or pass through."""
        if isinstance(code, Language):
            return code
        try:
            return cls(str(code).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown language code: {code!r}")


DEFAULT_ALPHABETS: Dict[Language, str] = {
    Language.EN: "ABCDEFGHIJKLMNOPQRSTUVWXYZ",
    Language.TR: "ABCÇDEFGĞHIİJKLMNOÖPRSŞTUÜVYZ",
}

# Turkish casing differs from the default Unicode mapping for the letter i
_TURKISH_UPPER = str.maketrans({"i": "İ", "ı": "I"})
_FOLD_I = str.maketrans({"İ": "i", "I": "i", "ı": "i", "i": "i"})


def normalize_word(text: str, language: Optional[Language] = None) -> str:
    """
    Uppercase a word the way its language spells it.

    Whitespace is removed, so multi-word entries become a single trail
    ('SUN DIAL' -> 'SUNDIAL').
    """
    text = "".join(text.split())
    if language == Language.TR:
        text = text.translate(_TURKISH_UPPER)
    return text.upper()


def fold_word(text: str) -> str:
    """
    Loose lookup key for a surface word in any language.

    Dotted and dotless I collapse to one letter so 'PİRAMİT', 'piramit'
    and 'PIRAMIT' share a key. 'KIR' and 'KİR' are different Turkish
    words, so this key is only a fallback once exact spellings miss.
    """
    return "".join(text.split()).translate(_FOLD_I).casefold()


class Coord(NamedTuple):
    """A grid coordinate; col is x, row is y."""
    col: int
    row: int

    def is_orthogonal_neighbor(self, other: 'Coord') -> bool:
        return abs(self.col - other.col) + abs(self.row - other.row) == 1

    def is_adjacent(self, other: 'Coord') -> bool:
        """Chebyshev distance of at most one (diagonals included)."""
        return (
            self != other
            and abs(self.col - other.col) <= 1
            and abs(self.row - other.row) <= 1
        )


# Ordered coordinates a word occupies once embedded
PlacementPath = List[Coord]


# up, right, down, left
ORTHOGONAL_DIRECTIONS = [(0, -1), (1, 0), (0, 1), (-1, 0)]


def to_path(points: Any) -> PlacementPath:
    """Convert [[x, y], ...] (or Coord list) into a PlacementPath."""
    return [Coord(int(p[0]), int(p[1])) for p in points]


def path_to_data(path: PlacementPath) -> List[List[int]]:
    return [[coord.col, coord.row] for coord in path]


@dataclass(eq=False)
class Cell:
    """A single lettered cell; identity is its position, not its letter."""
    col: int
    row: int
    letter: str = ""
    solved: bool = False  # display state only

    @property
    def coord(self) -> Coord:
        return Coord(self.col, self.row)

    def __hash__(self):
        return hash((self.col, self.row))

    def __eq__(self, other):
        if not isinstance(other, Cell):
            return False
        return self.col == other.col and self.row == other.row


@dataclass
class Grid:
    """Square letter grid stored row-major."""
    size: int = DEFAULT_GRID_SIZE
    cells: List[List[Cell]] = field(default_factory=list)

    def __post_init__(self):
        if self.size < 1:
            raise ValueError(f"Grid size must be positive, got {self.size}")
        if not self.cells:
            self.cells = [
                [Cell(col=c, row=r) for c in range(self.size)]
                for r in range(self.size)
            ]

    @classmethod
    def from_letters(cls, size: int, letters: List[str]) -> 'Grid':
        """Build a grid from a flat row-major list of letters."""
        if len(letters) != size * size:
            raise ValueError(
                f"Expected {size * size} letters for a {size}x{size} grid, "
                f"got {len(letters)}"
            )
        grid = cls(size=size)
        for index, letter in enumerate(letters):
            grid.set_letter(Coord(index % size, index // size), letter)
        return grid

    def get_cell(self, col: int, row: int) -> Cell:
        return self.cells[row][col]

    def cell_at(self, coord: Coord) -> Cell:
        return self.cells[coord.row][coord.col]

    def set_letter(self, coord: Coord, letter: str):
        self.cells[coord.row][coord.col].letter = letter

    def is_valid_position(self, col: int, row: int) -> bool:
        """Check if position is within grid bounds."""
        return 0 <= col < self.size and 0 <= row < self.size

    def iter_cells(self):
        for row in self.cells:
            for cell in row:
                yield cell

    def letters(self) -> List[str]:
        """Flat row-major letter list."""
        return [cell.letter for cell in self.iter_cells()]

    def read_path(self, path: PlacementPath) -> str:
        return "".join(self.cell_at(coord).letter for coord in path)

    def mark_solved(self, path: PlacementPath):
        for coord in path:
            if self.is_valid_position(coord.col, coord.row):
                self.cell_at(coord).solved = True

    def clear_solved(self):
        for cell in self.iter_cells():
            cell.solved = False

    def solved_coords(self) -> List[Coord]:
        return [cell.coord for cell in self.iter_cells() if cell.solved]

    def to_string(self) -> str:
        """Render rows of space-separated letters, '_' for empty cells."""
        return "\n".join(
            " ".join(cell.letter or "_" for cell in row) for row in self.cells
        )


class Placement(NamedTuple):
    """A successfully embedded word: the filled grid and its path."""
    grid: Grid
    path: PlacementPath


@dataclass
class PlacementFailure:
    """Returned when a word could not be embedded in a grid."""
    word: str
    size: int
    attempts: int
    reason: str = "no self-avoiding path found"

    def __str__(self):
        return (
            f"Could not place '{self.word}' on a {self.size}x{self.size} grid "
            f"after {self.attempts} attempts: {self.reason}"
        )


@dataclass
class Word:
    """A catalog word: base identity plus per-language spellings."""
    base: str
    translations: Dict[Language, str] = field(default_factory=dict)
    sentences: Dict[Language, List[str]] = field(default_factory=dict)

    def __post_init__(self):
        self.base = normalize_word(self.base)
        self.translations = {
            language: normalize_word(text, language)
            for language, text in self.translations.items()
        }

    def surface(self, language: Language) -> Optional[str]:
        """Spelling shown to players of the given language."""
        return self.translations.get(language)


@dataclass
class Category:
    """A themed bucket of words (an era), with localized display names."""
    id: str
    names: Dict[Language, str] = field(default_factory=dict)

    def display_name(self, language: Language) -> str:
        return self.names.get(language, self.id)


class WordKey(NamedTuple):
    """
    Position of a word within one language's ordering of a category.

    Indices are only meaningful together with their language and category,
    since every language orders a category independently.
    """
    language: Language
    category: str
    index: int


class SolveKey(NamedTuple):
    category: str
    base_word: str


@dataclass
class SolveRecord:
    """Durable solve state for one base word within a category."""
    category: str
    base_word: str
    path: PlacementPath = field(default_factory=list)
    solved: bool = True

    @property
    def key(self) -> SolveKey:
        return SolveKey(self.category, self.base_word)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'category': self.category,
            'baseWord': self.base_word,
            'path': path_to_data(self.path),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SolveRecord':
        """Parse a persisted record; unknown fields are ignored."""
        return cls(
            category=str(data['category']),
            base_word=normalize_word(str(data['baseWord'])),
            path=to_path(data.get('path') or []),
            solved=bool(data.get('solved', True)),
        )
