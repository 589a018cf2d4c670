"""
Placement Validator

Checks that a grid really hides its word:
1. The path is in bounds, has no repeated cells and is orthogonally connected
2. Reading the grid along the path spells the word
3. Every other cell holds a letter from the noise alphabet

Used on grids restored from storage before they are trusted.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from models import Grid, PlacementPath


@dataclass
class ValidationResult:
    """Result of placement validation."""
    valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    stats: Dict = field(default_factory=dict)

    def __str__(self):
        status = "✅ VALID" if self.valid else "❌ INVALID"
        lines = [f"Placement: {status}"]

        if self.errors:
            lines.append("\nErrors:")
            for e in self.errors:
                lines.append(f"  ❌ {e}")

        if self.warnings:
            lines.append("\nWarnings:")
            for w in self.warnings:
                lines.append(f"  ⚠️ {w}")

        if self.stats:
            lines.append("\nStats:")
            for k, v in self.stats.items():
                lines.append(f"  {k}: {v}")

        return "\n".join(lines)


def validate_placement(
    grid: Grid,
    word: str,
    path: PlacementPath,
    alphabet: Optional[str] = None
) -> ValidationResult:
    """
    Validate a word's embedding in a grid.

    Args:
        grid: The filled grid
        word: Word that should be readable along the path
        path: Ordered cell coordinates of the word
        alphabet: Noise alphabet; when None, noise cells are not checked

    Returns:
        ValidationResult with errors for every broken invariant
    """
    errors = []
    warnings = []

    if len(path) != len(word):
        errors.append(
            f"Path has {len(path)} cells but '{word}' has {len(word)} letters"
        )

    out_of_bounds = [c for c in path if not grid.is_valid_position(c.col, c.row)]
    if out_of_bounds:
        errors.append(f"Path leaves the grid at {[tuple(c) for c in out_of_bounds]}")

    if len(set(path)) != len(path):
        errors.append("Path visits a cell more than once")

    for prev, nxt in zip(path, path[1:]):
        if not prev.is_orthogonal_neighbor(nxt):
            errors.append(
                f"Cells {tuple(prev)} and {tuple(nxt)} are not orthogonally adjacent"
            )

    if not out_of_bounds and len(path) == len(word):
        spelled = grid.read_path(path)
        if spelled != word:
            errors.append(f"Path spells '{spelled}', expected '{word}'")

    on_path = set(path)
    noise_count = 0
    for cell in grid.iter_cells():
        if cell.coord in on_path:
            continue
        noise_count += 1
        if len(cell.letter) != 1:
            errors.append(f"Cell {tuple(cell.coord)} holds {cell.letter!r}")
        elif alphabet is not None and cell.letter not in alphabet:
            errors.append(
                f"Noise letter '{cell.letter}' at {tuple(cell.coord)} "
                f"is not in the alphabet"
            )

    if word:
        # Decoy starts make the first-letter hint highlight several cells
        decoys = sum(
            1 for cell in grid.iter_cells()
            if cell.coord not in on_path and cell.letter == word[0]
        )
        if decoys:
            warnings.append(
                f"{decoys} noise cells share the first letter '{word[0]}'"
            )

    return ValidationResult(
        valid=not errors,
        errors=errors,
        warnings=warnings,
        stats={
            "size": grid.size,
            "word_length": len(word),
            "noise_cells": noise_count,
        },
    )
