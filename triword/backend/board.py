"""Letter grid generation."""

from __future__ import annotations

import random

from triword.backend.errors import InvalidInput
from triword.backend.models import Grid

VOWELS = "AEIOU"
COMMON_CONSONANTS = "RSTLNMBD"
RARE_CONSONANTS = "CFGHJKPQVWXYZ"


def generate_grid(
    rows: int = 4,
    cols: int = 4,
    vowel_weight: float = 0.35,
    common_weight: float = 0.50,
    rng: random.Random | None = None,
) -> Grid:
    """Draw every cell independently from three weighted letter pools.

    The rare-consonant pool takes whatever weight is left after vowels and
    common consonants. Nothing guarantees the grid spells a valid word.
    """
    if rows <= 0 or cols <= 0:
        raise InvalidInput(f"Grid size must be positive, got {rows}x{cols}")
    if not (0.0 <= vowel_weight <= 1.0 and 0.0 <= common_weight <= 1.0):
        raise InvalidInput("Letter weights must be between 0 and 1")
    if vowel_weight + common_weight > 1.0 + 1e-9:
        raise InvalidInput("Vowel and common consonant weights exceed 1")

    draw = rng or random.Random()
    common_cutoff = vowel_weight + common_weight
    grid: Grid = []
    for _ in range(rows):
        row: list[str] = []
        for _ in range(cols):
            roll = draw.random()
            if roll < vowel_weight:
                pool = VOWELS
            elif roll < common_cutoff:
                pool = COMMON_CONSONANTS
            else:
                pool = RARE_CONSONANTS
            row.append(draw.choice(pool))
        grid.append(row)
    return grid


def in_bounds(grid: Grid, cell: tuple[int, int]) -> bool:
    row, col = cell
    return 0 <= row < len(grid) and 0 <= col < len(grid[row])
