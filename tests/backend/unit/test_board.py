import random

import pytest

from triword.backend.board import COMMON_CONSONANTS, RARE_CONSONANTS, VOWELS, generate_grid, in_bounds
from triword.backend.errors import InvalidInput


def test_generate_grid_has_requested_shape_and_uppercase_letters() -> None:
    grid = generate_grid(rows=3, cols=5, rng=random.Random(7))

    assert len(grid) == 3
    assert all(len(row) == 5 for row in grid)
    assert all(letter.isalpha() and letter.isupper() and len(letter) == 1 for row in grid for letter in row)


def test_generate_grid_honours_pool_weights() -> None:
    vowels_only = generate_grid(rows=4, cols=4, vowel_weight=1.0, common_weight=0.0, rng=random.Random(1))
    rare_only = generate_grid(rows=4, cols=4, vowel_weight=0.0, common_weight=0.0, rng=random.Random(1))
    common_only = generate_grid(rows=4, cols=4, vowel_weight=0.0, common_weight=1.0, rng=random.Random(1))

    assert all(letter in VOWELS for row in vowels_only for letter in row)
    assert all(letter in RARE_CONSONANTS for row in rare_only for letter in row)
    assert all(letter in COMMON_CONSONANTS for row in common_only for letter in row)


def test_generate_grid_is_reproducible_with_seeded_rng() -> None:
    assert generate_grid(rng=random.Random(42)) == generate_grid(rng=random.Random(42))


@pytest.mark.parametrize(
    ("rows", "cols", "vowel_weight", "common_weight"),
    [(0, 4, 0.35, 0.5), (4, -1, 0.35, 0.5), (4, 4, 0.7, 0.5), (4, 4, -0.1, 0.5)],
)
def test_generate_grid_rejects_bad_parameters(rows: int, cols: int, vowel_weight: float, common_weight: float) -> None:
    with pytest.raises(InvalidInput):
        generate_grid(rows=rows, cols=cols, vowel_weight=vowel_weight, common_weight=common_weight)


def test_in_bounds() -> None:
    grid = [["A", "B"], ["C", "D"]]

    assert in_bounds(grid, (1, 1))
    assert not in_bounds(grid, (2, 0))
    assert not in_bounds(grid, (0, -1))
