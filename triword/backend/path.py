"""Ordered cell selection for the shared word path."""

from __future__ import annotations

from triword.backend.board import in_bounds
from triword.backend.errors import InvalidSelection
from triword.backend.models import Cell, Grid


def is_adjacent(a: Cell, b: Cell) -> bool:
    """King-move neighbours; a cell is not adjacent to itself."""
    row_diff = abs(a[0] - b[0])
    col_diff = abs(a[1] - b[1])
    return max(row_diff, col_diff) == 1


class SelectedPath:
    """Append/pop-last sequence of selected cells.

    The current word is never stored; it is read off the grid on demand so a
    power that rewrites a cell is reflected immediately.
    """

    def __init__(self) -> None:
        self._cells: list[Cell] = []

    def __len__(self) -> int:
        return len(self._cells)

    @property
    def cells(self) -> tuple[Cell, ...]:
        return tuple(self._cells)

    @property
    def last(self) -> Cell | None:
        return self._cells[-1] if self._cells else None

    def current_word(self, grid: Grid) -> str:
        return "".join(grid[row][col] for row, col in self._cells)

    def select(self, grid: Grid, row: int, col: int) -> None:
        cell = (row, col)
        if not in_bounds(grid, cell):
            raise InvalidSelection(f"Cell ({row}, {col}) is outside the grid")
        if cell == self.last:
            self._cells.pop()
            return
        if cell in self._cells:
            raise InvalidSelection("Cell already selected")
        if self.last is not None and not is_adjacent(self.last, cell):
            raise InvalidSelection()
        self._cells.append(cell)

    def reset(self) -> None:
        self._cells.clear()
