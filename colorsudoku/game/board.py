"""Cell-grid helpers for game sessions: factories, win detection and counts."""

from __future__ import annotations

from dataclasses import replace
from typing import List, Optional, Sequence

from ..core.constants import GRID_SIZE
from ..core.models import CellGrid, CellState
from ..engine.grid import UNITS, is_complete_unit


def create_empty_cell() -> CellState:
    return CellState()


def create_clue_cell(color: int) -> CellState:
    return CellState(filled_color=color, is_clue=True)


def initialize_grid(puzzle: Sequence[Sequence[Optional[int]]]) -> CellGrid:
    """Turn a puzzle into play cells: givens become clues, blanks stay empty."""
    return tuple(
        tuple(create_clue_cell(value) if value is not None else create_empty_cell() for value in row)
        for row in puzzle
    )


def clue_only_grid(grid: CellGrid) -> CellGrid:
    """Keep clue cells, reset everything else to empty."""
    return tuple(
        tuple(cell.without_hints() if cell.is_clue else create_empty_cell() for cell in row)
        for row in grid
    )


def replace_cell(grid: CellGrid, row: int, col: int, cell: CellState) -> CellGrid:
    """Return a new grid with one cell swapped; untouched rows are shared."""
    updated = grid[row][:col] + (cell,) + grid[row][col + 1:]
    return grid[:row] + (updated,) + grid[row + 1:]


def reveal_cell(cell: CellState, color: int) -> CellState:
    """Fill with the solution color and lock the cell as a clue."""
    return replace(cell.without_hints(), filled_color=color, is_clue=True)


def check_win(grid: CellGrid) -> bool:
    """True when every row, column and box holds each color exactly once."""
    return all(is_complete_unit(grid[r][c].filled_color for r, c in unit) for unit in UNITS)


def count_filled_cells(grid: CellGrid) -> int:
    return sum(1 for row in grid for cell in row if cell.filled_color is not None)


def count_empty_cells(grid: CellGrid) -> int:
    return GRID_SIZE * GRID_SIZE - count_filled_cells(grid)


def count_color_usage(grid: CellGrid) -> List[int]:
    counts = [0] * GRID_SIZE
    for row in grid:
        for cell in row:
            if cell.filled_color is not None:
                counts[cell.filled_color] += 1
    return counts
