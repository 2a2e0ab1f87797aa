"""Grid geometry and plain-grid helpers shared by generation and solving."""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from ..core.constants import BOX_SIZE, GRID_SIZE
from ..core.models import Grid, Position, SolutionGrid


def box_origin(row: int, col: int) -> Position:
    return (row // BOX_SIZE) * BOX_SIZE, (col // BOX_SIZE) * BOX_SIZE


def in_bounds(row: int, col: int) -> bool:
    return 0 <= row < GRID_SIZE and 0 <= col < GRID_SIZE


def all_positions() -> List[Position]:
    return [(r, c) for r in range(GRID_SIZE) for c in range(GRID_SIZE)]


def _build_units() -> Tuple[Tuple[Position, ...], ...]:
    units: List[Tuple[Position, ...]] = []
    for row in range(GRID_SIZE):
        units.append(tuple((row, col) for col in range(GRID_SIZE)))
    for col in range(GRID_SIZE):
        units.append(tuple((row, col) for row in range(GRID_SIZE)))
    for box_row in range(0, GRID_SIZE, BOX_SIZE):
        for box_col in range(0, GRID_SIZE, BOX_SIZE):
            units.append(
                tuple(
                    (r, c)
                    for r in range(box_row, box_row + BOX_SIZE)
                    for c in range(box_col, box_col + BOX_SIZE)
                )
            )
    return tuple(units)


def _build_peers() -> Dict[Position, Tuple[Position, ...]]:
    peers: Dict[Position, Tuple[Position, ...]] = {}
    for row, col in all_positions():
        found: List[Position] = [(row, c) for c in range(GRID_SIZE) if c != col]
        found.extend((r, col) for r in range(GRID_SIZE) if r != row)
        box_row, box_col = box_origin(row, col)
        for r in range(box_row, box_row + BOX_SIZE):
            for c in range(box_col, box_col + BOX_SIZE):
                if r != row and c != col:
                    found.append((r, c))
        peers[(row, col)] = tuple(found)
    return peers


# Rows first, then columns, then boxes. Solver techniques scan in this order.
UNITS: Tuple[Tuple[Position, ...], ...] = _build_units()
PEERS: Dict[Position, Tuple[Position, ...]] = _build_peers()


def empty_grid() -> Grid:
    return [[None] * GRID_SIZE for _ in range(GRID_SIZE)]


def copy_grid(grid: Sequence[Sequence[Optional[int]]]) -> Grid:
    return [list(row) for row in grid]


def is_valid_placement(grid: Grid, row: int, col: int, value: int) -> bool:
    """True if ``value`` does not already appear in the cell's row, column or box."""
    if value in grid[row]:
        return False
    if any(grid[r][col] == value for r in range(GRID_SIZE)):
        return False
    box_row, box_col = box_origin(row, col)
    for r in range(box_row, box_row + BOX_SIZE):
        for c in range(box_col, box_col + BOX_SIZE):
            if grid[r][c] == value:
                return False
    return True


def is_complete_unit(values: Iterable[Optional[int]]) -> bool:
    """A unit is complete when it holds each of the nine colors exactly once."""
    seen = set()
    for value in values:
        if value is None or value in seen:
            return False
        seen.add(value)
    return seen == set(range(GRID_SIZE))


def is_valid_solution(grid: Sequence[Sequence[Optional[int]]]) -> bool:
    if len(grid) != GRID_SIZE or any(len(row) != GRID_SIZE for row in grid):
        return False
    return all(is_complete_unit(grid[r][c] for r, c in unit) for unit in UNITS)


def is_puzzle_of(puzzle: Grid, solution: SolutionGrid) -> bool:
    """True if every given in ``puzzle`` agrees with ``solution``."""
    for row in range(GRID_SIZE):
        for col in range(GRID_SIZE):
            value = puzzle[row][col]
            if value is not None and value != solution[row][col]:
                return False
    return True


def count_blanks(grid: Grid) -> int:
    return sum(1 for row in grid for value in row if value is None)


def validate_shape(grid: Sequence[Sequence[Optional[int]]]) -> None:
    """Raise ``ValueError`` unless ``grid`` is 9x9 with entries in 0..8 or None."""
    if len(grid) != GRID_SIZE:
        raise ValueError(f"Grid must have {GRID_SIZE} rows, got {len(grid)}")
    for r, row in enumerate(grid):
        if len(row) != GRID_SIZE:
            raise ValueError(f"Row {r} must have {GRID_SIZE} cells, got {len(row)}")
        for c, value in enumerate(row):
            if value is None:
                continue
            if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value < GRID_SIZE:
                raise ValueError(f"Invalid color {value!r} at ({r},{c})")
