"""Immutable game session state."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from ..core.constants import MAX_HISTORY_SIZE, Difficulty
from ..core.models import CellGrid, CellState, Position, SelectedColor
from ..engine.generator import PuzzleGenerator, PuzzleResult
from .board import initialize_grid

SolutionRows = Tuple[Tuple[int, ...], ...]


@dataclass(frozen=True)
class Session:
    """Everything a running game needs; replaced, never mutated.

    ``history`` holds grid snapshots taken before each mutating action,
    newest last. ``initial_grid`` is the clue-only layout used by Reset.
    """

    grid: CellGrid
    solution: SolutionRows
    initial_grid: CellGrid
    puzzle_seed: str
    difficulty: Difficulty
    selected_color: SelectedColor = None
    selected_cell: Optional[Position] = None
    is_won: bool = False
    start_time: Optional[float] = None
    elapsed_seconds: int = 0
    show_numbers: bool = False
    last_hinted_cell: Optional[Position] = None
    history: Tuple[CellGrid, ...] = ()

    def cell(self, row: int, col: int) -> CellState:
        return self.grid[row][col]


def session_from_result(result: PuzzleResult) -> Session:
    grid = initialize_grid(result.puzzle)
    return Session(
        grid=grid,
        solution=tuple(tuple(row) for row in result.solution),
        initial_grid=grid,
        puzzle_seed=result.seed,
        difficulty=result.difficulty,
    )


def create_initial_session(
    difficulty: Difficulty | str = Difficulty.EASY,
    seed: Optional[str] = None,
    generator: Optional[PuzzleGenerator] = None,
) -> Session:
    """Generate a puzzle and wrap it in a fresh session."""
    generator = generator or PuzzleGenerator()
    return session_from_result(generator.generate(seed, difficulty))


def push_history(history: Tuple[CellGrid, ...], grid: CellGrid) -> Tuple[CellGrid, ...]:
    """Append ``grid``, evicting the oldest snapshots beyond capacity."""
    return (history + (grid,))[-MAX_HISTORY_SIZE:]
