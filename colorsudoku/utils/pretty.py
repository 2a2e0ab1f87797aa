"""Pretty-print helpers for puzzles and sessions."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Dict, Optional, Sequence

from ..core.constants import BOX_SIZE, DIFFICULTY_LABELS, GRID_SIZE, SUDOKU_COLORS
from ..game.board import count_color_usage, count_empty_cells

if TYPE_CHECKING:
    from ..engine.generator import PuzzleResult
    from ..game.session import Session


EMPTY_SYMBOL = "."


def color_symbol(value: Optional[int]) -> str:
    """1-based digit for a color index, ``.`` for empty."""
    return EMPTY_SYMBOL if value is None else str(value + 1)


def format_grid(grid: Sequence[Sequence[Optional[int]]]) -> str:
    lines = []
    for r in range(GRID_SIZE):
        if r and r % BOX_SIZE == 0:
            lines.append("------+-------+------")
        chunks = []
        for box_col in range(0, GRID_SIZE, BOX_SIZE):
            chunks.append(" ".join(color_symbol(grid[r][c]) for c in range(box_col, box_col + BOX_SIZE)))
        lines.append(" | ".join(chunks))
    return "\n".join(lines)


def format_session(session: Session) -> str:
    grid = [[cell.filled_color for cell in row] for row in session.grid]
    status = "won" if session.is_won else "playing"
    label = DIFFICULTY_LABELS[session.difficulty]
    usage = " ".join(f"{i + 1}:{count}" for i, count in enumerate(count_color_usage(session.grid)))
    lines = [
        f"Seed: {session.puzzle_seed}  Difficulty: {label}  Status: {status}",
        format_grid(grid),
        f"Empty cells: {count_empty_cells(session.grid)}  Color usage: {usage}",
    ]
    return "\n".join(lines)


def color_legend() -> str:
    return ", ".join(f"{i + 1}={entry.name}" for i, entry in enumerate(SUDOKU_COLORS))


def print_puzzle_stats(
    result: PuzzleResult,
    technique_counts: Optional[Dict[str, int]] = None,
    *,
    stream=None,
) -> None:
    """Print puzzle, solution and carving stats."""

    stream = stream or sys.stdout
    print(f"Seed: {result.seed}  Difficulty: {result.difficulty.value}", file=stream)
    print(format_grid(result.puzzle), file=stream)
    print("", file=stream)
    print("Solution:", file=stream)
    print(format_grid(result.solution), file=stream)
    print("", file=stream)
    print(f"Colors: {color_legend()}", file=stream)
    print(
        f"Blanks: {result.blanks}/{result.requested_blanks} requested, "
        f"{GRID_SIZE * GRID_SIZE - result.blanks} clues",
        file=stream,
    )
    if technique_counts:
        used = ", ".join(f"{name}={count}" for name, count in technique_counts.items())
        print(f"Techniques: {used}", file=stream)
    print(f"Generated in {result.elapsed_seconds:.2f}s", file=stream)
