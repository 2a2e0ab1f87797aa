"""CP-SAT search oracle using OR-Tools.

The logic solver answers "is this solvable without guessing"; this module
answers "how many solutions exist at all" by full search. It backs the
uniqueness check in :mod:`colorsudoku.engine.validator`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from ortools.sat.python import cp_model

from ..core.constants import GRID_SIZE
from ..core.models import Position, SolutionGrid
from ..utils.logger import get_logger
from .grid import UNITS, validate_shape

LOGGER = get_logger(__name__)


@dataclass
class SolutionCount:
    count: int
    complete: bool  # False when the time limit cut the search short
    first_solution: Optional[SolutionGrid] = None

    @property
    def unique(self) -> bool:
        return self.complete and self.count == 1


class _CountingCallback(cp_model.CpSolverSolutionCallback):
    def __init__(self, cells: Dict[Position, cp_model.IntVar], limit: int) -> None:
        super().__init__()
        self._cells = cells
        self._limit = limit
        self.count = 0
        self.first: Optional[SolutionGrid] = None

    def on_solution_callback(self) -> None:
        self.count += 1
        if self.first is None:
            self.first = [
                [int(self.value(self._cells[(r, c)])) for c in range(GRID_SIZE)]
                for r in range(GRID_SIZE)
            ]
        if self.count >= self._limit:
            self.stop_search()


def _build_model(puzzle: Sequence[Sequence[Optional[int]]]) -> Tuple[cp_model.CpModel, Dict[Position, cp_model.IntVar]]:
    validate_shape(puzzle)
    model = cp_model.CpModel()
    cells: Dict[Position, cp_model.IntVar] = {}
    for r in range(GRID_SIZE):
        for c in range(GRID_SIZE):
            value = puzzle[r][c]
            if value is None:
                cells[(r, c)] = model.new_int_var(0, GRID_SIZE - 1, f"C_{r}_{c}")
            else:
                cells[(r, c)] = model.new_constant(value)
    for unit in UNITS:
        model.add_all_different([cells[pos] for pos in unit])
    return model, cells


def count_solutions(
    puzzle: Sequence[Sequence[Optional[int]]],
    limit: int = 2,
    timeout: float = 10.0,
) -> SolutionCount:
    """Count solutions of ``puzzle`` up to ``limit``.

    Args:
        puzzle: 9x9 grid with ``None`` for empty cells.
        limit: Stop enumerating once this many solutions are found. The
            default of 2 is enough to tell unique puzzles apart.
        timeout: Solver time limit in seconds.
    """
    model, cells = _build_model(puzzle)
    solver = cp_model.CpSolver()
    solver.parameters.max_time_in_seconds = timeout
    solver.parameters.enumerate_all_solutions = True
    solver.parameters.num_workers = 1

    callback = _CountingCallback(cells, limit)
    status = solver.solve(model, callback)
    complete = status in (cp_model.OPTIMAL, cp_model.INFEASIBLE) or callback.count >= limit
    LOGGER.debug(
        "CP-SAT: %d solution(s) (status=%s, %.2fs)",
        callback.count, solver.status_name(status), solver.wall_time,
    )
    return SolutionCount(count=callback.count, complete=complete, first_solution=callback.first)


def solve_exhaustively(
    puzzle: Sequence[Sequence[Optional[int]]],
    timeout: float = 10.0,
) -> Optional[SolutionGrid]:
    """Return any solution of ``puzzle`` found by full search, or ``None``."""
    model, cells = _build_model(puzzle)
    solver = cp_model.CpSolver()
    solver.parameters.max_time_in_seconds = timeout
    status = solver.solve(model)
    if status not in (cp_model.OPTIMAL, cp_model.FEASIBLE):
        LOGGER.warning("CP-SAT: no solution found (status=%s)", solver.status_name(status))
        return None
    grid: List[List[int]] = [
        [int(solver.value(cells[(r, c)])) for c in range(GRID_SIZE)]
        for r in range(GRID_SIZE)
    ]
    return grid
