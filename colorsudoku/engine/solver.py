"""Constraint-propagation solver that never guesses.

Every cell carries a candidate set. Four human-style techniques are applied
in a fixed priority order, restarting from the first one after any progress:

1. naked singles
2. hidden singles
3. naked pairs
4. hidden pairs

A puzzle counts as "solvable with logic" only if this loop reduces every
cell to a single candidate without any cell ever running out of candidates.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from itertools import combinations
from typing import Callable, Dict, List, Optional, Sequence, Set, Tuple

from ..core.constants import COLOR_INDICES, GRID_SIZE
from ..core.models import Grid, SolutionGrid
from ..utils.logger import get_logger
from .grid import PEERS, UNITS

LOGGER = get_logger(__name__)

CandidateGrid = List[List[Set[int]]]


class SolveStatus(str, Enum):
    SOLVED = "SOLVED"
    INVALID = "INVALID"
    STUCK = "STUCK"


@dataclass
class SolveResult:
    status: SolveStatus
    candidates: CandidateGrid
    technique_counts: Dict[str, int] = field(default_factory=dict)

    @property
    def solved(self) -> bool:
        return self.status == SolveStatus.SOLVED

    def to_grid(self) -> Optional[SolutionGrid]:
        if not self.solved:
            return None
        return [[next(iter(cell)) for cell in row] for row in self.candidates]


# ----------------------------------------------------------------------
# Candidate bookkeeping
# ----------------------------------------------------------------------
def initialize_candidates(puzzle: Sequence[Sequence[Optional[int]]]) -> CandidateGrid:
    """Seed candidates from ``puzzle`` and strip every given from its peers."""
    candidates: CandidateGrid = [
        [{value} if value is not None else set(COLOR_INDICES) for value in row]
        for row in puzzle
    ]
    for row in range(GRID_SIZE):
        for col in range(GRID_SIZE):
            value = puzzle[row][col]
            if value is not None:
                eliminate_from_peers(candidates, row, col, value)
    return candidates


def eliminate_from_peers(candidates: CandidateGrid, row: int, col: int, value: int) -> None:
    for r, c in PEERS[(row, col)]:
        candidates[r][c].discard(value)


def is_solved(candidates: CandidateGrid) -> bool:
    return all(len(cell) == 1 for row in candidates for cell in row)


def is_invalid(candidates: CandidateGrid) -> bool:
    return any(not cell for row in candidates for cell in row)


# ----------------------------------------------------------------------
# Techniques
# ----------------------------------------------------------------------
def apply_naked_singles(candidates: CandidateGrid) -> bool:
    """A cell with one candidate removes that value from all of its peers."""
    progress = False
    for row in range(GRID_SIZE):
        for col in range(GRID_SIZE):
            cell = candidates[row][col]
            if len(cell) != 1:
                continue
            value = next(iter(cell))
            for r, c in PEERS[(row, col)]:
                if value in candidates[r][c]:
                    candidates[r][c].discard(value)
                    progress = True
    return progress


def apply_hidden_singles(candidates: CandidateGrid) -> bool:
    """A value with a single possible cell in a unit is fixed to that cell."""
    progress = False
    for unit in UNITS:
        for value in COLOR_INDICES:
            spots = [(r, c) for r, c in unit if value in candidates[r][c]]
            if len(spots) != 1:
                continue
            row, col = spots[0]
            if len(candidates[row][col]) > 1:
                candidates[row][col] = {value}
                eliminate_from_peers(candidates, row, col, value)
                progress = True
    return progress


def apply_naked_pairs(candidates: CandidateGrid) -> bool:
    """Two cells of a unit sharing the same two candidates claim both values."""
    progress = False
    for unit in UNITS:
        pair_cells = [(r, c) for r, c in unit if len(candidates[r][c]) == 2]
        for first, second in combinations(pair_cells, 2):
            pair = candidates[first[0]][first[1]]
            if pair != candidates[second[0]][second[1]]:
                continue
            for r, c in unit:
                if (r, c) == first or (r, c) == second:
                    continue
                cell = candidates[r][c]
                if cell & pair:
                    cell -= pair
                    progress = True
    return progress


def apply_hidden_pairs(candidates: CandidateGrid) -> bool:
    """Two values confined to the same two cells of a unit evict all others there."""
    progress = False
    for unit in UNITS:
        for v1, v2 in combinations(COLOR_INDICES, 2):
            cells_v1 = [(r, c) for r, c in unit if v1 in candidates[r][c]]
            if len(cells_v1) != 2:
                continue
            cells_v2 = [(r, c) for r, c in unit if v2 in candidates[r][c]]
            if cells_v1 != cells_v2:
                continue
            for r, c in cells_v1:
                if len(candidates[r][c]) > 2:
                    candidates[r][c] = {v1, v2}
                    progress = True
    return progress


Technique = Callable[[CandidateGrid], bool]

# Priority order is part of the solver's contract.
TECHNIQUES: Tuple[Tuple[str, Technique], ...] = (
    ("naked_singles", apply_naked_singles),
    ("hidden_singles", apply_hidden_singles),
    ("naked_pairs", apply_naked_pairs),
    ("hidden_pairs", apply_hidden_pairs),
)


# ----------------------------------------------------------------------
# Solver loop
# ----------------------------------------------------------------------
class LogicSolver:
    """Runs the technique loop to a fixed point."""

    def __init__(self, techniques: Sequence[Tuple[str, Technique]] = TECHNIQUES) -> None:
        self.techniques = tuple(techniques)

    def run(self, puzzle: Sequence[Sequence[Optional[int]]]) -> SolveResult:
        """Solve ``puzzle`` as far as logic allows.

        Args:
            puzzle: 9x9 grid with ``None`` for empty cells.

        Returns:
            A :class:`SolveResult` whose status is ``SOLVED`` when every cell
            is a singleton, ``INVALID`` when some cell lost all candidates,
            and ``STUCK`` when no technique can make further progress.
        """
        candidates = initialize_candidates(puzzle)
        return self.propagate(candidates)

    def propagate(self, candidates: CandidateGrid) -> SolveResult:
        """Run the technique loop in place over an existing candidate grid."""
        counts: Dict[str, int] = {name: 0 for name, _ in self.techniques}
        while True:
            if is_invalid(candidates):
                return SolveResult(SolveStatus.INVALID, candidates, counts)
            if is_solved(candidates):
                return SolveResult(SolveStatus.SOLVED, candidates, counts)
            for name, technique in self.techniques:
                if technique(candidates):
                    counts[name] += 1
                    break
            else:
                LOGGER.debug("Logic solver stuck after %s", counts)
                return SolveResult(SolveStatus.STUCK, candidates, counts)


_DEFAULT_SOLVER = LogicSolver()


def is_solvable_with_logic(puzzle: Grid) -> bool:
    """True iff the technique loop reaches a solved state without contradiction."""
    return _DEFAULT_SOLVER.run(puzzle).solved


def solve_logically(puzzle: Grid) -> Optional[SolutionGrid]:
    """Return the fully assigned grid, or ``None`` if logic alone cannot finish it."""
    return _DEFAULT_SOLVER.run(puzzle).to_grid()
