"""Puzzle generation pipeline.

Two phases:
  1. Solution: seeded backtracking fills a complete grid in row-major order.
  2. Carving: cells are blanked one at a time, keeping each removal only if
     the logic solver can still finish the puzzle without guessing.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..core.constants import CELL_COUNT, COLOR_INDICES, DIFFICULTY_CELLS_TO_REMOVE, GRID_SIZE, Difficulty
from ..core.exceptions import GenerationError, ValidationError
from ..core.models import Grid, SolutionGrid
from ..utils.logger import get_logger
from .grid import all_positions, copy_grid, count_blanks, empty_grid, is_valid_placement
from .rng import SeededRng, generate_random_seed
from .solver import LogicSolver


LOGGER = get_logger(__name__)


def _default_targets() -> Dict[Difficulty, int]:
    return dict(DIFFICULTY_CELLS_TO_REMOVE)


@dataclass
class GeneratorConfig:
    blank_targets: Dict[Difficulty, int] = field(default_factory=_default_targets)
    verify_uniqueness: bool = False
    uniqueness_timeout: float = 10.0

    def __post_init__(self) -> None:
        targets: Dict[Difficulty, int] = {}
        for key, value in self.blank_targets.items():
            if not 0 <= int(value) <= CELL_COUNT:
                raise ValueError(f"Blank target for {key} must be within 0..{CELL_COUNT}, got {value}")
            targets[Difficulty.parse(key)] = int(value)
        self.blank_targets = targets

    def target_for(self, difficulty: Difficulty | str) -> int:
        level = Difficulty.parse(difficulty)
        try:
            return self.blank_targets[level]
        except KeyError as exc:
            raise ValueError(f"No blank target configured for difficulty '{level.value}'") from exc


@dataclass
class PuzzleResult:
    seed: str
    difficulty: Difficulty
    solution: SolutionGrid
    puzzle: Grid
    requested_blanks: int
    elapsed_seconds: float = 0.0

    @property
    def blanks(self) -> int:
        return count_blanks(self.puzzle)


class SolutionGenerator:
    """Fills an empty grid by backtracking over shuffled candidate values.

    The search is an explicit stack of frames (one per filled cell) rather
    than recursion. Each frame owns the value order drawn from the RNG when
    its cell was first entered, so the RNG is consumed exactly as a
    recursive search would consume it.
    """

    def __init__(self, rng: SeededRng) -> None:
        self.rng = rng

    def generate(self) -> SolutionGrid:
        grid = empty_grid()
        stack: List[_Frame] = [self._enter(0)]
        while stack:
            frame = stack[-1]
            row, col = divmod(frame.pos, GRID_SIZE)
            grid[row][col] = None
            value = frame.next_valid(grid, row, col)
            if value is None:
                stack.pop()
                continue
            grid[row][col] = value
            if frame.pos + 1 == CELL_COUNT:
                return [[v for v in r if v is not None] for r in grid]
            stack.append(self._enter(frame.pos + 1))
        raise GenerationError("Backtracking exhausted every candidate without completing the grid")

    def _enter(self, pos: int) -> "_Frame":
        return _Frame(pos=pos, order=self.rng.shuffle(COLOR_INDICES))


@dataclass
class _Frame:
    pos: int
    order: List[int]
    cursor: int = 0

    def next_valid(self, grid: Grid, row: int, col: int) -> Optional[int]:
        while self.cursor < len(self.order):
            value = self.order[self.cursor]
            self.cursor += 1
            if is_valid_placement(grid, row, col, value):
                return value
        return None


def carve_puzzle(
    solution: SolutionGrid,
    target_blanks: int,
    rng: SeededRng,
    solver: Optional[LogicSolver] = None,
) -> Grid:
    """Blank cells of ``solution`` while the puzzle stays logically solvable.

    Every position is tried at most once, in RNG-shuffled order. A blank is
    kept only if the solver still reaches a solution, so the puzzle is
    solvable after every accepted step. The result may have fewer blanks
    than ``target_blanks`` when no further removal survives the check.
    """
    solver = solver or LogicSolver()
    puzzle: Grid = copy_grid(solution)
    removed = 0
    attempts = 0
    for row, col in rng.shuffle(all_positions()):
        if removed >= target_blanks or attempts >= CELL_COUNT:
            break
        attempts += 1
        saved = puzzle[row][col]
        puzzle[row][col] = None
        if solver.run(puzzle).solved:
            removed += 1
        else:
            puzzle[row][col] = saved
            LOGGER.debug("Kept (%d,%d): removal would require guessing", row, col)
    if removed < target_blanks:
        LOGGER.info(
            "Carving stopped at %d/%d blanks after %d attempts",
            removed, target_blanks, attempts,
        )
    return puzzle


class PuzzleGenerator:
    """Seed in, ``{puzzle, solution}`` out."""

    def __init__(self, config: Optional[GeneratorConfig] = None, solver: Optional[LogicSolver] = None) -> None:
        self.config = config or GeneratorConfig()
        self.solver = solver or LogicSolver()

    def generate(self, seed: Optional[str] = None, difficulty: Difficulty | str = Difficulty.EASY) -> PuzzleResult:
        level = Difficulty.parse(difficulty)
        puzzle_seed = seed or generate_random_seed()
        target = self.config.target_for(level)
        started = time.perf_counter()

        rng = SeededRng(puzzle_seed)
        solution = SolutionGenerator(rng).generate()
        puzzle = carve_puzzle(solution, target, rng, solver=self.solver)

        result = PuzzleResult(
            seed=puzzle_seed,
            difficulty=level,
            solution=solution,
            puzzle=puzzle,
            requested_blanks=target,
            elapsed_seconds=time.perf_counter() - started,
        )
        LOGGER.info(
            "Generated %s puzzle for seed '%s': %d/%d blanks in %.2fs",
            level.value, puzzle_seed, result.blanks, target, result.elapsed_seconds,
        )
        if self.config.verify_uniqueness:
            self._verify(result)
        return result

    def _verify(self, result: PuzzleResult) -> None:
        from .validator import PuzzleValidator

        validation = PuzzleValidator(
            check_uniqueness=True,
            uniqueness_timeout=self.config.uniqueness_timeout,
        ).validate(result)
        if not validation.ok:
            raise ValidationError(f"Puzzle validation failed: {validation.messages}")


def generate_sudoku_puzzle(seed: str, difficulty: Difficulty | str) -> PuzzleResult:
    return PuzzleGenerator().generate(seed, difficulty)
