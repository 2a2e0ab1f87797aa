"""Deterministic integrity checks for generated puzzles."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, List

from ..core.exceptions import ValidationError
from ..utils.logger import get_logger
from .exhaustive import count_solutions
from .grid import is_puzzle_of, is_valid_solution, validate_shape
from .solver import solve_logically

if TYPE_CHECKING:
    from .generator import PuzzleResult


LOGGER = get_logger(__name__)


@dataclass
class ValidationResult:
    ok: bool
    messages: List[str]


class PuzzleValidator:
    """Runs deterministic validation over a generated puzzle/solution pair."""

    def __init__(self, check_uniqueness: bool = True, uniqueness_timeout: float = 10.0) -> None:
        self.check_uniqueness = check_uniqueness
        self.uniqueness_timeout = uniqueness_timeout

    def validate(self, result: PuzzleResult) -> ValidationResult:
        try:
            self._check_shapes(result)
            self._check_solution(result)
            self._check_givens(result)
            self._check_blank_budget(result)
            self._check_logic_solution(result)
            if self.check_uniqueness:
                self._check_unique(result)
        except ValidationError as exc:
            LOGGER.error("Validation failed: %s", exc)
            return ValidationResult(ok=False, messages=[str(exc)])
        return ValidationResult(ok=True, messages=[])

    def _check_shapes(self, result: PuzzleResult) -> None:
        for label, grid in (("solution", result.solution), ("puzzle", result.puzzle)):
            try:
                validate_shape(grid)
            except ValueError as exc:
                raise ValidationError(f"Malformed {label}: {exc}") from exc

    def _check_solution(self, result: PuzzleResult) -> None:
        if not is_valid_solution(result.solution):
            raise ValidationError("Solution has a row, column or box that is not a permutation of the colors")

    def _check_givens(self, result: PuzzleResult) -> None:
        if not is_puzzle_of(result.puzzle, result.solution):
            raise ValidationError("Puzzle givens disagree with the stored solution")

    def _check_blank_budget(self, result: PuzzleResult) -> None:
        if result.blanks > result.requested_blanks:
            raise ValidationError(
                f"Puzzle has {result.blanks} blanks, more than the {result.requested_blanks} requested"
            )

    def _check_logic_solution(self, result: PuzzleResult) -> None:
        solved = solve_logically(result.puzzle)
        if solved is None:
            raise ValidationError("Puzzle cannot be finished without guessing")
        if solved != result.solution:
            raise ValidationError("Logical solution differs from the stored solution")

    def _check_unique(self, result: PuzzleResult) -> None:
        counted = count_solutions(result.puzzle, limit=2, timeout=self.uniqueness_timeout)
        if not counted.complete:
            raise ValidationError("Uniqueness check timed out")
        if counted.count != 1:
            raise ValidationError(f"Puzzle has {counted.count} solutions, expected exactly one")
