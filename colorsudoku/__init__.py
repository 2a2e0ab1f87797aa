"""Color sudoku puzzle engine.

This package exposes the public API surface via:

- ``colorsudoku.engine.generator.PuzzleGenerator``: seeded puzzle generation.
- ``colorsudoku.engine.solver``: the no-guessing logic solver.
- ``colorsudoku.game.reducer.SessionReducer``: pure game-session transitions.
"""

from .core.constants import Difficulty
from .engine.generator import GeneratorConfig, PuzzleGenerator, PuzzleResult
from .engine.solver import LogicSolver, is_solvable_with_logic, solve_logically
from .game.reducer import SessionReducer, reduce
from .game.session import Session, create_initial_session

__all__ = [
    "Difficulty",
    "GeneratorConfig",
    "PuzzleGenerator",
    "PuzzleResult",
    "LogicSolver",
    "is_solvable_with_logic",
    "solve_logically",
    "SessionReducer",
    "reduce",
    "Session",
    "create_initial_session",
]

__version__ = "0.1.0"
