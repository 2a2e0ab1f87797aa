"""CLI entrypoint for the color sudoku puzzle generator."""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any, Dict

from colorsudoku.core.constants import DIFFICULTY_CELLS_TO_REMOVE, Difficulty
from colorsudoku.engine.generator import GeneratorConfig, PuzzleGenerator
from colorsudoku.engine.solver import LogicSolver
from colorsudoku.engine.validator import PuzzleValidator
from colorsudoku.game.session import session_from_result
from colorsudoku.io.session_store import SessionStore
from colorsudoku.utils.logger import configure_logging
from colorsudoku.utils.pretty import format_session, print_puzzle_stats


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate logically solvable color sudoku puzzles",
    )
    parser.add_argument(
        "--difficulty",
        type=str,
        choices=[d.value for d in Difficulty],
        default=Difficulty.EASY.value,
        help="Difficulty level (easy, medium, hard)",
    )
    parser.add_argument("--seed", type=str, default=None, help="Seed string for reproducibility")
    parser.add_argument(
        "--blanks",
        type=int,
        default=None,
        help="Override the blank-cell target for the chosen difficulty",
    )
    parser.add_argument(
        "--verify",
        action="store_true",
        help="Validate the puzzle, including a CP-SAT uniqueness check",
    )
    parser.add_argument(
        "--verify-timeout",
        type=float,
        default=10.0,
        help="Time limit in seconds for the uniqueness check",
    )
    parser.add_argument("--pretty", action="store_true", help="Print grids and stats instead of JSON")
    parser.add_argument("--output", type=Path, help="Optional path to JSON output")
    parser.add_argument(
        "--save-session",
        type=Path,
        metavar="DIR",
        help="Start a session for the puzzle and save it in DIR",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        configure_logging(args.log_level)
    except ValueError as exc:
        parser.error(str(exc))

    if args.seed is not None and not args.seed:
        parser.error("--seed must not be empty")
    if args.blanks is not None and not 0 <= args.blanks <= 81:
        parser.error("--blanks must be between 0 and 81")

    difficulty = Difficulty.parse(args.difficulty)
    targets = dict(DIFFICULTY_CELLS_TO_REMOVE)
    if args.blanks is not None:
        targets[difficulty] = args.blanks
    config = GeneratorConfig(blank_targets=targets, uniqueness_timeout=args.verify_timeout)

    result = PuzzleGenerator(config).generate(args.seed, difficulty)
    solve = LogicSolver().run(result.puzzle)

    validation_messages: list[str] = []
    valid = True
    if args.verify:
        validation = PuzzleValidator(
            check_uniqueness=True,
            uniqueness_timeout=args.verify_timeout,
        ).validate(result)
        valid = validation.ok
        validation_messages = validation.messages

    if args.save_session:
        session = session_from_result(result)
        SessionStore(args.save_session).save(session)
        if args.pretty:
            print(format_session(session))

    if args.pretty:
        print_puzzle_stats(result, solve.technique_counts)
        if args.verify:
            print("Validation: " + ("ok" if valid else "; ".join(validation_messages)))
        return 0 if valid else 1

    payload: Dict[str, Any] = {
        "seed": result.seed,
        "difficulty": result.difficulty.value,
        "puzzle": result.puzzle,
        "solution": result.solution,
        "blanks": result.blanks,
        "requested_blanks": result.requested_blanks,
        "solve_status": solve.status.value,
        "techniques": solve.technique_counts,
        "validation": validation_messages,
    }

    output_text = json.dumps(payload, ensure_ascii=False, indent=2)
    if args.output:
        args.output.write_text(output_text, encoding="utf-8")
    else:
        print(output_text)
    return 0 if valid else 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
