import unittest

from colorsudoku.core.constants import Difficulty
from colorsudoku.engine.generator import (
    GeneratorConfig,
    PuzzleGenerator,
    SolutionGenerator,
    carve_puzzle,
    generate_sudoku_puzzle,
)
from colorsudoku.engine.grid import count_blanks, is_puzzle_of, is_valid_solution
from colorsudoku.engine.rng import SeededRng
from colorsudoku.engine.solver import is_solvable_with_logic, solve_logically


class IdentityRng:
    """Stand-in RNG that never reorders anything."""

    def shuffle(self, items):
        return list(items)


class RecordingSolver:
    """Wraps the real solver and records every puzzle it was asked about."""

    def __init__(self) -> None:
        from colorsudoku.engine.solver import LogicSolver

        self._inner = LogicSolver()
        self.verdicts = []

    def run(self, puzzle):
        result = self._inner.run(puzzle)
        self.verdicts.append(([row[:] for row in puzzle], result.solved))
        return result


class SolutionGeneratorTests(unittest.TestCase):
    def test_solutions_are_valid_for_many_seeds(self) -> None:
        for seed in ("abc", "seed-1", "x", "\U0001F3B2", "a much longer seed"):
            with self.subTest(seed=seed):
                solution = SolutionGenerator(SeededRng(seed)).generate()
                self.assertTrue(is_valid_solution(solution))

    def test_same_seed_same_solution(self) -> None:
        first = SolutionGenerator(SeededRng("repeat")).generate()
        second = SolutionGenerator(SeededRng("repeat")).generate()
        self.assertEqual(first, second)

    def test_different_seeds_vary(self) -> None:
        first = SolutionGenerator(SeededRng("left")).generate()
        second = SolutionGenerator(SeededRng("right")).generate()
        self.assertNotEqual(first, second)

    def test_unshuffled_search_backtracks_to_valid_grid(self) -> None:
        solution = SolutionGenerator(IdentityRng()).generate()
        self.assertTrue(is_valid_solution(solution))
        self.assertEqual(solution[0], list(range(9)))


class CarverTests(unittest.TestCase):
    def setUp(self) -> None:
        self.solution = SolutionGenerator(SeededRng("carve")).generate()

    def test_zero_target_keeps_solution(self) -> None:
        puzzle = carve_puzzle(self.solution, 0, SeededRng("carve-0"))
        self.assertEqual(puzzle, self.solution)

    def test_carved_puzzle_respects_target_and_solution(self) -> None:
        puzzle = carve_puzzle(self.solution, 40, SeededRng("carve-40"))
        self.assertLessEqual(count_blanks(puzzle), 40)
        self.assertTrue(is_puzzle_of(puzzle, self.solution))
        self.assertTrue(is_solvable_with_logic(puzzle))

    def test_unreachable_target_is_accepted(self) -> None:
        puzzle = carve_puzzle(self.solution, 81, SeededRng("carve-all"))
        self.assertLess(count_blanks(puzzle), 81)
        self.assertTrue(is_solvable_with_logic(puzzle))

    def test_every_accepted_removal_keeps_puzzle_solvable(self) -> None:
        solver = RecordingSolver()
        carve_puzzle(self.solution, 55, SeededRng("carve-steps"), solver=solver)
        self.assertLessEqual(len(solver.verdicts), 81)
        accepted = [puzzle for puzzle, solved in solver.verdicts if solved]
        self.assertTrue(accepted)
        for puzzle in accepted:
            self.assertEqual(solve_logically(puzzle), self.solution)

    def test_solution_is_not_modified(self) -> None:
        snapshot = [row[:] for row in self.solution]
        carve_puzzle(self.solution, 45, SeededRng("carve-copy"))
        self.assertEqual(self.solution, snapshot)


class PuzzleGeneratorTests(unittest.TestCase):
    def test_easy_abc_scenario(self) -> None:
        result = generate_sudoku_puzzle("abc", "easy")
        self.assertEqual(result.seed, "abc")
        self.assertEqual(result.difficulty, Difficulty.EASY)
        self.assertEqual(result.requested_blanks, 35)
        self.assertLessEqual(result.blanks, 35)
        self.assertEqual(solve_logically(result.puzzle), result.solution)

    def test_every_difficulty_is_solvable(self) -> None:
        generator = PuzzleGenerator()
        for difficulty in Difficulty:
            for seed in ("d-1", "d-2"):
                with self.subTest(difficulty=difficulty, seed=seed):
                    result = generator.generate(seed, difficulty)
                    self.assertTrue(is_valid_solution(result.solution))
                    self.assertTrue(is_puzzle_of(result.puzzle, result.solution))
                    self.assertLessEqual(result.blanks, result.requested_blanks)
                    self.assertTrue(is_solvable_with_logic(result.puzzle))

    def test_generation_is_reproducible(self) -> None:
        first = generate_sudoku_puzzle("same", Difficulty.MEDIUM)
        second = generate_sudoku_puzzle("same", Difficulty.MEDIUM)
        self.assertEqual(first.solution, second.solution)
        self.assertEqual(first.puzzle, second.puzzle)

    def test_missing_seed_gets_random_one(self) -> None:
        result = PuzzleGenerator().generate(None, "easy")
        self.assertTrue(result.seed)
        self.assertTrue(is_solvable_with_logic(result.puzzle))

    def test_custom_blank_targets(self) -> None:
        config = GeneratorConfig(blank_targets={"easy": 10, "medium": 20, "hard": 30})
        result = PuzzleGenerator(config).generate("custom", "easy")
        self.assertEqual(result.requested_blanks, 10)
        self.assertEqual(result.blanks, 10)

    def test_verify_uniqueness_runs_validator(self) -> None:
        config = GeneratorConfig(verify_uniqueness=True)
        result = PuzzleGenerator(config).generate("verified", "medium")
        self.assertTrue(is_solvable_with_logic(result.puzzle))


class GeneratorConfigTests(unittest.TestCase):
    def test_defaults(self) -> None:
        config = GeneratorConfig()
        self.assertEqual(config.target_for("easy"), 35)
        self.assertEqual(config.target_for(Difficulty.MEDIUM), 45)
        self.assertEqual(config.target_for("HARD"), 55)

    def test_rejects_out_of_range_target(self) -> None:
        with self.assertRaises(ValueError):
            GeneratorConfig(blank_targets={"easy": 90})

    def test_rejects_unknown_difficulty(self) -> None:
        with self.assertRaises(ValueError):
            GeneratorConfig().target_for("extreme")

    def test_missing_target_is_reported(self) -> None:
        config = GeneratorConfig(blank_targets={"easy": 5})
        with self.assertRaises(ValueError):
            config.target_for("hard")


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
