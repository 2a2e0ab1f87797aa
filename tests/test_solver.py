import unittest

from colorsudoku.engine.generator import PuzzleGenerator
from colorsudoku.engine.grid import copy_grid
from colorsudoku.engine.solver import (
    TECHNIQUES,
    LogicSolver,
    SolveStatus,
    apply_hidden_pairs,
    apply_hidden_singles,
    apply_naked_pairs,
    apply_naked_singles,
    initialize_candidates,
    is_solvable_with_logic,
    solve_logically,
)


# Shifted-row pattern: a valid solution without running the generator.
SOLUTION = [[(r * 3 + r // 3 + c) % 9 for c in range(9)] for r in range(9)]


def full_candidates():
    return [[set(range(9)) for _ in range(9)] for _ in range(9)]


class CandidateInitTests(unittest.TestCase):
    def test_givens_are_singletons_and_removed_from_peers(self) -> None:
        puzzle = [[None] * 9 for _ in range(9)]
        puzzle[4][4] = 6
        candidates = initialize_candidates(puzzle)
        self.assertEqual(candidates[4][4], {6})
        self.assertNotIn(6, candidates[4][0])
        self.assertNotIn(6, candidates[0][4])
        self.assertNotIn(6, candidates[3][5])
        self.assertIn(6, candidates[0][0])


class TechniqueTests(unittest.TestCase):
    def test_naked_singles_eliminate_from_peers(self) -> None:
        candidates = full_candidates()
        candidates[2][2] = {4}
        self.assertTrue(apply_naked_singles(candidates))
        self.assertNotIn(4, candidates[2][8])
        self.assertNotIn(4, candidates[8][2])
        self.assertNotIn(4, candidates[0][0])
        self.assertIn(4, candidates[3][3])
        self.assertFalse(apply_naked_singles(candidates))

    def test_hidden_single_in_row_is_fixed(self) -> None:
        candidates = full_candidates()
        for col in range(9):
            if col != 4:
                candidates[0][col].discard(5)
        self.assertTrue(apply_hidden_singles(candidates))
        self.assertEqual(candidates[0][4], {5})
        self.assertNotIn(5, candidates[4][4])
        self.assertNotIn(5, candidates[1][3])

    def test_naked_pair_clears_rest_of_shared_unit(self) -> None:
        candidates = full_candidates()
        candidates[0][0] = {3, 7}
        candidates[0][5] = {3, 7}
        self.assertTrue(apply_naked_pairs(candidates))
        self.assertEqual(candidates[0][0], {3, 7})
        self.assertEqual(candidates[0][5], {3, 7})
        for col in range(9):
            if col in (0, 5):
                continue
            self.assertNotIn(3, candidates[0][col])
            self.assertNotIn(7, candidates[0][col])
        # (0,0) and (0,5) share only the row, so other units keep both values.
        self.assertEqual(candidates[1][1], set(range(9)))
        self.assertEqual(candidates[5][0], set(range(9)))

    def test_naked_pair_ignores_different_pairs(self) -> None:
        candidates = full_candidates()
        candidates[0][0] = {3, 7}
        candidates[0][5] = {3, 8}
        self.assertFalse(apply_naked_pairs(candidates))

    def test_hidden_pair_restricts_both_cells(self) -> None:
        candidates = full_candidates()
        for col in range(2, 9):
            candidates[0][col] -= {1, 2}
        self.assertTrue(apply_hidden_pairs(candidates))
        self.assertEqual(candidates[0][0], {1, 2})
        self.assertEqual(candidates[0][1], {1, 2})
        self.assertFalse(apply_hidden_pairs(candidates))


class SolverLoopTests(unittest.TestCase):
    def test_complete_grid_is_solved(self) -> None:
        result = LogicSolver().run(SOLUTION)
        self.assertEqual(result.status, SolveStatus.SOLVED)
        self.assertEqual(result.to_grid(), SOLUTION)

    def test_single_blank_is_solved(self) -> None:
        puzzle = copy_grid(SOLUTION)
        puzzle[3][7] = None
        self.assertEqual(solve_logically(puzzle), SOLUTION)

    def test_empty_grid_is_stuck(self) -> None:
        puzzle = [[None] * 9 for _ in range(9)]
        result = LogicSolver().run(puzzle)
        self.assertEqual(result.status, SolveStatus.STUCK)
        self.assertIsNone(result.to_grid())
        self.assertFalse(is_solvable_with_logic(puzzle))

    def test_contradiction_is_invalid(self) -> None:
        puzzle = [[None] * 9 for _ in range(9)]
        puzzle[0][0] = 1
        puzzle[0][1] = 1
        result = LogicSolver().run(puzzle)
        self.assertEqual(result.status, SolveStatus.INVALID)
        self.assertIsNone(solve_logically(puzzle))

    def test_solver_does_not_mutate_puzzle(self) -> None:
        puzzle = copy_grid(SOLUTION)
        puzzle[0][0] = None
        snapshot = copy_grid(puzzle)
        solve_logically(puzzle)
        self.assertEqual(puzzle, snapshot)


class SolverPropertyTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        generator = PuzzleGenerator()
        cls.results = [
            generator.generate(seed, difficulty)
            for seed, difficulty in (("prop-1", "easy"), ("prop-2", "medium"), ("prop-3", "hard"))
        ]

    def test_logical_solution_equals_stored_solution(self) -> None:
        for result in self.results:
            with self.subTest(seed=result.seed):
                self.assertEqual(solve_logically(result.puzzle), result.solution)

    def test_solver_is_deterministic(self) -> None:
        solver = LogicSolver()
        for result in self.results:
            with self.subTest(seed=result.seed):
                first = solver.run(result.puzzle)
                second = solver.run(result.puzzle)
                self.assertEqual(first.candidates, second.candidates)
                self.assertEqual(first.technique_counts, second.technique_counts)

    def test_hard_puzzle_reports_technique_usage(self) -> None:
        result = LogicSolver().run(self.results[2].puzzle)
        self.assertTrue(result.solved)
        self.assertEqual(set(result.technique_counts), {name for name, _ in TECHNIQUES})
        self.assertGreater(sum(result.technique_counts.values()), 0)

    def test_reordered_techniques_never_disagree_with_solution(self) -> None:
        reordered = LogicSolver(tuple(reversed(TECHNIQUES)))
        for result in self.results:
            with self.subTest(seed=result.seed):
                outcome = reordered.run(result.puzzle)
                self.assertNotEqual(outcome.status, SolveStatus.INVALID)
                if outcome.solved:
                    self.assertEqual(outcome.to_grid(), result.solution)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
