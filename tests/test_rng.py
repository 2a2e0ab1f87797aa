import unittest

from colorsudoku.engine.rng import SeededRng, generate_random_seed, hash_seed


class SeedHashTests(unittest.TestCase):
    def test_hash_matches_rolling_31_hash(self) -> None:
        self.assertEqual(hash_seed("a"), 97)
        self.assertEqual(hash_seed("abc"), 96354)

    def test_hash_wraps_to_signed_32_bits(self) -> None:
        value = hash_seed("a much longer seed string that overflows")
        self.assertGreaterEqual(value, -(2 ** 31))
        self.assertLess(value, 2 ** 31)

    def test_astral_characters_hash_as_surrogate_pairs(self) -> None:
        high, low = 0xD83C, 0xDFB2  # U+1F3B2
        self.assertEqual(hash_seed("\U0001F3B2"), 31 * high + low)


class SeededRngTests(unittest.TestCase):
    def test_same_seed_same_sequence(self) -> None:
        first = SeededRng("abc")
        second = SeededRng("abc")
        self.assertEqual([first.random() for _ in range(50)], [second.random() for _ in range(50)])

    def test_different_seeds_diverge(self) -> None:
        first = SeededRng("abc")
        second = SeededRng("abd")
        self.assertNotEqual([first.random() for _ in range(10)], [second.random() for _ in range(10)])

    def test_values_in_unit_interval(self) -> None:
        rng = SeededRng("range-check")
        for _ in range(2000):
            value = rng.random()
            self.assertGreaterEqual(value, 0.0)
            self.assertLess(value, 1.0)

    def test_shuffle_returns_permutation_without_touching_input(self) -> None:
        items = list(range(9))
        shuffled = SeededRng("shuffle").shuffle(items)
        self.assertEqual(items, list(range(9)))
        self.assertEqual(sorted(shuffled), items)

    def test_shuffle_is_reproducible(self) -> None:
        positions = [(r, c) for r in range(9) for c in range(9)]
        self.assertEqual(SeededRng("p").shuffle(positions), SeededRng("p").shuffle(positions))

    def test_empty_seed_rejected(self) -> None:
        with self.assertRaises(ValueError):
            SeededRng("")


class RandomSeedTests(unittest.TestCase):
    def test_random_seed_is_non_empty_base36(self) -> None:
        seed = generate_random_seed()
        self.assertTrue(seed)
        self.assertTrue(all(ch.isdigit() or "a" <= ch <= "z" for ch in seed))

    def test_random_seeds_differ(self) -> None:
        self.assertNotEqual(generate_random_seed(), generate_random_seed())


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
