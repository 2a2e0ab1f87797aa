"""Seeded pseudorandom sequence used by puzzle generation.

The generator is a Mulberry32 stream whose state is derived from a string
seed with a 31-multiplier rolling hash. Everything is kept in signed 32-bit
arithmetic so the same seed always yields the same puzzle.
"""

from __future__ import annotations

import random
import string
from typing import Iterator, List, Sequence, TypeVar

T = TypeVar("T")

_MASK32 = 0xFFFFFFFF
_TWO_POW_32 = 4294967296.0
_SEED_ALPHABET = string.digits + string.ascii_lowercase


def _int32(value: int) -> int:
    value &= _MASK32
    return value - 0x100000000 if value & 0x80000000 else value


def _imul(a: int, b: int) -> int:
    return _int32((a & _MASK32) * (b & _MASK32))


def _code_units(text: str) -> Iterator[int]:
    """Yield UTF-16 code units so astral characters hash as surrogate pairs."""
    for char in text:
        point = ord(char)
        if point > 0xFFFF:
            point -= 0x10000
            yield 0xD800 + (point >> 10)
            yield 0xDC00 + (point & 0x3FF)
        else:
            yield point


def hash_seed(seed: str) -> int:
    state = 0
    for unit in _code_units(seed):
        state = _int32(_imul(31, state) + unit)
    return state


class SeededRng:
    """Reproducible stream of floats in ``[0, 1)`` for a given seed string."""

    def __init__(self, seed: str) -> None:
        if not isinstance(seed, str) or not seed:
            raise ValueError("Seed must be a non-empty string")
        self.seed = seed
        self._state = hash_seed(seed)

    def random(self) -> float:
        self._state = _int32(self._state + 0x6D2B79F5)
        h = self._state
        t = _imul(h ^ ((h & _MASK32) >> 15), 1 | h)
        t = _int32(t + _imul(t ^ ((t & _MASK32) >> 7), 61 | t)) ^ t
        return ((t ^ ((t & _MASK32) >> 14)) & _MASK32) / _TWO_POW_32

    def randbelow(self, upper: int) -> int:
        return int(self.random() * upper)

    def shuffle(self, items: Sequence[T]) -> List[T]:
        """Return a Fisher-Yates shuffled copy of ``items``."""
        result = list(items)
        for i in range(len(result) - 1, 0, -1):
            j = self.randbelow(i + 1)
            result[i], result[j] = result[j], result[i]
        return result


def generate_random_seed() -> str:
    """Fresh, unseeded seed string for games started without one."""
    system = random.SystemRandom()
    return "".join(system.choice(_SEED_ALPHABET) for _ in range(26))
