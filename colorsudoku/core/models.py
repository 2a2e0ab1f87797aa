"""Data models shared by the generator, solver and game session."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import List, Optional, Tuple, Union

from .constants import GRID_SIZE, HINT_POSITION_ORDER, HintPosition


Grid = List[List[Optional[int]]]  # row-major, None marks an empty cell
SolutionGrid = List[List[int]]
Position = Tuple[int, int]

HintSlots = Tuple[Optional[int], Optional[int], Optional[int], Optional[int]]
EMPTY_HINTS: HintSlots = (None, None, None, None)


@dataclass(frozen=True)
class PaletteColor:
    """A real color from the palette, identified by its index."""

    index: int

    def __post_init__(self) -> None:
        if not 0 <= self.index < GRID_SIZE:
            raise ValueError(f"Color index {self.index} outside 0..{GRID_SIZE - 1}")


@dataclass(frozen=True)
class Eraser:
    """Palette pseudo-color that clears cells instead of filling them."""


ERASER = Eraser()

SelectedColor = Union[PaletteColor, Eraser, None]


@dataclass(frozen=True)
class CellState:
    """Play state of a single cell.

    ``hints`` holds the four corner slots in ``HINT_POSITION_ORDER`` and
    ``next_hint`` is the slot the next pencil mark is written to.
    """

    filled_color: Optional[int] = None
    hints: HintSlots = EMPTY_HINTS
    is_clue: bool = False
    next_hint: HintPosition = HintPosition.TOP_RIGHT

    def has_hints(self) -> bool:
        return any(hint is not None for hint in self.hints)

    def is_blank(self) -> bool:
        return self.filled_color is None and not self.has_hints()

    def hint_at(self, position: HintPosition) -> Optional[int]:
        return self.hints[HINT_POSITION_ORDER.index(position)]

    def with_hint(self, color: int) -> "CellState":
        slot = HINT_POSITION_ORDER.index(self.next_hint)
        hints = list(self.hints)
        hints[slot] = color
        following = HINT_POSITION_ORDER[(slot + 1) % len(HINT_POSITION_ORDER)]
        return replace(self, hints=tuple(hints), next_hint=following)

    def without_hints(self) -> "CellState":
        return replace(self, hints=EMPTY_HINTS, next_hint=HintPosition.TOP_RIGHT)


CellGrid = Tuple[Tuple[CellState, ...], ...]
