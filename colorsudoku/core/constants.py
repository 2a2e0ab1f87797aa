"""Shared constants and enumerations for the color sudoku engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple


GRID_SIZE = 9
BOX_SIZE = 3
CELL_COUNT = GRID_SIZE * GRID_SIZE

# Color indices are 0..8; the palette only matters for display.
COLOR_INDICES: Tuple[int, ...] = tuple(range(GRID_SIZE))

MAX_HISTORY_SIZE = 50
STORAGE_KEY = "color-sudoku-game-state"


class Difficulty(str, Enum):
    """Puzzle difficulty levels."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @classmethod
    def parse(cls, value: "Difficulty | str") -> "Difficulty":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            known = ", ".join(d.value for d in cls)
            raise ValueError(f"Unknown difficulty '{value}' (expected one of: {known})") from exc


# Number of cells to blank per difficulty; more blanks means a harder puzzle.
DIFFICULTY_CELLS_TO_REMOVE: Dict[Difficulty, int] = {
    Difficulty.EASY: 35,
    Difficulty.MEDIUM: 45,
    Difficulty.HARD: 55,
}

DIFFICULTY_LABELS: Dict[Difficulty, str] = {
    Difficulty.EASY: "Easy",
    Difficulty.MEDIUM: "Medium",
    Difficulty.HARD: "Hard",
}


class HintPosition(str, Enum):
    """Corner slots for pencil-mark hints inside a cell."""

    TOP_RIGHT = "top-right"
    TOP_LEFT = "top-left"
    BOTTOM_LEFT = "bottom-left"
    BOTTOM_RIGHT = "bottom-right"


# Write order for hint slots; also the index order of ``CellState.hints``.
HINT_POSITION_ORDER: Tuple[HintPosition, ...] = (
    HintPosition.TOP_RIGHT,
    HintPosition.TOP_LEFT,
    HintPosition.BOTTOM_LEFT,
    HintPosition.BOTTOM_RIGHT,
)


@dataclass(frozen=True)
class PaletteEntry:
    hex: str
    name: str


SUDOKU_COLORS: Tuple[PaletteEntry, ...] = (
    PaletteEntry("#FF0E41", "Red"),
    PaletteEntry("#FF510B", "Orange"),
    PaletteEntry("#FFCA09", "Amber"),
    PaletteEntry("#09F04A", "Green"),
    PaletteEntry("#12FFD1", "Cyan"),
    PaletteEntry("#1E91FF", "Blue"),
    PaletteEntry("#540FFF", "Indigo"),
    PaletteEntry("#CB0EFF", "Magenta"),
    PaletteEntry("#FF0EBC", "Pink"),
)
