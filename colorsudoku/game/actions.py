"""Actions accepted by the session reducer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from ..core.constants import Difficulty
from ..core.models import SelectedColor


@dataclass(frozen=True)
class NewGame:
    difficulty: Difficulty
    seed: Optional[str] = None


@dataclass(frozen=True)
class SelectColor:
    color: SelectedColor


@dataclass(frozen=True)
class SelectCell:
    row: int
    col: int


@dataclass(frozen=True)
class Deselect:
    pass


@dataclass(frozen=True)
class FillCell:
    """Single tap on a cell."""

    row: int
    col: int


@dataclass(frozen=True)
class AddHint:
    """Double tap on a cell: write a pencil mark."""

    row: int
    col: int


@dataclass(frozen=True)
class ClearCell:
    row: int
    col: int


@dataclass(frozen=True)
class ClearHints:
    row: int
    col: int


@dataclass(frozen=True)
class StartTimer:
    start_time: float


@dataclass(frozen=True)
class UpdateTimer:
    elapsed_seconds: int


@dataclass(frozen=True)
class ToggleNumbers:
    pass


@dataclass(frozen=True)
class CheckWin:
    pass


@dataclass(frozen=True)
class UseHint:
    """Fill one random empty cell from the solution."""


@dataclass(frozen=True)
class ClearHintedCell:
    pass


@dataclass(frozen=True)
class Undo:
    pass


@dataclass(frozen=True)
class Reset:
    pass


@dataclass(frozen=True)
class RevealSpecificCell:
    """Reveal a chosen cell; ``success`` is rolled by the caller."""

    row: int
    col: int
    success: bool


Action = Union[
    NewGame,
    SelectColor,
    SelectCell,
    Deselect,
    FillCell,
    AddHint,
    ClearCell,
    ClearHints,
    StartTimer,
    UpdateTimer,
    ToggleNumbers,
    CheckWin,
    UseHint,
    ClearHintedCell,
    Undo,
    Reset,
    RevealSpecificCell,
]
