"""Lossless conversion between sessions and JSON-compatible documents.

Cells use the layout hosts already persist::

    {"filledColor": 3 | null,
     "hints": {"top-right": null, "top-left": 5, ...},
     "isClue": false,
     "nextHintPosition": "top-left"}

Older documents without ``history`` or ``initialGrid`` are migrated on load.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Sequence

from ..core.constants import GRID_SIZE, HINT_POSITION_ORDER, Difficulty, HintPosition
from ..core.exceptions import SessionFormatError
from ..core.models import ERASER, CellGrid, CellState, Eraser, PaletteColor, Position, SelectedColor
from ..game.board import clue_only_grid
from ..game.session import Session
from ..utils.logger import get_logger

LOGGER = get_logger(__name__)

ERASER_TOKEN = "eraser"


# ----------------------------------------------------------------------
# Encoding
# ----------------------------------------------------------------------
def cell_to_jsonable(cell: CellState) -> Dict[str, Any]:
    return {
        "filledColor": cell.filled_color,
        "hints": {position.value: cell.hints[index] for index, position in enumerate(HINT_POSITION_ORDER)},
        "isClue": cell.is_clue,
        "nextHintPosition": cell.next_hint.value,
    }


def grid_to_jsonable(grid: CellGrid) -> List[List[Dict[str, Any]]]:
    return [[cell_to_jsonable(cell) for cell in row] for row in grid]


def _color_to_jsonable(color: SelectedColor) -> Any:
    if isinstance(color, Eraser):
        return ERASER_TOKEN
    if isinstance(color, PaletteColor):
        return color.index
    return None


def _position_to_jsonable(position: Optional[Position]) -> Optional[Dict[str, int]]:
    if position is None:
        return None
    return {"row": position[0], "col": position[1]}


def session_to_jsonable(session: Session) -> Dict[str, Any]:
    return {
        "grid": grid_to_jsonable(session.grid),
        "solution": [list(row) for row in session.solution],
        "selectedColor": _color_to_jsonable(session.selected_color),
        "selectedCell": _position_to_jsonable(session.selected_cell),
        "isWon": session.is_won,
        "puzzleSeed": session.puzzle_seed,
        "difficulty": session.difficulty.value,
        "startTime": session.start_time,
        "elapsedSeconds": session.elapsed_seconds,
        "showNumbers": session.show_numbers,
        "lastHintedCell": _position_to_jsonable(session.last_hinted_cell),
        "history": [grid_to_jsonable(snapshot) for snapshot in session.history],
        "initialGrid": grid_to_jsonable(session.initial_grid),
    }


# ----------------------------------------------------------------------
# Decoding
# ----------------------------------------------------------------------
def _color_index(value: Any, where: str) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value < GRID_SIZE:
        raise SessionFormatError(f"Invalid color {value!r} in {where}")
    return value


def cell_from_jsonable(doc: Mapping[str, Any], where: str = "cell") -> CellState:
    if not isinstance(doc, Mapping):
        raise SessionFormatError(f"Expected an object for {where}, got {type(doc).__name__}")
    hints_doc = doc.get("hints") or {}
    if not isinstance(hints_doc, Mapping):
        raise SessionFormatError(f"Hints of {where} must be an object")
    hints = tuple(_color_index(hints_doc.get(position.value), where) for position in HINT_POSITION_ORDER)
    try:
        next_hint = HintPosition(doc.get("nextHintPosition", HintPosition.TOP_RIGHT.value))
    except ValueError as exc:
        raise SessionFormatError(f"Unknown hint position in {where}") from exc
    return CellState(
        filled_color=_color_index(doc.get("filledColor"), where),
        hints=hints,  # type: ignore[arg-type]
        is_clue=_flag(doc, "isClue", where),
        next_hint=next_hint,
    )


def grid_from_jsonable(doc: Any, where: str = "grid") -> CellGrid:
    rows = _require_rows(doc, where)
    return tuple(
        tuple(cell_from_jsonable(cell, f"{where}[{r}][{c}]") for c, cell in enumerate(row))
        for r, row in enumerate(rows)
    )


def _require_rows(doc: Any, where: str) -> Sequence[Sequence[Any]]:
    if not isinstance(doc, list) or len(doc) != GRID_SIZE:
        raise SessionFormatError(f"{where} must be a list of {GRID_SIZE} rows")
    for r, row in enumerate(doc):
        if not isinstance(row, list) or len(row) != GRID_SIZE:
            raise SessionFormatError(f"{where}[{r}] must be a list of {GRID_SIZE} cells")
    return doc


def _color_from_jsonable(value: Any) -> SelectedColor:
    if value == ERASER_TOKEN:
        return ERASER
    index = _color_index(value, "selectedColor")
    return PaletteColor(index) if index is not None else None


def _position_from_jsonable(doc: Any, where: str) -> Optional[Position]:
    if doc is None:
        return None
    try:
        return int(doc["row"]), int(doc["col"])
    except (KeyError, TypeError, ValueError) as exc:
        raise SessionFormatError(f"Invalid position in {where}: {doc!r}") from exc


def session_from_jsonable(doc: Mapping[str, Any]) -> Session:
    """Rebuild a session from :func:`session_to_jsonable` output."""
    if not isinstance(doc, Mapping):
        raise SessionFormatError("Session document must be an object")
    for key in ("grid", "solution", "puzzleSeed", "difficulty"):
        if key not in doc:
            raise SessionFormatError(f"Session document is missing '{key}'")

    grid = grid_from_jsonable(doc["grid"])
    solution_rows = _require_rows(doc["solution"], "solution")
    solution = tuple(
        tuple(_solution_value(value, r, c) for c, value in enumerate(row))
        for r, row in enumerate(solution_rows)
    )

    history_doc = doc.get("history")
    if history_doc is None:
        LOGGER.info("Session document has no history; starting with an empty undo stack")
        history_doc = []
    if not isinstance(history_doc, list):
        raise SessionFormatError("history must be a list of grids")
    history = tuple(grid_from_jsonable(snapshot, f"history[{i}]") for i, snapshot in enumerate(history_doc))

    if doc.get("initialGrid") is None:
        LOGGER.info("Session document has no initial grid; deriving it from clue cells")
        initial_grid = clue_only_grid(grid)
    else:
        initial_grid = grid_from_jsonable(doc["initialGrid"], "initialGrid")

    try:
        difficulty = Difficulty.parse(doc["difficulty"])
    except ValueError as exc:
        raise SessionFormatError(str(exc)) from exc

    return Session(
        grid=grid,
        solution=solution,
        initial_grid=initial_grid,
        puzzle_seed=str(doc["puzzleSeed"]),
        difficulty=difficulty,
        selected_color=_color_from_jsonable(doc.get("selectedColor")),
        selected_cell=_position_from_jsonable(doc.get("selectedCell"), "selectedCell"),
        is_won=_flag(doc, "isWon", "session"),
        start_time=_start_time(doc.get("startTime")),
        elapsed_seconds=_elapsed_seconds(doc.get("elapsedSeconds", 0)),
        show_numbers=_flag(doc, "showNumbers", "session"),
        last_hinted_cell=_position_from_jsonable(doc.get("lastHintedCell"), "lastHintedCell"),
        history=history,
    )


def _solution_value(value: Any, row: int, col: int) -> int:
    index = _color_index(value, f"solution[{row}][{col}]")
    if index is None:
        raise SessionFormatError(f"solution[{row}][{col}] is empty")
    return index


def _flag(doc: Mapping[str, Any], key: str, where: str) -> bool:
    value = doc.get(key, False)
    if not isinstance(value, bool):
        raise SessionFormatError(f"{key} of {where} must be true or false, got {value!r}")
    return value


def _start_time(value: Any) -> Optional[float]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise SessionFormatError(f"startTime must be a number or null, got {value!r}")
    return value


def _elapsed_seconds(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise SessionFormatError(f"elapsedSeconds must be a non-negative integer, got {value!r}")
    return value
