"""Pure session reducer: ``(Session, Action) -> Session``.

The input session is never mutated. Any action that would not change the
game (clue targets, out-of-range cells, repeated fills, nothing to clear)
returns the very same session object and records no history.
"""

from __future__ import annotations

import random
from dataclasses import replace
from typing import Callable, Dict, Optional

from ..core.models import CellState, Eraser, PaletteColor
from ..engine.generator import PuzzleGenerator
from ..engine.grid import in_bounds
from ..utils.logger import get_logger
from . import actions as act
from .board import check_win, create_empty_cell, replace_cell, reveal_cell
from .session import Session, create_initial_session, push_history

LOGGER = get_logger(__name__)

Handler = Callable[[Session, act.Action], Session]


class SessionReducer:
    """Applies actions to sessions.

    ``generator`` builds new games for :class:`~colorsudoku.game.actions.NewGame`.
    ``rng`` picks the cell filled by :class:`~colorsudoku.game.actions.UseHint`;
    it is independent of puzzle generation and unseeded by default.
    """

    def __init__(
        self,
        generator: Optional[PuzzleGenerator] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.generator = generator or PuzzleGenerator()
        self.rng = rng or random.Random()
        self._handlers: Dict[type, Handler] = {
            act.NewGame: self._new_game,
            act.SelectColor: self._select_color,
            act.SelectCell: self._select_cell,
            act.Deselect: self._deselect,
            act.FillCell: self._fill_cell,
            act.AddHint: self._add_hint,
            act.ClearCell: self._clear_cell,
            act.ClearHints: self._clear_hints,
            act.StartTimer: self._start_timer,
            act.UpdateTimer: self._update_timer,
            act.ToggleNumbers: self._toggle_numbers,
            act.CheckWin: self._check_win,
            act.UseHint: self._use_hint,
            act.ClearHintedCell: self._clear_hinted_cell,
            act.Undo: self._undo,
            act.Reset: self._reset,
            act.RevealSpecificCell: self._reveal_specific_cell,
        }

    def reduce(self, session: Session, action: act.Action) -> Session:
        handler = self._handlers.get(type(action))
        if handler is None:
            LOGGER.debug("Ignoring unknown action %r", action)
            return session
        return handler(session, action)

    __call__ = reduce

    # ------------------------------------------------------------------
    # Game lifecycle
    # ------------------------------------------------------------------
    def _new_game(self, session: Session, action: act.NewGame) -> Session:
        return create_initial_session(action.difficulty, action.seed, generator=self.generator)

    def _undo(self, session: Session, action: act.Undo) -> Session:
        if not session.history:
            return session
        return replace(
            session,
            grid=session.history[-1],
            history=session.history[:-1],
            is_won=False,
            last_hinted_cell=None,
        )

    def _reset(self, session: Session, action: act.Reset) -> Session:
        if (
            not session.history
            and not session.is_won
            and session.selected_cell is None
            and session.last_hinted_cell is None
            and session.grid == session.initial_grid
        ):
            return session
        return replace(
            session,
            grid=session.initial_grid,
            history=(),
            is_won=False,
            selected_cell=None,
            last_hinted_cell=None,
        )

    # ------------------------------------------------------------------
    # Selection and bookkeeping
    # ------------------------------------------------------------------
    def _select_color(self, session: Session, action: act.SelectColor) -> Session:
        return replace(session, selected_color=action.color)

    def _select_cell(self, session: Session, action: act.SelectCell) -> Session:
        if not in_bounds(action.row, action.col):
            return session
        return replace(session, selected_cell=(action.row, action.col))

    def _deselect(self, session: Session, action: act.Deselect) -> Session:
        return replace(session, selected_cell=None)

    def _start_timer(self, session: Session, action: act.StartTimer) -> Session:
        return replace(session, start_time=action.start_time)

    def _update_timer(self, session: Session, action: act.UpdateTimer) -> Session:
        return replace(session, elapsed_seconds=action.elapsed_seconds)

    def _toggle_numbers(self, session: Session, action: act.ToggleNumbers) -> Session:
        return replace(session, show_numbers=not session.show_numbers)

    def _check_win(self, session: Session, action: act.CheckWin) -> Session:
        return replace(session, is_won=check_win(session.grid))

    def _clear_hinted_cell(self, session: Session, action: act.ClearHintedCell) -> Session:
        return replace(session, last_hinted_cell=None)

    # ------------------------------------------------------------------
    # Grid mutations
    # ------------------------------------------------------------------
    def _fill_cell(self, session: Session, action: act.FillCell) -> Session:
        if not in_bounds(action.row, action.col):
            return session
        cell = session.cell(action.row, action.col)
        if cell.is_clue:
            return session

        color = session.selected_color
        if isinstance(color, Eraser):
            if cell.is_blank():
                return session
            return self._commit(session, action.row, action.col, create_empty_cell())

        if not isinstance(color, PaletteColor) or cell.filled_color == color.index:
            return session
        filled = replace(cell.without_hints(), filled_color=color.index)
        return self._commit(session, action.row, action.col, filled, recheck_win=True)

    def _add_hint(self, session: Session, action: act.AddHint) -> Session:
        if not in_bounds(action.row, action.col):
            return session
        cell = session.cell(action.row, action.col)
        if cell.is_clue or cell.filled_color is not None:
            return session

        color = session.selected_color
        if isinstance(color, Eraser):
            if not cell.has_hints():
                return session
            return self._commit(session, action.row, action.col, cell.without_hints())

        if not isinstance(color, PaletteColor) or color.index in cell.hints:
            return session
        return self._commit(session, action.row, action.col, cell.with_hint(color.index))

    def _clear_cell(self, session: Session, action: act.ClearCell) -> Session:
        if not in_bounds(action.row, action.col):
            return session
        cell = session.cell(action.row, action.col)
        if cell.is_clue or cell.is_blank():
            return session
        return self._commit(session, action.row, action.col, create_empty_cell())

    def _clear_hints(self, session: Session, action: act.ClearHints) -> Session:
        if not in_bounds(action.row, action.col):
            return session
        cell = session.cell(action.row, action.col)
        if cell.is_clue or not cell.has_hints():
            return session
        return self._commit(session, action.row, action.col, cell.without_hints())

    def _use_hint(self, session: Session, action: act.UseHint) -> Session:
        eligible = [
            (r, c)
            for r, row in enumerate(session.grid)
            for c, cell in enumerate(row)
            if not cell.is_clue and cell.filled_color is None
        ]
        if not eligible:
            return session
        row, col = eligible[self.rng.randrange(len(eligible))]
        LOGGER.debug("Hint fills (%d,%d)", row, col)
        return self._reveal(session, row, col)

    def _reveal_specific_cell(self, session: Session, action: act.RevealSpecificCell) -> Session:
        if not in_bounds(action.row, action.col):
            return session
        cell = session.cell(action.row, action.col)
        if cell.is_clue or cell.filled_color is not None:
            return session
        if not action.success:
            return replace(session, last_hinted_cell=(action.row, action.col))
        return self._reveal(session, action.row, action.col)

    def _reveal(self, session: Session, row: int, col: int) -> Session:
        revealed = reveal_cell(session.cell(row, col), session.solution[row][col])
        updated = self._commit(session, row, col, revealed, recheck_win=True)
        return replace(updated, last_hinted_cell=(row, col))

    @staticmethod
    def _commit(session: Session, row: int, col: int, cell: CellState, recheck_win: bool = False) -> Session:
        grid = replace_cell(session.grid, row, col, cell)
        changes = {"grid": grid, "history": push_history(session.history, session.grid)}
        if recheck_win:
            changes["is_won"] = check_win(grid)
        return replace(session, **changes)


_DEFAULT_REDUCER: Optional[SessionReducer] = None


def reduce(session: Session, action: act.Action) -> Session:
    """Apply ``action`` with a shared default reducer."""
    global _DEFAULT_REDUCER
    if _DEFAULT_REDUCER is None:
        _DEFAULT_REDUCER = SessionReducer()
    return _DEFAULT_REDUCER.reduce(session, action)
