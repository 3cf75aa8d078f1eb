"""Board state owned on behalf of a renderer.

Every incoming position string is decoded, padded and clustered into a
candidate board. Whether the candidate replaces the current board right away
or after an animation window is decided by a two-state machine:

- IDLE: publish the diff, start the animation timer, go to ANIMATION_PENDING.
- ANIMATION_PENDING: a newer position wins; cancel the timer and adopt it now.

A locally applied move (``move_piece``) or an explicit ``set_manual_move``
makes the next update adopt immediately without animating, because the
position source echoes back a move the user has already seen.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import List, Optional

from .config import BoardConfig
from .core.board import BoardState
from .core.events import (
    AnimationCancelled, AnimationStarted, BoardAdopted, PieceMoved, UnitMaterialized,
)
from .core.setup import build_board
from .core.types import EMPTY_SQUARE, NON_EXISTENT_SQUARE, Idx, Row, Square, is_piece
from .diff import Diff, diff
from .fen import parse_extended_fen
from .scheduling import Handle, ManualScheduler, Scheduler

LOGGER = logging.getLogger("extboard.store")


class AnimationState(Enum):
    IDLE = "IDLE"
    ANIMATION_PENDING = "ANIMATION_PENDING"


class Listener:
    def on_event(self, store: "BoardStateStore", event: object) -> None:
        return


class BoardStateStore:
    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        scheduler: Optional[Scheduler] = None,
    ) -> None:
        self.config = (config or BoardConfig()).validate()
        self.scheduler: Scheduler = scheduler if scheduler is not None else ManualScheduler()
        self.listeners: List[Listener] = []

        self._board = BoardState()
        self._diff = Diff()
        self._state = AnimationState.IDLE
        self._manual_move = False
        self._timer: Optional[Handle] = None
        self._last_fen: Optional[str] = None

    # --- events ---
    def emit(self, event: object) -> None:
        for listener in list(self.listeners):
            listener.on_event(self, event)

    def _build(self, rows: List[Row]) -> BoardState:
        cfg = self.config
        return build_board(
            rows,
            cfg.horizontal_add_unit,
            cfg.vertical_add_unit,
            cfg.horizontal_extend_limit,
            cfg.vertical_extend_limit,
        )

    def _adopt(self, board: BoardState, reason: str) -> None:
        self._board = board
        LOGGER.debug("store_board_adopted", extra={"reason": reason, "rows": board.num_rows, "cols": board.num_cols})
        self.emit(BoardAdopted(reason=reason))

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    # --- input ---
    def update(self, fen: str) -> None:
        """Feed a new position string from the external source."""
        self._last_fen = fen
        candidate = self._build(parse_extended_fen(fen))
        d = diff(self._board.piece_map(), candidate.piece_map())

        if self._manual_move:
            self._manual_move = False
            self._diff = Diff()
            if self._state is AnimationState.ANIMATION_PENDING:
                self._cancel_timer()
                self._state = AnimationState.IDLE
                LOGGER.info("store_animation_cancelled", extra={"fen": fen})
                self.emit(AnimationCancelled())
            self._adopt(candidate, "manual_move")
            return

        if self._state is AnimationState.ANIMATION_PENDING:
            self._cancel_timer()
            self._state = AnimationState.IDLE
            LOGGER.info("store_animation_cancelled", extra={"fen": fen})
            self.emit(AnimationCancelled())
            self._adopt(candidate, "superseded")
            return

        self._diff = d
        self._state = AnimationState.ANIMATION_PENDING
        self._cancel_timer()
        self._timer = self.scheduler.call_later(
            self.config.animation_duration_s, lambda: self._finish_animation(candidate)
        )
        LOGGER.info(
            "store_animation_started",
            extra={"added": len(d.added), "removed": len(d.removed)},
        )
        self.emit(AnimationStarted(diff=d))

    def _finish_animation(self, candidate: BoardState) -> None:
        self._timer = None
        self._state = AnimationState.IDLE
        LOGGER.info("store_animation_completed")
        self._adopt(candidate, "animation_done")

    def reconfigure(self, config: BoardConfig) -> None:
        """Swap configuration and re-run the last position through the pipeline."""
        self.config = config.validate()
        if self._last_fen is not None:
            self.update(self._last_fen)

    # --- queries ---
    @property
    def state(self) -> AnimationState:
        return self._state

    def num_rows(self) -> int:
        return self._board.num_rows

    def num_cols(self) -> int:
        return self._board.num_cols

    def square_at(self, row: int, col: int) -> Optional[Square]:
        return self._board.square_at(row, col)

    def piece_at(self, location: str) -> str:
        return self._board.piece_at(location)

    def is_non_existent(self, location: str) -> bool:
        return self._board.is_non_existent(location)

    def board(self) -> BoardState:
        return self._board

    def unit_members(self, location: str) -> List[Idx]:
        return list(self._board.location_to_unit.get(location, []))

    def location_idx(self, location: str) -> Optional[Idx]:
        return self._board.location_to_idx.get(location)

    def current_diff(self) -> Diff:
        return self._diff

    def is_animating(self) -> bool:
        return self._state is AnimationState.ANIMATION_PENDING

    def set_manual_move(self, flag: bool) -> None:
        self._manual_move = flag

    @property
    def manual_move(self) -> bool:
        return self._manual_move

    # --- local mutations ---
    def move_piece(self, from_location: str, to_location: str, piece: str) -> bool:
        """Apply a move the user made locally. Returns False when ignored."""
        board = self._board
        src = board.location_to_idx.get(from_location)
        dst = board.location_to_idx.get(to_location)
        if src is None or dst is None:
            LOGGER.debug("store_move_ignored", extra={"from": from_location, "to": to_location, "why": "unknown"})
            return False
        if not is_piece(board.rows[src.row][src.col].piece):
            LOGGER.debug("store_move_ignored", extra={"from": from_location, "to": to_location, "why": "no_piece"})
            return False
        if board.rows[dst.row][dst.col].piece == NON_EXISTENT_SQUARE:
            LOGGER.debug("store_move_ignored", extra={"from": from_location, "to": to_location, "why": "non_existent"})
            return False

        rows = board.copy_rows()
        rows[src.row][src.col].piece = EMPTY_SQUARE
        rows[dst.row][dst.col].piece = piece

        # labels and the non-existent set are unchanged, so both indices carry over
        self._board = BoardState(
            rows=rows,
            location_to_idx=board.location_to_idx,
            location_to_unit=board.location_to_unit,
        )
        self._manual_move = True
        self.emit(PieceMoved(from_location, to_location, piece))
        return True

    def materialize_unit(self, location: str) -> bool:
        """Turn the unit of a non-existent square into empty squares and rebuild."""
        if not self._board.is_non_existent(location):
            LOGGER.debug("store_materialize_ignored", extra={"location": location})
            return False

        members = self.unit_members(location)
        rows = self._board.copy_rows()
        for idx in members:
            rows[idx.row][idx.col].piece = EMPTY_SQUARE

        self._adopt(self._build(rows), "materialized")
        self.emit(UnitMaterialized(location, members))
        return True
