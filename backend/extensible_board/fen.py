"""Extended FEN grammar.

Rows are separated by ``/``; anything after the first space is ignored.
Inside a row a digit run is that many empty squares, ``E`` is a square that
does not exist (yet), and any other letter is a piece (case gives color).
Two markers anchor the labels:

- ``#`` marks the row holding rank 8, so rows written above it get ranks 9, 10, ...
- ``$`` marks where file ``a`` starts, so squares written before it get the
  negative-side labels ``A``, ``B``, ... counted backward from ``a``.

Row lengths are not checked; the caller provides rectangular input.
"""

from __future__ import annotations

import logging
import re
from typing import List

from .core.types import (
    EMPTY_SQUARE, NON_EXISTENT_SQUARE, TOP_RANK, Row, Square,
    file_index, file_label,
)

LOGGER = logging.getLogger("extboard.fen")

STARTPOS_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

RANK8_MARKER = "#"
FILE_A_MARKER = "$"

_TOKEN = re.compile(r"\d+|[a-zA-Z]")
_TRAILER = re.compile(r" .+$")


def fen_to_piece_code(ch: str) -> str:
    if ch == ch.lower():
        return "b" + ch.upper()
    return "w" + ch.upper()


def piece_code_to_fen(code: str) -> str:
    letter = code[1:2] or "?"
    return letter.lower() if code.startswith("b") else letter.upper()


def _start_rank(fen_rows: List[str]) -> int:
    for i, fen_row in enumerate(fen_rows):
        if RANK8_MARKER in fen_row:
            return i + TOP_RANK
    return TOP_RANK


def _count_squares(tokens: List[str]) -> int:
    n = 0
    for tok in tokens:
        n += int(tok) if tok.isdigit() else 1
    return n


def _start_col(fen_row: str) -> int:
    marker = fen_row.find(FILE_A_MARKER)
    if marker <= 0:
        return 0
    return -_count_squares(_TOKEN.findall(fen_row[:marker]))


def parse_extended_fen(fen: str) -> List[Row]:
    """Decode ``fen`` into rows of labelled squares (no padding)."""
    fen = _TRAILER.sub("", fen)
    fen_rows = fen.split("/")

    rank = _start_rank(fen_rows)
    rows: List[Row] = []

    for n, fen_row in enumerate(fen_rows):
        tokens = _TOKEN.findall(fen_row)
        if not tokens:
            # the rank is not consumed, so every later row shifts up by one
            LOGGER.warning("fen_row_skipped", extra={"row_index": n, "row": fen_row})
            continue

        col = _start_col(fen_row)
        row: Row = []
        for tok in tokens:
            if tok.isdigit():
                for _ in range(int(tok)):
                    row.append(Square(EMPTY_SQUARE, file_label(col), rank))
                    col += 1
            elif tok == NON_EXISTENT_SQUARE:
                row.append(Square(NON_EXISTENT_SQUARE, file_label(col), rank))
                col += 1
            else:
                row.append(Square(fen_to_piece_code(tok), file_label(col), rank))
                col += 1

        rows.append(row)
        rank -= 1

    return rows


def board_to_fen(rows: List[Row]) -> str:
    """Encode rows back into the extended grammar (placement only).

    Only boards whose top row is rank 8 or above can be written; ``#`` is
    emitted on the rank-8 row when rows precede it and ``$`` before file
    ``a`` when squares precede it.
    """
    out = []
    for r, row in enumerate(rows):
        parts: List[str] = []
        if r > 0 and row and row[0].rank == TOP_RANK:
            parts.append(RANK8_MARKER)

        a_col = next((c for c, s in enumerate(row) if file_index(s.file) == 0), -1)
        empty = 0
        for c, square in enumerate(row):
            if c == a_col and c > 0:
                if empty:
                    parts.append(str(empty))
                    empty = 0
                parts.append(FILE_A_MARKER)
            if square.piece == EMPTY_SQUARE:
                empty += 1
                continue
            if empty:
                parts.append(str(empty))
                empty = 0
            if square.piece == NON_EXISTENT_SQUARE:
                parts.append(NON_EXISTENT_SQUARE)
            else:
                parts.append(piece_code_to_fen(square.piece))
        if empty:
            parts.append(str(empty))
        out.append("".join(parts))
    return "/".join(out)
