from __future__ import annotations

from typing import List

from .board import BoardState, location_index
from .padding import pad_board
from .types import AddUnit, EMPTY_SQUARE, NON_EXISTENT_SQUARE, Row
from .units import cluster_units


def build_board(
    rows: List[Row],
    horizontal_add_unit: AddUnit,
    vertical_add_unit: AddUnit,
    horizontal_extend_limit: int,
    vertical_extend_limit: int,
) -> BoardState:
    padded = pad_board(
        rows,
        horizontal_add_unit,
        vertical_add_unit,
        horizontal_extend_limit,
        vertical_extend_limit,
    )
    return BoardState(
        rows=padded,
        location_to_idx=location_index(padded),
        location_to_unit=cluster_units(padded, horizontal_add_unit, vertical_add_unit),
    )


def ascii_board(board: BoardState) -> str:
    lines = []
    for row in board.rows:
        cells = []
        for s in row:
            if s.piece == EMPTY_SQUARE:
                cells.append(" .")
            elif s.piece == NON_EXISTENT_SQUARE:
                cells.append(" #")
            else:
                cells.append(s.piece)
        rank = str(row[0].rank) if row else ""
        lines.append(f"{rank:>3} " + " ".join(cells))
    if board.rows:
        lines.append("    " + " ".join(f"{s.file:>2}" for s in board.rows[0]))
    return "\n".join(lines)
