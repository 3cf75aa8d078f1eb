"""Sentinel padding around a decoded grid.

Every edge is topped up with non-existent squares so that one full add unit
is available to reveal beyond it, without ever growing past the extend limit
measured from the canonical a..h / 1..8 frame.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from .types import (
    AddUnit, NON_EXISTENT_SQUARE, Row, Square, TOP_RANK,
    file_index, file_label,
)


@dataclass(frozen=True)
class Edges:
    top: int = 0
    bottom: int = 0
    left: int = 0
    right: int = 0


def _all_non_existent(squares: List[Optional[Square]]) -> bool:
    return all(s is not None and s.piece == NON_EXISTENT_SQUARE for s in squares)


def _column(rows: List[Row], col: int) -> List[Optional[Square]]:
    return [row[col] if col < len(row) else None for row in rows]


def covered_edges(rows: List[Row], horizontal: AddUnit, vertical: AddUnit) -> Edges:
    """Fully non-existent rows/columns within one add unit of each edge."""
    n, m = vertical.y, horizontal.x
    width = len(rows[0]) if rows else 0
    left = [_column(rows, i) for i in range(min(m, width))]
    right = [_column(rows, width - 1 - i) for i in range(min(m, width))]
    return Edges(
        top=sum(1 for row in rows[:n] if _all_non_existent(row)),
        bottom=sum(1 for row in rows[-n:] if _all_non_existent(row)),
        left=sum(1 for col in left if _all_non_existent(col)),
        right=sum(1 for col in right if _all_non_existent(col)),
    )


def frame_extent(rows: List[Row]) -> Edges:
    """How far the grid already reaches past rank 8 / file a on each side.

    Bottom/right may come out negative for grids smaller than the frame.
    Grids lacking a rank-8 row or an ``a`` file report zero everywhere.
    """
    if not rows or not rows[0]:
        return Edges()
    top = next((r for r, row in enumerate(rows) if row and row[0].rank == TOP_RANK), -1)
    left = next((c for c, s in enumerate(rows[0]) if s.file == "a"), -1)
    if top == -1 or left == -1:
        return Edges()
    return Edges(
        top=top,
        bottom=len(rows) - (8 + top),
        left=left,
        right=len(rows[0]) - (8 + left),
    )


def clamp_to_limit(existing: int, to_add: int, limit: int) -> int:
    if existing + to_add > limit:
        return limit - existing
    return to_add


def _pad_row(row: Row, left: int, right: int, limit: int) -> Row:
    if not row:
        return list(row)
    left = max(0, min(left, limit))
    right = max(0, min(right, limit))
    rank = row[0].rank
    first = file_index(row[0].file)
    last = file_index(row[-1].file)

    out: Row = [Square(NON_EXISTENT_SQUARE, file_label(first - left + i), rank) for i in range(left)]
    out.extend(row)
    out.extend(Square(NON_EXISTENT_SQUARE, file_label(last + 1 + i), rank) for i in range(right))
    return out


def _blank_row(width: int, first_col: int, rank: int) -> Row:
    return [Square(NON_EXISTENT_SQUARE, file_label(first_col + i), rank) for i in range(width)]


def _pad_rows(rows: List[Row], top: int, bottom: int, limit: int) -> List[Row]:
    top = max(0, min(top, limit))
    bottom = max(0, min(bottom, limit))
    width = len(rows[0])
    first_col = file_index(rows[0][0].file)
    top_rank = rows[0][0].rank
    bottom_rank = rows[-1][0].rank if rows[-1] else top_rank - len(rows) + 1

    out: List[Row] = [_blank_row(width, first_col, top_rank + top - i) for i in range(top)]
    out.extend(rows)
    out.extend(_blank_row(width, first_col, bottom_rank - 1 - i) for i in range(bottom))
    return out


def pad_board(
    rows: List[Row],
    horizontal_add_unit: AddUnit,
    vertical_add_unit: AddUnit,
    horizontal_extend_limit: int,
    vertical_extend_limit: int,
) -> List[Row]:
    """Return a new padded grid; ``rows`` itself is not modified."""
    if not rows or not rows[0]:
        return [list(row) for row in rows]

    covered = covered_edges(rows, horizontal_add_unit, vertical_add_unit)
    extent = frame_extent(rows)

    left = clamp_to_limit(extent.left, horizontal_add_unit.x - covered.left, horizontal_extend_limit)
    right = clamp_to_limit(extent.right, horizontal_add_unit.x - covered.right, horizontal_extend_limit)
    top = clamp_to_limit(extent.top, vertical_add_unit.y - covered.top, vertical_extend_limit)
    bottom = clamp_to_limit(extent.bottom, vertical_add_unit.y - covered.bottom, vertical_extend_limit)

    padded = [_pad_row(row, left, right, horizontal_extend_limit) for row in rows]
    return _pad_rows(padded, top, bottom, vertical_extend_limit)
