from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .types import Idx, Row, Square, NON_EXISTENT_SQUARE, is_piece


def location_index(rows: List[Row]) -> Dict[str, Idx]:
    out: Dict[str, Idx] = {}
    for r, row in enumerate(rows):
        for c, square in enumerate(row):
            out[square.location] = Idx(r, c)
    return out


def piece_map(rows: List[Row]) -> Dict[str, str]:
    """Flat location -> piece code map, sentinels included."""
    out: Dict[str, str] = {}
    for row in rows:
        for square in row:
            out[square.location] = square.piece
    return out


@dataclass
class BoardState:
    rows: List[Row] = field(default_factory=list)
    location_to_idx: Dict[str, Idx] = field(default_factory=dict)
    location_to_unit: Dict[str, List[Idx]] = field(default_factory=dict)

    @property
    def num_rows(self) -> int:
        return len(self.rows)

    @property
    def num_cols(self) -> int:
        return len(self.rows[0]) if self.rows else 0

    def square_at(self, row: int, col: int) -> Optional[Square]:
        if not (0 <= row < self.num_rows and 0 <= col < len(self.rows[row])):
            return None
        return self.rows[row][col]

    def square_of(self, location: str) -> Optional[Square]:
        idx = self.location_to_idx.get(location)
        if idx is None:
            return None
        return self.rows[idx.row][idx.col]

    def piece_at(self, location: str) -> str:
        square = self.square_of(location)
        if square is None or not is_piece(square.piece):
            return ""
        return square.piece

    def is_non_existent(self, location: str) -> bool:
        square = self.square_of(location)
        return square is not None and square.piece == NON_EXISTENT_SQUARE

    def piece_map(self) -> Dict[str, str]:
        return piece_map(self.rows)

    def copy_rows(self) -> List[Row]:
        return [[Square(s.piece, s.file, s.rank) for s in row] for row in self.rows]
