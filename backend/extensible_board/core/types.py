from __future__ import annotations

from dataclasses import dataclass
from typing import List

EMPTY_SQUARE = "e"
NON_EXISTENT_SQUARE = "E"
SENTINELS = (EMPTY_SQUARE, NON_EXISTENT_SQUARE)

# canonical frame: files a..h, ranks 1..8
FILES = "abcdefgh"
TOP_RANK = 8
BOTTOM_RANK = 1


@dataclass
class Square:
    piece: str
    file: str
    rank: int

    @property
    def location(self) -> str:
        return location_of(self.file, self.rank)


@dataclass(frozen=True)
class Idx:
    row: int
    col: int


@dataclass(frozen=True)
class AddUnit:
    """Block of squares revealed together: x columns by y rows."""
    x: int = 1
    y: int = 1

    def is_single(self) -> bool:
        return self.x == 1 and self.y == 1

    @classmethod
    def parse(cls, text: str) -> "AddUnit":
        parts = text.strip().lower().split("x")
        if len(parts) != 2:
            raise ValueError(f"Bad add unit: {text!r}")
        try:
            x, y = int(parts[0]), int(parts[1])
        except ValueError:
            raise ValueError(f"Bad add unit: {text!r}") from None
        if x < 1 or y < 1:
            raise ValueError(f"Add unit must be positive: {text!r}")
        return cls(x, y)


Row = List[Square]


def location_of(file: str, rank: int) -> str:
    return f"{file}{rank}"


def file_label(col: int) -> str:
    # 0 -> 'a', 7 -> 'h', 8 -> 'i'; -1 -> 'A', -2 -> 'B'
    if col < 0:
        return chr(64 + abs(col))
    return chr(97 + col)


def file_index(file: str) -> int:
    code = ord(file[0])
    if code >= 97:
        return code - 97
    return -(code - 64)


def is_piece(code: str) -> bool:
    return bool(code) and code not in SENTINELS


def in_canonical_ranks(rank: int) -> bool:
    return BOTTOM_RANK <= rank <= TOP_RANK
