from __future__ import annotations

from typing import Dict, List, Tuple

from .types import AddUnit, Idx, NON_EXISTENT_SQUARE, Row, in_canonical_ranks

# (horizontal, vertical) steps: down-right, up-right, down-left, up-left.
# The first valid candidate in this order wins.
DIRECTIONS: Tuple[Tuple[int, int], ...] = ((1, 1), (1, -1), (-1, 1), (-1, -1))


def governing_unit(rank: int, horizontal: AddUnit, vertical: AddUnit) -> AddUnit:
    # rank outside 1..8 takes priority over the file
    if not in_canonical_ranks(rank):
        return vertical
    return horizontal


def candidate_unit(idx: Idx, direction: Tuple[int, int], unit: AddUnit) -> List[Idx]:
    dh, dv = direction
    return [
        Idx(idx.row + j * dv, idx.col + i * dh)
        for i in range(unit.x)
        for j in range(unit.y)
    ]


def is_unit_valid(rows: List[Row], unit: List[Idx]) -> bool:
    for idx in unit:
        if not (0 <= idx.row < len(rows) and 0 <= idx.col < len(rows[idx.row])):
            return False
        if rows[idx.row][idx.col].piece != NON_EXISTENT_SQUARE:
            return False
    return True


def unit_for(rows: List[Row], idx: Idx, unit: AddUnit) -> List[Idx]:
    """Members revealed together with the square at ``idx``; [] if no block fits."""
    if unit.is_single():
        return [idx]
    for direction in DIRECTIONS:
        members = candidate_unit(idx, direction, unit)
        if is_unit_valid(rows, members):
            return members
    return []


def cluster_units(rows: List[Row], horizontal: AddUnit, vertical: AddUnit) -> Dict[str, List[Idx]]:
    out: Dict[str, List[Idx]] = {}
    for r, row in enumerate(rows):
        for c, square in enumerate(row):
            if square.piece != NON_EXISTENT_SQUARE:
                continue
            unit = governing_unit(square.rank, horizontal, vertical)
            out[square.location] = unit_for(rows, Idx(r, c), unit)
    return out
