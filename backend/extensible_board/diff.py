from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Mapping, Optional

from .core.types import Idx, is_piece


@dataclass(frozen=True)
class Diff:
    added: Dict[str, str] = field(default_factory=dict)
    removed: Dict[str, str] = field(default_factory=dict)

    def is_empty(self) -> bool:
        return not self.added and not self.removed


def diff(before: Mapping[str, str], after: Mapping[str, str]) -> Diff:
    """Per-location difference between two piece maps.

    A moved piece shows up as a removal at its source and an addition at its
    destination; pairing them is up to the consumer (see ``pair_moves``).
    """
    removed = {k: v for k, v in before.items() if after.get(k) != v}
    added = {k: v for k, v in after.items() if before.get(k) != v}
    return Diff(added=added, removed=removed)


@dataclass(frozen=True)
class MovePair:
    from_location: str
    to_location: str
    piece: str
    row_delta: int
    col_delta: int


PromotionCheck = Callable[[str, str, str], bool]


def pair_moves(
    d: Diff,
    location_to_idx: Mapping[str, Idx],
    is_promotion: Optional[PromotionCheck] = None,
) -> List[MovePair]:
    """Match each removed piece to the added square it went to.

    A removal pairs with the first addition of the same piece code, or one
    ``is_promotion(from, to, piece)`` accepts. Sentinels never pair, nor do
    squares missing from ``location_to_idx``.
    """
    out: List[MovePair] = []
    for src, piece in d.removed.items():
        if not is_piece(piece):
            continue
        for dst, new_piece in d.added.items():
            if not is_piece(new_piece):
                continue
            if new_piece != piece and not (is_promotion and is_promotion(src, dst, piece)):
                continue
            a = location_to_idx.get(src)
            b = location_to_idx.get(dst)
            if a is None or b is None:
                break
            out.append(MovePair(src, dst, piece, b.row - a.row, b.col - a.col))
            break
    return out
