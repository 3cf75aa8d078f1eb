from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..core.board import BoardState
from ..core.types import Idx
from ..diff import Diff, MovePair, PromotionCheck, pair_moves
from ..fen import board_to_fen


def _idx_to_dict(idx: Idx) -> Dict[str, int]:
    return {"row": idx.row, "col": idx.col}


def diff_to_dict(d: Diff) -> Dict[str, Dict[str, str]]:
    return {"added": dict(d.added), "removed": dict(d.removed)}


def moves_to_list(moves: List[MovePair]) -> List[Dict[str, Any]]:
    return [
        {
            "from": m.from_location,
            "to": m.to_location,
            "piece": m.piece,
            "row_delta": m.row_delta,
            "col_delta": m.col_delta,
        }
        for m in moves
    ]


def board_to_dict(board: BoardState) -> Dict[str, Any]:
    rows: List[List[Dict[str, Any]]] = []
    for row in board.rows:
        rows.append([
            {"piece": s.piece, "file": s.file, "rank": s.rank, "location": s.location}
            for s in row
        ])

    out: Dict[str, Any] = {
        "num_rows": board.num_rows,
        "num_cols": board.num_cols,
        "rows": rows,
        "units": {
            loc: [_idx_to_dict(i) for i in members]
            for loc, members in sorted(board.location_to_unit.items())
        },
    }

    # position string convenience
    out["fen"] = board_to_fen(board.rows)
    return out


def snapshot(store, is_promotion: Optional[PromotionCheck] = None) -> Dict[str, Any]:
    """JSON-friendly snapshot of a BoardStateStore."""
    board = store.board()
    d = store.current_diff()
    out = board_to_dict(board)
    out["diff"] = diff_to_dict(d)
    out["animating"] = store.is_animating()
    out["state"] = store.state.value
    out["moves"] = moves_to_list(pair_moves(d, board.location_to_idx, is_promotion)) if store.is_animating() else []
    return out
