"""Extensible board (backend).

- core: squares, padding, unit clustering, board assembly
- fen: extended position grammar (decode/encode)
- diff: per-square added/removed deltas and move pairing
- store: reactive board store with animation timing
- api: JSON-friendly snapshots for renderers
"""

from . import core, api
from .config import BoardConfig
from .diff import Diff, MovePair, diff, pair_moves
from .fen import parse_extended_fen, board_to_fen, STARTPOS_FEN
from .scheduling import ManualScheduler, AsyncioScheduler
from .store import BoardStateStore, AnimationState, Listener

__all__ = [
    "core","api",
    "BoardConfig",
    "Diff","MovePair","diff","pair_moves",
    "parse_extended_fen","board_to_fen","STARTPOS_FEN",
    "ManualScheduler","AsyncioScheduler",
    "BoardStateStore","AnimationState","Listener",
]
