"""JSON-friendly view of the board store for renderers and hosts.

Everything here returns plain dicts/lists/strings so a frontend can consume
board snapshots and animation diffs without importing the core types.
"""

from .serde import snapshot, board_to_dict, diff_to_dict, moves_to_list

__all__ = ["snapshot", "board_to_dict", "diff_to_dict", "moves_to_list"]
