from __future__ import annotations

from dataclasses import dataclass
from typing import List, TYPE_CHECKING

if TYPE_CHECKING:
    from ..diff import Diff
    from .types import Idx

@dataclass(frozen=True)
class BoardAdopted:
    # "manual_move" | "superseded" | "animation_done" | "materialized"
    reason: str

@dataclass(frozen=True)
class AnimationStarted:
    diff: "Diff"

@dataclass(frozen=True)
class AnimationCancelled:
    pass

@dataclass(frozen=True)
class PieceMoved:
    from_location: str
    to_location: str
    piece: str

@dataclass(frozen=True)
class UnitMaterialized:
    location: str
    members: List["Idx"]
