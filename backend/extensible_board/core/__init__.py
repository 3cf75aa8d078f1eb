from .types import (
    EMPTY_SQUARE, NON_EXISTENT_SQUARE, FILES,
    Square, Idx, AddUnit, Row,
    location_of, file_label, file_index, is_piece,
)
from .board import BoardState, location_index, piece_map
from .padding import pad_board, covered_edges, frame_extent, Edges
from .units import cluster_units, unit_for, governing_unit, DIRECTIONS
from .setup import build_board, ascii_board
from .events import BoardAdopted, AnimationStarted, AnimationCancelled, PieceMoved, UnitMaterialized

__all__ = [
    "EMPTY_SQUARE","NON_EXISTENT_SQUARE","FILES",
    "Square","Idx","AddUnit","Row",
    "location_of","file_label","file_index","is_piece",
    "BoardState","location_index","piece_map",
    "pad_board","covered_edges","frame_extent","Edges",
    "cluster_units","unit_for","governing_unit","DIRECTIONS",
    "build_board","ascii_board",
    "BoardAdopted","AnimationStarted","AnimationCancelled","PieceMoved","UnitMaterialized",
]
