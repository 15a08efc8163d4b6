"""Game engine module for gridchess."""

from gridchess.game.pieces import Coord, Piece, PieceType
from gridchess.game.players import Color, Player
from gridchess.game.board import Board, Location, LocationState
from gridchess.game.paths import get_move_vector, points_along_vector
from gridchess.game.moves import (
    attack_vectors,
    validate_attack,
    validate_move,
    vectors_same_direction,
)
from gridchess.game.attacks import attacked_squares, recompute_attack_map
from gridchess.game.engine import (
    BoardCorruptionError,
    Game,
    MoveError,
    MoveResult,
)
from gridchess.game.board_parser import parse_board_string
from gridchess.game.display import render_board, render_captures

__all__ = [
    # Pieces
    "Coord",
    "Piece",
    "PieceType",
    # Players
    "Color",
    "Player",
    # Board
    "Board",
    "Location",
    "LocationState",
    # Paths
    "get_move_vector",
    "points_along_vector",
    # Capabilities
    "attack_vectors",
    "validate_attack",
    "validate_move",
    "vectors_same_direction",
    # Attack map
    "attacked_squares",
    "recompute_attack_map",
    # Engine
    "BoardCorruptionError",
    "Game",
    "MoveError",
    "MoveResult",
    # Parsing / display
    "parse_board_string",
    "render_board",
    "render_captures",
]
