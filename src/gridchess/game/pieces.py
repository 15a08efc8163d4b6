"""Piece definitions for gridchess."""

from dataclasses import dataclass
from enum import Enum

from gridchess.game.players import Color

# (x, y) grid coordinate, both axes in [0, 7]
Coord = tuple[int, int]


class PieceType(Enum):
    """Type of chess piece."""

    PAWN = "P"
    ROOK = "R"
    KNIGHT = "N"
    BISHOP = "B"
    QUEEN = "Q"
    KING = "K"

    def __str__(self) -> str:
        return self.value


# Pieces that move any distance along a fixed direction
SLIDING_TYPES = frozenset({PieceType.ROOK, PieceType.BISHOP, PieceType.QUEEN})

# Creation order of a player's 16 pieces
PIECE_ORDER = [PieceType.PAWN] * 8 + [
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
]


@dataclass
class Piece:
    """A chess piece.

    Attributes:
        id: Stable index of the piece in its game's piece array
        type: Type of piece
        owner: Color of the owning player
        has_moved: Whether the piece has moved at least once
        location: Current (x, y) cell, or None once captured
    """

    id: int
    type: PieceType
    owner: Color
    has_moved: bool = False
    location: Coord | None = None

    @property
    def captured(self) -> bool:
        """Whether the piece has been taken off the board."""
        return self.location is None

    @property
    def is_sliding(self) -> bool:
        return self.type in SLIDING_TYPES

    def __str__(self) -> str:
        return f"{self.owner.piece_char}{self.type}"
