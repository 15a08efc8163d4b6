"""Piece capabilities: which displacements are legal moves and attacks."""

import math

from gridchess.game.board import BOARD_SIZE, Board
from gridchess.game.paths import Vector
from gridchess.game.pieces import Coord, Piece, PieceType

# Tolerance for comparing the cosine between two vectors against 1
DIRECTION_TOLERANCE = 1e-9

ROOK_DIRECTIONS: tuple[Vector, ...] = ((1, 0), (-1, 0), (0, 1), (0, -1))
BISHOP_DIRECTIONS: tuple[Vector, ...] = ((1, 1), (1, -1), (-1, 1), (-1, -1))
QUEEN_DIRECTIONS: tuple[Vector, ...] = ROOK_DIRECTIONS + BISHOP_DIRECTIONS

KNIGHT_OFFSETS: tuple[Vector, ...] = (
    (1, 2),
    (2, 1),
    (2, -1),
    (1, -2),
    (-1, -2),
    (-2, -1),
    (-2, 1),
    (-1, 2),
)
KING_OFFSETS: tuple[Vector, ...] = QUEEN_DIRECTIONS


def vectors_same_direction(a: Vector, b: Vector) -> bool:
    """Check whether two vectors point the same way.

    Uses the normalized dot product, so (1, 0) matches (5, 0) but not
    (-5, 0). A zero vector has no direction and never matches.
    """
    norm_a = math.hypot(a[0], a[1])
    norm_b = math.hypot(b[0], b[1])
    if norm_a == 0 or norm_b == 0:
        return False

    cos_theta = (a[0] * b[0] + a[1] * b[1]) / (norm_a * norm_b)
    return abs(cos_theta - 1.0) <= DIRECTION_TOLERANCE


def _matches_any_direction(vector: Vector, directions: tuple[Vector, ...]) -> bool:
    return any(vectors_same_direction(d, vector) for d in directions)


def _slide_directions(piece_type: PieceType) -> tuple[Vector, ...]:
    match piece_type:
        case PieceType.ROOK:
            return ROOK_DIRECTIONS
        case PieceType.BISHOP:
            return BISHOP_DIRECTIONS
        case PieceType.QUEEN:
            return QUEEN_DIRECTIONS
        case _:
            return ()


def _validate_pawn_move(piece: Piece, vector: Vector) -> bool:
    """Pawns move straight forward: 1 square, or 2 before their first move."""
    dx, dy = vector
    max_distance = 1 if piece.has_moved else 2

    if dx != 0:
        return False
    if not 1 <= abs(dy) <= max_distance:
        return False
    # Pawns can't move backwards
    return dy == abs(dy) * piece.owner.pawn_direction


def validate_move(piece: Piece, vector: Vector) -> bool:
    """Check whether a displacement is a legal move onto an empty cell.

    Args:
        piece: The moving piece (its type, owner and has-moved flag matter)
        vector: Displacement (dx, dy) from the piece's cell

    Returns:
        True if the piece may make this move, ignoring other pieces
    """
    dx, dy = abs(vector[0]), abs(vector[1])

    match piece.type:
        case PieceType.PAWN:
            return _validate_pawn_move(piece, vector)
        case PieceType.KNIGHT:
            return (dx, dy) in ((1, 2), (2, 1))
        case PieceType.ROOK | PieceType.BISHOP | PieceType.QUEEN:
            return _matches_any_direction(vector, _slide_directions(piece.type))
        case PieceType.KING:
            return dx <= 1 and dy <= 1 and (dx, dy) != (0, 0)
        case _:
            return False


def validate_attack(piece: Piece, vector: Vector) -> bool:
    """Check whether a displacement is a legal capture.

    Every piece attacks the way it moves, except pawns, which capture one
    step diagonally forward.
    """
    if piece.type == PieceType.PAWN:
        return abs(vector[0]) == 1 and vector[1] == piece.owner.pawn_direction
    return validate_move(piece, vector)


def _extend_to_edge(source: Coord, direction: Vector) -> Vector:
    """Longest multiple of ``direction`` that stays on the board."""
    distance = 0
    for k in range(1, BOARD_SIZE):
        if not Board.is_valid_square(source[0] + k * direction[0], source[1] + k * direction[1]):
            break
        distance = k
    return (distance * direction[0], distance * direction[1])


def attack_vectors(piece: Piece, source: Coord) -> list[Vector]:
    """Get the vectors a piece threatens along from ``source``.

    Short-range pieces (pawn, knight, king) yield their single-step offsets
    whose target is on the board. Sliding pieces yield one maximal vector per
    direction, reaching the last on-board cell; directions with no room are
    skipped.
    """
    if piece.is_sliding:
        vectors = [_extend_to_edge(source, d) for d in _slide_directions(piece.type)]
        return [v for v in vectors if v != (0, 0)]

    match piece.type:
        case PieceType.PAWN:
            forward = piece.owner.pawn_direction
            offsets: tuple[Vector, ...] = ((-1, forward), (1, forward))
        case PieceType.KNIGHT:
            offsets = KNIGHT_OFFSETS
        case PieceType.KING:
            offsets = KING_OFFSETS
        case _:
            return []

    return [
        (dx, dy)
        for dx, dy in offsets
        if Board.is_valid_square(source[0] + dx, source[1] + dy)
    ]
