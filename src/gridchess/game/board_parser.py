"""Board string parser for custom positions."""

from gridchess.game.board import BOARD_SIZE
from gridchess.game.engine import Game
from gridchess.game.pieces import Coord, PieceType
from gridchess.game.players import Color

PIECE_TYPE_MAP = {piece_type.value: piece_type for piece_type in PieceType}

PLAYER_COLORS = {
    "1": Color.WHITE,
    "2": Color.BLACK,
}


def parse_board_string(board_str: str, current: Color = Color.WHITE) -> Game:
    """Parse a board string into a Game.

    Board string format:
        - 8 rows, row 0 (black's home side) first
        - Each square = 2 characters: piece type + player number
        - "00" = empty square
        - Piece types: P (pawn), N (knight), B (bishop), R (rook), Q (queen), K (king)
        - Players: 1 (white), 2 (black)

    Args:
        board_str: Multi-line string with 2 chars per square
        current: Color to move first

    Returns:
        Game with pieces placed

    Raises:
        ValueError: If the board string format is invalid
    """
    lines = [line.strip() for line in board_str.strip().splitlines() if line.strip()]

    if len(lines) != BOARD_SIZE:
        raise ValueError(f"Expected {BOARD_SIZE} rows, got {len(lines)}")

    layout: dict[Coord, tuple[PieceType, Color]] = {}

    for y, line in enumerate(lines):
        if len(line) != BOARD_SIZE * 2:
            raise ValueError(f"Row {y} has wrong length: {len(line)}, expected {BOARD_SIZE * 2}")

        for x in range(BOARD_SIZE):
            cell = line[x * 2 : x * 2 + 2]
            if cell == "00":
                continue

            piece_type_char, player_char = cell[0], cell[1]

            if piece_type_char not in PIECE_TYPE_MAP:
                raise ValueError(f"Unknown piece type: {piece_type_char}")
            if player_char not in PLAYER_COLORS:
                raise ValueError(f"Invalid player number: {player_char}")

            layout[(x, y)] = (PIECE_TYPE_MAP[piece_type_char], PLAYER_COLORS[player_char])

    return Game.from_layout(layout, current=current)
