"""Core game engine for gridchess.

This module owns the game state and the move state machine. A move attempt
runs every validation gate before touching the board, so a rejected move
leaves the game exactly as it was and does not switch turns. Rejections are
returned as data (``MoveResult``); only internal corruption raises.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from gridchess.game.attacks import recompute_attack_map
from gridchess.game.board import BOARD_SIZE, HOME_ROWS, Board
from gridchess.game.display import render_board
from gridchess.game.moves import validate_attack, validate_move
from gridchess.game.paths import get_move_vector, points_along_vector
from gridchess.game.pieces import PIECE_ORDER, Coord, Piece, PieceType
from gridchess.game.players import Color, Player

logger = logging.getLogger(__name__)


class BoardCorruptionError(RuntimeError):
    """Internal invariant violation; the game state can no longer be trusted."""


class MoveError(Enum):
    """Reasons a move attempt can be rejected."""

    OUT_OF_BOUNDS = "out_of_bounds"
    EMPTY_SOURCE = "empty_source"
    NOT_OWNER = "not_owner"
    PATH_BLOCKED = "path_blocked"
    FRIENDLY_FIRE = "friendly_fire"
    ILLEGAL_ATTACK = "illegal_attack"
    ILLEGAL_MOVE = "illegal_move"


MOVE_ERROR_MESSAGES: dict[MoveError, str] = {
    MoveError.OUT_OF_BOUNDS: "Square is off the board",
    MoveError.EMPTY_SOURCE: "There is no piece on the source square",
    MoveError.NOT_OWNER: "That piece belongs to the other player",
    MoveError.PATH_BLOCKED: "Another piece is in the way",
    MoveError.FRIENDLY_FIRE: "Cannot capture your own piece",
    MoveError.ILLEGAL_ATTACK: "That piece cannot capture in that direction",
    MoveError.ILLEGAL_MOVE: "That piece cannot move like that",
}


@dataclass
class MoveResult:
    """Result of attempting to make a move.

    Attributes:
        success: Whether the move was applied
        source: Requested source cell
        dest: Requested destination cell
        error: Rejection reason, None on success
        message: Human-readable rejection reason
        piece_id: Id of the piece on the source cell, if any
        captured_id: Id of the piece captured by the move, if any
        current: Color to move after the attempt
    """

    success: bool
    source: Coord
    dest: Coord
    error: MoveError | None = None
    message: str | None = None
    piece_id: int | None = None
    captured_id: int | None = None
    current: Color | None = None


@dataclass
class Game:
    """A two-player game.

    Pieces live in one dense array and are referenced everywhere else by
    their index: board cells hold a piece id, pieces hold their (x, y)
    location, and players hold lists of ids.

    Attributes:
        board: The 8x8 grid
        pieces: Every piece in the game, captured ones included
        player1: First player
        player2: Second player
        current: Color of the player to move
        captures: (attacker id, captured id) in the order they happened
    """

    board: Board
    pieces: list[Piece]
    player1: Player
    player2: Player
    current: Color = Color.WHITE
    captures: list[tuple[int, int]] = field(default_factory=list)

    # -- Construction -------------------------------------------------------

    @classmethod
    def create(
        cls,
        player1_name: str,
        player1_color: Color,
        player2_name: str,
        player2_color: Color,
    ) -> "Game":
        """Create a game with the standard starting layout.

        Each color gets its back row (R N B Q K B N R) and a row of pawns on
        its own side, with four empty rows between. White moves first.

        Raises:
            ValueError: If both players ask for the same color
        """
        if player1_color == player2_color:
            raise ValueError("Players must have different colors")

        board = Board()
        pieces: list[Piece] = []
        players = (Player(player1_name, player1_color), Player(player2_name, player2_color))

        for player in players:
            back_row, pawn_row = HOME_ROWS[player.color]
            for index, piece_type in enumerate(PIECE_ORDER):
                if index < BOARD_SIZE:
                    coords = (index, pawn_row)
                else:
                    coords = (index - BOARD_SIZE, back_row)
                piece = Piece(id=len(pieces), type=piece_type, owner=player.color, location=coords)
                pieces.append(piece)
                player.pieces.append(piece.id)
                board[coords].occupy(piece.id)
                if piece_type == PieceType.KING:
                    player.king = piece.id

        game = cls(board=board, pieces=pieces, player1=players[0], player2=players[1])
        logger.info(
            f"Game created: {player1_name} ({player1_color.value}) vs "
            f"{player2_name} ({player2_color.value})"
        )
        return game

    @classmethod
    def from_layout(
        cls,
        layout: dict[Coord, tuple[PieceType, Color]],
        white_name: str = "white",
        black_name: str = "black",
        current: Color = Color.WHITE,
    ) -> "Game":
        """Create a game from a custom position (for tests and puzzles).

        Pawns placed off their home row are treated as having moved.

        Args:
            layout: Map of (x, y) to (piece type, owner color)
            white_name: Name of the white player (player 1)
            black_name: Name of the black player (player 2)
            current: Color to move first

        Raises:
            ValueError: If a square is off the board or a side does not have
                exactly one king
        """
        board = Board()
        pieces: list[Piece] = []
        players = {
            Color.WHITE: Player(white_name, Color.WHITE),
            Color.BLACK: Player(black_name, Color.BLACK),
        }

        # Row-major so piece ids read like the board
        for (x, y), (piece_type, color) in sorted(layout.items(), key=lambda item: item[0][::-1]):
            if not Board.is_valid_square(x, y):
                raise ValueError(f"Square ({x}, {y}) is off the board")

            player = players[color]
            has_moved = piece_type == PieceType.PAWN and y != HOME_ROWS[color][1]
            piece = Piece(
                id=len(pieces), type=piece_type, owner=color, has_moved=has_moved, location=(x, y)
            )
            pieces.append(piece)
            player.pieces.append(piece.id)
            board.get(x, y).occupy(piece.id)

            if piece_type == PieceType.KING:
                if player.king is not None:
                    raise ValueError(f"{color.value} has more than one king")
                player.king = piece.id

        for color, player in players.items():
            if player.king is None:
                raise ValueError(f"{color.value} has no king")

        return cls(
            board=board,
            pieces=pieces,
            player1=players[Color.WHITE],
            player2=players[Color.BLACK],
            current=current,
        )

    # -- Lookups ------------------------------------------------------------

    def player_for(self, color: Color) -> Player:
        """Get the player controlling ``color``."""
        return self.player1 if self.player1.color == color else self.player2

    @property
    def current_player(self) -> Player:
        return self.player_for(self.current)

    def opponent_of(self, player: Player) -> Player:
        return self.player2 if player.id == self.player1.id else self.player1

    def piece_at(self, x: int, y: int) -> Piece | None:
        """Get the piece on (x, y), or None if the square is empty."""
        loc = self.board.get(x, y)
        if loc.piece_id is None:
            return None
        return self.pieces[loc.piece_id]

    def king_of(self, color: Color) -> Piece:
        king_id = self.player_for(color).king
        if king_id is None:
            raise BoardCorruptionError(f"{color.value} has no king")
        return self.pieces[king_id]

    # -- Moves --------------------------------------------------------------

    def move_piece(self, source: Coord, dest: Coord) -> MoveResult:
        """Attempt to move the piece on ``source`` to ``dest``.

        Gates run in order and the first failure rejects the move with no
        mutation: bounds, source occupancy, ownership, path collision
        (knights jump), then destination checks (friendly fire and attack
        capability when occupied, move capability when empty). On success the
        capture, the move and the turn switch are applied together.

        Args:
            source: (x, y) of the piece to move
            dest: (x, y) to move it to

        Returns:
            MoveResult describing the outcome

        Raises:
            BoardCorruptionError: If a piece to be captured is missing from
                its owner's active pieces
        """
        if not Board.is_valid_square(*dest) or not Board.is_valid_square(*source):
            return self._reject(MoveError.OUT_OF_BOUNDS, source, dest)

        source_loc = self.board[source]
        if source_loc.piece_id is None:
            return self._reject(MoveError.EMPTY_SOURCE, source, dest)

        piece = self.pieces[source_loc.piece_id]
        if piece.owner != self.current:
            return self._reject(MoveError.NOT_OWNER, source, dest, piece)

        vector = get_move_vector(source, dest)

        # Every piece but the knight needs a clear path
        if piece.type != PieceType.KNIGHT:
            for point in points_along_vector(source, vector):
                if not self.board[point].is_empty:
                    return self._reject(MoveError.PATH_BLOCKED, source, dest, piece)

        captured: Piece | None = None
        dest_loc = self.board[dest]
        if dest_loc.piece_id is not None:
            target = self.pieces[dest_loc.piece_id]
            if target.owner == piece.owner:
                return self._reject(MoveError.FRIENDLY_FIRE, source, dest, piece)
            if not validate_attack(piece, vector):
                return self._reject(MoveError.ILLEGAL_ATTACK, source, dest, piece)

            if target.id not in self.player_for(target.owner).pieces:
                logger.error(
                    f"Piece {target.id} on {dest} is missing from {target.owner.value}'s active pieces"
                )
                raise BoardCorruptionError(
                    f"Captured piece {target.id} not found among active pieces"
                )
            captured = target
        elif not validate_move(piece, vector):
            return self._reject(MoveError.ILLEGAL_MOVE, source, dest, piece)

        self._commit(piece, source, dest, captured)

        return MoveResult(
            success=True,
            source=source,
            dest=dest,
            piece_id=piece.id,
            captured_id=captured.id if captured is not None else None,
            current=self.current,
        )

    def _reject(
        self,
        error: MoveError,
        source: Coord,
        dest: Coord,
        piece: Piece | None = None,
    ) -> MoveResult:
        logger.debug(f"Move rejected: {source} -> {dest} ({error.value})")
        return MoveResult(
            success=False,
            source=source,
            dest=dest,
            error=error,
            message=MOVE_ERROR_MESSAGES[error],
            piece_id=piece.id if piece is not None else None,
            current=self.current,
        )

    def _commit(self, piece: Piece, source: Coord, dest: Coord, captured: Piece | None) -> None:
        if captured is not None:
            defender = self.player_for(captured.owner)
            defender.pieces.remove(captured.id)
            defender.dead_pieces.append(captured.id)
            captured.location = None
            self.captures.append((piece.id, captured.id))
            logger.info(f"{piece} on {source} captured {captured} on {dest}")

        piece.has_moved = True
        piece.location = dest
        self.board[dest].occupy(piece.id)
        self.board[source].vacate()

        self.switch_turns()

    def switch_turns(self) -> None:
        """Hand the move to the other color."""
        self.current = self.current.opponent

    # -- Attack map ---------------------------------------------------------

    def recompute_attack_map(self, side: Color | Player) -> None:
        """Refresh the threat flags of one side."""
        color = side.color if isinstance(side, Player) else side
        recompute_attack_map(self, color)

    # -- Views --------------------------------------------------------------

    def snapshot(self) -> list[dict[str, Any]]:
        """Per-cell view of the board for rendering, row by row."""
        cells: list[dict[str, Any]] = []
        for loc in self.board.cells():
            piece = self.pieces[loc.piece_id] if loc.piece_id is not None else None
            cells.append(
                {
                    "x": loc.coords[0],
                    "y": loc.coords[1],
                    "occupied": piece is not None,
                    "piece_id": piece.id if piece else None,
                    "piece_type": piece.type.value if piece else None,
                    "color": piece.owner.value if piece else None,
                    "white_attackable": loc.white_attackable,
                    "black_attackable": loc.black_attackable,
                }
            )
        return cells

    def check_invariants(self) -> None:
        """Verify the board, pieces and players agree with each other.

        Raises:
            BoardCorruptionError: On the first inconsistency found
        """
        for loc in self.board.cells():
            if loc.is_empty != (loc.piece_id is None):
                raise BoardCorruptionError(f"Cell {loc.coords} state disagrees with its piece")
            if loc.piece_id is not None and self.pieces[loc.piece_id].location != loc.coords:
                raise BoardCorruptionError(f"Piece {loc.piece_id} does not point back to {loc.coords}")

        for player in (self.player1, self.player2):
            active = set(player.pieces)
            dead = set(player.dead_pieces)
            if active & dead:
                raise BoardCorruptionError(f"{player.name} has pieces both active and captured")

            for piece_id in active:
                piece = self.pieces[piece_id]
                if piece.location is None or self.board[piece.location].piece_id != piece_id:
                    raise BoardCorruptionError(f"Active piece {piece_id} is not on the board")
            for piece_id in dead:
                if self.pieces[piece_id].location is not None:
                    raise BoardCorruptionError(f"Captured piece {piece_id} still has a location")

            owned = {p.id for p in self.pieces if p.owner == player.color}
            if owned != active | dead:
                raise BoardCorruptionError(f"{player.name}'s piece lists are incomplete")

            kings = [p for p in owned if self.pieces[p].type == PieceType.KING]
            if kings != [player.king]:
                raise BoardCorruptionError(f"{player.name} must have exactly one king")

    def __str__(self) -> str:
        return render_board(self)
