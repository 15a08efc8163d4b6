"""Attack map generation.

Each board cell carries one threat flag per color. Recomputing the map for a
color clears that color's flags and re-marks every cell its active pieces
currently threaten. The flags are the building block for check detection.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from gridchess.game.moves import attack_vectors
from gridchess.game.paths import points_along_vector
from gridchess.game.pieces import Coord
from gridchess.game.players import Color

if TYPE_CHECKING:
    from gridchess.game.engine import Game

logger = logging.getLogger(__name__)


def recompute_attack_map(game: Game, color: Color) -> None:
    """Recompute which cells ``color`` threatens. Mutates the board's flags.

    Rays are walked nearest first. An empty cell is marked and the walk
    continues; an enemy piece is marked and stops the walk; a friendly piece
    stops the walk without being marked.

    Args:
        game: Game whose board is updated
        color: Side whose threat flags are recomputed
    """
    board = game.board
    board.clear_attacks(color)

    player = game.player_for(color)
    for piece_id in player.pieces:
        piece = game.pieces[piece_id]
        if piece.location is None:
            continue

        for vector in attack_vectors(piece, piece.location):
            for point in points_along_vector(piece.location, vector, inclusive=True):
                loc = board[point]
                if loc.is_empty:
                    loc.set_attackable(color, True)
                    continue
                if game.pieces[loc.piece_id].owner != color:
                    loc.set_attackable(color, True)
                break

    logger.debug(f"Attack map for {color.value}: {len(attacked_squares(game, color))} squares")


def attacked_squares(game: Game, color: Color) -> set[Coord]:
    """Get the cells currently flagged as threatened by ``color``."""
    return {loc.coords for loc in game.board.cells() if loc.is_attackable(color)}
