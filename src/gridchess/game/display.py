"""Plain-text rendering of a game."""

from __future__ import annotations

from typing import TYPE_CHECKING

from gridchess.game.players import Color

if TYPE_CHECKING:
    from gridchess.game.engine import Game

EMPTY_CELL = " __ "


def render_board(game: Game) -> str:
    """Render the board one line per row, row 0 first.

    Empty cells are `` __ ``; occupied cells show the owner marker (``O``
    for white, ``X`` for black) followed by the piece letter, e.g. `` OP ``.
    """
    lines: list[str] = []
    for row in game.board.rows:
        text = ""
        for loc in row:
            if loc.piece_id is None:
                text += EMPTY_CELL
            else:
                text += f" {game.pieces[loc.piece_id]} "
        lines.append(text)
    return "\n".join(lines)


def render_captures(game: Game, color: Color) -> str:
    """Summarize one player's active and captured pieces."""
    player = game.player_for(color)
    dead = " ".join(str(game.pieces[piece_id].type) for piece_id in player.dead_pieces)
    return (
        f"Player {player.name} ({color.value})\n"
        f"Alive count: {len(player.pieces)}\n"
        f"Dead count: {len(player.dead_pieces)}\n"
        f"Dead pieces: {dead or '-'}"
    )
