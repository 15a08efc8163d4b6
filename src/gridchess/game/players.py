"""Player definitions for gridchess."""

import uuid
from dataclasses import dataclass, field
from enum import Enum


class Color(Enum):
    """Side a player controls."""

    WHITE = "white"
    BLACK = "black"

    @property
    def opponent(self) -> "Color":
        return Color.BLACK if self is Color.WHITE else Color.WHITE

    @property
    def pawn_direction(self) -> int:
        """Row delta of a forward pawn step.

        White starts on rows 6-7 and moves toward row 0.
        """
        return -1 if self is Color.WHITE else 1

    @property
    def piece_char(self) -> str:
        """Owner marker used by the text renderer."""
        return "O" if self is Color.WHITE else "X"


def _generate_player_id() -> str:
    return uuid.uuid4().hex


@dataclass
class Player:
    """A participant in a game.

    Pieces are referenced by their integer id in the owning game's piece
    array. A piece id is always in exactly one of ``pieces`` and
    ``dead_pieces``.

    Attributes:
        name: Display name
        color: Side the player controls
        id: Unique identity
        pieces: Ids of active pieces, in creation order
        dead_pieces: Ids of captured pieces, in capture order
        king: Id of the player's king
    """

    name: str
    color: Color
    id: str = field(default_factory=_generate_player_id)
    pieces: list[int] = field(default_factory=list)
    dead_pieces: list[int] = field(default_factory=list)
    king: int | None = None

    @property
    def pawn_direction(self) -> int:
        return self.color.pawn_direction

    @property
    def piece_count(self) -> int:
        """Active plus captured pieces; constant over the life of a game."""
        return len(self.pieces) + len(self.dead_pieces)
