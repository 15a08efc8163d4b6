"""Board representation for gridchess."""

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum

from gridchess.game.pieces import Coord
from gridchess.game.players import Color

BOARD_SIZE = 8

# Row 0: Black back row
# Row 1: Black pawns
# Row 6: White pawns
# Row 7: White back row
# color -> (back row, pawn row)
HOME_ROWS: dict[Color, tuple[int, int]] = {
    Color.BLACK: (0, 1),
    Color.WHITE: (7, 6),
}


class LocationState(Enum):
    """Occupancy of a board cell."""

    EMPTY = "empty"
    OCCUPIED = "occupied"


@dataclass
class Location:
    """A single board cell.

    Attributes:
        coords: (x, y) of the cell
        state: Occupancy state
        piece_id: Id of the occupying piece, set iff the cell is occupied
        white_attackable: Whether white currently threatens the cell
        black_attackable: Whether black currently threatens the cell
    """

    coords: Coord
    state: LocationState = LocationState.EMPTY
    piece_id: int | None = None
    white_attackable: bool = False
    black_attackable: bool = False

    @property
    def is_empty(self) -> bool:
        return self.state == LocationState.EMPTY

    def occupy(self, piece_id: int) -> None:
        self.state = LocationState.OCCUPIED
        self.piece_id = piece_id

    def vacate(self) -> None:
        self.state = LocationState.EMPTY
        self.piece_id = None

    def is_attackable(self, color: Color) -> bool:
        """Check whether ``color`` threatens this cell."""
        if color is Color.WHITE:
            return self.white_attackable
        return self.black_attackable

    def set_attackable(self, color: Color, value: bool) -> None:
        if color is Color.WHITE:
            self.white_attackable = value
        else:
            self.black_attackable = value


def _empty_rows() -> list[list[Location]]:
    return [[Location(coords=(x, y)) for x in range(BOARD_SIZE)] for y in range(BOARD_SIZE)]


@dataclass
class Board:
    """8x8 grid of locations, stored row-major as ``rows[y][x]``."""

    rows: list[list[Location]] = field(default_factory=_empty_rows)

    @staticmethod
    def is_valid_square(x: int, y: int) -> bool:
        """Check if a coordinate lies on the board."""
        return 0 <= x < BOARD_SIZE and 0 <= y < BOARD_SIZE

    def get(self, x: int, y: int) -> Location:
        """Get the location at (x, y).

        Raises:
            IndexError: If the coordinate is off the board
        """
        if not self.is_valid_square(x, y):
            raise IndexError(f"Square ({x}, {y}) is off the board")
        return self.rows[y][x]

    def __getitem__(self, coords: Coord) -> Location:
        return self.get(*coords)

    def cells(self) -> Iterator[Location]:
        """Iterate over every location, row by row."""
        for row in self.rows:
            yield from row

    def occupied_cells(self) -> Iterator[Location]:
        return (loc for loc in self.cells() if not loc.is_empty)

    def clear_attacks(self, color: Color) -> None:
        """Reset one color's threat flags, leaving the other color's intact."""
        for loc in self.cells():
            loc.set_attackable(color, False)
