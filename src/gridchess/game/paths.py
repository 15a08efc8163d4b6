"""Path tracing along move vectors."""

import math

from gridchess.game.board import Board
from gridchess.game.pieces import Coord

Vector = tuple[int, int]


def get_move_vector(source: Coord, dest: Coord) -> Vector:
    """Displacement from source to dest."""
    return (dest[0] - source[0], dest[1] - source[1])


def points_along_vector(
    source: Coord,
    vector: Vector,
    inclusive: bool = False,
) -> list[Coord]:
    """Get the lattice points a vector passes through.

    The vector is reduced to its primitive step using the gcd of its
    components, then points ``source + k * step`` are generated nearest
    first. Points off the board are dropped.

    Args:
        source: Starting cell (never included)
        vector: Displacement to trace
        inclusive: Also include the vector's endpoint. The attack map uses
            this to turn a maximal vector into a full ray.

    Returns:
        List of (x, y) points. Empty for a zero vector.
    """
    dx, dy = vector
    steps = math.gcd(abs(dx), abs(dy))
    if steps == 0:
        return []

    step_x = dx // steps
    step_y = dy // steps
    last = steps + 1 if inclusive else steps

    points: list[Coord] = []
    for k in range(1, last):
        x = source[0] + k * step_x
        y = source[1] + k * step_y
        if Board.is_valid_square(x, y):
            points.append((x, y))

    return points
