"""Game service for managing active games.

Games are kept in memory. Each game is guarded by its own lock: a move
attempt reads many cells before it writes any, so two attempts on the same
game must never interleave. Every read or mutation of a game goes through
that lock.
"""

import logging
import random
import threading
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from gridchess.game.attacks import attacked_squares
from gridchess.game.display import render_board, render_captures
from gridchess.game.engine import Game, MoveResult
from gridchess.game.pieces import Coord
from gridchess.game.players import Color
from gridchess.settings import get_settings

logger = logging.getLogger(__name__)


@dataclass
class ManagedGame:
    """A game being managed by the service.

    Attributes:
        game: The game state
        lock: Serializes every access to ``game``
        created_at: When the game was created
        last_activity: When the game was last accessed
    """

    game: Game
    lock: threading.Lock = field(default_factory=threading.Lock)
    created_at: datetime = field(default_factory=datetime.now)
    last_activity: datetime = field(default_factory=datetime.now)

    def touch(self) -> None:
        self.last_activity = datetime.now()


_GAME_ID_ALPHABET = "ABCDEFGHJKMNPQRSTUVWXYZ23456789"
_GAME_ID_LENGTH = 8


def _generate_game_id() -> str:
    """Generate a unique game ID."""
    return "".join(random.choices(_GAME_ID_ALPHABET, k=_GAME_ID_LENGTH))


class GameService:
    """Manages active games and their state.

    This service is responsible for:
    - Creating new games
    - Processing moves one at a time per game
    - Refreshing attack maps
    - Cleaning up abandoned games
    """

    def __init__(self) -> None:
        """Initialize the game service."""
        self.games: dict[str, ManagedGame] = {}
        self._registry_lock = threading.Lock()

    def create_game(
        self,
        white_name: str | None = None,
        black_name: str | None = None,
    ) -> str:
        """Create a new game with the standard layout.

        Args:
            white_name: Name of the white player (defaults from settings)
            black_name: Name of the black player (defaults from settings)

        Returns:
            The game_id

        Raises:
            ValueError: If the service already holds the maximum number of games
                and none of them is stale
        """
        settings = get_settings()
        white_name = white_name or settings.default_white_name
        black_name = black_name or settings.default_black_name

        game = Game.create(white_name, Color.WHITE, black_name, Color.BLACK)

        with self._registry_lock:
            # Full registry: make room by dropping idle games first
            if len(self.games) >= settings.max_games:
                self._evict_stale_locked(settings.stale_game_seconds)
            if len(self.games) >= settings.max_games:
                raise ValueError(f"Too many active games (max {settings.max_games})")

            game_id = _generate_game_id()
            # Ensure unique game ID
            while game_id in self.games:
                game_id = _generate_game_id()

            self.games[game_id] = ManagedGame(game=game)

        logger.info(f"Game {game_id} created successfully")
        return game_id

    def get_managed_game(self, game_id: str) -> ManagedGame | None:
        return self.games.get(game_id)

    def get_game(self, game_id: str) -> Game | None:
        """Get a game by ID.

        Callers that read the game outside of this service must hold the
        managed game's lock.
        """
        managed = self.games.get(game_id)
        return managed.game if managed is not None else None

    def make_move(self, game_id: str, source: Coord, dest: Coord) -> MoveResult | None:
        """Attempt a move in a game.

        Args:
            game_id: The game ID
            source: (x, y) of the piece to move
            dest: (x, y) destination

        Returns:
            MoveResult for the attempt, or None if the game does not exist
        """
        managed = self.games.get(game_id)
        if managed is None:
            return None

        with managed.lock:
            managed.touch()
            result = managed.game.move_piece(source, dest)

        if result.success:
            logger.debug(f"Game {game_id}: moved {source} -> {dest}")
        return result

    def get_board(self, game_id: str) -> dict[str, Any] | None:
        """Get a consistent view of a game for rendering.

        Returns:
            Dict with the cell snapshot, the color to move and each color's
            captured piece types, or None if the game does not exist
        """
        managed = self.games.get(game_id)
        if managed is None:
            return None

        with managed.lock:
            managed.touch()
            game = managed.game
            return {
                "cells": game.snapshot(),
                "current": game.current,
                "captured": {
                    color: [game.pieces[p].type for p in game.player_for(color).dead_pieces]
                    for color in Color
                },
            }

    def render_text(self, game_id: str) -> str | None:
        """Render the board followed by each color's capture summary.

        Returns:
            Plain text, or None if the game does not exist
        """
        managed = self.games.get(game_id)
        if managed is None:
            return None

        with managed.lock:
            managed.touch()
            game = managed.game
            sections = [render_board(game)]
            sections.extend(render_captures(game, color) for color in Color)
            return "\n\n".join(sections) + "\n"

    def get_attack_map(self, game_id: str, color: Color) -> set[Coord] | None:
        """Recompute and return the squares ``color`` threatens.

        Returns:
            Set of (x, y) squares, or None if the game does not exist
        """
        managed = self.games.get(game_id)
        if managed is None:
            return None

        with managed.lock:
            managed.touch()
            managed.game.recompute_attack_map(color)
            return attacked_squares(managed.game, color)

    def remove_game(self, game_id: str) -> bool:
        """Remove a game. Returns True if it existed."""
        with self._registry_lock:
            return self.games.pop(game_id, None) is not None

    def cleanup_stale_games(self, max_age_seconds: int | None = None) -> int:
        """Remove games that have not been accessed recently.

        Args:
            max_age_seconds: Maximum idle time (defaults from settings)

        Returns:
            Number of games cleaned up
        """
        if max_age_seconds is None:
            max_age_seconds = get_settings().stale_game_seconds

        with self._registry_lock:
            return self._evict_stale_locked(max_age_seconds)

    def _evict_stale_locked(self, max_age_seconds: int) -> int:
        """Drop games idle for longer than ``max_age_seconds``.

        Must be called with ``_registry_lock`` held.
        """
        now = datetime.now()
        stale_games = [
            game_id
            for game_id, managed in self.games.items()
            if (now - managed.last_activity).total_seconds() > max_age_seconds
        ]
        for game_id in stale_games:
            del self.games[game_id]

        if stale_games:
            logger.info(f"Cleaned up {len(stale_games)} stale games")
        return len(stale_games)


# Global singleton instance
_game_service: GameService | None = None


def get_game_service() -> GameService:
    """Get the global game service instance."""
    global _game_service
    if _game_service is None:
        _game_service = GameService()
    return _game_service
