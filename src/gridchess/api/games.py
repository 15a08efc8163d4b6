"""Game API endpoints."""

import logging

from fastapi import APIRouter, HTTPException
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, Field

from gridchess.game.players import Color
from gridchess.services.game_service import get_game_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/games", tags=["games"])


# Request models


class CreateGameRequest(BaseModel):
    """Request to start a new game."""

    white: str | None = Field(default=None, max_length=64)
    black: str | None = Field(default=None, max_length=64)


class MoveRequest(BaseModel):
    """A move from one square to another, as (x, y) pairs."""

    source: tuple[int, int]
    dest: tuple[int, int]


# Response models


class CreateGameResponse(BaseModel):
    """Response for creating a game."""

    game_id: str = Field(alias="gameId")
    current_player: Color = Field(alias="currentPlayer")

    model_config = {"populate_by_name": True}


class CellResponse(BaseModel):
    """One board cell."""

    x: int
    y: int
    occupied: bool
    piece_id: int | None = Field(default=None, alias="pieceId")
    piece_type: str | None = Field(default=None, alias="pieceType")
    color: Color | None = None
    white_attackable: bool = Field(default=False, alias="whiteAttackable")
    black_attackable: bool = Field(default=False, alias="blackAttackable")

    model_config = {"populate_by_name": True}


class BoardResponse(BaseModel):
    """Full board state."""

    game_id: str = Field(alias="gameId")
    current_player: Color = Field(alias="currentPlayer")
    cells: list[CellResponse]
    captured: dict[Color, list[str]]

    model_config = {"populate_by_name": True}


class MoveResponse(BaseModel):
    """Outcome of a move attempt."""

    success: bool
    error: str | None = None
    message: str | None = None
    captured_piece_id: int | None = Field(default=None, alias="capturedPieceId")
    current_player: Color = Field(alias="currentPlayer")

    model_config = {"populate_by_name": True}


class AttackMapResponse(BaseModel):
    """Squares one color currently threatens."""

    color: Color
    squares: list[tuple[int, int]]


# Endpoints


@router.post("", response_model=CreateGameResponse)
async def create_game(request: CreateGameRequest) -> CreateGameResponse:
    """Start a new game with the standard layout."""
    service = get_game_service()
    try:
        game_id = service.create_game(white_name=request.white, black_name=request.black)
    except ValueError as e:
        raise HTTPException(status_code=503, detail=str(e)) from e

    return CreateGameResponse(game_id=game_id, current_player=Color.WHITE)


@router.get("/{game_id}", response_model=BoardResponse)
async def get_board(game_id: str) -> BoardResponse:
    """Get the board, the player to move and the captured pieces."""
    view = get_game_service().get_board(game_id)
    if view is None:
        raise HTTPException(status_code=404, detail="Game not found")

    return BoardResponse(
        game_id=game_id,
        current_player=view["current"],
        cells=[CellResponse(**cell) for cell in view["cells"]],
        captured={
            color: [str(piece_type) for piece_type in types]
            for color, types in view["captured"].items()
        },
    )


@router.post("/{game_id}/moves", response_model=MoveResponse)
async def make_move(game_id: str, request: MoveRequest) -> MoveResponse:
    """Attempt a move.

    Rejected moves are not HTTP errors: the response carries ``success:
    false`` and the reason so the client can explain it.
    """
    service = get_game_service()
    result = service.make_move(game_id, request.source, request.dest)
    if result is None:
        raise HTTPException(status_code=404, detail="Game not found")

    return MoveResponse(
        success=result.success,
        error=result.error.value if result.error else None,
        message=result.message,
        captured_piece_id=result.captured_id,
        current_player=result.current,
    )


@router.get("/{game_id}/text", response_class=PlainTextResponse)
async def get_board_text(game_id: str) -> str:
    """Get the board and capture summaries as plain text."""
    text = get_game_service().render_text(game_id)
    if text is None:
        raise HTTPException(status_code=404, detail="Game not found")
    return text


@router.get("/{game_id}/attacks/{color}", response_model=AttackMapResponse)
async def get_attack_map(game_id: str, color: Color) -> AttackMapResponse:
    """Recompute and return the squares ``color`` threatens."""
    squares = get_game_service().get_attack_map(game_id, color)
    if squares is None:
        raise HTTPException(status_code=404, detail="Game not found")

    return AttackMapResponse(color=color, squares=sorted(squares, key=lambda sq: (sq[1], sq[0])))
