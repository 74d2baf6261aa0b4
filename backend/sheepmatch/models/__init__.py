"""Data models package.

This package contains tile/level data models and API schemas.
"""
from .level import (
    Tile,
    TileStatus,
    GameState,
    LevelParams,
    TILE_TYPES,
    TILE_SIZE,
    BOARD_WIDTH,
    BOARD_HEIGHT,
    SLOT_CAPACITY,
    MATCH_CLEAR_DELAY_MS,
)
from .schemas import (
    TileInput,
    LevelResponse,
    ClickableRequest,
    ClickableResponse,
    CreateSessionRequest,
    ClickRequest,
    MuteRequest,
    SessionSnapshot,
    ClickResponse,
    ErrorResponse,
)

__all__ = [
    # Level models
    "Tile",
    "TileStatus",
    "GameState",
    "LevelParams",
    "TILE_TYPES",
    "TILE_SIZE",
    "BOARD_WIDTH",
    "BOARD_HEIGHT",
    "SLOT_CAPACITY",
    "MATCH_CLEAR_DELAY_MS",
    # API schemas
    "TileInput",
    "LevelResponse",
    "ClickableRequest",
    "ClickableResponse",
    "CreateSessionRequest",
    "ClickRequest",
    "MuteRequest",
    "SessionSnapshot",
    "ClickResponse",
    "ErrorResponse",
]
