"""Pydantic schemas for API request/response validation."""
from pydantic import BaseModel, Field
from typing import Dict, List, Any, Optional

from .level import TileStatus


class TileInput(BaseModel):
    """A tile as supplied by a client for clickability checks."""
    id: str = Field(..., description="Unique tile id")
    type: str = Field(..., description="Tile type symbol")
    x: int = Field(..., description="Top-left x in board pixels")
    y: int = Field(..., description="Top-left y in board pixels")
    z: int = Field(..., ge=0, description="Layer index (0 = bottom)")
    status: TileStatus = Field(default=TileStatus.BOARD, description="Tile status")


class LevelResponse(BaseModel):
    """Response schema for a generated level."""
    level: int = Field(..., description="Level number")
    params: Dict[str, Any] = Field(..., description="Derived generator parameters")
    tiles: List[Dict[str, Any]] = Field(..., description="Tiles in insertion order")
    statistics: Dict[str, Any] = Field(default={}, description="Tile statistics")


class ClickableRequest(BaseModel):
    """Request schema for resolving clickable tiles."""
    tiles: List[TileInput] = Field(..., description="Full tile collection in insertion order")


class ClickableResponse(BaseModel):
    """Response schema for resolving clickable tiles."""
    clickable_ids: List[str] = Field(default=[], description="Ids of clickable tiles, in collection order")


class CreateSessionRequest(BaseModel):
    """Request schema for starting a new game session."""
    level: int = Field(default=1, ge=0, description="Level to start at")
    muted: bool = Field(default=False, description="Suppress audio cues")


class ClickRequest(BaseModel):
    """Request schema for clicking a tile."""
    tile_id: str = Field(..., description="Id of the clicked tile")


class MuteRequest(BaseModel):
    """Request schema for toggling audio cues."""
    muted: bool = Field(..., description="Suppress audio cues")


class SessionSnapshot(BaseModel):
    """Full view of a game session for the presentation layer."""
    session_id: str = Field(..., description="Session id")
    level: int = Field(..., description="Current level")
    epoch: int = Field(..., description="Level generation counter")
    state: str = Field(..., description="Game state (start/loading/playing/won/lost)")
    muted: bool = Field(default=False, description="Whether cues are suppressed")
    backdrop_url: Optional[str] = Field(default=None, description="Decorative backdrop for the level")
    slot_capacity: int = Field(..., description="Slot capacity")
    tiles: List[Dict[str, Any]] = Field(default=[], description="All tiles with clickability")
    slot: List[Dict[str, Any]] = Field(default=[], description="Slot tiles in display order")
    progress: Dict[str, Any] = Field(default={}, description="Total/cleared/remaining counts")
    is_last_slot_warning: bool = Field(default=False, description="One slot left with no pending match")
    recent_cues: List[str] = Field(default=[], description="Most recent cues, oldest first")


class ClickResponse(BaseModel):
    """Response schema for a tile click."""
    accepted: bool = Field(..., description="Whether the tile moved into the slot")
    session: SessionSnapshot = Field(..., description="Session after the click")


class ErrorResponse(BaseModel):
    """Error response schema."""
    error: str = Field(..., description="Error message")
    detail: Optional[str] = Field(default=None, description="Detailed error information")
