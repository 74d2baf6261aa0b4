"""Tile and level data models and structures."""
from dataclasses import dataclass
from typing import Dict, Any, Optional
from enum import Enum


# Board geometry (board pixel units)
TILE_SIZE = 48
BOARD_WIDTH = 320
BOARD_HEIGHT = 480

# Slot and timing defaults
SLOT_CAPACITY = 7
MATCH_CLEAR_DELAY_MS = 300

# Fixed ordered type catalog. Levels draw their palette from the front.
TILE_TYPES = [
    "🐑", "🌿", "🥕", "🌽",
    "🍎", "🧅", "🥦", "🍄",
    "🔥", "🧤", "🪵", "🥛",
    "🧶", "✂️", "🔔", "🌸",
]


class TileStatus(str, Enum):
    """Tile lifecycle status."""
    BOARD = "board"
    SLOT = "slot"
    MATCHING = "matching"
    CLEARED = "cleared"


class GameState(str, Enum):
    """Session-level game state."""
    START = "start"
    LOADING = "loading"
    PLAYING = "playing"
    WON = "won"
    LOST = "lost"


@dataclass
class Tile:
    """A single tile on the board, in the slot, or cleared."""
    id: str
    type: str
    x: int
    y: int
    z: int
    status: TileStatus = TileStatus.BOARD
    added_at: Optional[float] = None  # Set once on board -> slot

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "type": self.type,
            "x": self.x,
            "y": self.y,
            "z": self.z,
            "status": self.status.value,
            "addedAt": self.added_at,
        }


@dataclass
class LevelParams:
    """Generator parameters derived from a level number."""
    level: int
    num_sets: int
    num_types: int
    layers: int
    tiles_per_layer: int

    @property
    def total_tiles(self) -> int:
        return self.num_sets * 3

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "level": self.level,
            "num_sets": self.num_sets,
            "num_types": self.num_types,
            "layers": self.layers,
            "tiles_per_layer": self.tiles_per_layer,
            "total_tiles": self.total_tiles,
        }
