"""Utility helper functions."""
import string
from typing import Dict, Any, List

from ..models.level import Tile, TileStatus, TILE_TYPES, TILE_SIZE, BOARD_WIDTH, BOARD_HEIGHT
from ..core.resolver import clickable_ids


def type_letter(tile_type: str) -> str:
    """Single ASCII letter for a catalog type ('?' if not in the catalog)."""
    if tile_type in TILE_TYPES:
        return string.ascii_uppercase[TILE_TYPES.index(tile_type)]
    return "?"


def extract_tile_statistics(tiles: List[Tile]) -> Dict[str, Any]:
    """
    Extract tile statistics from a tile collection.

    Args:
        tiles: Tile collection to analyze.

    Returns:
        Dictionary with total, per-layer, per-type and per-status counts.
    """
    stats = {
        "total_tiles": len(tiles),
        "tiles_per_layer": {},
        "tile_types": {},
        "statuses": {status.value: 0 for status in TileStatus},
    }

    for tile in tiles:
        layer_key = f"layer_{tile.z}"
        stats["tiles_per_layer"][layer_key] = stats["tiles_per_layer"].get(layer_key, 0) + 1
        stats["tile_types"][tile.type] = stats["tile_types"].get(tile.type, 0) + 1
        stats["statuses"][tile.status.value] += 1

    return stats


def format_board_for_display(tiles: List[Tile]) -> str:
    """
    Format the board tiles for human-readable display.

    Each layer is drawn top to bottom on a half-tile grid. Tiles show their
    catalog letter: uppercase when clickable, lowercase when blocked.

    Args:
        tiles: Tile collection in insertion order.

    Returns:
        Formatted string representation.
    """
    cell = TILE_SIZE // 2
    cols = BOARD_WIDTH // cell
    rows = BOARD_HEIGHT // cell
    clickable = clickable_ids(tiles)

    board_tiles = [t for t in tiles if t.status == TileStatus.BOARD]
    layers = sorted({t.z for t in board_tiles}, reverse=True)

    lines = [f"Board with {len(board_tiles)} tiles, {len(clickable)} clickable:"]
    lines.append("-" * 40)

    for z in layers:
        layer_tiles = [t for t in board_tiles if t.z == z]
        lines.append(f"\nLayer {z} ({len(layer_tiles)} tiles):")

        grid = [["." for _ in range(cols)] for _ in range(rows)]
        for tile in layer_tiles:
            col, row = tile.x // cell, tile.y // cell
            if 0 <= col < cols and 0 <= row < rows:
                letter = type_letter(tile.type)
                grid[row][col] = letter if tile.id in clickable else letter.lower()

        for row in grid:
            lines.append("  " + " ".join(row))

    return "\n".join(lines)
