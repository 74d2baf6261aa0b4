"""Occlusion resolver: decides which board tiles can be clicked."""
from typing import List, Set

from ..models.level import Tile, TileStatus, TILE_SIZE


def tiles_overlap(t1: Tile, t2: Tile) -> bool:
    """Check whether two tile footprints intersect.

    Tiles are TILE_SIZE squares anchored at their top-left corner. Touching
    edges do not count as overlap.
    """
    return (
        t1.x < t2.x + TILE_SIZE
        and t1.x + TILE_SIZE > t2.x
        and t1.y < t2.y + TILE_SIZE
        and t1.y + TILE_SIZE > t2.y
    )


def _index_of(tile: Tile, all_tiles: List[Tile]) -> int:
    for i, other in enumerate(all_tiles):
        if other.id == tile.id:
            return i
    return -1


def is_clickable(tile: Tile, all_tiles: List[Tile]) -> bool:
    """
    Check whether a tile can currently be clicked.

    A board tile is blocked by any other overlapping board tile that sits in
    a higher layer, or in the same layer but later in ``all_tiles``. Tiles in
    slot/matching/cleared status never block.

    Args:
        tile: Tile to test.
        all_tiles: Current full tile collection in insertion order.

    Returns:
        True if the tile is on the board and nothing blocks it.
    """
    if tile.status != TileStatus.BOARD:
        return False

    tile_index = _index_of(tile, all_tiles)

    for i, other in enumerate(all_tiles):
        if other.id == tile.id or other.status != TileStatus.BOARD:
            continue

        if other.z > tile.z or (other.z == tile.z and i > tile_index):
            if tiles_overlap(tile, other):
                return False

    return True


def clickable_ids(all_tiles: List[Tile]) -> Set[str]:
    """Return the ids of every clickable tile in the collection."""
    return {tile.id for tile in all_tiles if is_clickable(tile, all_tiles)}
