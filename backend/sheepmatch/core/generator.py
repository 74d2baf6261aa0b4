"""Deterministic level generator."""
import logging
import math
from typing import List

from ..models.level import (
    Tile,
    TileStatus,
    LevelParams,
    TILE_TYPES,
    TILE_SIZE,
    BOARD_WIDTH,
    BOARD_HEIGHT,
)
from .rng import SeededRandom

logger = logging.getLogger(__name__)


class LevelGenerator:
    """Generates the layered tile set for a level number.

    Output is a pure function of the level: the same level always produces
    the same tiles in the same order. Order matters because the occlusion
    resolver uses it to decide which of two same-layer tiles sits on top.
    """

    # Offset added to the level to form the RNG seed
    SEED_OFFSET = 1000

    # Set counts (3 tiles per set)
    FIRST_LEVEL_SETS = 4
    SECOND_LEVEL_SETS = 15
    SETS_PER_LEVEL = 5
    MAX_SETS = 60  # 180 tiles

    # Layering
    MAX_LAYERS = 12
    BASE_MARGIN = 20
    MARGIN_PER_LAYER = 5

    # Placement retries before an overlapping position is accepted
    MAX_PLACEMENT_ATTEMPTS = 30

    def level_params(self, level: int) -> LevelParams:
        """
        Derive set, palette and layer counts for a level.

        Args:
            level: Level number (non-negative).

        Returns:
            LevelParams for the level.
        """
        num_sets = self.FIRST_LEVEL_SETS
        if level == 2:
            num_sets = self.SECOND_LEVEL_SETS
        if level > 2:
            num_sets = self.SECOND_LEVEL_SETS + (level - 2) * self.SETS_PER_LEVEL
        num_sets = min(num_sets, self.MAX_SETS)

        num_types = min(3 + level * 2, len(TILE_TYPES))
        layers = min(3 + level * 2, self.MAX_LAYERS)
        tiles_per_layer = math.ceil(num_sets * 3 / layers)

        return LevelParams(
            level=level,
            num_sets=num_sets,
            num_types=num_types,
            layers=layers,
            tiles_per_layer=tiles_per_layer,
        )

    def generate(self, level: int) -> List[Tile]:
        """
        Generate the tiles for a level.

        Args:
            level: Level number (non-negative).

        Returns:
            Board-status tiles in insertion order.
        """
        rng = SeededRandom(level + self.SEED_OFFSET)
        params = self.level_params(level)

        types_to_place = self._draw_types(rng, params)
        self._shuffle(rng, types_to_place)
        tiles = self._place_tiles(rng, params, types_to_place)

        logger.debug(
            f"Generated level {level}: {len(tiles)} tiles, "
            f"{params.layers} layers, {params.num_types} types"
        )
        return tiles

    def _draw_types(self, rng: SeededRandom, params: LevelParams) -> List[str]:
        """Draw one type per set and repeat it three times."""
        available_types = TILE_TYPES[:params.num_types]

        types_to_place: List[str] = []
        for _ in range(params.num_sets):
            tile_type = available_types[rng.next_index(len(available_types))]
            types_to_place.extend([tile_type, tile_type, tile_type])

        return types_to_place

    def _shuffle(self, rng: SeededRandom, items: List[str]) -> None:
        """Fisher-Yates shuffle in place, driven by the seeded RNG."""
        for i in range(len(items) - 1, 0, -1):
            j = rng.next_index(i + 1)
            items[i], items[j] = items[j], items[i]

    def _place_tiles(
        self, rng: SeededRandom, params: LevelParams, types_to_place: List[str]
    ) -> List[Tile]:
        """Lay the shuffled types out layer by layer on a half-tile grid."""
        grid_step = TILE_SIZE // 2
        tiles: List[Tile] = []
        # (z, x, y) of every placed tile, for the same-position checks
        occupied = set()
        type_index = 0

        for z in range(params.layers):
            layer_margin = self.BASE_MARGIN + z * self.MARGIN_PER_LAYER
            available_width = BOARD_WIDTH - TILE_SIZE - layer_margin * 2
            available_height = BOARD_HEIGHT - TILE_SIZE - layer_margin * 2

            for i in range(params.tiles_per_layer):
                if type_index >= len(types_to_place):
                    break

                x = y = 0
                for _ in range(self.MAX_PLACEMENT_ATTEMPTS):
                    grid_x = int(rng.next() * (available_width / grid_step))
                    grid_y = int(rng.next() * (available_height / grid_step))

                    x = layer_margin + grid_x * grid_step
                    y = layer_margin + grid_y * grid_step

                    same_pos_in_current = (z, x, y) in occupied
                    same_pos_in_below = z > 0 and (z - 1, x, y) in occupied

                    if not same_pos_in_current and not same_pos_in_below:
                        break

                tiles.append(Tile(
                    id=f"tile-{z}-{i}-{type_index}",
                    type=types_to_place[type_index],
                    x=x,
                    y=y,
                    z=z,
                    status=TileStatus.BOARD,
                ))
                occupied.add((z, x, y))
                type_index += 1

        return tiles


# Singleton instance
_generator = None


def get_generator() -> LevelGenerator:
    """Get or create generator singleton instance."""
    global _generator
    if _generator is None:
        _generator = LevelGenerator()
    return _generator


def generate_level(level: int) -> List[Tile]:
    """Generate the tiles for a level with the shared generator."""
    return get_generator().generate(level)
