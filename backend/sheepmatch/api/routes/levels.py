"""Level generation and clickability API routes."""
from fastapi import APIRouter, Depends, Path

from ...models.level import Tile
from ...models.schemas import (
    LevelResponse,
    ClickableRequest,
    ClickableResponse,
)
from ...core.generator import LevelGenerator
from ...core.resolver import clickable_ids
from ...utils.helpers import extract_tile_statistics
from ..deps import get_level_generator

router = APIRouter(prefix="/api/levels", tags=["levels"])


@router.post("/clickable", response_model=ClickableResponse)
async def resolve_clickable(request: ClickableRequest) -> ClickableResponse:
    """
    Resolve which tiles of a collection can be clicked.

    Args:
        request: ClickableRequest with the full tile collection in order.

    Returns:
        ClickableResponse with clickable ids in collection order.
    """
    tiles = [
        Tile(id=t.id, type=t.type, x=t.x, y=t.y, z=t.z, status=t.status)
        for t in request.tiles
    ]
    clickable = clickable_ids(tiles)
    return ClickableResponse(clickable_ids=[t.id for t in tiles if t.id in clickable])


@router.get("/{level}", response_model=LevelResponse)
async def get_level(
    level: int = Path(..., ge=0, description="Level number"),
    generator: LevelGenerator = Depends(get_level_generator),
) -> LevelResponse:
    """
    Generate the tiles for a level.

    Args:
        level: Level number.
        generator: LevelGenerator dependency.

    Returns:
        LevelResponse with tiles, derived parameters and statistics.
    """
    tiles = generator.generate(level)
    return LevelResponse(
        level=level,
        params=generator.level_params(level).to_dict(),
        tiles=[t.to_dict() for t in tiles],
        statistics=extract_tile_statistics(tiles),
    )
