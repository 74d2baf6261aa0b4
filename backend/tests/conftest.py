"""Shared fixtures for the test suite."""
import pytest

from sheepmatch.core.exceptions import AssetFetchError
from sheepmatch.models.level import Tile, TileStatus


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class StubBackdrops:
    """Backdrop provider that never touches the network."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.requested = []

    async def get_level_backdrop(self, level: int) -> str:
        self.requested.append(level)
        if self.fail:
            raise AssetFetchError("backdrop server down")
        return f"backdrop-{level}.mp4"


def make_tile(tile_id, tile_type="A", x=0, y=0, z=0, status=TileStatus.BOARD, added_at=None):
    """Build a tile with sensible defaults."""
    return Tile(id=tile_id, type=tile_type, x=x, y=y, z=z, status=status, added_at=added_at)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def backdrops():
    return StubBackdrops()
