"""Tests for the backdrop client."""
import asyncio
from contextlib import asynccontextmanager

import pytest
from aiohttp import web
from aiohttp import test_utils
from sheepmatch.clients.backdrop import (
    BackdropClient,
    DEFAULT_BACKDROPS,
    get_backdrop_client,
    parse_backdrop_manifest,
)
from sheepmatch.core.exceptions import AssetFetchError
from sheepmatch.core.session import GameSession
from sheepmatch.models.level import GameState


@asynccontextmanager
async def serve_manifest(body: bytes, charset: str = "utf-8"):
    """Serve ``body`` as a JSON manifest on a local port and yield its URL."""

    async def handler(request):
        return web.Response(body=body, content_type="application/json", charset=charset)

    app = web.Application()
    app.router.add_get("/manifest.json", handler)
    async with test_utils.TestServer(app) as server:
        yield str(server.make_url("/manifest.json"))


class TestBackdropClient:
    """Test cases for BackdropClient."""

    def test_level_index_wraps_catalog(self):
        """Test that level N maps to entry (N - 1) mod catalog size."""
        client = BackdropClient(catalog=["a", "b", "c"])

        assert asyncio.run(client.get_level_backdrop(1)) == "a"
        assert asyncio.run(client.get_level_backdrop(3)) == "c"
        assert asyncio.run(client.get_level_backdrop(4)) == "a"
        assert asyncio.run(client.get_level_backdrop(8)) == "b"

    def test_default_catalog(self):
        client = BackdropClient(catalog=None, manifest_url=None)
        if client.is_remote:
            pytest.skip("backdrop manifest configured in environment")

        assert asyncio.run(client.get_catalog()) == DEFAULT_BACKDROPS
        assert asyncio.run(client.get_level_backdrop(3)) == DEFAULT_BACKDROPS[2]

    def test_unreachable_manifest_raises_asset_error(self):
        """Test that connection failures surface as AssetFetchError."""
        client = BackdropClient(manifest_url="http://127.0.0.1:9/manifest.json", timeout_s=2)

        assert client.is_remote
        with pytest.raises(AssetFetchError):
            asyncio.run(client.get_level_backdrop(1))

    def test_undecodable_manifest_raises_asset_error(self):
        """Test that a manifest body that is not valid text surfaces as AssetFetchError."""

        async def fetch():
            async with serve_manifest(b'["\xff\xfe"]', charset="utf-8") as url:
                await BackdropClient(manifest_url=url, timeout_s=2).get_level_backdrop(1)

        with pytest.raises(AssetFetchError):
            asyncio.run(fetch())

    def test_unknown_charset_raises_asset_error(self):
        async def fetch():
            async with serve_manifest(b'["a.mp4"]', charset="x-no-such-codec") as url:
                await BackdropClient(manifest_url=url, timeout_s=2).get_level_backdrop(1)

        with pytest.raises(AssetFetchError):
            asyncio.run(fetch())

    def test_remote_manifest_loaded(self):
        async def fetch():
            async with serve_manifest(b'{"backdrops": ["a.mp4", "b.mp4"]}') as url:
                return await BackdropClient(manifest_url=url, timeout_s=2).get_level_backdrop(2)

        assert asyncio.run(fetch()) == "b.mp4"

    def test_bad_manifest_does_not_block_level(self):
        """Test that a session still starts when the manifest cannot be decoded."""

        async def start():
            async with serve_manifest(b'["\xff\xfe"]', charset="utf-8") as url:
                session = GameSession(backdrop_client=BackdropClient(manifest_url=url, timeout_s=2))
                await session.start_level(1)
                return session

        session = asyncio.run(start())

        assert session.state == GameState.PLAYING
        assert session.backdrop_url is None
        assert len(session.tiles) == 12

    def test_singleton_client(self):
        """Test that get_backdrop_client returns singleton."""
        assert get_backdrop_client() is get_backdrop_client()


class TestParseBackdropManifest:
    """Test cases for manifest parsing."""

    def test_plain_list(self):
        assert parse_backdrop_manifest(["a.mp4", "b.mp4"]) == ["a.mp4", "b.mp4"]

    def test_wrapped_list(self):
        assert parse_backdrop_manifest({"backdrops": ["a.mp4"]}) == ["a.mp4"]

    def test_blank_entries_skipped(self):
        assert parse_backdrop_manifest(["", "a.mp4", 3, "  "]) == ["a.mp4"]

    def test_empty_manifest_rejected(self):
        with pytest.raises(AssetFetchError):
            parse_backdrop_manifest([])

    def test_wrong_shape_rejected(self):
        with pytest.raises(AssetFetchError):
            parse_backdrop_manifest({"videos": ["a.mp4"]})
        with pytest.raises(AssetFetchError):
            parse_backdrop_manifest("a.mp4")
