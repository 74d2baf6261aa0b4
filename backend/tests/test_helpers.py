"""Tests for board helpers and the session store."""
import pytest
from sheepmatch.core.exceptions import SessionNotFoundError
from sheepmatch.core.generator import generate_level
from sheepmatch.core.store import SessionStore, get_session_store
from sheepmatch.models.level import TileStatus, TILE_TYPES
from sheepmatch.utils.helpers import extract_tile_statistics, format_board_for_display, type_letter

from conftest import StubBackdrops, make_tile


class TestExtractTileStatistics:
    """Test cases for tile statistics."""

    def test_counts(self):
        tiles = [
            make_tile("a", "A", z=0),
            make_tile("b", "A", z=1),
            make_tile("c", "B", z=1, status=TileStatus.SLOT),
        ]

        stats = extract_tile_statistics(tiles)

        assert stats["total_tiles"] == 3
        assert stats["tiles_per_layer"] == {"layer_0": 1, "layer_1": 2}
        assert stats["tile_types"] == {"A": 2, "B": 1}
        assert stats["statuses"] == {"board": 2, "slot": 1, "matching": 0, "cleared": 0}

    def test_generated_level(self):
        stats = extract_tile_statistics(generate_level(2))

        assert stats["total_tiles"] == 45
        assert sum(stats["tiles_per_layer"].values()) == 45


class TestFormatBoardForDisplay:
    """Test cases for the text board."""

    def test_type_letter(self):
        assert type_letter(TILE_TYPES[0]) == "A"
        assert type_letter(TILE_TYPES[2]) == "C"
        assert type_letter("not-a-type") == "?"

    def test_clickable_uppercase_blocked_lowercase(self):
        bottom = make_tile("bottom", TILE_TYPES[1], x=0, y=0, z=0)
        top = make_tile("top", TILE_TYPES[0], x=24, y=0, z=1)

        text = format_board_for_display([bottom, top])

        assert "Layer 1 (1 tiles):" in text
        assert "Layer 0 (1 tiles):" in text
        assert "  . A ." in text
        assert "  b ." in text

    def test_non_board_tiles_skipped(self):
        tiles = [make_tile("a", TILE_TYPES[0], status=TileStatus.CLEARED)]

        text = format_board_for_display(tiles)

        assert text.startswith("Board with 0 tiles")


class TestSessionStore:
    """Test cases for SessionStore."""

    def test_create_and_get(self):
        store = SessionStore(max_sessions=4)
        session = store.create(backdrop_client=StubBackdrops())

        assert store.get(session.session_id) is session
        assert session.session_id in store
        assert len(store) == 1

    def test_missing_session_raises(self):
        store = SessionStore(max_sessions=4)

        with pytest.raises(SessionNotFoundError):
            store.get("missing")
        with pytest.raises(SessionNotFoundError):
            store.delete("missing")

    def test_oldest_evicted(self):
        store = SessionStore(max_sessions=2)
        first = store.create(backdrop_client=StubBackdrops())
        store.create(backdrop_client=StubBackdrops())
        store.create(backdrop_client=StubBackdrops())

        assert len(store) == 2
        assert first.session_id not in store

    def test_delete(self):
        store = SessionStore(max_sessions=2)
        session = store.create(backdrop_client=StubBackdrops())
        store.delete(session.session_id)

        assert len(store) == 0

    def test_singleton_store(self):
        assert get_session_store() is get_session_store()
