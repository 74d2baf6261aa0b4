"""Core game logic package.

This package contains the seeded level generator, the occlusion resolver,
and the slot/match session engine.
"""
from .rng import SeededRandom
from .generator import LevelGenerator, get_generator, generate_level
from .resolver import tiles_overlap, is_clickable, clickable_ids
from .timers import DeferredQueue
from .session import GameSession, Cue, find_match, has_pending_match
from .store import SessionStore, get_session_store
from .exceptions import SheepMatchError, AssetFetchError, SessionNotFoundError

__all__ = [
    "SeededRandom",
    "LevelGenerator",
    "get_generator",
    "generate_level",
    "tiles_overlap",
    "is_clickable",
    "clickable_ids",
    "DeferredQueue",
    "GameSession",
    "Cue",
    "find_match",
    "has_pending_match",
    "SessionStore",
    "get_session_store",
    "SheepMatchError",
    "AssetFetchError",
    "SessionNotFoundError",
]
