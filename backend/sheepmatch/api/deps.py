"""API dependencies."""
from ..core.generator import get_generator, LevelGenerator
from ..core.store import get_session_store, SessionStore


def get_level_generator() -> LevelGenerator:
    """Dependency for level generator."""
    return get_generator()


def get_sessions() -> SessionStore:
    """Dependency for the session store."""
    return get_session_store()
