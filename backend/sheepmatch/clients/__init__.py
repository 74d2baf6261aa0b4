"""External service clients package.

This package contains the level backdrop provider.
"""
from .backdrop import (
    BackdropClient,
    get_backdrop_client,
    parse_backdrop_manifest,
    DEFAULT_BACKDROPS,
)

__all__ = [
    "BackdropClient",
    "get_backdrop_client",
    "parse_backdrop_manifest",
    "DEFAULT_BACKDROPS",
]
