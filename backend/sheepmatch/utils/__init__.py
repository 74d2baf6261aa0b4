"""Utility helpers package."""
from .helpers import extract_tile_statistics, format_board_for_display, type_letter

__all__ = [
    "extract_tile_statistics",
    "format_board_for_display",
    "type_letter",
]
