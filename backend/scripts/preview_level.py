#!/usr/bin/env python3
"""Print a generated level as text or JSON.

Usage:
    python preview_level.py [--level N] [--json] [--stats]
"""

import argparse
import json
import logging
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from sheepmatch.config import get_settings
from sheepmatch.core.generator import get_generator
from sheepmatch.utils.helpers import extract_tile_statistics, format_board_for_display

logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(description="Preview a generated level")
    parser.add_argument("--level", "-l", type=int, default=1,
                       help="Level number (default: 1)")
    parser.add_argument("--json", "-j", action="store_true",
                       help="Print tiles as JSON instead of a text board")
    parser.add_argument("--stats", "-s", action="store_true",
                       help="Also print tile statistics")
    args = parser.parse_args()

    logging.basicConfig(
        level=get_settings().log_level.upper(),
        format='%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%H:%M:%S'
    )

    if args.level < 0:
        parser.error("--level must be non-negative")

    generator = get_generator()
    params = generator.level_params(args.level)
    tiles = generator.generate(args.level)
    logger.info(f"Level {args.level}: {params.to_dict()}")

    if args.json:
        print(json.dumps([t.to_dict() for t in tiles], ensure_ascii=False, indent=2))
    else:
        print(format_board_for_display(tiles))

    if args.stats:
        print(json.dumps(extract_tile_statistics(tiles), ensure_ascii=False, indent=2))


if __name__ == "__main__":
    main()
