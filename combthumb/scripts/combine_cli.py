from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from combthumb.api import generate_combined_thumbnail
from combthumb.errors import ProcessingError
from combthumb.logging_utils import setup_logging
from combthumb.utils import load_images, save_bytes


def build_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        description="Combine 1-4 images into one blurred-edge thumbnail."
    )
    p.add_argument(
        "images", nargs="+", type=Path, help="Input images, in layout order"
    )
    p.add_argument(
        "--out", required=True, type=Path, help="Output file path"
    )
    p.add_argument(
        "--format",
        default="PNG",
        help="Output format understood by Pillow (default: PNG)",
    )
    p.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Threads for per-image scaling (default: one per image)",
    )
    p.add_argument("--log-level", default="INFO")
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_args(argv)
    setup_logging(None, args.log_level)
    log = logging.getLogger("combthumb.cli")

    try:
        images = load_images(args.images)
        thumb = generate_combined_thumbnail(
            images, image_format=args.format, n_jobs=args.workers
        )
    except (ProcessingError, OSError) as e:
        log.error("%s", e)
        return 2
    save_bytes(thumb.to_bytes(), args.out)
    log.info(
        "Thumbnail written: %s (%s, %d bytes)",
        args.out,
        thumb.content_type,
        len(thumb.to_bytes()),
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
