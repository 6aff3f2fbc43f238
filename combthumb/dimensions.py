from __future__ import annotations

import logging
from typing import Sequence, Tuple

from PIL import Image

from .errors import CouldNotFindMostPixels

log = logging.getLogger(__name__)


def find_img_with_most_pixels(images: Sequence[Image.Image]) -> Image.Image:
    """Return the image with the largest pixel area.

    When several images share the largest area the last one wins.
    """
    best: Image.Image | None = None
    best_area = -1
    for img in images:
        area = img.width * img.height
        if area >= best_area:
            best, best_area = img, area
    if best is None:
        raise CouldNotFindMostPixels()
    return best


def get_total_img_size(images: Sequence[Image.Image]) -> Tuple[int, int]:
    ref = find_img_with_most_pixels(images)
    width, height = ref.size
    if len(images) == 1:
        size = (width, height)
    elif len(images) == 2:
        size = (width * 2, height)
    else:
        size = (width * 2, height * 2)
    log.debug(
        "Reference image %dx%d, canvas %dx%d", width, height, size[0], size[1]
    )
    return size
