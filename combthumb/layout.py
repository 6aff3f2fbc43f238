from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence

from PIL import Image

from .dimensions import find_img_with_most_pixels
from .errors import EmptyImageArray, TooManyImages
from .scaling import (
    FillPolicy,
    ScaledImage,
    scale_all_images_to_same_size,
    scale_image,
)

log = logging.getLogger(__name__)


class LayoutPlan(Enum):
    SINGLE = 1
    PAIR = 2
    TRIPLE = 3
    QUAD = 4

    @classmethod
    def for_count(cls, n: int) -> "LayoutPlan":
        if n <= 0:
            raise EmptyImageArray()
        if n > 4:
            raise TooManyImages()
        return cls(n)


@dataclass(frozen=True)
class Placement:
    image: Image.Image
    x: int
    y: int


def layout_horizontal(
    images: Sequence[ScaledImage], y_offset: int
) -> List[Placement]:
    """Place images left to right on one row starting at x=0."""
    out: List[Placement] = []
    x_offset = 0
    for img in images:
        out.append(Placement(img.image, x_offset, y_offset))
        x_offset += img.width
    return out


def _place_pair(
    scaled: Sequence[ScaledImage], total_width: int, row_height: int
) -> List[Placement]:
    return layout_horizontal(scaled, 0)


def _place_triple(
    scaled: Sequence[ScaledImage], total_width: int, row_height: int
) -> List[Placement]:
    top = layout_horizontal(scaled[:2], 0)
    # Third image becomes a single full-width row under the top pair
    last = scale_image(
        scaled[2].image, total_width, row_height, scaled[2].policy
    )
    return top + layout_horizontal([last], scaled[0].height)


def _place_quad(
    scaled: Sequence[ScaledImage], total_width: int, row_height: int
) -> List[Placement]:
    return layout_horizontal(scaled[:2], 0) + layout_horizontal(
        scaled[2:], scaled[0].height
    )


PlacementFn = Callable[[Sequence[ScaledImage], int, int], List[Placement]]

_PLACEMENTS: Dict[LayoutPlan, PlacementFn] = {
    LayoutPlan.PAIR: _place_pair,
    LayoutPlan.TRIPLE: _place_triple,
    LayoutPlan.QUAD: _place_quad,
}


def plan_placements(
    plan: LayoutPlan,
    scaled: Sequence[ScaledImage],
    total_width: int,
    row_height: int,
) -> List[Placement]:
    if plan is LayoutPlan.SINGLE:
        return [Placement(scaled[0].image, 0, 0)]
    return _PLACEMENTS[plan](scaled, total_width, row_height)


def combine_images(
    images: Sequence[Image.Image],
    total_width: int,
    total_height: int,
    policy: FillPolicy,
    n_jobs: Optional[int] = None,
) -> Image.Image:
    """Lay out 1-4 images on one canvas of (total_width, total_height).

    A single image is returned as-is (RGBA copy) without any resize. Every
    other image is scaled to the size of the largest image, not the canvas.
    """
    plan = LayoutPlan.for_count(len(images))
    if plan is LayoutPlan.SINGLE:
        return images[0].convert("RGBA")

    canvas = Image.new("RGBA", (total_width, total_height), (0, 0, 0, 0))
    ref = find_img_with_most_pixels(images)
    scaled = scale_all_images_to_same_size(
        images, ref.width, ref.height, policy, n_jobs=n_jobs
    )
    log.debug(
        "Layout %s (%s) on %dx%d canvas",
        plan.name,
        policy.value,
        total_width,
        total_height,
    )
    for p in plan_placements(plan, scaled, total_width, ref.height):
        canvas.alpha_composite(p.image, (p.x, p.y))
        log.debug("Overlaying image at x: %d, y: %d", p.x, p.y)
    return canvas
