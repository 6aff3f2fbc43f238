from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

import cv2
import numpy as np
from PIL import Image

from .dimensions import get_total_img_size
from .errors import EmptyImageArray, EncodingError, TooManyImages
from .layout import combine_images
from .scaling import FillPolicy
from .utils import to_rgba

log = logging.getLogger(__name__)

# Fixed background blur strength
BLUR_SIGMA = 50.0
MAX_IMAGES = 4


@dataclass(frozen=True)
class CombinedThumbnail:
    data: bytes
    format: str = "PNG"

    @property
    def content_type(self) -> str:
        Image.init()
        return Image.MIME.get(
            self.format.upper(), "application/octet-stream"
        )

    def to_bytes(self) -> bytes:
        return self.data


def gaussian_blur(image: Image.Image, sigma: float) -> Image.Image:
    """Return a blurred RGBA copy of image; the input is left untouched."""
    arr = np.array(image.convert("RGBA"))
    blurred = cv2.GaussianBlur(
        arr,
        (0, 0),
        sigmaX=sigma,
        sigmaY=sigma,
        borderType=cv2.BORDER_REPLICATE,
    )
    return Image.fromarray(blurred)


def encode(image: Image.Image, image_format: str = "PNG") -> CombinedThumbnail:
    fmt = image_format.upper()
    buf = io.BytesIO()
    try:
        image.save(buf, format=fmt)
    except (KeyError, ValueError, OSError, MemoryError) as e:
        raise EncodingError(e) from e
    return CombinedThumbnail(data=buf.getvalue(), format=fmt)


def _prepare(images: Sequence[Image.Image]) -> List[Image.Image]:
    if len(images) == 0:
        raise EmptyImageArray()
    if len(images) > MAX_IMAGES:
        raise TooManyImages()
    return [to_rgba(im) for im in images]


def compose_thumbnail(
    images: Sequence[Image.Image], n_jobs: Optional[int] = None
) -> Image.Image:
    """Sharp letterboxed layout over a blurred, stretched copy of itself.

    Transparent margins left by letterboxing show the blurred background
    instead of solid bars.
    """
    imgs = _prepare(images)
    total_w, total_h = get_total_img_size(imgs)
    foreground = combine_images(
        imgs, total_w, total_h, FillPolicy.LETTERBOX, n_jobs=n_jobs
    )
    background = gaussian_blur(
        combine_images(
            imgs, total_w, total_h, FillPolicy.STRETCH, n_jobs=n_jobs
        ),
        BLUR_SIGMA,
    )
    background.alpha_composite(foreground, (0, 0))
    log.debug(
        "Composed %d image(s) into %dx%d", len(imgs), total_w, total_h
    )
    return background


def generate_combined_thumbnail(
    images: Sequence[Image.Image],
    *,
    image_format: str = "PNG",
    n_jobs: Optional[int] = None,
) -> CombinedThumbnail:
    """Combine 1-4 images into one encoded thumbnail.

    Raises a ProcessingError subclass on invalid input or encoding failure.
    """
    return encode(compose_thumbnail(images, n_jobs=n_jobs), image_format)
