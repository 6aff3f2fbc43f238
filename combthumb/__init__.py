"""Combine 1-4 images into a single preview-card thumbnail."""

from .api import (
    BLUR_SIGMA,
    CombinedThumbnail,
    compose_thumbnail,
    encode,
    gaussian_blur,
    generate_combined_thumbnail,
)
from .errors import (
    CouldNotFindMostPixels,
    EmptyImageArray,
    EncodingError,
    ProcessingError,
    TooManyImages,
)
from .layout import LayoutPlan, combine_images
from .scaling import FillPolicy, ScaledImage, scale_image
from .utils import load_image, load_image_bytes

__all__ = [
    "BLUR_SIGMA",
    "CombinedThumbnail",
    "CouldNotFindMostPixels",
    "EmptyImageArray",
    "EncodingError",
    "FillPolicy",
    "LayoutPlan",
    "ProcessingError",
    "ScaledImage",
    "TooManyImages",
    "combine_images",
    "compose_thumbnail",
    "encode",
    "gaussian_blur",
    "generate_combined_thumbnail",
    "load_image",
    "load_image_bytes",
    "scale_image",
]
