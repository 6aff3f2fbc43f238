from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from joblib import Parallel, delayed  # type: ignore
from PIL import Image


class FillPolicy(Enum):
    # preserve aspect, center, transparent margins
    LETTERBOX = "letterbox"
    # ignore aspect, cover the whole target
    STRETCH = "stretch"


@dataclass(frozen=True)
class ScaledImage:
    image: Image.Image
    policy: FillPolicy

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height


def letterbox_size(
    width: int, height: int, target_width: int, target_height: int
) -> Tuple[int, int]:
    """Largest (w, h) with the source aspect ratio that fits the target.

    Dimensions are truncated, then clamped to at least one pixel.
    """
    aspect = width / height
    if aspect > target_width / target_height:
        new_w, new_h = target_width, int(target_width / aspect)
    else:
        new_w, new_h = int(target_height * aspect), target_height
    return max(1, new_w), max(1, new_h)


def scale_image(
    image: Image.Image,
    target_width: int,
    target_height: int,
    policy: FillPolicy,
) -> ScaledImage:
    if target_width <= 0 or target_height <= 0:
        raise ValueError(
            f"Target size must be positive, got {target_width}x{target_height}"
        )
    if image.mode != "RGBA":
        image = image.convert("RGBA")

    if policy is FillPolicy.STRETCH:
        # Only ever blurred afterwards, so a cheap smoothing filter is enough
        out = image.resize(
            (target_width, target_height), Image.Resampling.BOX
        )
        return ScaledImage(out, policy)

    new_w, new_h = letterbox_size(
        image.width, image.height, target_width, target_height
    )
    resized = image.resize((new_w, new_h), Image.Resampling.LANCZOS)
    x = (target_width - new_w) // 2
    y = (target_height - new_h) // 2
    out = Image.new("RGBA", (target_width, target_height), (0, 0, 0, 0))
    out.alpha_composite(resized, (x, y))
    return ScaledImage(out, policy)


def scale_all_images_to_same_size(
    images: Sequence[Image.Image],
    target_width: int,
    target_height: int,
    policy: FillPolicy,
    n_jobs: Optional[int] = None,
) -> List[ScaledImage]:
    """Scale every image to one target size, keeping input order.

    n_jobs=None uses one thread per image; n_jobs=1 runs inline.
    """
    if not images:
        return []
    workers = len(images) if n_jobs is None else n_jobs
    if workers == 1 or len(images) == 1:
        return [
            scale_image(img, target_width, target_height, policy)
            for img in images
        ]
    # Pillow releases the GIL while resampling; joblib keeps result order
    return list(
        Parallel(n_jobs=workers, prefer="threads")(
            delayed(scale_image)(img, target_width, target_height, policy)
            for img in images
        )
    )
