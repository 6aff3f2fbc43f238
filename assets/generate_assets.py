from __future__ import annotations

from pathlib import Path

import numpy as np
from PIL import Image, ImageDraw


def gradient(w: int, h: int, seed: int = 0) -> Image.Image:
    rng = np.random.default_rng(seed)
    c0 = rng.integers(0, 256, size=3).astype(np.float32)
    c1 = rng.integers(0, 256, size=3).astype(np.float32)
    t = np.linspace(0.0, 1.0, num=w, dtype=np.float32)[None, :, None]
    rgb = c0 * (1.0 - t) + c1 * t
    rgb = np.broadcast_to(rgb, (h, w, 3))
    return Image.fromarray(rgb.astype(np.uint8)).convert("RGBA")


def labelled(w: int, h: int, label: str, seed: int = 0) -> Image.Image:
    img = gradient(w, h, seed=seed)
    draw = ImageDraw.Draw(img)
    draw.rectangle(
        [0, 0, w - 1, h - 1], outline=(255, 255, 255, 255), width=4
    )
    draw.text((12, 12), f"{label} {w}x{h}", fill=(255, 255, 255, 255))
    return img


def main() -> None:
    out = Path("assets")
    out.mkdir(parents=True, exist_ok=True)
    sizes = {
        "landscape": (800, 600),
        "small_landscape": (400, 300),
        "portrait": (600, 900),
        "square": (300, 300),
        "panorama": (1200, 300),
    }
    for i, (name, (w, h)) in enumerate(sizes.items()):
        labelled(w, h, name, seed=i).save(out / f"{name}.png")


if __name__ == "__main__":
    main()
