from __future__ import annotations

import io
import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Sequence

from PIL import Image


def to_rgba(img: Image.Image) -> Image.Image:
    if img.mode != "RGBA":
        img = img.convert("RGBA")
    return img


def load_image(path: Path) -> Image.Image:
    # convert copies, so the result outlives the closed file
    with Image.open(path) as img:
        return img.convert("RGBA")


def load_image_bytes(data: bytes) -> Image.Image:
    """Decode an encoded image held in memory into an RGBA image."""
    with Image.open(io.BytesIO(data)) as img:
        return img.convert("RGBA")


def load_images(paths: Sequence[Path]) -> List[Image.Image]:
    return [load_image(Path(p)) for p in paths]


def save_bytes(data: bytes, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)


def now_stamp() -> str:
    return datetime.now().strftime("%Y-%m-%d_%H%M%S")


def make_output_dir(output_root: Path, stamp: str) -> Path:
    out = output_root / stamp
    out.mkdir(parents=True, exist_ok=True)
    return out


def save_json(obj: Dict[str, Any], path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w") as f:
        json.dump(obj, f, indent=2)
