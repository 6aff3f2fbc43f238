from __future__ import annotations

from pathlib import Path

from PIL import Image

from combthumb.scripts.combine_cli import main
from combthumb.utils import load_image


def _write(path: Path, w: int, h: int) -> Path:
    Image.new("RGB", (w, h), (120, 30, 200)).save(path)
    return path


def test_cli_writes_thumbnail(tmp_path: Path):
    a = _write(tmp_path / "a.png", 40, 30)
    b = _write(tmp_path / "b.png", 20, 15)
    out = tmp_path / "out" / "thumb.png"
    rc = main([str(a), str(b), "--out", str(out), "--workers", "1"])
    assert rc == 0
    assert load_image(out).size == (80, 30)


def test_cli_rejects_too_many_images(tmp_path: Path):
    paths = [str(_write(tmp_path / f"{i}.png", 8, 8)) for i in range(5)]
    out = tmp_path / "thumb.png"
    rc = main(paths + ["--out", str(out)])
    assert rc == 2
    assert not out.exists()


def test_cli_reports_unreadable_input(tmp_path: Path):
    bad = tmp_path / "bad.png"
    bad.write_bytes(b"not an image")
    out = tmp_path / "thumb.png"
    assert main([str(bad), "--out", str(out)]) == 2
    assert main([str(tmp_path / "missing.png"), "--out", str(out)]) == 2
    assert not out.exists()
