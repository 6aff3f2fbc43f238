from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional


def setup_logging(run_dir: Optional[Path], level: str = "INFO") -> None:
    """Route root logging to the console and, if given, run_dir/run.log.

    With run_dir=None (the CLI) only the console handler is installed.
    """
    # Clear existing handlers to avoid duplicates on re-run
    root = logging.getLogger()
    if root.handlers:
        for h in list(root.handlers):
            root.removeHandler(h)

    log_level = getattr(logging, level.upper(), logging.INFO)

    fmt = logging.Formatter(
        fmt="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%H:%M:%S",
    )

    if run_dir is not None:
        run_dir.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(run_dir / "run.log", encoding="utf-8")
        fh.setLevel(log_level)
        fh.setFormatter(fmt)
        root.addHandler(fh)

    ch = logging.StreamHandler()
    ch.setLevel(log_level)
    ch.setFormatter(fmt)

    root.setLevel(log_level)
    root.addHandler(ch)
