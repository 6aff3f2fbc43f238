from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml


@dataclass
class GlobalConfig:
    output_root: Path
    # joblib n_jobs across jobs; None means all cores
    num_cores: Optional[int]
    # per-image scaling threads; None means one per image
    scale_workers: Optional[int] = None
    image_format: str = "PNG"
    log_level: str = "INFO"
    profiling: bool = True


@dataclass
class Job:
    name: str
    images: List[Path]


@dataclass
class Config:
    global_cfg: GlobalConfig
    jobs: List[Job]


def _as_int_or_none(v: Any) -> Optional[int]:
    if v is None:
        return None
    if isinstance(v, str) and v.lower() == "auto":
        return None
    return int(v)


def _parse_job(raw: Dict[str, Any], index: int) -> Job:
    name = raw.get("name")
    if not name:
        raise ValueError(f"Job #{index} has no name")
    images = raw.get("images") or []
    if not images:
        raise ValueError(f"Job '{name}' lists no images")
    return Job(name=str(name), images=[Path(p) for p in images])


def load_config(path: Path) -> Config:
    with path.open("r") as f:
        data: Dict[str, Any] = yaml.safe_load(f) or {}

    g = data.get("global", {}) or {}
    global_cfg = GlobalConfig(
        output_root=Path(g.get("output_root", "outputs")),
        num_cores=_as_int_or_none(g.get("num_cores", "auto")),
        scale_workers=_as_int_or_none(g.get("scale_workers", "auto")),
        image_format=str(g.get("image_format", "PNG")).upper(),
        log_level=str(g.get("log_level", "INFO")),
        profiling=bool(g.get("profiling", True)),
    )

    jobs = [_parse_job(j, i) for i, j in enumerate(data.get("jobs", []))]
    return Config(global_cfg=global_cfg, jobs=jobs)
