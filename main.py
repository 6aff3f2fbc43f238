from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from pathlib import Path
from time import perf_counter
from typing import Optional

from joblib import Parallel, delayed  # type: ignore
from tqdm import tqdm
from tqdm_joblib import tqdm_joblib  # type: ignore

from combthumb.api import compose_thumbnail, encode
from combthumb.config import Config, GlobalConfig, Job, load_config
from combthumb.env_info import env_as_dict
from combthumb.errors import ProcessingError
from combthumb.logging_utils import setup_logging
from combthumb.utils import (
    load_images,
    make_output_dir,
    now_stamp,
    save_bytes,
    save_json,
)


class TimingStats:
    def __init__(self, enabled: bool = True) -> None:
        self.enabled = enabled
        self._totals: dict[str, float] = {}
        self._counts: dict[str, int] = {}

    def add(self, name: str, dt: float) -> None:
        if not self.enabled:
            return
        self._totals[name] = self._totals.get(name, 0.0) + dt
        self._counts[name] = self._counts.get(name, 0) + 1

    def as_dict(self) -> dict[str, dict[str, float] | dict[str, int]]:
        return {"totals": self._totals, "counts": self._counts}


@contextmanager
def record(ts: Optional[TimingStats], name: str):
    if ts is None or not ts.enabled:
        yield
        return
    t0 = perf_counter()
    try:
        yield
    finally:
        ts.add(name, perf_counter() - t0)


def _process_job(job: Job, gcfg: GlobalConfig, run_root: Path) -> bool:
    log = logging.getLogger(f"job.{job.name}")
    missing = [p for p in job.images if not p.exists()]
    if missing:
        log.warning("Images not found: %s", ", ".join(map(str, missing)))
        return False

    ts = TimingStats(enabled=gcfg.profiling)
    job_dir = run_root / job.name
    try:
        with record(ts, "load_images"):
            images = load_images(job.images)
        log.info(
            "Combining %d image(s): %s",
            len(images),
            ", ".join(f"{im.width}x{im.height}" for im in images),
        )
        with record(ts, "compose"):
            canvas = compose_thumbnail(images, n_jobs=gcfg.scale_workers)
        with record(ts, "encode"):
            thumb = encode(canvas, gcfg.image_format)
    except (ProcessingError, OSError, ValueError) as e:
        # decode, IO and worker-count failures end this job only
        log.error("Job failed: %s", e)
        return False

    ext = gcfg.image_format.lower()
    with record(ts, "save"):
        save_bytes(thumb.to_bytes(), job_dir / f"thumbnail.{ext}")
    log.info("Wrote %dx%d %s", canvas.width, canvas.height, thumb.format)
    save_json(ts.as_dict(), job_dir / "timings.json")
    return True


def aggregate_timings(
    run_root: Path,
) -> dict[str, dict[str, float] | dict[str, int]]:
    totals: dict[str, float] = {}
    counts: dict[str, int] = {}
    for job_dir in run_root.iterdir():
        tfile = job_dir / "timings.json"
        if not job_dir.is_dir() or not tfile.exists():
            continue
        try:
            with tfile.open("r") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logging.getLogger("combthumb").warning(
                "Failed to read timings %s: %s", str(tfile), e
            )
            continue
        for k, v in data.get("totals", {}).items():
            totals[k] = totals.get(k, 0.0) + float(v)
        for k, v in data.get("counts", {}).items():
            counts[k] = counts.get(k, 0) + int(v)
    return {"totals": totals, "counts": counts}


def main(config_path: Path) -> None:
    cfg: Config = load_config(config_path)
    stamp = now_stamp()
    gcfg = cfg.global_cfg

    run_root = make_output_dir(Path(gcfg.output_root), stamp)
    setup_logging(run_root, gcfg.log_level)
    log = logging.getLogger("combthumb")
    log.info("Starting run: %s", stamp)
    log.info("Config file: %s", str(config_path))
    save_json(env_as_dict(), run_root / "environment.json")
    save_json(
        {
            "global": {
                "output_root": str(gcfg.output_root),
                "num_cores": gcfg.num_cores,
                "scale_workers": gcfg.scale_workers,
                "image_format": gcfg.image_format,
                "profiling": gcfg.profiling,
            },
            "jobs": [
                {"name": j.name, "images": [str(p) for p in j.images]}
                for j in cfg.jobs
            ],
        },
        run_root / "resolved_config.json",
    )

    n_jobs = -1 if gcfg.num_cores is None else gcfg.num_cores
    total = len(cfg.jobs)
    if n_jobs == 1:
        results = [
            _process_job(j, gcfg, run_root)
            for j in tqdm(cfg.jobs, total=total, desc="Jobs", unit="job")
        ]
    else:
        log.info(
            "Running in parallel with %s jobs",
            n_jobs if n_jobs > 0 else "auto",
        )
        with tqdm_joblib(tqdm(total=total, desc="Jobs", unit="job")):
            results = Parallel(n_jobs=n_jobs)(
                delayed(_process_job)(j, gcfg, run_root) for j in cfg.jobs
            )
    failed = sum(1 for ok in results if not ok)
    log.info("Finished %d job(s), %d failed", total, failed)

    agg = aggregate_timings(run_root)
    save_json(agg, run_root / "run_timings.json")

    totals = agg.get("totals", {})
    counts = agg.get("counts", {})
    items = sorted(totals.items(), key=lambda kv: kv[1], reverse=True)
    log.info("Timing summary (total seconds, calls, avg per call):")
    for name, total_secs in items:
        cnt = counts.get(name, 0) or 1
        log.info(
            " - %s: %.3fs total over %d calls (%.3fs avg)",
            name,
            total_secs,
            cnt,
            total_secs / cnt,
        )


if __name__ == "__main__":
    import argparse

    p = argparse.ArgumentParser()
    p.add_argument("--config", type=str, default="config.yaml")
    args = p.parse_args()
    main(Path(args.config))
