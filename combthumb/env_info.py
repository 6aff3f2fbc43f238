from __future__ import annotations

import os
import platform
import sys
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Dict, Any

import cv2
import numpy as np
import PIL


@dataclass
class EnvInfo:
    python: str
    platform: str
    machine: str
    cwd: str
    numpy: str
    pillow: str
    opencv: str
    cpu_count: int
    argv: list[str]
    env_vars: Dict[str, str]


def collect_env() -> EnvInfo:
    return EnvInfo(
        python=sys.version.split(" ")[0],
        platform=platform.platform(),
        machine=platform.machine(),
        cwd=str(Path.cwd()),
        numpy=np.__version__,
        pillow=PIL.__version__,
        opencv=cv2.__version__,
        cpu_count=os.cpu_count() or 1,
        argv=list(sys.argv),
        env_vars={
            k: v
            for k, v in os.environ.items()
            if k in ("CONDA_DEFAULT_ENV", "PYTHONPATH", "OMP_NUM_THREADS")
        },
    )


def env_as_dict() -> Dict[str, Any]:
    return asdict(collect_env())
