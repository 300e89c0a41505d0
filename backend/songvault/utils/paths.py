"""Path manipulation utilities."""
import time
from pathlib import Path


def ensure_directory(path: Path) -> Path:
    """Ensure a directory exists, creating if necessary."""
    path.mkdir(parents=True, exist_ok=True)
    return path


def unique_upload_name(filename: str) -> str:
    """Prefix the bare file name with a tick count so uploads never collide.

    Directory components in ``filename`` are dropped.
    """
    ticks = time.time_ns() // 100
    return f"{ticks}_{Path(filename).name}"
