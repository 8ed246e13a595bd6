from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

_MODEL_PATHS = (
    Path("/sys/firmware/devicetree/base/model"),
    Path("/proc/device-tree/model"),
)


def _read_text(path: Path) -> Optional[str]:
    try:
        # device-tree strings are NUL-terminated
        txt = path.read_text(encoding="utf-8", errors="ignore").strip("\x00").strip()
        return txt or None
    except OSError:
        return None


def detect_board_model(paths: Sequence[Path] = _MODEL_PATHS) -> Optional[str]:
    for p in paths:
        model = _read_text(p)
        if model:
            return model
    return None


def is_raspberry_pi(model: Optional[str]) -> bool:
    return bool(model) and "raspberry pi" in str(model).lower()
