from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from filelock import FileLock, Timeout

from .errors import LedgerLocked

logger = logging.getLogger(__name__)


def lock_path_for(state_dir: str | Path) -> Path:
    # Beside the state directory, not inside it: --reset deletes the directory
    # while the lock is held.
    p = Path(state_dir)
    return p.with_name(p.name + ".lock")


@contextmanager
def provision_lock(state_dir: str | Path) -> Iterator[Path]:
    """Hold the state directory exclusively for one invocation."""

    path = lock_path_for(state_dir)
    path.parent.mkdir(parents=True, exist_ok=True)
    lock = FileLock(str(path))
    try:
        lock.acquire(timeout=0)
    except Timeout as e:
        raise LedgerLocked(
            f"Another provisioning run holds {path}; wait for it to finish"
        ) from e

    logger.debug("Acquired provisioning lock %s", path)
    try:
        yield path
    finally:
        lock.release()
