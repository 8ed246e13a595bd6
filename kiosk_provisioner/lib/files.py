from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


def ensure_dir(path: str | Path, *, owner: Optional[str] = None, dry_run: bool = False) -> None:
    p = Path(path)
    if dry_run:
        logger.info("Would create directory %s", str(p))
        return
    missing = []
    q = p
    while not q.exists() and q != q.parent:
        missing.append(q)
        q = q.parent

    p.mkdir(parents=True, exist_ok=True)
    if owner:
        # Every directory created here belongs to the owner, not only the leaf.
        for d in reversed(missing or [p]):
            shutil.chown(d, user=owner, group=owner)


def write_file(
    path: str | Path,
    contents: str,
    *,
    mode: Optional[int] = None,
    owner: Optional[str] = None,
    dry_run: bool = False,
) -> None:
    """Write (or overwrite) a file, creating parent directories."""

    p = Path(path)
    if dry_run:
        logger.info("Would write %s", str(p))
        return
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(contents, encoding="utf-8")
    if mode is not None:
        os.chmod(p, mode)
    if owner:
        shutil.chown(p, user=owner, group=owner)
    logger.info("Wrote %s", str(p))


def append_once(path: str | Path, fragment: str, *, dry_run: bool = False) -> bool:
    """Append `fragment` unless it is already present. Returns True if appended.

    Appends on the same line (no newline), which is what single-line files
    such as cmdline.txt require.
    """

    p = Path(path)
    existing = p.read_text(encoding="utf-8") if p.exists() else ""
    if fragment.strip() in existing:
        return False
    if dry_run:
        logger.info("Would append %r to %s", fragment, str(p))
        return True

    head = existing.rstrip("\n")
    tail = existing[len(head):]
    p.write_text(head + fragment + tail, encoding="utf-8")
    return True
