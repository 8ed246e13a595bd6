from __future__ import annotations

import logging
from typing import Optional, Sequence

from .command import run_cmd

logger = logging.getLogger(__name__)

# apt must never stop to ask questions mid-provisioning.
_APT_ENV = {"DEBIAN_FRONTEND": "noninteractive"}


def apt_update(*, timeout_s: Optional[float] = None, dry_run: bool = False) -> None:
    run_cmd(["apt-get", "update"], env=_APT_ENV, timeout_s=timeout_s, capture=False, dry_run=dry_run)


def apt_upgrade(*, timeout_s: Optional[float] = None, dry_run: bool = False) -> None:
    run_cmd(
        ["apt-get", "upgrade", "-y"],
        env=_APT_ENV,
        timeout_s=timeout_s,
        capture=False,
        dry_run=dry_run,
    )


def apt_install(
    packages: Sequence[str],
    *,
    with_recommends: bool = False,
    timeout_s: Optional[float] = None,
    dry_run: bool = False,
) -> None:
    if not packages:
        return
    argv = [
        "apt-get",
        "install",
        "-y",
    ]
    if not with_recommends:
        argv.append("--no-install-recommends")
    run_cmd(
        [*argv, *packages],
        env=_APT_ENV,
        timeout_s=timeout_s,
        capture=False,
        dry_run=dry_run,
    )
    logger.info("Installed packages: %s", " ".join(packages))
