from __future__ import annotations

import logging
from typing import Callable, Optional

from .command import run_cmd

logger = logging.getLogger(__name__)


def confirm_reboot(message: str, *, prompt: Optional[Callable[[str], str]] = None) -> bool:
    """Show why a reboot is needed and block until the operator presses Enter.

    Returns False when there is nobody to ask (stdin closed).
    """

    ask = prompt or input
    print(message)
    try:
        ask("Press Enter to reboot now... ")
    except EOFError:
        logger.warning("No operator input available; not rebooting automatically")
        return False
    return True


def reboot(*, dry_run: bool = False) -> None:
    logger.info("Rebooting")
    run_cmd(["sync"], dry_run=dry_run)
    run_cmd(["reboot"], dry_run=dry_run)
