from __future__ import annotations

import logging
from pathlib import Path

from ..lib.command import run_cmd
from ..runner import StepCtx
from .base import failing_as

logger = logging.getLogger(__name__)

SCRIPT_PATH = "/tmp/argon1.sh"


class InstallArgon1Step:
    """Argon ONE case fan/power-button tooling (vendor install script)."""

    step_id = "40_install_argon1"
    description = "Installing Argon1 themes and tools"

    def __init__(self, script_path: str = SCRIPT_PATH) -> None:
        self.script_path = script_path

    def run(self, ctx: StepCtx) -> None:
        cfg = ctx.cfg
        if not cfg.argon1_enabled:
            logger.info("Argon1 installation disabled, skipping")
            return

        script = Path(self.script_path)
        with failing_as("failed to download Argon1 script"):
            run_cmd(
                ["curl", "-fsSL", "-o", str(script), cfg.argon1_url],
                timeout_s=ctx.timeout_s,
                dry_run=ctx.dry_run,
            )

        try:
            if not ctx.dry_run:
                logger.info("Downloaded Argon1 script to %s", script)
                logger.info("Script size: %d bytes", script.stat().st_size)
            with failing_as("Argon1 script execution failed"):
                run_cmd(["bash", str(script)], timeout_s=ctx.timeout_s, capture=False, dry_run=ctx.dry_run)
        finally:
            if not ctx.dry_run:
                script.unlink(missing_ok=True)

        logger.info("Argon1 installation completed successfully")
