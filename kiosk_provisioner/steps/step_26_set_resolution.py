from __future__ import annotations

import logging

from ..lib.files import append_once
from ..runner import StepCtx
from .base import failing_as

logger = logging.getLogger(__name__)


class SetResolutionStep:
    step_id = "26_set_resolution"
    description = "Set HDMI resolution"

    def run(self, ctx: StepCtx) -> None:
        cfg = ctx.cfg
        video = f"video={cfg.display_output}:{cfg.display_mode}"

        with failing_as("failed to write resolution to cmdline.txt"):
            appended = append_once(cfg.cmdline_path, f" {video}", dry_run=ctx.dry_run)

        if appended:
            logger.info("Added %s to %s", video, cfg.cmdline_path)
        else:
            logger.info("Resolution already set, skipping")
