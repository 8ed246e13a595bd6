from __future__ import annotations

from ..lib.pkg import apt_update, apt_upgrade
from ..runner import StepCtx
from .base import failing_as


class UpdateSystemPackagesStep:
    step_id = "10_update_packages"
    description = "Updating system packages"

    def run(self, ctx: StepCtx) -> None:
        with failing_as("apt update failed"):
            apt_update(timeout_s=ctx.timeout_s, dry_run=ctx.dry_run)
        with failing_as("apt upgrade failed"):
            apt_upgrade(timeout_s=ctx.timeout_s, dry_run=ctx.dry_run)
