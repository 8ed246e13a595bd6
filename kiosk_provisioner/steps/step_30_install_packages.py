from __future__ import annotations

from ..lib.pkg import apt_install
from ..runner import StepCtx
from .base import failing_as


class InstallPackagesStep:
    step_id = "30_install_packages"
    description = "Installing required packages"

    def run(self, ctx: StepCtx) -> None:
        with failing_as("package installation failed"):
            apt_install(ctx.cfg.packages, timeout_s=ctx.timeout_s, dry_run=ctx.dry_run)
