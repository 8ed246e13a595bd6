from __future__ import annotations

from pathlib import Path

from ..lib.files import ensure_dir, write_file
from ..runner import StepCtx
from .base import failing_as
from .step_55_write_kiosk_script import kiosk_script_path


class WriteAutostartStep:
    step_id = "60_write_autostart"
    description = "Writing auto-start script"

    def run(self, ctx: StepCtx) -> None:
        cfg = ctx.cfg
        autostart = Path(cfg.home_dir) / ".config/autostart"

        with failing_as("failed to create autostart directory"):
            ensure_dir(autostart, owner=cfg.user, dry_run=ctx.dry_run)

        entry = "\n".join(
            [
                "[Desktop Entry]",
                "Type=Application",
                "Name=Kiosk",
                f"Exec={kiosk_script_path(cfg)}",
                "StartupNotify=false",
                "Terminal=false",
                "",
            ]
        )
        with failing_as("failed to write autostart desktop file"):
            write_file(autostart / "kiosk.desktop", entry, owner=cfg.user, dry_run=ctx.dry_run)
