from __future__ import annotations

from ..lib.raspi import eeprom_update
from ..runner import StepCtx
from .base import failing_as


class UpdateBootloaderStep:
    step_id = "15_update_bootloader"
    description = "Updating Raspberry Pi bootloader"

    def run(self, ctx: StepCtx) -> None:
        with failing_as("bootloader update failed"):
            eeprom_update(timeout_s=ctx.timeout_s, dry_run=ctx.dry_run)
