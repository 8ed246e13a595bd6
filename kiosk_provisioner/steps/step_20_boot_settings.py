from __future__ import annotations

from ..lib.raspi import (
    BOOT_BEHAVIOUR_DESKTOP_AUTOLOGIN,
    BOOT_ORDER_USB,
    WAYLAND_X11,
    raspi_config,
)
from ..runner import StepCtx
from .base import failing_as


class EnableUsbBootStep:
    step_id = "20_enable_usb_boot"
    description = "Enabling USB boot"

    def run(self, ctx: StepCtx) -> None:
        with failing_as("USB boot configuration failed"):
            raspi_config("do_boot_order", BOOT_ORDER_USB, timeout_s=ctx.timeout_s, dry_run=ctx.dry_run)


class BootToDesktopStep:
    step_id = "22_boot_to_desktop"
    description = "Set boot to desktop"

    def run(self, ctx: StepCtx) -> None:
        with failing_as("boot to desktop configuration failed"):
            raspi_config(
                "do_boot_behaviour",
                BOOT_BEHAVIOUR_DESKTOP_AUTOLOGIN,
                timeout_s=ctx.timeout_s,
                dry_run=ctx.dry_run,
            )


class UseX11Step:
    # The kiosk script relies on xset/unclutter, which need an X11 session.
    step_id = "24_use_x11"
    description = "Use X11 instead of Wayland"

    def run(self, ctx: StepCtx) -> None:
        with failing_as("X11 configuration failed"):
            raspi_config("do_wayland", WAYLAND_X11, timeout_s=ctx.timeout_s, dry_run=ctx.dry_run)
