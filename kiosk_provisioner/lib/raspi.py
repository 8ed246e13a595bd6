"""Thin wrappers over the Raspberry Pi OS configuration tools."""

from __future__ import annotations

from typing import Optional

from .command import run_cmd

# raspi-config nonint option values.
BOOT_ORDER_USB = "4"
BOOT_BEHAVIOUR_DESKTOP_AUTOLOGIN = "B4"
WAYLAND_X11 = "W1"


def raspi_config(*args: str, timeout_s: Optional[float] = None, dry_run: bool = False) -> None:
    run_cmd(["raspi-config", "nonint", *args], timeout_s=timeout_s, dry_run=dry_run)


def eeprom_update(*, timeout_s: Optional[float] = None, dry_run: bool = False) -> None:
    """Stage the latest bootloader EEPROM image; it is flashed on next boot."""

    run_cmd(["rpi-eeprom-update", "-a"], timeout_s=timeout_s, dry_run=dry_run)
