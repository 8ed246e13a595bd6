from __future__ import annotations

from typing import List

from .runner import Stage
from .steps import (
    BootToDesktopStep,
    ConfigureBashStep,
    EnableUsbBootStep,
    InstallArgon1Step,
    InstallPackagesStep,
    SetResolutionStep,
    UpdateBootloaderStep,
    UpdateSystemPackagesStep,
    UseX11Step,
    WriteAutostartStep,
    WriteKioskScriptStep,
)


def build_stages() -> List[Stage]:
    """The kiosk stage table.

    Ledger positions map to list positions, so stages are never removed or
    reordered; optional work is skipped inside its step instead.
    """

    return [
        Stage(
            name="System Updates",
            steps=(UpdateSystemPackagesStep(), UpdateBootloaderStep()),
            reboot_message="System updated. A reboot is required to apply the new bootloader.",
        ),
        Stage(
            name="System Configuration",
            steps=(EnableUsbBootStep(), BootToDesktopStep(), UseX11Step(), SetResolutionStep()),
            reboot_message="Boot and display settings changed. A reboot is required to apply them.",
        ),
        Stage(
            name="Package Installation",
            steps=(InstallPackagesStep(),),
        ),
        Stage(
            name="Optional Argon1 Installation",
            steps=(InstallArgon1Step(),),
        ),
        Stage(
            name="User Configuration & Scripts",
            steps=(ConfigureBashStep(), WriteKioskScriptStep(), WriteAutostartStep()),
            reboot_message="Kiosk configured. Reboot to start the kiosk session.",
        ),
    ]
