from .step_10_update_packages import UpdateSystemPackagesStep
from .step_15_update_bootloader import UpdateBootloaderStep
from .step_20_boot_settings import BootToDesktopStep, EnableUsbBootStep, UseX11Step
from .step_26_set_resolution import SetResolutionStep
from .step_30_install_packages import InstallPackagesStep
from .step_40_install_argon1 import InstallArgon1Step
from .step_50_configure_bash import ConfigureBashStep
from .step_55_write_kiosk_script import WriteKioskScriptStep
from .step_60_write_autostart import WriteAutostartStep

__all__ = [
    "UpdateSystemPackagesStep",
    "UpdateBootloaderStep",
    "EnableUsbBootStep",
    "BootToDesktopStep",
    "UseX11Step",
    "SetResolutionStep",
    "InstallPackagesStep",
    "InstallArgon1Step",
    "ConfigureBashStep",
    "WriteKioskScriptStep",
    "WriteAutostartStep",
]
