from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

CONFIG_ENV_VAR = "KIOSK_PROVISIONER_CONFIG"
DEFAULT_CONFIG_PATH = "kiosk.yaml"

DEFAULT_PACKAGES = [
    "x11-xserver-utils",
    "unclutter",
    "xscreensaver",
    "chromium",
]


@dataclass(frozen=True)
class ProvisionConfig:
    raw: Dict[str, Any] = field(default_factory=dict)

    @property
    def state_dir(self) -> str:
        return str(self.raw.get("state_dir") or ".init")

    @property
    def user(self) -> str:
        return str(self.raw.get("user") or "admin")

    @property
    def home_dir(self) -> str:
        return str(self.raw.get("home_dir") or f"/home/{self.user}")

    @property
    def kiosk_url(self) -> str:
        return str(self.raw.get("kiosk_url") or "https://calendar.google.com")

    @property
    def display_output(self) -> str:
        return str(((self.raw.get("display") or {}).get("output")) or "HDMI-A-1")

    @property
    def display_mode(self) -> str:
        return str(((self.raw.get("display") or {}).get("mode")) or "1920x1080@60")

    @property
    def cmdline_path(self) -> str:
        return str(self.raw.get("cmdline_path") or "/boot/firmware/cmdline.txt")

    @property
    def packages(self) -> List[str]:
        pkgs = self.raw.get("packages")
        if pkgs is None:
            return list(DEFAULT_PACKAGES)
        if not isinstance(pkgs, list):
            raise ValueError("packages must be a list of package names")
        return [str(p) for p in pkgs]

    @property
    def argon1_enabled(self) -> bool:
        return bool((self.raw.get("argon1") or {}).get("enabled", True))

    @property
    def argon1_url(self) -> str:
        return str(((self.raw.get("argon1") or {}).get("url")) or "https://download.argon40.com/argon1.sh")

    @property
    def step_timeout_s(self) -> Optional[float]:
        value = self.raw.get("step_timeout_s", 1800)
        if not value:
            return None
        if isinstance(value, bool) or not isinstance(value, (int, float)) or value < 0:
            raise ValueError(f"step_timeout_s must be a non-negative number of seconds, got {value!r}")
        return float(value)

    @property
    def dry_run(self) -> bool:
        return bool(self.raw.get("dry_run", False))

    def validate(self) -> None:
        """Check the typed keys up front so a bad file fails before any state is touched."""

        for key in ("display", "argon1"):
            section = self.raw.get(key)
            if section is not None and not isinstance(section, dict):
                raise ValueError(f"{key} must be a mapping, got {section!r}")

        pkgs = self.raw.get("packages")
        if pkgs is not None and not (
            isinstance(pkgs, list) and all(isinstance(p, str) and p.strip() for p in pkgs)
        ):
            raise ValueError(f"packages must be a list of package names, got {pkgs!r}")

        self.step_timeout_s  # raises on bad values


def resolve_config_path(env: Optional[Dict[str, str]] = None) -> Optional[str]:
    """Pick the config file: $KIOSK_PROVISIONER_CONFIG, else ./kiosk.yaml if present."""

    env = os.environ if env is None else env
    explicit = env.get(CONFIG_ENV_VAR)
    if explicit:
        return explicit
    if Path(DEFAULT_CONFIG_PATH).exists():
        return DEFAULT_CONFIG_PATH
    return None


def load_config(path: Optional[str]) -> ProvisionConfig:
    if path is None:
        return ProvisionConfig()

    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(path)

    if p.suffix.lower() not in {".yaml", ".yml"}:
        raise ValueError("provisioning config must be YAML")

    import yaml

    try:
        raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"{path} is not valid YAML: {e}") from e
    if not isinstance(raw, dict):
        raise ValueError(f"{path} must contain a mapping/object")

    cfg = ProvisionConfig(raw=raw)
    cfg.validate()
    return cfg
