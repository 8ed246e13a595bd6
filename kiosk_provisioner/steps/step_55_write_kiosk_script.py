from __future__ import annotations

from pathlib import Path
from urllib.parse import urlparse

from ..config import ProvisionConfig
from ..lib.files import write_file
from ..runner import StepCtx
from .base import failing_as


def render_kiosk_script(cfg: ProvisionConfig) -> str:
    """Session script: wait for network, keep the screen awake, run Chromium."""

    host = urlparse(cfg.kiosk_url).hostname or "localhost"
    profile_dir = f"{cfg.home_dir}/.config/chromium-kiosk"

    return "\n".join(
        [
            "#!/usr/bin/env bash",
            "set -e",
            "",
            "# Wait for network (important on boot)",
            f"until getent hosts {host} >/dev/null; do",
            "  sleep 2",
            "done",
            "",
            "# Disable screen blanking / power management",
            "xset s off",
            "xset -dpms",
            "xset s noblank",
            "xset q >/dev/null 2>&1 || sleep 3",
            "",
            "# Auto-hide mouse cursor",
            "unclutter -idle 0.5 -root &",
            "",
            "# Ensure profile exists",
            f'CHROME_PREFS="{profile_dir}/Default/Preferences"',
            'if [ ! -f "$CHROME_PREFS" ]; then',
            "  chromium --headless --disable-gpu about:blank >/dev/null 2>&1 || true",
            "fi",
            "",
            "# Let chromium think it always exited cleanly.",
            'if [ -f "$CHROME_PREFS" ]; then',
            '  sed -i \'s/"exited_cleanly":false/"exited_cleanly":true/\' "$CHROME_PREFS"',
            '  sed -i \'s/"exit_type":"Crashed"/"exit_type":"Normal"/\' "$CHROME_PREFS"',
            "fi",
            "",
            "# Launch Chromium in kiosk mode",
            "exec chromium \\",
            f'  --user-data-dir="{profile_dir}" \\',
            "  --kiosk \\",
            "  --password-store=basic \\",
            "  --no-first-run \\",
            "  --disable-infobars \\",
            "  --disable-session-crashed-bubble \\",
            "  --disable-features=TranslateUI \\",
            "  --noerrdialogs \\",
            "  --overscroll-history-navigation=0 \\",
            "  --disable-session-restore \\",
            "  --new-window \\",
            "  --disable-pinch \\",
            f'  "{cfg.kiosk_url}"',
            "",
        ]
    )


def kiosk_script_path(cfg: ProvisionConfig) -> Path:
    return Path(cfg.home_dir) / "kiosk.sh"


class WriteKioskScriptStep:
    step_id = "55_write_kiosk_script"
    description = "Writing kiosk script"

    def run(self, ctx: StepCtx) -> None:
        cfg = ctx.cfg
        with failing_as("failed to write kiosk script"):
            write_file(
                kiosk_script_path(cfg),
                render_kiosk_script(cfg),
                mode=0o755,
                owner=cfg.user,
                dry_run=ctx.dry_run,
            )
