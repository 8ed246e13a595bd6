import logging
import sys

import pytest

from kiosk_provisioner.errors import LedgerLocked, PrivilegeError
from kiosk_provisioner.lib.command import CommandError, CommandTimeout, run_cmd
from kiosk_provisioner.lib.files import append_once
from kiosk_provisioner.lib.hwdetect import detect_board_model, is_raspberry_pi
from kiosk_provisioner.lib.power import confirm_reboot
from kiosk_provisioner.lib.privileges import require_root
from kiosk_provisioner.locking import lock_path_for, provision_lock
from kiosk_provisioner.logging_utils import configure_logging, set_log_stage


def test_run_cmd_success_captures_output():
    r = run_cmd([sys.executable, "-c", "print('hi')"])

    assert r.returncode == 0
    assert r.stdout.strip() == "hi"


def test_run_cmd_nonzero_raises():
    with pytest.raises(CommandError) as exc:
        run_cmd([sys.executable, "-c", "import sys; sys.exit(3)"])

    assert exc.value.returncode == 3


def test_run_cmd_nonzero_unchecked():
    r = run_cmd([sys.executable, "-c", "import sys; sys.exit(3)"], check=False)

    assert r.returncode == 3


def test_run_cmd_timeout():
    with pytest.raises(CommandTimeout) as exc:
        run_cmd([sys.executable, "-c", "import time; time.sleep(5)"], timeout_s=0.2)

    assert exc.value.timeout_s == 0.2


def test_run_cmd_dry_run_executes_nothing(tmp_path):
    marker = tmp_path / "marker"

    r = run_cmd(["touch", str(marker)], dry_run=True)

    assert r.returncode == 0
    assert not marker.exists()


def test_require_root():
    require_root(0)
    with pytest.raises(PrivilegeError):
        require_root(1000)


def test_lock_is_exclusive(tmp_path):
    state = tmp_path / ".init"

    with provision_lock(state) as path:
        assert path == tmp_path / ".init.lock"
        with pytest.raises(LedgerLocked):
            with provision_lock(state):
                pass

    # released on exit
    with provision_lock(state):
        pass


def test_lock_lives_outside_state_dir(tmp_path):
    assert lock_path_for(tmp_path / ".init").parent == tmp_path


def test_append_once_without_trailing_newline(tmp_path):
    p = tmp_path / "cmdline.txt"
    p.write_text("console=tty1", encoding="utf-8")

    assert append_once(p, " quiet") is True
    assert append_once(p, " quiet") is False
    assert p.read_text(encoding="utf-8") == "console=tty1 quiet"


def test_board_model_detection(tmp_path):
    model = tmp_path / "model"
    model.write_bytes(b"Raspberry Pi 4 Model B Rev 1.5\x00")

    found = detect_board_model([tmp_path / "missing", model])

    assert found == "Raspberry Pi 4 Model B Rev 1.5"
    assert is_raspberry_pi(found)
    assert not is_raspberry_pi(None)
    assert detect_board_model([tmp_path / "missing"]) is None


def test_confirm_reboot(capsys):
    assert confirm_reboot("rebooting", prompt=lambda p: "") is True
    assert "rebooting" in capsys.readouterr().out

    def closed(prompt):
        raise EOFError

    assert confirm_reboot("rebooting", prompt=closed) is False


def test_log_stream_format(tmp_path):
    log_path = tmp_path / "logs.txt"
    configure_logging(log_path=str(log_path), also_console=False)
    set_log_stage(2)

    logging.getLogger("kiosk_provisioner.test").info("Writing kiosk script")
    logging.getLogger("kiosk_provisioner.test").info("disk full", extra={"stage_label": "Stage 3"})

    lines = log_path.read_text(encoding="utf-8").splitlines()
    assert lines[-2].endswith(" | Stage 2 | Writing kiosk script")
    assert lines[-1].endswith(" | Stage 3 | disk full")


def test_reconfigure_swaps_log_file(tmp_path):
    first = tmp_path / "a.txt"
    second = tmp_path / "b.txt"

    configure_logging(log_path=str(first), also_console=False)
    configure_logging(log_path=str(second), also_console=False)
    logging.getLogger("kiosk_provisioner.test").info("only in second")

    assert "only in second" not in first.read_text(encoding="utf-8")
    assert "only in second" in second.read_text(encoding="utf-8")
