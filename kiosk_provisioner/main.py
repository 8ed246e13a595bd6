from __future__ import annotations

import argparse
import logging
import sys
from typing import Callable, Optional, Sequence

from .config import ProvisionConfig, load_config, resolve_config_path
from .errors import (
    LedgerCorruption,
    LedgerLocked,
    PreviousStageFailure,
    PrivilegeError,
    ProvisionError,
    StepFailure,
)
from .ledger import Ledger
from .lib.hwdetect import detect_board_model, is_raspberry_pi
from .lib.power import confirm_reboot
from .lib.privileges import require_root
from .locking import provision_lock
from .logging_utils import configure_logging, set_log_stage
from .runner import RunResult, Stage, run_stages
from .stages import build_stages

logger = logging.getLogger(__name__)

BANNER = "\n".join(
    [
        "┌──────────────────────┐",
        "│   Kiosk Provisioner  │",
        "└──────────────────────┘",
    ]
)


def run(
    *,
    cfg: ProvisionConfig,
    stages: Optional[Sequence[Stage]] = None,
    confirm: Callable[[str], bool] = confirm_reboot,
    reboot_fn: Optional[Callable[[], None]] = None,
) -> RunResult:
    """Initialize the ledger if needed and resume provisioning where it stopped."""

    ledger = Ledger(cfg.state_dir)

    with provision_lock(cfg.state_dir):
        set_log_stage(0)
        first_run = not ledger.log_path.exists()
        configure_logging(log_path=str(ledger.log_path))
        if first_run:
            logger.info("init started")

        ledger.initialize()

        model = detect_board_model()
        if is_raspberry_pi(model):
            logger.info("Board: %s", model)
        else:
            logger.warning("Board %s does not look like a Raspberry Pi; continuing anyway", model or "unknown")

        current_stage, last_outcome = ledger.read_current_state()
        return run_stages(
            ledger=ledger,
            stages=build_stages() if stages is None else stages,
            current_stage=current_stage,
            last_outcome=last_outcome,
            cfg=cfg,
            confirm=confirm,
            reboot_fn=reboot_fn,
        )


def reset(*, cfg: ProvisionConfig) -> bool:
    """Delete the ledger and log stream. Irreversible."""

    configure_logging(log_path=None)
    with provision_lock(cfg.state_dir):
        return Ledger(cfg.state_dir).reset()


def _print_failure(header: str, *, stage: object, message: str, log_path: str) -> None:
    print(header)
    print(f"  stage: {stage}")
    print(f"  message: {message}")
    print(f"Please check {log_path} for more details.")


def main(argv: Optional[list[str]] = None, *, euid: Optional[int] = None) -> int:
    p = argparse.ArgumentParser(
        prog="kiosk-provision",
        description=(
            "Provision a Raspberry Pi as a browser kiosk. Run repeatedly (as root); "
            "each run resumes after the last completed stage."
        ),
    )
    p.add_argument(
        "--reset",
        action="store_true",
        help="Delete all provisioning state and logs, then exit",
    )

    args = p.parse_args(argv)

    try:
        require_root(euid)
    except PrivilegeError as e:
        print(e, file=sys.stderr)
        return 1

    try:
        cfg = load_config(resolve_config_path())
    except (OSError, ValueError) as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 1

    log_path = str(Ledger(cfg.state_dir).log_path)

    try:
        if args.reset:
            removed = reset(cfg=cfg)
            print("Provisioning state removed." if removed else "Nothing to reset.")
            return 0

        print(BANNER)
        run(cfg=cfg)
        return 0
    except PreviousStageFailure as e:
        logger.error("Refusing to continue: stage %s failed earlier (%s)", e.stage, e.message)
        _print_failure("Initialization previously failed:", stage=e.stage, message=e.message, log_path=log_path)
        return 1
    except StepFailure as e:
        _print_failure("Initialization failed:", stage=e.stage, message=e.message, log_path=log_path)
        return 1
    except LedgerCorruption as e:
        logger.error("%s", e)
        print(f"Provisioning ledger is corrupt: {e}")
        print("Run with --reset to start over.")
        return 1
    except LedgerLocked as e:
        print(e, file=sys.stderr)
        return 1
    except ProvisionError as e:
        logger.error("%s", e)
        print(f"Provisioning failed: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted; provisioning state left as last recorded.", file=sys.stderr)
        return 130
