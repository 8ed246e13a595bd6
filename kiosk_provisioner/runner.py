from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, List, Optional, Protocol, Sequence

from .config import ProvisionConfig
from .errors import PreviousStageFailure, StepFailure
from .ledger import SUCCESS, Ledger, one_line
from .lib.command import CommandError, CommandTimeout
from .lib.power import confirm_reboot, reboot
from .logging_utils import set_log_stage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StepCtx:
    cfg: ProvisionConfig
    stage: int
    timeout_s: Optional[float]
    dry_run: bool = False


class Step(Protocol):
    """A single idempotent provisioning action.

    run() returns normally on success and raises StepFailure (with the message
    to record) on failure.
    """

    step_id: str
    description: str

    def run(self, ctx: StepCtx) -> None:
        ...


@dataclass(frozen=True)
class FunctionStep:
    """Adapt a plain callable into a Step. A False return counts as failure."""

    step_id: str
    fn: Callable[[StepCtx], Any]
    description: str = ""
    timeout_s: Optional[float] = None

    def run(self, ctx: StepCtx) -> None:
        if self.fn(ctx) is False:
            raise StepFailure(f"{self.step_id} failed")


@dataclass(frozen=True)
class Stage:
    name: str
    steps: Sequence[Step] = field(default_factory=tuple)
    reboot_message: Optional[str] = None

    @property
    def requires_reboot(self) -> bool:
        return self.reboot_message is not None


class RunOutcome(str, Enum):
    COMPLETE = "complete"
    REBOOTING = "rebooting"
    REBOOT_PENDING = "reboot_pending"


@dataclass(frozen=True)
class RunResult:
    outcome: RunOutcome
    ran_stages: List[int]
    next_stage: int


def _step_timeout(step: Step, cfg: ProvisionConfig) -> Optional[float]:
    own = getattr(step, "timeout_s", None)
    return float(own) if own else cfg.step_timeout_s


def _run_stage(*, ledger: Ledger, stage: Stage, number: int, cfg: ProvisionConfig) -> None:
    """Run every step of one stage, then record the stage outcome.

    The first failing step is recorded in the ledger and re-raised as
    StepFailure; nothing after it runs.
    """

    for step in stage.steps:
        logger.info("%s", getattr(step, "description", "") or step.step_id)
        try:
            ctx = StepCtx(cfg=cfg, stage=number, timeout_s=_step_timeout(step, cfg), dry_run=cfg.dry_run)
            step.run(ctx)
            continue
        except StepFailure as e:
            message = e.message
        except Exception as e:
            logger.exception("Step %s raised", step.step_id)
            message = str(e) or type(e).__name__

        message = one_line(message)
        if message in ("", SUCCESS):
            message = f"{step.step_id} failed"
        ledger.append(number, message, succeeded=False)
        logger.error("Stage %d failed at step %s", number, step.step_id)
        raise StepFailure(message, stage=number, step_id=step.step_id)

    ledger.append(number, SUCCESS)


def run_stages(
    *,
    ledger: Ledger,
    stages: Sequence[Stage],
    current_stage: int,
    last_outcome: str,
    cfg: Optional[ProvisionConfig] = None,
    confirm: Callable[[str], bool] = confirm_reboot,
    reboot_fn: Optional[Callable[[], None]] = None,
) -> RunResult:
    """Resume provisioning at `current_stage` and run until done, reboot, or failure.

    current_stage/last_outcome come from Ledger.read_current_state(); after
    each stage they are re-derived from the ledger rather than incremented.
    """

    cfg = cfg or ProvisionConfig()
    if reboot_fn is None:
        def reboot_fn() -> None:
            reboot(dry_run=cfg.dry_run)

    ran: List[int] = []

    while True:
        set_log_stage(current_stage)

        if last_outcome != SUCCESS:
            failed = ledger.read_last()
            set_log_stage(failed.stage_number)
            raise PreviousStageFailure(failed.stage_number, failed.outcome)

        if current_stage > len(stages):
            logger.info("Initialization complete!")
            return RunResult(outcome=RunOutcome.COMPLETE, ran_stages=ran, next_stage=current_stage)

        number = current_stage
        stage = stages[number - 1]
        logger.info(">>> Stage %d: %s <<<", number, stage.name)

        _run_stage(ledger=ledger, stage=stage, number=number, cfg=cfg)
        ran.append(number)
        current_stage, last_outcome = ledger.read_current_state()

        if stage.reboot_message is None:
            continue

        if not confirm(stage.reboot_message):
            logger.warning(
                "Stage %d requires a reboot. Reboot manually, then run again to continue with stage %d",
                number,
                current_stage,
            )
            return RunResult(outcome=RunOutcome.REBOOT_PENDING, ran_stages=ran, next_stage=current_stage)

        try:
            reboot_fn()
        except (CommandError, CommandTimeout, OSError) as e:
            logger.error("Reboot failed: %s", e)
            logger.warning(
                "Stage %d is recorded; reboot manually, then run again to continue with stage %d",
                number,
                current_stage,
            )
            return RunResult(outcome=RunOutcome.REBOOT_PENDING, ran_stages=ran, next_stage=current_stage)
        # Only reached when the reboot is simulated (dry run, tests).
        return RunResult(outcome=RunOutcome.REBOOTING, ran_stages=ran, next_stage=current_stage)
