from __future__ import annotations

import logging
import os
import re
import shutil
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from .errors import LedgerCorruption

logger = logging.getLogger(__name__)

SUCCESS = "success"
LEDGER_FILENAME = "stage.txt"
LOG_FILENAME = "logs.txt"

_STAGE_LABEL = re.compile(r"^Stage (\d+)$")


def _now_iso() -> str:
    return datetime.now().astimezone().isoformat(timespec="seconds")


def one_line(text: str) -> str:
    # Records are line-delimited; a multi-line message would split a record.
    return " ".join(str(text).split())


@dataclass(frozen=True)
class StageRecord:
    timestamp: str
    stage_number: int
    outcome: str

    @property
    def succeeded(self) -> bool:
        return self.outcome == SUCCESS

    @property
    def stage_label(self) -> str:
        return f"Stage {self.stage_number}"

    def to_line(self) -> str:
        return f"{self.timestamp} | {self.stage_label} | {self.outcome}\n"

    @classmethod
    def parse(cls, line: str, *, lineno: int = 0) -> "StageRecord":
        parts = line.rstrip("\n").split("|", 2)
        if len(parts) != 3:
            raise LedgerCorruption(f"Ledger line {lineno} is not 'timestamp | Stage N | outcome': {line!r}")

        timestamp, label, outcome = (p.strip() for p in parts)
        m = _STAGE_LABEL.match(label)
        if not timestamp or not m or not outcome:
            raise LedgerCorruption(f"Ledger line {lineno} is malformed: {line!r}")

        return cls(timestamp=timestamp, stage_number=int(m.group(1)), outcome=outcome)


class Ledger:
    """Append-only stage ledger plus the log stream that sits beside it.

    The current stage is never stored: it is the number of records. The seed
    record (stage 0, success) makes a fresh ledger report stage 1.
    """

    def __init__(self, state_dir: str | Path, *, clock: Optional[Callable[[], str]] = None) -> None:
        self.state_dir = Path(state_dir)
        self.path = self.state_dir / LEDGER_FILENAME
        self.log_path = self.state_dir / LOG_FILENAME
        self._clock = clock or _now_iso

    def exists(self) -> bool:
        return self.path.exists()

    def initialize(self) -> bool:
        """Create the ledger with its seed record. Returns True if created."""

        if self.path.exists():
            return False

        self.state_dir.mkdir(parents=True, exist_ok=True)
        seed = StageRecord(timestamp=self._clock(), stage_number=0, outcome=SUCCESS)

        # Write-then-rename so a crash never leaves an empty ledger behind.
        tmp = self.path.with_name(self.path.name + ".tmp")
        with tmp.open("w", encoding="utf-8") as f:
            f.write(seed.to_line())
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp, self.path)

        logger.info("Ledger created at %s", self.path)
        logger.info("%s", seed.outcome, extra={"stage_label": seed.stage_label})
        return True

    def records(self) -> List[StageRecord]:
        text = self.path.read_text(encoding="utf-8")
        lines = [ln for ln in text.splitlines() if ln.strip()]
        if not lines:
            raise LedgerCorruption(f"Ledger {self.path} is empty (missing seed record)")

        out: List[StageRecord] = []
        for i, line in enumerate(lines):
            rec = StageRecord.parse(line, lineno=i + 1)
            if rec.stage_number != i:
                raise LedgerCorruption(
                    f"Ledger line {i + 1} reports stage {rec.stage_number}, expected stage {i}"
                )
            out.append(rec)

        if not out[0].succeeded:
            raise LedgerCorruption(f"Ledger seed record is not '{SUCCESS}': {out[0].outcome!r}")
        return out

    def read_last(self) -> StageRecord:
        return self.records()[-1]

    def read_current_state(self) -> Tuple[int, str]:
        records = self.records()
        return len(records), records[-1].outcome

    def append(
        self, stage_number: int, outcome: str = SUCCESS, *, succeeded: Optional[bool] = None
    ) -> StageRecord:
        """Durably append one record for the stage currently in progress.

        `succeeded` defaults to whether `outcome` is exactly SUCCESS. A failure
        whose message would read back as success (or as nothing) is stored as
        "failed".
        """

        expected = len(self.records())
        if stage_number != expected:
            raise ValueError(f"Cannot record stage {stage_number}; ledger is at stage {expected}")

        if succeeded is None:
            succeeded = outcome == SUCCESS
        if succeeded:
            text = SUCCESS
        else:
            text = one_line(outcome)
            if text in ("", SUCCESS):
                text = "failed"

        rec = StageRecord(
            timestamp=self._clock(),
            stage_number=stage_number,
            outcome=text,
        )
        with self.path.open("a", encoding="utf-8") as f:
            f.write(rec.to_line())
            f.flush()
            os.fsync(f.fileno())

        logger.info("%s", rec.outcome, extra={"stage_label": rec.stage_label})
        return rec

    def reset(self) -> bool:
        """Delete the whole state directory. Returns True if anything was removed."""

        if not self.state_dir.exists():
            return False
        shutil.rmtree(self.state_dir)
        logger.warning("Removed provisioning state %s", self.state_dir)
        return True
