from __future__ import annotations

from typing import Optional


class ProvisionError(RuntimeError):
    """Base class for every fatal provisioning condition."""


class PrivilegeError(ProvisionError):
    pass


class LedgerCorruption(ProvisionError):
    pass


class LedgerLocked(ProvisionError):
    pass


class StepFailure(ProvisionError):
    """A step could not complete. `message` is what lands in the ledger."""

    def __init__(
        self,
        message: str,
        *,
        stage: Optional[int] = None,
        step_id: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.stage = stage
        self.step_id = step_id


class PreviousStageFailure(ProvisionError):
    def __init__(self, stage: int, message: str) -> None:
        super().__init__(f"Stage {stage} previously failed: {message}")
        self.stage = stage
        self.message = message
