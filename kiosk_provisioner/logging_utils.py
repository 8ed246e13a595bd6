from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

LINE_FORMAT = "%(asctime)s | %(stage_label)s | %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"


class StageLabelFilter(logging.Filter):
    """Stamp every record with the stage the runner is currently in.

    The label only decorates log lines; control flow always reads the ledger.
    """

    def __init__(self) -> None:
        super().__init__()
        self.stage = 0

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "stage_label"):
            record.stage_label = f"Stage {self.stage}"
        return True


_STAGE_FILTER = StageLabelFilter()


def set_log_stage(stage: int) -> None:
    _STAGE_FILTER.stage = stage


def configure_logging(
    log_path: Optional[str] = None,
    level: int = logging.INFO,
    also_console: bool = True,
) -> Optional[str]:
    """Configure the log stream.

    Requirement: every line printed during provisioning is also appended to
    the state directory's logs.txt, in the same `timestamp | Stage N | text`
    shape as the ledger so the two files diff cleanly.

    Notes:
    - log_path=None configures the console only (used by --reset, which is
      about to delete the log file).
    - Calling again with a different path swaps the handlers; calling again
      with the same path is a no-op.

    Returns the log file path in use (or None).
    """

    logger = logging.getLogger()
    logger.setLevel(level)

    if getattr(logger, "_kiosk_configured", False):
        if getattr(logger, "_kiosk_log_path", None) == log_path:
            return log_path
        for h in getattr(logger, "_kiosk_handlers", []):
            logger.removeHandler(h)
            h.close()

    handlers: list[logging.Handler] = []

    fmt = logging.Formatter(fmt=LINE_FORMAT, datefmt=DATE_FORMAT)

    if log_path:
        Path(os.path.dirname(log_path) or ".").mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(fmt)
        handlers.append(file_handler)

    if also_console:
        console = logging.StreamHandler()
        console.setFormatter(fmt)
        handlers.append(console)

    for h in handlers:
        h.addFilter(_STAGE_FILTER)
        logger.addHandler(h)

    setattr(logger, "_kiosk_configured", True)
    setattr(logger, "_kiosk_log_path", log_path)
    setattr(logger, "_kiosk_handlers", handlers)

    logging.getLogger(__name__).debug("Logging initialized (log_path=%s)", log_path)
    return log_path
