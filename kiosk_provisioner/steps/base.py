from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from ..errors import StepFailure
from ..lib.command import CommandError, CommandTimeout

logger = logging.getLogger(__name__)


@contextmanager
def failing_as(message: str) -> Iterator[None]:
    """Turn command/OS errors inside the block into StepFailure(message).

    The ledger gets the short operator message; the log stream gets the cause.
    """

    try:
        yield
    except CommandTimeout as e:
        logger.error("%s: %s", message, e)
        raise StepFailure(f"{message} (timed out after {e.timeout_s:g}s)") from e
    except (CommandError, OSError, LookupError) as e:
        logger.error("%s: %s", message, e)
        raise StepFailure(message) from e
