from __future__ import annotations

import os
from typing import Optional

from ..errors import PrivilegeError


def require_root(euid: Optional[int] = None) -> None:
    """Raise PrivilegeError unless running as root. Touches nothing on disk."""

    uid = os.geteuid() if euid is None else euid
    if uid != 0:
        raise PrivilegeError("This script must be run as root.")
