# conftest.py (repo root)
# Make `kiosk_provisioner` importable when running pytest from a checkout.
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent
root_str = str(ROOT)

if root_str not in sys.path:
    sys.path.insert(0, root_str)


@pytest.fixture(autouse=True)
def _release_log_stream():
    yield
    from kiosk_provisioner.logging_utils import configure_logging

    # Close file handlers opened under tmp_path by the previous test.
    configure_logging(log_path=None, also_console=False)
