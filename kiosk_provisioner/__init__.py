"""Kiosk Provisioner (resumable, ledger-driven).

Turns a freshly flashed Raspberry Pi into a browser kiosk appliance.

Core design goals:
- Ledger-driven and resumable across reboots
- Idempotent steps
- Fail-stop: a recorded failure blocks further stages until reset
- Centralized logging
"""

__all__ = []
