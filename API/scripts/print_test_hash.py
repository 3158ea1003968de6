#!/usr/bin/env python3
"""Print a bcrypt hash of the diagnostic password (cost 10).
Usage (from repo root): python API/scripts/print_test_hash.py
"""
from __future__ import annotations

import sys


def main() -> int:
    from loginkit.auth.handler import DIAGNOSTIC_PASSWORD, LoginHandler
    from loginkit.core.logging import configure_logging
    from loginkit.core.password import verify_password

    configure_logging("INFO")
    hashed = LoginHandler().test()
    if not verify_password(DIAGNOSTIC_PASSWORD, hashed):
        print("Error: generated hash does not verify", file=sys.stderr)
        return 1
    print(hashed)
    return 0


if __name__ == "__main__":
    sys.exit(main())
