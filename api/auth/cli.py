"""
Print a bcrypt hash for AUTH_PASSWORD_HASH.

Usage:
    genity-hash-password
"""

from __future__ import annotations

import getpass
import sys

from . import security


def hash_password_main() -> int:
    password = getpass.getpass("Password: ")
    if password != getpass.getpass("Repeat password: "):
        print("Passwords do not match.", file=sys.stderr)
        return 1
    try:
        print(security.hash_password(password))
    except security.AuthSecurityError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(hash_password_main())
