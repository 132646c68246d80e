"""
Password hashing and verification.

Uses bcrypt for password hashing with automatic
salting and configurable work factor. bcrypt only reads the first
``MAX_PASSWORD_BYTES`` (72) bytes of its input, so registration rejects
longer passwords rather than letting two of them share a hash.
"""

from __future__ import annotations

import bcrypt

# bcrypt ignores everything past this many bytes of input.
MAX_PASSWORD_BYTES = 72


def hash_password(password: str, rounds: int = 12) -> str:
    """Hash a password with bcrypt (auto-salted, work factor *rounds*)."""
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=rounds)).decode()


def verify_password(password: str, password_hash: str) -> bool:
    """Constant-time comparison against a bcrypt hash."""
    try:
        return bcrypt.checkpw(password.encode(), password_hash.encode())
    except (ValueError, TypeError):
        return False
