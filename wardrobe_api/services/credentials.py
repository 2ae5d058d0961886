"""Credentials: bcrypt password hashing.

Invariants:
    - Plaintext passwords never leave this module
    - Passwords are at most 72 bytes (bcrypt's limit); schemas enforce it at the edge
"""

import bcrypt


def hash_password(password: str, rounds: int = 12) -> str:
    return bcrypt.hashpw(
        password.encode("utf-8"), bcrypt.gensalt(rounds=rounds),
    ).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
