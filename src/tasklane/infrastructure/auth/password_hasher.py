"""Argon2id hashing for seeded user passwords.

The seeder stores sample users with hashed passwords so the authentication
service can log them in. Tasklane itself never checks a password.
"""

from argon2 import PasswordHasher

_hasher = PasswordHasher()


def hash_password(password: str) -> str:
    """Return an Argon2id hash of ``password`` with a fresh random salt."""
    return _hasher.hash(password)
