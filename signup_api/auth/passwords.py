"""Salted password hashing.

bcrypt only looks at the first 72 bytes of its input, and newer releases
refuse longer input outright. Passwords are therefore reduced to a fixed
44-byte SHA-256 digest (base64) before bcrypt sees them, so any length is
accepted and every byte of the password counts.
"""

import base64
import hashlib

import bcrypt

BCRYPT_ROUNDS = 12

# longer than bcrypt's 72-byte window on purpose
_SELF_CHECK_PASSWORD = "startup self-check " * 5


def _prehash(password: str) -> bytes:
    return base64.b64encode(hashlib.sha256(password.encode("utf-8")).digest())


def hash_password(password: str, rounds: int = BCRYPT_ROUNDS) -> str:
    return bcrypt.hashpw(_prehash(password), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(password: str, hashed_password: str) -> bool:
    try:
        return bcrypt.checkpw(_prehash(password), hashed_password.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def check_password_hashing() -> None:
    """Fail fast if the installed bcrypt cannot round-trip a long password."""
    hashed = hash_password(_SELF_CHECK_PASSWORD, rounds=4)
    if not verify_password(_SELF_CHECK_PASSWORD, hashed):
        raise RuntimeError("Password hashing self-check failed.")
    if verify_password(_SELF_CHECK_PASSWORD[:-1], hashed):
        raise RuntimeError("Password hashing ignores trailing characters.")
