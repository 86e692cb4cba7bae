"""
Inkwell Backend - Password Hashing
====================================

bcrypt helpers used by the user service. Hashes are salted, self-describing
($2b$<rounds>$...) strings, so verification needs no stored salt or cost.

bcrypt only reads the first 72 bytes of its input; longer passwords are
truncated before hashing and verifying so both sides agree.
"""

import logging

import bcrypt

logger = logging.getLogger(__name__)

BCRYPT_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str, rounds: int = 10) -> str:
    """
    Hash a password using bcrypt.

    Args:
        password: Plain text password
        rounds: bcrypt cost factor (log2 of the iteration count)

    Returns:
        The hash as an ASCII string, safe to store in a text column
    """
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(_encode(password), salt).decode("utf-8")


def verify_password(password: str, hashed_password: str) -> bool:
    """
    Check a password against a stored bcrypt hash.

    A stored value that is not a valid bcrypt hash never matches.
    """
    try:
        return bcrypt.checkpw(_encode(password), hashed_password.encode("utf-8"))
    except ValueError:
        logger.warning("Stored password hash is malformed; treating as mismatch")
        return False
