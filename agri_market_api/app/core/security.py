"""
Password hashing helpers.

Passwords are hashed with PBKDF2-HMAC-SHA256 and a random 16-byte
salt before they reach storage.  The stored form is
``"<salt hex>$<hash hex>"``.  There are no sessions or tokens in this
API; ``POST /api/users/login`` simply verifies the password and
returns the public user record.
"""

import hashlib
import hmac
import os

ITERATIONS = 100_000


def hash_password(password: str) -> str:
    """Hash a password, returning ``salt$hash`` in hex."""
    salt = os.urandom(16)
    dk = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, ITERATIONS)
    return f"{salt.hex()}${dk.hex()}"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against a stored salt+hash string.

    Returns ``False`` for stored values that are not in the
    ``salt$hash`` format instead of raising.
    """
    salt_hex, sep, hash_hex = hashed_password.partition("$")
    if not sep:
        return False
    try:
        salt = bytes.fromhex(salt_hex)
        stored_hash = bytes.fromhex(hash_hex)
    except ValueError:
        return False
    dk = hashlib.pbkdf2_hmac("sha256", plain_password.encode("utf-8"), salt, ITERATIONS)
    return hmac.compare_digest(dk, stored_hash)
