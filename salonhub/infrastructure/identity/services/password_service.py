"""Password hashing and verification service."""

from pwdlib import PasswordHash
from pwdlib.exceptions import UnknownHashError

from salonhub.config import get_settings

password_hash = PasswordHash.recommended()

# A real hash, so verifying against it costs as much as verifying a user's password.
DUMMY_HASH = password_hash.hash("dummy_password_for_timing_attack_prevention")


def _pepper() -> str:
    return get_settings().PASSWORD_PEPPER


def hash_password(plain_password: str) -> str:
    """Hash a plain password for storage with pepper."""
    return password_hash.hash(plain_password + _pepper())


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against a peppered hash."""
    try:
        return password_hash.verify(plain_password + _pepper(), hashed_password)
    except UnknownHashError:
        return False


def get_dummy_hash() -> str:
    """Get a dummy hash for timing attack prevention."""
    return DUMMY_HASH
