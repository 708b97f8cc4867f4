"""Password policy and hashing.

Digests come from werkzeug's ``generate_password_hash`` and look like
``method$salt$hash``, so the method, its cost parameters and the salt travel
with the digest and verification needs nothing else.
"""

from werkzeug.security import check_password_hash, generate_password_hash

from glintstore.core.exceptions import (
    HashingError,
    InvalidLengthError,
    NonPrintableCharacterError,
)

MIN_PASSWORD_LENGTH = 8
MAX_PASSWORD_LENGTH = 32

DEFAULT_HASH_METHOD = "scrypt"


def validate_password(password: str) -> None:
    """Raise a PasswordPolicyError if the password breaks a rule.

    Rules are checked in order and the first violation is reported:
    every character must be printable ASCII (33-126, no space), then the
    length must be between 8 and 32 characters.
    """
    for ch in password:
        if ord(ch) < 33 or ord(ch) > 126:
            raise NonPrintableCharacterError(
                "Password must consist of ASCII printable characters"
            )
    if len(password) < MIN_PASSWORD_LENGTH or len(password) > MAX_PASSWORD_LENGTH:
        raise InvalidLengthError(
            f"Password must contain between {MIN_PASSWORD_LENGTH} "
            f"and {MAX_PASSWORD_LENGTH} characters"
        )


def hash_password(password: str, method: str = DEFAULT_HASH_METHOD) -> str:
    """Validate and salt-hash a password."""
    validate_password(password)
    try:
        return generate_password_hash(password, method=method)
    except (ValueError, TypeError) as exc:
        raise HashingError(f"Unable to hash password with {method!r}") from exc


def verify_password(password_hash: str, password: str) -> bool:
    """Check a candidate password against a stored digest.

    An empty or malformed digest never matches.
    """
    if not password_hash:
        return False
    try:
        return check_password_hash(password_hash, password)
    except (ValueError, TypeError):
        return False
