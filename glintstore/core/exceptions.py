"""Glintstore exceptions."""


class GlintStoreError(Exception):
    """Base exception for glintstore errors."""


class PasswordPolicyError(GlintStoreError):
    """Password rejected by the password policy."""


class NonPrintableCharacterError(PasswordPolicyError):
    """Password contains a character outside ASCII 33-126."""


class InvalidLengthError(PasswordPolicyError):
    """Password is shorter than 8 or longer than 32 characters."""


class HashingError(GlintStoreError):
    """The password hashing algorithm failed."""


class StorageError(GlintStoreError):
    """Database connectivity, statement or constraint failure."""


class DuplicateConstraintError(StorageError):
    """Insert violated a uniqueness constraint."""


class NotFoundError(GlintStoreError):
    """Account, file or attribute not found.

    The message is the same for every resource so callers cannot tell a
    missing account from a missing file or attribute.
    """

    def __init__(self, message: str = "not found") -> None:
        super().__init__(message)
