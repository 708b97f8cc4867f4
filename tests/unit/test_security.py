"""Tests for the password policy and hasher."""

import pytest

from glintstore.core.exceptions import (
    HashingError,
    InvalidLengthError,
    NonPrintableCharacterError,
    PasswordPolicyError,
)
from glintstore.core.security import hash_password, validate_password, verify_password

TEST_HASH_METHOD = "pbkdf2:sha256:1000"


class TestValidatePassword:
    """Tests for validate_password."""

    @pytest.mark.parametrize(
        "password",
        ["Secret12", "Secret123", "x" * 32, "!~" * 4, "a1b2c3d4e5f6"],
    )
    def test_accepts_valid(self, password: str) -> None:
        validate_password(password)

    @pytest.mark.parametrize("password", ["", "short", "Secret1", "x" * 33])
    def test_rejects_length(self, password: str) -> None:
        with pytest.raises(InvalidLengthError):
            validate_password(password)

    @pytest.mark.parametrize(
        "password",
        ["Secret 123", "Secret\t123", "Secret\x7f123", "Sécret123", "パスワードパスワード"],
    )
    def test_rejects_non_printable(self, password: str) -> None:
        with pytest.raises(NonPrintableCharacterError):
            validate_password(password)

    def test_every_code_point(self) -> None:
        """Test that only code points 33-126 are allowed."""
        for code in range(0, 256):
            password = "Secret1" + chr(code)
            if 33 <= code <= 126:
                validate_password(password)
            else:
                with pytest.raises(NonPrintableCharacterError):
                    validate_password(password)

    def test_character_rule_checked_first(self) -> None:
        """Test that a short password with a space reports the character rule."""
        with pytest.raises(NonPrintableCharacterError):
            validate_password("a b")

    def test_errors_share_base(self) -> None:
        assert issubclass(NonPrintableCharacterError, PasswordPolicyError)
        assert issubclass(InvalidLengthError, PasswordPolicyError)


class TestHashing:
    """Tests for hash_password and verify_password."""

    def test_hash_verifies(self) -> None:
        digest = hash_password("Secret123", method=TEST_HASH_METHOD)

        assert digest != "Secret123"
        assert verify_password(digest, "Secret123")
        assert not verify_password(digest, "Secret123x")

    def test_hash_is_salted(self) -> None:
        first = hash_password("Secret123", method=TEST_HASH_METHOD)
        second = hash_password("Secret123", method=TEST_HASH_METHOD)

        assert first != second
        assert verify_password(second, "Secret123")

    def test_digest_carries_method(self) -> None:
        digest = hash_password("Secret123", method=TEST_HASH_METHOD)

        assert digest.startswith(TEST_HASH_METHOD + "$")

    def test_default_method(self) -> None:
        digest = hash_password("Secret123")

        assert digest.startswith("scrypt")
        assert verify_password(digest, "Secret123")

    def test_hash_validates_first(self) -> None:
        with pytest.raises(InvalidLengthError):
            hash_password("short", method=TEST_HASH_METHOD)

    def test_unknown_method_raises_hashing_error(self) -> None:
        with pytest.raises(HashingError):
            hash_password("Secret123", method="no-such-method")

    @pytest.mark.parametrize(
        "digest",
        ["", "not-a-digest", "pbkdf2:sha256:1000$onlysalt", "bogus$salt$hash"],
    )
    def test_malformed_digest_never_matches(self, digest: str) -> None:
        assert not verify_password(digest, "Secret123")
        assert not verify_password(digest, "")
