"""
Unit tests for utils.crypto_utils.
"""
from qaforum.utils.crypto_utils import hash_password, verify_password


class TestPasswordHashing:

    def test_hash_is_not_plaintext(self):
        hashed = hash_password("password")
        assert hashed != "password"
        assert hashed.startswith("$2")

    def test_same_password_gets_different_salts(self):
        assert hash_password("password") != hash_password("password")

    def test_verify_accepts_matching_password(self):
        assert verify_password("password", hash_password("password")) is True

    def test_verify_rejects_wrong_password(self):
        assert verify_password("wrong", hash_password("password")) is False

    def test_long_passwords_are_not_truncated(self):
        """Passwords sharing the first 72 bytes must still differ."""
        base = "x" * 80
        hashed = hash_password(base + "a")
        assert verify_password(base + "a", hashed) is True
        assert verify_password(base + "b", hashed) is False

    def test_verify_rejects_non_bcrypt_value(self):
        """A legacy plaintext value never verifies."""
        assert verify_password("password", "password") is False
