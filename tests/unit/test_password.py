"""Unit tests for password hashing."""

import pytest

from src.kernel.identity.exceptions import InvalidHashFormat
from src.kernel.identity.password import PasswordHasher


class TestPasswordHasher:
    """Tests for PasswordHasher."""

    def test_hash_creates_different_hashes(self, hasher: PasswordHasher):
        """Same password should create different hashes (due to salt)."""
        password = "Abcdefg12"
        hash1 = hasher.hash(password)
        hash2 = hasher.hash(password)

        assert hash1 != hash2
        assert hash1.startswith("$2b$")  # bcrypt prefix

    def test_hash_never_equals_plaintext(self, hasher: PasswordHasher):
        password = "Abcdefg12"
        assert hasher.hash(password) != password

    def test_verify_correct_password(self, hasher: PasswordHasher):
        """Correct password should verify successfully."""
        password = "Abcdefg12"
        hashed = hasher.hash(password)

        assert hasher.verify(password, hashed) is True

    def test_verify_wrong_password(self, hasher: PasswordHasher):
        """Wrong password should fail verification without raising."""
        hashed = hasher.hash("Abcdefg12")

        assert hasher.verify("Abcdefg13", hashed) is False

    def test_hash_embeds_configured_cost(self, hasher: PasswordHasher):
        hashed = hasher.hash("Abcdefg12")

        assert hashed.split("$")[2] == "04"

    @pytest.mark.parametrize(
        "malformed",
        ["", "plaintext", "$2b$04$tooshort", "$1$abcdefgh$0123456789012345678901"],
    )
    def test_verify_malformed_hash_raises(self, hasher: PasswordHasher, malformed: str):
        with pytest.raises(InvalidHashFormat):
            hasher.verify("Abcdefg12", malformed)

    def test_needs_rehash_when_cost_differs(self, hasher: PasswordHasher):
        hashed = hasher.hash("Abcdefg12")

        assert hasher.needs_rehash(hashed) is False
        assert PasswordHasher(rounds=5).needs_rehash(hashed) is True

    def test_needs_rehash_malformed_hash_raises(self, hasher: PasswordHasher):
        with pytest.raises(InvalidHashFormat):
            hasher.needs_rehash("not-a-hash")

    def test_long_passwords_truncated_to_72_bytes(self, hasher: PasswordHasher):
        base = "A" * 72
        hashed = hasher.hash(base + "1")

        assert hasher.verify(base + "2", hashed) is True
