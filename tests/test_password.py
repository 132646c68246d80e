"""
Tests for bcrypt password hashing.
"""

from auth.password import MAX_PASSWORD_BYTES, hash_password, verify_password


class TestPasswordHashing:
    def test_hash_is_not_plaintext(self):
        hashed = hash_password("pw123", rounds=4)
        assert hashed != "pw123"
        assert hashed.startswith("$2")

    def test_salted(self):
        assert hash_password("pw123", rounds=4) != hash_password("pw123", rounds=4)

    def test_verify_roundtrip(self):
        hashed = hash_password("pw123", rounds=4)
        assert verify_password("pw123", hashed)
        assert not verify_password("wrong", hashed)

    def test_cost_factor_is_embedded(self):
        assert hash_password("pw123", rounds=5).startswith("$2b$05$")

    def test_malformed_hash_is_rejected_not_raised(self):
        assert verify_password("pw123", "not-a-bcrypt-hash") is False
        assert verify_password("pw123", "") is False

    def test_max_length_password_hashes(self):
        password = "x" * MAX_PASSWORD_BYTES
        hashed = hash_password(password, rounds=4)
        assert verify_password(password, hashed)
        assert not verify_password("x" * (MAX_PASSWORD_BYTES - 1), hashed)
