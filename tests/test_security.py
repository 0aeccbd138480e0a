"""Tests for password hashing and token generation."""

import string

from blogclient.core.security import device_info, generate_token, hash_password, verify_password


class TestHashPassword:
    def test_is_deterministic(self):
        assert hash_password("secret1") == hash_password("secret1")

    def test_different_inputs_differ(self):
        assert hash_password("secret1") != hash_password("secret2")

    def test_fixed_length_hex(self):
        for secret in ("", "a", "x" * 1000):
            digest = hash_password(secret)
            assert len(digest) == 64
            assert set(digest) <= set(string.hexdigits.lower())

    def test_known_sha256_vector(self):
        assert hash_password("abc") == (
            "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"
        )

    def test_never_returns_plaintext(self):
        assert "secret1" not in hash_password("secret1")


class TestVerifyPassword:
    def test_matches_own_digest(self):
        assert verify_password("secret1", hash_password("secret1"))

    def test_rejects_wrong_password(self):
        assert not verify_password("wrong", hash_password("secret1"))


class TestGenerateToken:
    def test_has_256_bits(self):
        token = generate_token()
        assert len(token) == 64
        int(token, 16)

    def test_tokens_are_unique(self):
        tokens = {generate_token() for _ in range(200)}
        assert len(tokens) == 200


def test_device_info_carries_platform_and_timestamp():
    info = device_info("mobile")
    assert info["platform"] == "mobile"
    assert "T" in info["timestamp"]
