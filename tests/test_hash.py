"""
Tests for the Hash Oracles
==========================

Tests cover:
- Known digests for keccak256, sha256 and double_sha256
- Keccak-256 is distinct from the standardized SHA3-256
- Resolving oracles by name, by callable and by default
"""

import hashlib

import pytest

from merkle_tree.crypto.hash import (
    DEFAULT_HASH_ALGORITHM,
    DIGEST_SIZE,
    HASH_FUNCTIONS,
    double_sha256,
    get_hash_function,
    keccak256,
    sha256,
)


class TestHashFunctions:
    """Tests for the built-in oracles."""

    def test_keccak256_empty(self):
        assert keccak256(b"").hex() == (
            "c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470"
        )

    def test_keccak256_is_not_sha3(self):
        assert keccak256(b"hello") != hashlib.sha3_256(b"hello").digest()

    def test_sha256_known_value(self):
        assert sha256(b"hello").hex() == (
            "2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824"
        )

    def test_double_sha256_known_value(self):
        assert double_sha256(b"hello").hex() == (
            "9595c9df90075148eb06860365df33584b75bff782a510c6cd4883a419833d50"
        )

    @pytest.mark.parametrize("name", sorted(HASH_FUNCTIONS))
    def test_digest_size(self, name):
        assert len(HASH_FUNCTIONS[name](b"data")) == DIGEST_SIZE

    def test_deterministic(self):
        assert keccak256(b"data") == keccak256(b"data")


class TestGetHashFunction:
    """Tests for oracle resolution."""

    def test_default_is_keccak256(self):
        assert DEFAULT_HASH_ALGORITHM == "keccak256"
        assert get_hash_function() is keccak256
        assert get_hash_function(None) is keccak256

    def test_by_name(self):
        assert get_hash_function("sha256") is sha256
        assert get_hash_function("double_sha256") is double_sha256

    def test_callable_passthrough(self):
        def identity(data: bytes) -> bytes:
            return data

        assert get_hash_function(identity) is identity

    def test_unknown_name(self):
        with pytest.raises(ValueError, match="Unknown hash algorithm"):
            get_hash_function("sha3_256")
