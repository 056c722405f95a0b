"""
Tests for the hex encoding helpers.
"""

import pytest

from merkle_tree.utils.encoding import (
    bytes_to_hex,
    hex_to_bytes,
    proof_from_hex,
    proof_to_hex,
)


class TestHexConversion:

    def test_bytes_to_hex(self):
        assert bytes_to_hex(b"\xab\xcd") == "abcd"

    def test_hex_to_bytes(self):
        assert hex_to_bytes("abcd") == b"\xab\xcd"

    def test_hex_to_bytes_with_prefix(self):
        assert hex_to_bytes("0xABCD") == b"\xab\xcd"
        assert hex_to_bytes("0Xabcd") == b"\xab\xcd"

    def test_invalid_hex(self):
        with pytest.raises(ValueError):
            hex_to_bytes("zz")


class TestProofConversion:

    def test_proof_hex_round_trip(self):
        proof = [b"\x01" * 32, b"\xff" * 32]
        hex_proof = proof_to_hex(proof)
        assert hex_proof == ["01" * 32, "ff" * 32]
        assert proof_from_hex(hex_proof) == proof

    def test_empty_proof(self):
        assert proof_to_hex([]) == []
        assert proof_from_hex([]) == []

    def test_invalid_entry(self):
        with pytest.raises(ValueError):
            proof_from_hex(["01" * 32, "not hex"])
