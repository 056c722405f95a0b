"""
Hex encoding utilities.

Digests and proofs are handled as raw bytes throughout the library. These
helpers convert them to and from lowercase hex for display, logging, and for
callers that keep roots and proofs as text.
"""

from typing import List, Sequence


# ---------------------------------------------------------------------------
# Hex / bytes conversions
# ---------------------------------------------------------------------------

def bytes_to_hex(data: bytes) -> str:
    """
    Convert bytes to a lowercase hex string.

    Args:
        data: The bytes to convert.

    Returns:
        Lowercase hexadecimal string representation.

    Example:
        >>> bytes_to_hex(b'\\xab\\xcd')
        'abcd'
    """
    return data.hex()


def hex_to_bytes(hex_string: str) -> bytes:
    """
    Convert a hex string to bytes.

    Args:
        hex_string: Hexadecimal string (with or without '0x' prefix).

    Returns:
        The decoded bytes.

    Raises:
        ValueError: If the string is not valid hex.

    Example:
        >>> hex_to_bytes('0xabcd')
        b'\\xab\\xcd'
    """
    if hex_string.startswith('0x') or hex_string.startswith('0X'):
        hex_string = hex_string[2:]
    return bytes.fromhex(hex_string)


# ---------------------------------------------------------------------------
# Proof conversions
# ---------------------------------------------------------------------------

def proof_to_hex(proof: Sequence[bytes]) -> List[str]:
    """Convert a list of proof digests to a list of hex strings."""
    return [bytes_to_hex(sibling) for sibling in proof]


def proof_from_hex(hex_proof: Sequence[str]) -> List[bytes]:
    """
    Convert a list of hex strings back to proof digests.

    Raises:
        ValueError: If any entry is not valid hex.
    """
    return [hex_to_bytes(sibling) for sibling in hex_proof]
