"""
Merkle Tree Hash Oracles
========================

This module provides the hash functions ("oracles") a Merkle tree can be
built with. A hash oracle is any deterministic, collision-resistant callable
that maps an arbitrary byte string to a fixed-size digest:

    H: bytes -> bytes

The tree never hard-wires a particular primitive. Instead a callable is
injected when the tree is built, and the same callable must be used for the
lifetime of that tree and for every proof checked against its root.

Available oracles:
- **keccak256**: Keccak-256, the pre-standard variant of SHA-3 used by
  Ethereum. This is the default, and the oracle the reference roots in the
  test-suite are computed with.
- **sha256**: Plain SHA-256.
- **double_sha256**: SHA-256 applied twice, as Bitcoin hashes its Merkle
  nodes.

All three produce 32-byte digests.
"""

import hashlib
from typing import Callable, Union

from eth_utils import keccak


HashFunction = Callable[[bytes], bytes]
"""Type of a hash oracle: takes raw bytes, returns a fixed-size digest."""


# ---------------------------------------------------------------------------
# Configuration constants
# ---------------------------------------------------------------------------

DEFAULT_HASH_ALGORITHM = "keccak256"
"""Name of the oracle used when a tree is built without an explicit hash
function."""

DIGEST_SIZE = 32
"""Size in bytes of the digests produced by every built-in oracle."""


# ---------------------------------------------------------------------------
# Hash functions
# ---------------------------------------------------------------------------

def keccak256(data: bytes) -> bytes:
    """
    Compute the Keccak-256 hash of the input data.

    Note that Keccak-256 is *not* the same as the standardized SHA3-256
    (``hashlib.sha3_256``): the two differ in their padding rule and give
    different digests for the same input.

    Args:
        data: The raw bytes to hash.

    Returns:
        The 32-byte Keccak-256 digest.

    Example:
        >>> keccak256(b"").hex()
        'c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470'
    """
    return keccak(data)


def sha256(data: bytes) -> bytes:
    """
    Compute the SHA-256 hash of the input data.

    Args:
        data: The raw bytes to hash.

    Returns:
        The 32-byte SHA-256 digest.

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).digest()


def double_sha256(data: bytes) -> bytes:
    """
    Compute the double SHA-256 hash: SHA-256(SHA-256(data)).

    Args:
        data: The raw bytes to hash.

    Returns:
        The 32-byte double-SHA-256 digest.

    Example:
        >>> double_sha256(b"hello").hex()
        '9595c9df90075148eb06860365df33584b75bff782a510c6cd4883a419833d50'
    """
    return hashlib.sha256(hashlib.sha256(data).digest()).digest()


HASH_FUNCTIONS = {
    "keccak256": keccak256,
    "sha256": sha256,
    "double_sha256": double_sha256,
}
"""Registry of the built-in oracles, keyed by name."""


def get_hash_function(hash_function: Union[str, HashFunction, None] = None) -> HashFunction:
    """
    Resolve a hash oracle.

    Accepts a registry name, an already-callable oracle (returned unchanged),
    or None for the default oracle.

    Args:
        hash_function: Name from HASH_FUNCTIONS, a callable, or None.

    Returns:
        A callable ``bytes -> bytes``.

    Raises:
        ValueError: If a name is given that is not in the registry.
    """
    if hash_function is None:
        return HASH_FUNCTIONS[DEFAULT_HASH_ALGORITHM]
    if callable(hash_function):
        return hash_function
    try:
        return HASH_FUNCTIONS[hash_function]
    except KeyError:
        raise ValueError(
            f"Unknown hash algorithm {hash_function!r}. "
            f"Expected one of: {', '.join(sorted(HASH_FUNCTIONS))}"
        ) from None
