"""
Append-only binary Merkle trees with inclusion proofs.

    >>> from merkle_tree import MerkleTree
    >>> tree = MerkleTree.build_from([b"foo", b"bar", b"hello"])
    >>> tree.count_leaves()
    3
"""

from merkle_tree.crypto import (
    EmptyInputError,
    MerkleTree,
    compute_merkle_root,
    get_hash_function,
    keccak256,
    verify_proof,
)

__version__ = "0.1.0"

__all__ = [
    'EmptyInputError',
    'MerkleTree',
    'compute_merkle_root',
    'get_hash_function',
    'keccak256',
    'verify_proof',
]
