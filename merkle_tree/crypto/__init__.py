# Hash oracles and the Merkle tree

from .hash import (
    DEFAULT_HASH_ALGORITHM,
    DIGEST_SIZE,
    HASH_FUNCTIONS,
    HashFunction,
    double_sha256,
    get_hash_function,
    keccak256,
    sha256,
)
from .merkle import (
    EmptyInputError,
    MerkleTree,
    compute_merkle_root,
    is_power_of_two,
    padded_length,
    verify_proof,
)

__all__ = [
    # Hash functions
    'DEFAULT_HASH_ALGORITHM',
    'DIGEST_SIZE',
    'HASH_FUNCTIONS',
    'HashFunction',
    'keccak256',
    'sha256',
    'double_sha256',
    'get_hash_function',
    # Merkle tree
    'EmptyInputError',
    'MerkleTree',
    'compute_merkle_root',
    'is_power_of_two',
    'padded_length',
    'verify_proof',
]
