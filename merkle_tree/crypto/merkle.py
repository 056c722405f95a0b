"""
Merkle Tree Implementation
==========================

This module implements a binary Merkle tree (hash tree) that commits to an
ordered sequence of data items.

A Merkle tree is a binary tree where:
- **Leaf nodes** contain the hashes of individual data items
- **Internal nodes** contain the hash of their two children concatenated,
  left child first: H(left || right)
- The **root** is a single digest that commits to every leaf and to their
  order

The tree supports three things:

1. **Commitment**: ``get_root()`` folds the leaves into one fixed-size digest.
   Changing, reordering, or adding any item changes the root.

2. **Incremental growth**: ``add_leaves()`` appends new items to the end of
   the tree. Existing leaves are never modified or removed.

3. **Inclusion proofs**: ``generate_proof()`` returns the sibling digests on
   the path from one leaf up to the root. With the proof, the leaf digest and
   the leaf index, anyone can recompute the root using ``verify_proof()``
   without seeing the other items.

Padding
-------
The tree only stores the real leaves. Whenever a root or proof is needed, a
temporary copy of the leaves is padded up to the next power of two by
repeatedly appending a copy of whatever element is *currently* last. For
three leaves ``[a, b, c]`` the padded sequence is ``[a, b, c, c]``; for five
leaves ``[a, b, c, d, e]`` it is ``[a, b, c, d, e, e, e, e]``. The padded
copy is thrown away once the computation is done, so the padding always
follows the current leaf count.

Because the padded positions are derived from the current length, a leaf
index captured before ``add_leaves()`` may describe a different path through
the tree afterwards. Proofs must be regenerated after the tree grows.

Duplicating leaves as padding is a weak construction: the trees for
``[a, b, c]`` and ``[a, b, c, c]`` have the same root. Callers that need to
distinguish those cases must commit to the leaf count separately.

Inclusion Proofs
----------------
A proof is a plain list of sibling digests, ordered from the leaf's immediate
sibling up to the sibling just below the root. It carries no left/right
markers. The verifier recovers the concatenation order from the parity of
the leaf index at each level:

- index even: the running value is the left child, H(value || sibling)
- index odd:  the running value is the right child, H(sibling || value)

and halves the index before moving up a level.
"""

import logging
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from merkle_tree.crypto.hash import HashFunction, get_hash_function
from merkle_tree.utils.encoding import bytes_to_hex

logger = logging.getLogger(__name__)

Item = Union[bytes, bytearray, str]
Proof = List[bytes]

BYTES_LIKE = (bytes, bytearray, memoryview)


class EmptyInputError(ValueError):
    """
    Raised when a Merkle tree is built from an empty sequence of items.

    A tree must commit to at least one leaf; there is no root for an empty
    dataset. Callers should catch this and refuse to commit, rather than
    inventing a placeholder root.
    """
    pass


# ---------------------------------------------------------------------------
# Level helpers
# ---------------------------------------------------------------------------

def is_power_of_two(n: int) -> bool:
    """Return True if *n* is a positive power of two (1, 2, 4, 8, ...)."""
    return n > 0 and (n & (n - 1)) == 0


def padded_length(n: int) -> int:
    """
    Return the length a sequence of *n* leaves is padded to.

    This is the smallest power of two that is >= n, with a minimum of 1.

    Example:
        >>> [padded_length(n) for n in range(1, 10)]
        [1, 2, 4, 4, 8, 8, 8, 8, 16]
    """
    if n <= 1:
        return 1
    return 1 << (n - 1).bit_length()


def pad_leaves(leaves: Sequence[bytes]) -> List[bytes]:
    """
    Return a copy of *leaves* right-padded to a power-of-two length.

    Padding repeatedly appends a copy of the current last element until the
    length is a power of two. The input is not modified.

    Args:
        leaves: A non-empty sequence of leaf digests.

    Returns:
        A new list whose length is ``padded_length(len(leaves))``.
    """
    level = list(leaves)
    while not is_power_of_two(len(level)):
        level.append(level[-1])
    return level


def hash_pairs(level: Sequence[bytes], hash_function: HashFunction) -> List[bytes]:
    """
    Fold one tree level into the next.

    Consecutive disjoint pairs ``(level[0], level[1])``, ``(level[2],
    level[3])``, ... are each replaced by ``H(left || right)``.

    Args:
        level: A level of even length (every padded level above the root is).
        hash_function: The oracle used to hash each concatenated pair.

    Returns:
        The parent level, half the length of *level*.
    """
    return [
        hash_function(level[i] + level[i + 1])
        for i in range(0, len(level), 2)
    ]


class MerkleTree:
    """
    An append-only binary Merkle tree over an ordered list of leaf digests.

    The tree stores only the unpadded leaf digests. Roots, proofs, and
    levels are computed on demand from a padded working copy; no node graph
    is kept between calls.

    The tree provides no internal locking. If several threads share one
    instance, ``add_leaves()`` must be serialized against all readers by the
    caller.

    Usage example:
        >>> tree = MerkleTree.build_from([b"foo", b"bar", b"hello"])
        >>> root = tree.get_root()
        >>> leaf = tree.hash_function(b"bar")
        >>> proof, index = tree.contains_leaf(leaf)
        >>> MerkleTree.verify(proof, root, leaf, index)
        True

    Attributes:
        hash_function: The hash oracle the tree was built with.
        digest_size: Size in bytes of every leaf digest in the tree.
    """

    def __init__(
        self,
        leaves: Iterable[bytes],
        hash_function: Union[str, HashFunction, None] = None,
    ) -> None:
        """
        Initialize the tree from leaf digests that are already hashed.

        Most callers should use ``build_from()``, which hashes raw items.

        Args:
            leaves: Leaf digests in order. All must have the same size.
            hash_function: Hash oracle for internal nodes. A callable, a
                name registered in ``merkle_tree.crypto.hash.HASH_FUNCTIONS``,
                or None for the default (keccak256).

        Raises:
            EmptyInputError: If *leaves* is empty.
            TypeError: If a leaf is not bytes-like.
            ValueError: If the digests are not all the same size.
        """
        digests = []
        for leaf in leaves:
            if not isinstance(leaf, BYTES_LIKE):
                raise TypeError(
                    f"Leaf digests must be bytes, not {type(leaf).__name__}"
                )
            digests.append(bytes(leaf))
        if not digests:
            raise EmptyInputError("Cannot build a Merkle tree from zero items")

        self.hash_function: HashFunction = get_hash_function(hash_function)
        self.digest_size: int = len(digests[0])
        self._leaves: List[bytes] = []
        self._append_digests(digests)

    # ------------------------------------------------------------------
    # Construction and growth
    # ------------------------------------------------------------------

    @classmethod
    def build_from(
        cls,
        items: Iterable[Item],
        hash_function: Union[str, HashFunction, None] = None,
    ) -> "MerkleTree":
        """
        Build a tree by hashing each raw item into a leaf.

        ``leaves[i] = H(items[i])`` for every item, in the original order.
        The number of items does not need to be a power of two; padding is
        applied later, whenever a root or proof is computed.

        Args:
            items: Byte strings to commit to. ``str`` items are encoded as
                UTF-8 before hashing.
            hash_function: Hash oracle (callable, registry name, or None for
                the default).

        Returns:
            A new MerkleTree.

        Raises:
            EmptyInputError: If *items* is empty.
            TypeError: If an item is not bytes-like or str.
        """
        oracle = get_hash_function(hash_function)
        leaves = [oracle(_item_bytes(item)) for item in items]
        tree = cls(leaves, hash_function=oracle)
        logger.debug("Built Merkle tree with %d leaves", len(leaves))
        return tree

    def add_leaves(self, items: Iterable[Item]) -> None:
        """
        Hash new items and append them to the end of the tree.

        Items are hashed exactly as ``build_from()`` hashes them. Existing
        leaves keep their positions and values. Any proof generated before
        this call is stale afterwards and should be regenerated.

        Args:
            items: Byte strings (or str) to append, in order. An empty
                iterable leaves the tree unchanged.

        Raises:
            TypeError: If an item is not bytes-like or str.
            ValueError: If the oracle returns a digest of a different size
                than the existing leaves.
        """
        digests = [self.hash_function(_item_bytes(item)) for item in items]
        self._append_digests(digests)
        logger.debug(
            "Appended %d leaves, tree now has %d", len(digests), len(self._leaves)
        )

    def _append_digests(self, digests: List[bytes]) -> None:
        for digest in digests:
            if len(digest) != self.digest_size:
                raise ValueError(
                    f"Digest size changed from {self.digest_size} to "
                    f"{len(digest)} bytes"
                )
        self._leaves.extend(digests)

    # ------------------------------------------------------------------
    # Leaf access
    # ------------------------------------------------------------------

    @property
    def leaves(self) -> Tuple[bytes, ...]:
        """The unpadded leaf digests, in insertion order (read-only copy)."""
        return tuple(self._leaves)

    def count_leaves(self) -> int:
        """Return the number of real (unpadded) leaves in the tree."""
        return len(self._leaves)

    def get_leaf(self, index: int) -> bytes:
        """
        Return the digest of the leaf at *index* in the unpadded sequence.

        Raises:
            IndexError: If the index is out of range.
        """
        if index < 0 or index >= len(self._leaves):
            raise IndexError(
                f"Leaf index {index} out of range [0, {len(self._leaves) - 1}]"
            )
        return self._leaves[index]

    leaf_digest_at = get_leaf

    # ------------------------------------------------------------------
    # Root
    # ------------------------------------------------------------------

    def get_root(self) -> bytes:
        """
        Compute the Merkle root of the current leaves.

        The algorithm:
        1. Copy the leaves and pad the copy to a power-of-two length by
           repeatedly duplicating the current last element
        2. Hash each consecutive pair: H(left || right)
        3. Repeat on the resulting half-length level until one digest
           remains

        A single-leaf tree's root is that leaf's digest, with no further
        hashing.

        Returns:
            The root digest.
        """
        level = pad_leaves(self._leaves)
        while len(level) > 1:
            level = hash_pairs(level, self.hash_function)
        return level[0]

    def get_root_hex(self) -> str:
        """Return the Merkle root as a lowercase hex string."""
        return bytes_to_hex(self.get_root())

    def get_levels(self) -> List[List[bytes]]:
        """
        Compute every level of the padded tree.

        Returns:
            A list of levels. ``levels[0]`` is the padded leaf sequence and
            ``levels[-1]`` is ``[root]``. The lists are freshly computed and
            are not retained by the tree.
        """
        levels = [pad_leaves(self._leaves)]
        while len(levels[-1]) > 1:
            levels.append(hash_pairs(levels[-1], self.hash_function))
        return levels

    # ------------------------------------------------------------------
    # Proofs
    # ------------------------------------------------------------------

    def generate_proof(self, leaf_index: int) -> Proof:
        """
        Generate an inclusion proof for the leaf at *leaf_index*.

        Walks the same level folding as ``get_root()``. At each level the
        sibling of the current position is recorded: ``i + 1`` when ``i`` is
        even, ``i - 1`` when it is odd. The index is then halved for the
        next level. Nothing is recorded for the root level itself.

        The index is checked against the *padded* sequence, so a padding
        position may be proven as well.

        Args:
            leaf_index: Zero-based position in the padded leaf sequence.

        Returns:
            The sibling digests, from the leaf's immediate sibling up to the
            sibling just below the root. Empty for a single-leaf tree.

        Raises:
            IndexError: If the index is outside the padded sequence.
        """
        level = pad_leaves(self._leaves)
        if leaf_index < 0 or leaf_index >= len(level):
            raise IndexError(
                f"Leaf index {leaf_index} out of range [0, {len(level) - 1}]"
            )

        proof = []
        current_index = leaf_index

        while len(level) > 1:
            if current_index % 2 == 0:
                sibling_index = current_index + 1
            else:
                sibling_index = current_index - 1
            proof.append(level[sibling_index])

            level = hash_pairs(level, self.hash_function)
            current_index = current_index // 2

        logger.debug(
            "Generated proof of %d steps for leaf index %d", len(proof), leaf_index
        )
        return proof

    def contains_leaf(self, target_digest: bytes) -> Optional[Tuple[Proof, int]]:
        """
        Look up a leaf digest and return an inclusion proof for it.

        The search is linear over the unpadded leaves and stops at the first
        match. Note that *target_digest* must already be hashed: pass
        ``H(item)``, not the raw item.

        Args:
            target_digest: The leaf digest to look for.

        Returns:
            ``(proof, index)`` for the first matching leaf, or None if no
            leaf has that digest.
        """
        for index, leaf in enumerate(self._leaves):
            if leaf == target_digest:
                return self.generate_proof(index), index
        return None

    @staticmethod
    def verify(
        proof: Sequence[bytes],
        root: bytes,
        leaf_digest: bytes,
        leaf_index: int,
        hash_function: Union[str, HashFunction, None] = None,
    ) -> bool:
        """
        Verify an inclusion proof. See ``verify_proof()``.

        This is a static method and does not know which tree the proof came
        from. For a tree built with anything other than the default oracle,
        pass that tree's ``hash_function``; otherwise keccak256 is used and
        the proof will not verify.
        """
        return verify_proof(proof, root, leaf_digest, leaf_index, hash_function)

    def __len__(self) -> int:
        return len(self._leaves)

    def __repr__(self) -> str:
        return (
            f"MerkleTree(leaves={len(self._leaves)}, "
            f"root='{self.get_root_hex()[:16]}...')"
        )


# ---------------------------------------------------------------------------
# Verification
# ---------------------------------------------------------------------------

def verify_proof(
    proof: Sequence[bytes],
    root: bytes,
    leaf_digest: bytes,
    leaf_index: int,
    hash_function: Union[str, HashFunction, None] = None,
) -> bool:
    """
    Verify an inclusion proof against a known root.

    This is a pure function of its inputs and needs no tree instance. The
    verification replays the level folding:
    1. Start with the leaf digest and the leaf index
    2. For each sibling in the proof, hash H(value || sibling) if the index
       is even, or H(sibling || value) if it is odd, then halve the index
    3. The final value must equal the root

    A proof of the wrong length, a tampered sibling, a wrong index, a
    negative index, or a leaf or sibling that is not bytes-like (for
    example a hex string) all give False; no exception is raised for bad
    input. A root of the wrong type simply does not compare equal.

    The default oracle is keccak256. Proofs from a tree built with another
    oracle must be checked with that tree's ``hash_function``.

    Args:
        proof: Sibling digests from ``generate_proof()``.
        root: The expected Merkle root.
        leaf_digest: The digest of the leaf being proven.
        leaf_index: The leaf's position at the time the proof was made.
        hash_function: The oracle the tree was built with (callable,
            registry name, or None for the default).

    Returns:
        True if the recomputed root equals *root*, False otherwise.
    """
    oracle = get_hash_function(hash_function)

    if leaf_index < 0:
        logger.debug("Rejecting proof with negative leaf index %d", leaf_index)
        return False

    if not isinstance(leaf_digest, BYTES_LIKE):
        logger.debug("Rejecting proof for non-bytes leaf digest %r", type(leaf_digest))
        return False

    current = bytes(leaf_digest)
    current_index = leaf_index

    for step, sibling in enumerate(proof):
        if not isinstance(sibling, BYTES_LIKE):
            logger.debug("Rejecting proof with non-bytes sibling at step %d", step)
            return False
        if current_index % 2 == 0:
            current = oracle(current + bytes(sibling))
        else:
            current = oracle(bytes(sibling) + current)
        current_index = current_index // 2

    if current != root:
        logger.debug(
            "Proof for leaf index %d computed root %s", leaf_index, bytes_to_hex(current)[:16]
        )
        return False
    return True


def compute_merkle_root(
    items: Iterable[Item],
    hash_function: Union[str, HashFunction, None] = None,
) -> bytes:
    """
    Compute the Merkle root of raw items in a single call.

    This is a convenience function that builds a MerkleTree and returns its
    root.

    Args:
        items: Byte strings (or str) to commit to.
        hash_function: Hash oracle (callable, registry name, or None for the
            default).

    Returns:
        The root digest.

    Raises:
        EmptyInputError: If *items* is empty.
    """
    return MerkleTree.build_from(items, hash_function=hash_function).get_root()


def _item_bytes(item: Item) -> bytes:
    if isinstance(item, str):
        return item.encode("utf-8")
    if isinstance(item, BYTES_LIKE):
        return bytes(item)
    raise TypeError(
        f"Merkle tree items must be bytes or str, not {type(item).__name__}"
    )
