"""
Merkle Tree Implementation
Immutable Merkle tree data model and deterministic construction.

This module provides:
- EmptyTree / MerkleNode: the two variants of a tree
- build_merkle_tree: reduce an ordered item sequence to a root node
- root_hash, leaf_count, tree_height: read-only queries

Canonical Commitment Rules (Hard Contracts):
1. Leaf digest: H(item_bytes)
2. Parent digest: H(left.digest + right.digest)
3. Odd node at any level: carried up unchanged, paired on a later level.
   The last node is never duplicated.
4. Zero items: rejected with EmptyInputException. There is no empty root.
5. Single item: root is the leaf itself, root_hash == H(item)

Determinism Notes:
- No randomness or non-deterministic ordering
- This module never sorts items - it trusts input order
- Trees are frozen after construction and safe to share between threads
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, Sequence, Union

from hashtree.config.runtime import resolve_digest_function
from hashtree.crypto.hashing import (
    DigestFunction,
    check_digest,
    hash_concat,
    hash_leaf,
    to_hex,
)
from hashtree.schemas.errors import EmptyInputException, EmptyTreeException


logger = logging.getLogger(__name__)

ItemLike = Union[bytes, bytearray, memoryview, str]


class EmptyTree:
    """
    The empty tree variant.

    Has no digest and zero leaves. Leaves use it for both children.
    Use the EMPTY_TREE singleton rather than constructing new instances.
    """

    __slots__ = ()
    _instance: "EmptyTree | None" = None

    def __new__(cls) -> "EmptyTree":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @property
    def leaf_count(self) -> int:
        return 0

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> "EmptyTree":
        return self

    def __deepcopy__(self, memo: dict) -> "EmptyTree":
        return self

    def __reduce__(self) -> tuple:
        return (EmptyTree, ())

    def __repr__(self) -> str:
        return "EMPTY_TREE"


EMPTY_TREE = EmptyTree()


@dataclass(frozen=True)
class MerkleNode:
    """
    A non-empty Merkle tree node.

    Attributes:
        digest: 32-byte digest committing to every leaf beneath this node
        leaf_count: Number of leaves in this subtree (1 for a leaf)
        left: Left subtree (EMPTY_TREE for a leaf)
        right: Right subtree (EMPTY_TREE for a leaf)
    """
    digest: bytes
    leaf_count: int
    left: "MerkleTree" = EMPTY_TREE
    right: "MerkleTree" = EMPTY_TREE

    @property
    def is_leaf(self) -> bool:
        return self.leaf_count == 1

    def __repr__(self) -> str:
        return f"MerkleNode(digest={to_hex(self.digest)}, leaf_count={self.leaf_count})"


MerkleTree = Union[EmptyTree, MerkleNode]


def _item_bytes(item: ItemLike, position: int) -> bytes:
    if isinstance(item, str):
        return item.encode("utf-8")
    if isinstance(item, (bytes, bytearray, memoryview)):
        return bytes(item)
    raise TypeError(
        f"Merkle items must be bytes-like or str, got {type(item).__name__} at index {position}"
    )


def make_leaf(item: ItemLike, hash_fn: DigestFunction | None = None) -> MerkleNode:
    """Build a single leaf node: digest = H(item), leaf_count = 1."""
    hash_fn = resolve_digest_function(hash_fn)
    digest = check_digest(hash_leaf(_item_bytes(item, 0), hash_fn), hash_fn)
    return MerkleNode(digest=digest, leaf_count=1)


def merkle_parent(
    left: MerkleNode,
    right: MerkleNode,
    hash_fn: DigestFunction | None = None,
) -> MerkleNode:
    """
    Merge two sibling nodes into their parent.

    The parent digest is H(left.digest + right.digest) and its leaf count is
    the sum of the children's.
    """
    hash_fn = resolve_digest_function(hash_fn)
    return MerkleNode(
        digest=check_digest(hash_concat(left.digest, right.digest, hash_fn), hash_fn),
        leaf_count=left.leaf_count + right.leaf_count,
        left=left,
        right=right,
    )


def build_merkle_tree(
    items: Sequence[ItemLike],
    hash_fn: DigestFunction | None = None,
) -> MerkleNode:
    """
    Build a Merkle tree from an ordered sequence of items.

    Algorithm:
    1. Hash every item into a leaf node
    2. Scan the level left-to-right, merging consecutive pairs into parents
    3. If the level has an odd count, carry the trailing node up unchanged
    4. Repeat until a single node remains

    Example: [a, b, c] -> [ab, c] -> [abc]
             [a, b, c, d, e] -> [ab, cd, e] -> [abcd, e] -> [abcde]

    Args:
        items: Item byte sequences (str items are UTF-8 encoded).
               Order matters and is preserved.
        hash_fn: Digest function; defaults to the configured algorithm

    Returns:
        Root MerkleNode with leaf_count == len(items)

    Raises:
        EmptyInputException: If items is empty
        DigestWidthException: If hash_fn returns anything but 32 bytes
            for any leaf or parent
        TypeError: If an item is not bytes-like or str
    """
    if len(items) == 0:
        raise EmptyInputException()

    hash_fn = resolve_digest_function(hash_fn)

    current_level: list[MerkleNode] = [
        MerkleNode(
            digest=check_digest(hash_leaf(_item_bytes(item, i), hash_fn), hash_fn),
            leaf_count=1,
        )
        for i, item in enumerate(items)
    ]

    while len(current_level) > 1:
        next_level: list[MerkleNode] = []
        for i in range(0, len(current_level) - 1, 2):
            next_level.append(merkle_parent(current_level[i], current_level[i + 1], hash_fn))

        # Odd node out is carried, never duplicated
        if len(current_level) % 2 == 1:
            next_level.append(current_level[-1])

        current_level = next_level

    root = current_level[0]
    logger.debug(f"Built Merkle tree: {root.leaf_count} leaves, root={to_hex(root.digest)}")
    return root


def root_hash(tree: MerkleTree) -> bytes:
    """
    Return the root digest of a tree.

    Raises:
        EmptyTreeException: If tree is EMPTY_TREE
    """
    if isinstance(tree, EmptyTree):
        raise EmptyTreeException()
    return tree.digest


def leaf_count(tree: MerkleTree) -> int:
    """Number of leaves in the tree (0 for EMPTY_TREE)."""
    return tree.leaf_count


def tree_height(tree: MerkleTree) -> int:
    """
    Number of levels from the root down to the deepest leaf, inclusive.

    EMPTY_TREE has height 0 and a single leaf has height 1. Carried nodes
    make the tree unbalanced, so the left spine is not enough; every node
    is visited once using an explicit stack.
    """
    if isinstance(tree, EmptyTree):
        return 0

    height = 0
    stack: list[tuple[MerkleNode, int]] = [(tree, 1)]
    while stack:
        node, depth = stack.pop()
        height = max(height, depth)
        for child in (node.left, node.right):
            if isinstance(child, MerkleNode):
                stack.append((child, depth + 1))
    return height


def compute_tree_depth(num_leaves: int) -> int:
    """
    Height of the tree build_merkle_tree produces for ``num_leaves`` items.

    Each level halves the node count rounding up (the carried node survives),
    so this is 1 + ceil(log2(num_leaves)).

    Returns:
        Tree depth (0 for no leaves)
    """
    if num_leaves < 0:
        raise ValueError(f"Leaf count must be non-negative, got {num_leaves}")
    if num_leaves == 0:
        return 0

    depth = 1
    n = num_leaves
    while n > 1:
        n = (n + 1) // 2
        depth += 1
    return depth


def iter_leaf_digests(tree: MerkleTree) -> Iterator[bytes]:
    """Yield leaf digests left to right."""
    if isinstance(tree, EmptyTree):
        return

    stack: list[MerkleNode] = [tree]
    while stack:
        node = stack.pop()
        if node.is_leaf:
            yield node.digest
            continue
        # Right pushed first so the left subtree is visited first
        stack.append(node.right)
        stack.append(node.left)


__all__ = [
    "EmptyTree",
    "EMPTY_TREE",
    "MerkleNode",
    "MerkleTree",
    "make_leaf",
    "merkle_parent",
    "build_merkle_tree",
    "root_hash",
    "leaf_count",
    "tree_height",
    "compute_tree_depth",
    "iter_leaf_digests",
]
