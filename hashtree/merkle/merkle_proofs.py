"""
Merkle Proofs
Inclusion proof generation and verification.

This module provides:
- Position / ProofStep: one level of an inclusion proof
- get_proof: sibling path for a leaf index, ordered leaf-to-root
- validate: recompute a root from leaf content and a proof
- MerkleProof: a self-describing proof bundle
- MerkleProver / MerkleVerifier: class-based convenience wrappers

Fold Rule:
- RIGHT step: candidate = H(candidate + sibling)
- LEFT step:  candidate = H(sibling + candidate)

The verifier only compares digests. It does not re-derive the leaf index
from the LEFT/RIGHT sequence, and it never raises: malformed input makes
it return False.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Sequence

from hashtree.config.runtime import resolve_digest_function
from hashtree.crypto.hashing import (
    DIGEST_SIZE,
    DigestFunction,
    hash_canonical,
    hash_concat,
    to_hex,
)
from hashtree.merkle.merkle_tree import (
    ItemLike,
    MerkleNode,
    MerkleTree,
    build_merkle_tree,
)
from hashtree.schemas.canonical import encode_canonical
from hashtree.schemas.errors import (
    CanonicalizationException,
    HashTreeException,
    IndexOutOfBoundsException,
)


logger = logging.getLogger(__name__)


class Position(str, Enum):
    """Side of the path node on which a proof sibling sits."""
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class ProofStep:
    """
    One level of an inclusion proof.

    Attributes:
        position: Side the sibling sits on relative to the path node
        sibling_digest: Digest of the sibling subtree (32 bytes)
    """
    position: Position
    sibling_digest: bytes

    def __post_init__(self) -> None:
        # Accept "left"/"right" strings as well as Position members
        object.__setattr__(self, "position", Position(self.position))

    def __repr__(self) -> str:
        return f"ProofStep({self.position.name}, {to_hex(self.sibling_digest)})"


@dataclass(frozen=True)
class MerkleProof:
    """
    An inclusion proof bundled with what it proves.

    Attributes:
        leaf: Digest of the proven leaf
        index: 0-based position of the leaf in the original item list
        leaf_count: Number of leaves in the tree the proof was taken from
        steps: Sibling steps, leaf-to-root
        root: Root digest the proof is against
    """
    leaf: bytes
    index: int
    leaf_count: int
    steps: tuple[ProofStep, ...]
    root: bytes

    def __post_init__(self) -> None:
        """Validate proof structure."""
        if self.index < 0:
            raise ValueError(f"Leaf index must be non-negative, got {self.index}")
        # Accept any sequence, store a tuple so the bundle stays immutable
        object.__setattr__(self, "steps", tuple(self.steps))


def _descend(tree: MerkleTree, index: int) -> tuple[MerkleNode, list[ProofStep]]:
    """
    Walk from the root to leaf ``index``.

    Returns the leaf node and the sibling steps in root-to-leaf order.
    """
    count = tree.leaf_count
    if index < 0 or index >= count:
        raise IndexOutOfBoundsException(index=index, leaf_count=count)

    steps: list[ProofStep] = []
    current: MerkleNode = tree  # type: ignore[assignment]
    # Leaves strictly left of the current subtree
    base = 0

    while current.leaf_count > 1:
        left, right = current.left, current.right
        if index < base + left.leaf_count:
            steps.append(ProofStep(Position.RIGHT, right.digest))
            current = left
        else:
            base += left.leaf_count
            steps.append(ProofStep(Position.LEFT, left.digest))
            current = right

    return current, steps


def get_proof(tree: MerkleTree, index: int) -> list[ProofStep]:
    """
    Generate the inclusion proof for the leaf at ``index``.

    Args:
        tree: A tree from build_merkle_tree (or EMPTY_TREE)
        index: 0-based leaf index

    Returns:
        Proof steps ordered leaf-to-root; empty for a single-leaf tree

    Raises:
        IndexOutOfBoundsException: Unless 0 <= index < leaf_count(tree)
    """
    _, steps = _descend(tree, index)
    steps.reverse()
    logger.debug(f"Generated proof for leaf {index}: {len(steps)} steps")
    return steps


def build_merkle_proof(tree: MerkleTree, index: int) -> MerkleProof:
    """
    Generate a bundled proof carrying the leaf digest, index and root.

    Raises:
        IndexOutOfBoundsException: Unless 0 <= index < leaf_count(tree)
    """
    leaf, steps = _descend(tree, index)
    steps.reverse()
    return MerkleProof(
        leaf=leaf.digest,
        index=index,
        leaf_count=tree.leaf_count,
        steps=tuple(steps),
        root=tree.digest,  # type: ignore[union-attr]
    )


def _is_digest(value: Any) -> bool:
    return isinstance(value, bytes) and len(value) == DIGEST_SIZE


def _verifier_digest_function(hash_fn: DigestFunction | None) -> DigestFunction | None:
    """Resolve the digest function, or None when the configured one is unusable."""
    try:
        return resolve_digest_function(hash_fn)
    except HashTreeException as e:
        logger.debug(f"Rejecting proof: no usable digest function ({e.message})")
        return None


def validate_leaf_digest(
    leaf_digest: bytes,
    proof: Sequence[ProofStep],
    claimed_root: bytes,
    hash_fn: DigestFunction | None = None,
) -> bool:
    """
    Fold a proof starting from an already computed leaf digest.

    Args:
        leaf_digest: H(leaf_content)
        proof: Steps ordered leaf-to-root
        claimed_root: Trusted root digest
        hash_fn: Digest function; defaults to the configured algorithm

    Returns:
        True if the folded digest equals claimed_root, False otherwise
    """
    if not _is_digest(leaf_digest) or not _is_digest(claimed_root):
        logger.debug("Rejecting proof: leaf or root is not a 32-byte digest")
        return False
    if not isinstance(proof, (list, tuple)):
        logger.debug(f"Rejecting proof: expected a list of steps, got {type(proof).__name__}")
        return False

    hash_fn = _verifier_digest_function(hash_fn)
    if hash_fn is None:
        return False
    candidate = leaf_digest

    for level, step in enumerate(proof):
        if not isinstance(step, ProofStep) or not _is_digest(step.sibling_digest):
            logger.debug(f"Rejecting proof: malformed step at level {level}")
            return False
        if step.position == Position.RIGHT:
            candidate = hash_concat(candidate, step.sibling_digest, hash_fn)
        else:
            candidate = hash_concat(step.sibling_digest, candidate, hash_fn)

    if candidate != claimed_root:
        logger.debug(
            f"Root mismatch: computed {to_hex(candidate)}, claimed {to_hex(claimed_root)}"
        )
        return False
    return True


def validate(
    leaf_content: ItemLike,
    proof: Sequence[ProofStep],
    claimed_root: bytes,
    hash_fn: DigestFunction | None = None,
) -> bool:
    """
    Check that ``leaf_content`` is committed under ``claimed_root``.

    Algorithm:
    1. candidate = H(leaf_content)
    2. For each step leaf-to-root, fold the sibling in on its side
    3. Compare candidate with claimed_root byte-for-byte

    An empty proof succeeds only when H(leaf_content) is the root itself.

    Returns:
        True if the proof is valid, False otherwise (never raises)
    """
    if isinstance(leaf_content, str):
        try:
            leaf_content = leaf_content.encode("utf-8")
        except UnicodeEncodeError as e:
            logger.debug(f"Rejecting proof: leaf content is not valid UTF-8 ({e.reason})")
            return False
    elif isinstance(leaf_content, (bytearray, memoryview)):
        leaf_content = bytes(leaf_content)
    elif not isinstance(leaf_content, bytes):
        logger.debug(f"Rejecting proof: leaf content of type {type(leaf_content).__name__}")
        return False

    hash_fn = _verifier_digest_function(hash_fn)
    if hash_fn is None:
        return False
    return validate_leaf_digest(hash_fn(leaf_content), proof, claimed_root, hash_fn)


def verify_merkle_proof(proof: MerkleProof, hash_fn: DigestFunction | None = None) -> bool:
    """Verify a bundled proof against its own stored root."""
    return validate_leaf_digest(proof.leaf, proof.steps, proof.root, hash_fn)


class MerkleProver:
    """
    Convenience class for building trees and generating proofs.

    Provides static methods working from:
    - Raw items (bytes or str)
    - Structured records (canonically encoded before hashing)

    Example:
        >>> tree = MerkleProver.build([b"a", b"b", b"c"])
        >>> MerkleProver.prove(tree, 1)[0].position
        <Position.LEFT: 'left'>
    """

    @staticmethod
    def build(items: Sequence[ItemLike], hash_fn: DigestFunction | None = None) -> MerkleNode:
        """Build a tree from raw items."""
        return build_merkle_tree(items, hash_fn)

    @staticmethod
    def prove(tree: MerkleTree, index: int) -> list[ProofStep]:
        """Generate a leaf-to-root proof for the leaf at ``index``."""
        return get_proof(tree, index)

    @staticmethod
    def build_from_objects(
        objects: Sequence[Any],
        hash_fn: DigestFunction | None = None,
    ) -> MerkleNode:
        """
        Build a tree over structured records.

        Each record is encoded as canonical JSON bytes, which become the item.

        Raises:
            CanonicalizationException: If a record cannot be encoded
            EmptyInputException: If objects is empty
        """
        return build_merkle_tree([encode_canonical(obj) for obj in objects], hash_fn)

    @staticmethod
    def prove_object(
        objects: Sequence[Any],
        index: int,
        hash_fn: DigestFunction | None = None,
    ) -> MerkleProof:
        """Build a tree over records and return the bundled proof for one of them."""
        tree = MerkleProver.build_from_objects(objects, hash_fn)
        return build_merkle_proof(tree, index)


class MerkleVerifier:
    """
    Convenience class for verifying proofs.

    Example:
        >>> tree = MerkleProver.build([b"a", b"b"])
        >>> MerkleVerifier.validate(b"b", MerkleProver.prove(tree, 1), tree.digest)
        True
    """

    @staticmethod
    def validate(
        leaf_content: ItemLike,
        proof: Sequence[ProofStep],
        root: bytes,
        hash_fn: DigestFunction | None = None,
    ) -> bool:
        return validate(leaf_content, proof, root, hash_fn)

    @staticmethod
    def verify(proof: MerkleProof, hash_fn: DigestFunction | None = None) -> bool:
        return verify_merkle_proof(proof, hash_fn)

    @staticmethod
    def validate_object(
        obj: Any,
        proof: Sequence[ProofStep],
        root: bytes,
        hash_fn: DigestFunction | None = None,
    ) -> bool:
        """
        Verify a record is committed under ``root``.

        Records that cannot be canonically encoded are reported as invalid.
        """
        resolved = _verifier_digest_function(hash_fn)
        if resolved is None:
            return False
        try:
            leaf_digest = hash_canonical(obj, resolved)
        except CanonicalizationException as e:
            logger.debug(f"Rejecting proof: record not encodable ({e.message})")
            return False
        return validate_leaf_digest(leaf_digest, proof, root, resolved)


__all__ = [
    "Position",
    "ProofStep",
    "MerkleProof",
    "get_proof",
    "build_merkle_proof",
    "validate",
    "validate_leaf_digest",
    "verify_merkle_proof",
    "MerkleProver",
    "MerkleVerifier",
]
