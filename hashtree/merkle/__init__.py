"""
Merkle Tree and Inclusion Proofs
Deterministic Merkle tree construction + proof generation/verification.

This module provides:
- MerkleNode / EMPTY_TREE: immutable tree variants
- build_merkle_tree: Build a tree from ordered items
- root_hash / leaf_count: Tree queries
- get_proof: Leaf-to-root sibling path for one leaf
- validate: Check leaf content against a proof and a trusted root

Canonical Commitment Rules:
1. Leaf hashing: H(item_bytes)
2. Parent hashing: H(left + right)
3. Odd node at a level: carried up unchanged (never duplicated)
4. Empty input: rejected with EmptyInputException
5. Single leaf: root = H(item)

Usage:
    from hashtree.merkle import build_merkle_tree, get_proof, root_hash, validate

    tree = build_merkle_tree([b"A", b"B", b"C", b"D", b"E"])
    proof = get_proof(tree, 2)
    assert validate(b"C", proof, root_hash(tree))
"""
from .merkle_tree import (
    EMPTY_TREE,
    EmptyTree,
    MerkleNode,
    MerkleTree,
    build_merkle_tree,
    compute_tree_depth,
    iter_leaf_digests,
    leaf_count,
    make_leaf,
    merkle_parent,
    root_hash,
    tree_height,
)

from .merkle_proofs import (
    MerkleProof,
    MerkleProver,
    MerkleVerifier,
    Position,
    ProofStep,
    build_merkle_proof,
    get_proof,
    validate,
    validate_leaf_digest,
    verify_merkle_proof,
)


__all__ = [
    # Core types
    "EmptyTree",
    "EMPTY_TREE",
    "MerkleNode",
    "MerkleTree",
    "Position",
    "ProofStep",
    "MerkleProof",
    # Construction and queries
    "make_leaf",
    "merkle_parent",
    "build_merkle_tree",
    "root_hash",
    "leaf_count",
    "tree_height",
    "compute_tree_depth",
    "iter_leaf_digests",
    # Proofs
    "get_proof",
    "build_merkle_proof",
    "validate",
    "validate_leaf_digest",
    "verify_merkle_proof",
    # Convenience classes
    "MerkleProver",
    "MerkleVerifier",
]
