"""
hashtree - Merkle hash trees with compact inclusion proofs.

Usage:
    from hashtree import build_merkle_tree, get_proof, root_hash, validate
"""

__version__ = "0.1.0"

from hashtree.merkle import (
    EMPTY_TREE,
    MerkleNode,
    MerkleProof,
    Position,
    ProofStep,
    build_merkle_tree,
    get_proof,
    leaf_count,
    root_hash,
    validate,
)
from hashtree.schemas.errors import (
    EmptyInputException,
    EmptyTreeException,
    HashTreeException,
    IndexOutOfBoundsException,
)

__all__ = [
    "EMPTY_TREE",
    "MerkleNode",
    "MerkleProof",
    "Position",
    "ProofStep",
    "build_merkle_tree",
    "root_hash",
    "leaf_count",
    "get_proof",
    "validate",
    "HashTreeException",
    "EmptyInputException",
    "EmptyTreeException",
    "IndexOutOfBoundsException",
]
