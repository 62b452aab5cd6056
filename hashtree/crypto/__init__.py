"""
Digest functions and hashing helpers.
"""
from .hashing import (
    DIGEST_FUNCTIONS,
    DIGEST_SIZE,
    DigestFunction,
    blake2b_256,
    blake2s_256,
    check_digest,
    get_digest_function,
    hash_canonical,
    hash_concat,
    hash_leaf,
    sha256,
    sha3_256,
    to_hex,
)

__all__ = [
    "DIGEST_SIZE",
    "DIGEST_FUNCTIONS",
    "DigestFunction",
    "sha256",
    "sha3_256",
    "blake2b_256",
    "blake2s_256",
    "get_digest_function",
    "check_digest",
    "hash_leaf",
    "hash_concat",
    "hash_canonical",
    "to_hex",
]
