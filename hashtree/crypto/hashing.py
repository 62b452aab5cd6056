"""
Hashing Utilities
Digest functions and composition helpers for Merkle commitments.

This module provides:
- SHA-256 hashing for raw bytes (the default digest function)
- A registry of 32-byte hashlib digest functions selectable by name
- Leaf and parent composition rules
- Hex encoding with 0x prefix (for logs and error details)

Composition Rules (Hard Contracts):
1. Leaf: H(item_bytes), no prefix byte
2. Parent: H(left + right), raw concatenation of two 32-byte digests
"""
from __future__ import annotations

import hashlib
from typing import Any, Callable

from hashtree.schemas.canonical import encode_canonical
from hashtree.schemas.errors import DigestWidthException, UnsupportedDigestException


# Width of every digest in a tree, in bytes
DIGEST_SIZE: int = 32

DigestFunction = Callable[[bytes], bytes]


def sha256(data: bytes) -> bytes:
    """
    Compute SHA-256 hash of raw bytes.

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).digest()


def sha3_256(data: bytes) -> bytes:
    return hashlib.sha3_256(data).digest()


def blake2b_256(data: bytes) -> bytes:
    return hashlib.blake2b(data, digest_size=DIGEST_SIZE).digest()


def blake2s_256(data: bytes) -> bytes:
    return hashlib.blake2s(data).digest()


DIGEST_FUNCTIONS: dict[str, DigestFunction] = {
    "sha256": sha256,
    "sha3_256": sha3_256,
    "blake2b": blake2b_256,
    "blake2s": blake2s_256,
}


def get_digest_function(algorithm: str) -> DigestFunction:
    """
    Look up a registered digest function by name.

    Args:
        algorithm: Registry key, case-insensitive (e.g. "sha256", "blake2b")

    Returns:
        Function mapping bytes to a 32-byte digest

    Raises:
        UnsupportedDigestException: If the name is not registered
    """
    try:
        return DIGEST_FUNCTIONS[algorithm.lower()]
    except KeyError:
        raise UnsupportedDigestException(algorithm) from None


def check_digest(digest: bytes, hash_fn: DigestFunction | None = None) -> bytes:
    """
    Ensure a digest function produced a DIGEST_SIZE-byte value.

    Raises:
        DigestWidthException: On any other width or a non-bytes result
    """
    if not isinstance(digest, bytes) or len(digest) != DIGEST_SIZE:
        actual = len(digest) if isinstance(digest, (bytes, bytearray)) else None
        name = getattr(hash_fn, "__name__", repr(hash_fn)) if hash_fn else "digest"
        raise DigestWidthException(
            f"{name} must return {DIGEST_SIZE} bytes, got "
            f"{actual if actual is not None else type(digest).__name__}",
            expected=DIGEST_SIZE,
            actual=actual,
        )
    return digest


def hash_leaf(data: bytes, hash_fn: DigestFunction = sha256) -> bytes:
    """
    Hash a leaf item: H(data).

    Args:
        data: Raw item bytes
        hash_fn: Digest function

    Returns:
        32-byte leaf digest
    """
    return hash_fn(data)


def hash_concat(left: bytes, right: bytes, hash_fn: DigestFunction = sha256) -> bytes:
    """
    Hash the concatenation of two digests: H(left + right).

    This is the parent rule for internal Merkle nodes. No separator or
    domain prefix is inserted.
    """
    return hash_fn(left + right)


def hash_canonical(obj: Any, hash_fn: DigestFunction = sha256) -> bytes:
    """
    Leaf digest of a structured record.

    Rule: leaf = H(dumps_canonical(obj).encode("utf-8"))

    Raises:
        CanonicalizationException: If the record cannot be canonically encoded
    """
    return hash_fn(encode_canonical(obj))


def to_hex(data: bytes) -> str:
    """
    Convert bytes to hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + data.hex()


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
