"""
Hashing Unit Tests
Tests for hashtree/crypto/hashing.py

Tests:
- sha256 known values
- digest registry lookup and widths
- leaf/parent composition rules
- to_hex formatting
"""
import hashlib

import pytest

from hashtree.crypto.hashing import (
    DIGEST_FUNCTIONS,
    DIGEST_SIZE,
    check_digest,
    get_digest_function,
    hash_canonical,
    hash_concat,
    hash_leaf,
    sha256,
    sha3_256,
    to_hex,
)
from hashtree.schemas.errors import (
    DigestWidthException,
    ErrorCodes,
    UnsupportedDigestException,
)


class TestSha256:
    """Tests for sha256() function."""

    def test_sha256_known_value(self):
        result = sha256(b"hello")

        assert result.hex() == "2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824"
        assert len(result) == 32

    def test_sha256_empty_bytes(self):
        assert sha256(b"") == hashlib.sha256(b"").digest()


class TestDigestRegistry:
    """Tests for the named digest function registry."""

    @pytest.mark.parametrize("name", sorted(DIGEST_FUNCTIONS))
    def test_registered_functions_are_32_bytes(self, name):
        assert len(get_digest_function(name)(b"data")) == DIGEST_SIZE

    def test_lookup_is_case_insensitive(self):
        assert get_digest_function("SHA256") is sha256
        assert get_digest_function("Sha3_256") is sha3_256

    def test_blake2b_uses_32_byte_output(self):
        expected = hashlib.blake2b(b"data", digest_size=32).digest()

        assert get_digest_function("blake2b")(b"data") == expected

    def test_unknown_algorithm_raises(self):
        with pytest.raises(UnsupportedDigestException) as exc_info:
            get_digest_function("md5")

        assert exc_info.value.code == ErrorCodes.UNSUPPORTED_DIGEST
        assert exc_info.value.details["algorithm"] == "md5"


class TestCheckDigest:
    """Tests for check_digest()."""

    def test_accepts_32_bytes(self):
        digest = sha256(b"x")

        assert check_digest(digest) is digest

    def test_rejects_other_widths(self):
        with pytest.raises(DigestWidthException):
            check_digest(b"\x00" * 20)

    def test_rejects_non_bytes(self):
        with pytest.raises(DigestWidthException) as exc_info:
            check_digest("0" * 32)

        assert "str" in exc_info.value.message


class TestComposition:
    """Tests for leaf and parent composition."""

    def test_leaf_is_plain_hash(self):
        """No domain-separation prefix on leaves."""
        assert hash_leaf(b"A") == sha256(b"A")

    def test_concat_is_hash_of_concatenation(self):
        left, right = sha256(b"left"), sha256(b"right")

        assert hash_concat(left, right) == sha256(left + right)

    def test_concat_order_matters(self):
        a, b = sha256(b"a"), sha256(b"b")

        assert hash_concat(a, b) != hash_concat(b, a)

    def test_composition_with_alternate_function(self):
        assert hash_leaf(b"A", sha3_256) == hashlib.sha3_256(b"A").digest()

    def test_hash_canonical_ignores_key_order(self):
        assert hash_canonical({"b": 2, "a": 1}) == hash_canonical({"a": 1, "b": 2})
        assert hash_canonical({"a": 1, "b": 2}) == sha256(b'{"a":1,"b":2}')


class TestHexConversion:
    """Tests for to_hex()."""

    def test_to_hex_prefix(self):
        assert to_hex(bytes.fromhex("deadbeef")) == "0xdeadbeef"

    def test_to_hex_digest_length(self):
        assert len(to_hex(sha256(b"x"))) == 2 + 2 * DIGEST_SIZE
