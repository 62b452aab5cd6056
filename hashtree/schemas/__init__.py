"""
Error taxonomy and canonical record encoding.
"""
from .canonical import (
    CANONICAL_JSON_SEPARATORS,
    canonicalize_value,
    dumps_canonical,
    encode_canonical,
    format_datetime_canonical,
)
from .errors import (
    CanonicalizationException,
    ConfigurationException,
    DigestWidthException,
    EmptyInputException,
    EmptyTreeException,
    ErrorCodes,
    HashTreeError,
    HashTreeException,
    IndexOutOfBoundsError,
    IndexOutOfBoundsException,
    UnsupportedDigestException,
)

__all__ = [
    # Canonical encoding
    "CANONICAL_JSON_SEPARATORS",
    "canonicalize_value",
    "dumps_canonical",
    "encode_canonical",
    "format_datetime_canonical",
    # Errors
    "ErrorCodes",
    "HashTreeError",
    "IndexOutOfBoundsError",
    "HashTreeException",
    "EmptyInputException",
    "EmptyTreeException",
    "IndexOutOfBoundsException",
    "DigestWidthException",
    "UnsupportedDigestException",
    "CanonicalizationException",
    "ConfigurationException",
]
