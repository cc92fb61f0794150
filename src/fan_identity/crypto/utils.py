"""Base64 encoding/decoding utilities for fan-identity."""

import base64
import binascii
import re

_BASE64URL_PATTERN = re.compile(r"^[A-Za-z0-9_-]*$")


class Base64URLDecodeError(ValueError):
    """Raised when a string is not unpadded base64url."""


def to_base64url(data: bytes) -> str:
    """Encode bytes to URL-safe base64 without padding.

    Args:
        data: The bytes to encode.

    Returns:
        URL-safe base64 string without padding.
    """
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def from_base64url(s: str) -> bytes:
    """Decode an unpadded URL-safe base64 string to bytes.

    Args:
        s: The base64url string to decode.

    Returns:
        The decoded bytes.

    Raises:
        Base64URLDecodeError: If the string contains ``+``, ``/``, ``=`` or
            any other character outside the base64url alphabet.
    """
    if any(c in s for c in "+/="):
        raise Base64URLDecodeError("Base64URL string contains forbidden characters")
    if not _BASE64URL_PATTERN.match(s):
        raise Base64URLDecodeError("Base64URL string contains non-Base64URL characters")
    padding = 4 - (len(s) % 4)
    if padding != 4:
        s += "=" * padding
    try:
        return base64.urlsafe_b64decode(s)
    except binascii.Error as e:
        raise Base64URLDecodeError(f"Invalid Base64URL string: {e}") from e


def to_base64(data: bytes) -> str:
    """Encode bytes to standard base64.

    Args:
        data: The bytes to encode.

    Returns:
        Standard base64 string with padding.
    """
    return base64.b64encode(data).decode("ascii")


def from_base64(s: str) -> bytes:
    """Decode a standard base64 string to bytes.

    Args:
        s: The base64 string to decode.

    Returns:
        The decoded bytes.

    Raises:
        binascii.Error: If the string is not valid padded base64.
    """
    return base64.b64decode(s, validate=True)


def int_to_bytes(value: int) -> bytes:
    """Encode a non-negative integer as minimal big-endian bytes."""
    return value.to_bytes(max(1, (value.bit_length() + 7) // 8), "big")
