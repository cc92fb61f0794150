"""Validation utilities for fan-identity."""

from __future__ import annotations

import json
from typing import Any

from ..crypto.constants import AES_BLOCK_SIZE, AES_IV_SIZE, JWK_KEY_TYPE, KDF_SALT_SIZE
from ..crypto.identifier import is_valid_identifier
from ..crypto.utils import from_base64
from ..errors import InvalidIdentityDataError

REQUIRED_FIELDS = (
    "identifier",
    "name",
    "encrypted_private_key",
    "salt",
    "iv",
    "public_key_jwk",
)


def validate_identity_data(data: dict[str, Any]) -> None:
    """Validate a stored identity record.

    The name is not checked beyond being a string; password policy and
    name policy belong to the host.

    Args:
        data: The record to validate.

    Raises:
        InvalidIdentityDataError: If a field is missing or malformed.
    """
    for field in REQUIRED_FIELDS:
        if field not in data:
            raise InvalidIdentityDataError(f"Missing required field: {field}")
        if not isinstance(data[field], str):
            raise InvalidIdentityDataError(f"Field '{field}' must be a string")

    if not is_valid_identifier(data["identifier"]):
        raise InvalidIdentityDataError(f"Invalid identifier format: {data['identifier']!r}")

    _validate_base64_size("salt", data["salt"], KDF_SALT_SIZE)
    _validate_base64_size("iv", data["iv"], AES_IV_SIZE)

    try:
        ciphertext = from_base64(data["encrypted_private_key"])
    except ValueError as e:
        raise InvalidIdentityDataError(f"Failed to decode encrypted_private_key: {e}") from e
    if not ciphertext or len(ciphertext) % AES_BLOCK_SIZE != 0:
        raise InvalidIdentityDataError(
            f"Invalid encrypted_private_key size: {len(ciphertext)} bytes, "
            f"expected a multiple of {AES_BLOCK_SIZE}"
        )

    try:
        jwk = json.loads(data["public_key_jwk"])
    except json.JSONDecodeError as e:
        raise InvalidIdentityDataError(f"Failed to parse public_key_jwk as JSON: {e}") from e
    if not isinstance(jwk, dict) or jwk.get("kty") != JWK_KEY_TYPE:
        raise InvalidIdentityDataError(f"public_key_jwk must be a JWK with kty={JWK_KEY_TYPE!r}")


def _validate_base64_size(field: str, value: str, expected: int) -> None:
    """Validate a base64 field decodes to exactly ``expected`` bytes."""
    try:
        decoded = from_base64(value)
    except ValueError as e:
        raise InvalidIdentityDataError(f"Failed to decode {field}: {e}") from e
    if len(decoded) != expected:
        raise InvalidIdentityDataError(
            f"Invalid {field} size: {len(decoded)} bytes, expected {expected}"
        )
