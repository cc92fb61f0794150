"""Cryptographic operations for fan-identity."""

from .constants import AES_IV_SIZE, KDF_SALT_SIZE, MIN_KDF_ITERATIONS, RSA_KEY_SIZE
from .identifier import IDENTIFIER_PATTERN, derive_identifier, is_valid_identifier
from .jwk import public_key_from_jwk, public_key_to_jwk
from .keypair import Keypair, generate_keypair, validate_keypair
from .utils import from_base64, from_base64url, to_base64, to_base64url
from .wrap import (
    WrappedKey,
    derive_key,
    unwrap_private_key,
    unwrap_with_key,
    wrap_private_key,
)

__all__ = [
    "AES_IV_SIZE",
    "IDENTIFIER_PATTERN",
    "KDF_SALT_SIZE",
    "MIN_KDF_ITERATIONS",
    "RSA_KEY_SIZE",
    "Keypair",
    "WrappedKey",
    "derive_identifier",
    "derive_key",
    "from_base64",
    "from_base64url",
    "generate_keypair",
    "is_valid_identifier",
    "public_key_from_jwk",
    "public_key_to_jwk",
    "to_base64",
    "to_base64url",
    "unwrap_private_key",
    "unwrap_with_key",
    "validate_keypair",
    "wrap_private_key",
]
