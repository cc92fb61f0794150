"""Content-addressed identifier derivation for fan-identity.

The identifier is the MD5 digest of the public key's SubjectPublicKeyInfo PEM,
hex encoded behind the ``did:fan:`` prefix. MD5 is not collision resistant,
but stored identifiers depend on this exact digest and length.
"""

from __future__ import annotations

import hashlib
import re

from cryptography.hazmat.primitives.asymmetric import rsa

from .constants import IDENTIFIER_DIGEST_SIZE, IDENTIFIER_PREFIX
from .keypair import public_key_pem

# Pattern for valid identifiers - prefix followed by 32 lowercase hex chars
IDENTIFIER_PATTERN = re.compile(
    rf"^{re.escape(IDENTIFIER_PREFIX)}[0-9a-f]{{{IDENTIFIER_DIGEST_SIZE * 2}}}$"
)


def derive_identifier(public_key: rsa.RSAPublicKey) -> str:
    """Derive the stable identifier for a public key.

    Args:
        public_key: The RSA public key.

    Returns:
        The identifier string, e.g. ``did:fan:9e107d9d372bb6826bd81d3542a419d6``.
    """
    digest = hashlib.md5(public_key_pem(public_key), usedforsecurity=False).hexdigest()
    return f"{IDENTIFIER_PREFIX}{digest}"


def is_valid_identifier(identifier: str) -> bool:
    """Check whether a string has the identifier format."""
    return IDENTIFIER_PATTERN.match(identifier) is not None
