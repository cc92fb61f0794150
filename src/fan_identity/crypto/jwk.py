"""JWK export and import of RSA public keys for fan-identity."""

from __future__ import annotations

import json
from typing import Any

from cryptography.hazmat.primitives.asymmetric import rsa

from .constants import JWK_KEY_TYPE
from .utils import from_base64url, int_to_bytes, to_base64url


def public_key_to_jwk_dict(public_key: rsa.RSAPublicKey) -> dict[str, str]:
    """Build the minimal JWK members for an RSA public key.

    Args:
        public_key: The RSA public key.

    Returns:
        A dict with ``kty``, ``n`` and ``e``.
    """
    numbers = public_key.public_numbers()
    return {
        "kty": JWK_KEY_TYPE,
        "n": to_base64url(int_to_bytes(numbers.n)),
        "e": to_base64url(int_to_bytes(numbers.e)),
    }


def public_key_to_jwk(public_key: rsa.RSAPublicKey) -> str:
    """Export an RSA public key as a compact JWK JSON string.

    Args:
        public_key: The RSA public key.

    Returns:
        JSON such as ``{"kty":"RSA","n":"...","e":"AQAB"}``.
    """
    return json.dumps(public_key_to_jwk_dict(public_key), separators=(",", ":"))


def public_key_from_jwk(jwk: str | dict[str, Any]) -> rsa.RSAPublicKey:
    """Rebuild an RSA public key from a JWK.

    Args:
        jwk: The JWK as a JSON string or an already parsed dict.

    Returns:
        The RSA public key.

    Raises:
        ValueError: If the JWK is not an RSA key or its members are invalid.
    """
    data = json.loads(jwk) if isinstance(jwk, str) else jwk
    if not isinstance(data, dict):
        raise ValueError("JWK must be a JSON object")
    if data.get("kty") != JWK_KEY_TYPE:
        raise ValueError(f"Unsupported JWK key type: {data.get('kty')}, expected {JWK_KEY_TYPE}")
    for member in ("n", "e"):
        if not isinstance(data.get(member), str):
            raise ValueError(f"Missing required JWK member: {member}")

    n = int.from_bytes(from_base64url(data["n"]), "big")
    e = int.from_bytes(from_base64url(data["e"]), "big")
    return rsa.RSAPublicNumbers(e=e, n=n).public_key()
