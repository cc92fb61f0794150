"""RSA keypair generation for fan-identity."""

from __future__ import annotations

from dataclasses import dataclass

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from ..errors import KeyGenerationError
from .constants import RSA_KEY_SIZE, RSA_PUBLIC_EXPONENT


@dataclass(frozen=True)
class Keypair:
    """RSA-2048 keypair for a single identity.

    Attributes:
        private_key: The RSA private key. Never persisted unencrypted.
        public_key: The matching RSA public key.
    """

    private_key: rsa.RSAPrivateKey
    public_key: rsa.RSAPublicKey

    def __repr__(self) -> str:
        return f"Keypair(key_size={self.public_key.key_size})"


def generate_keypair() -> Keypair:
    """Generate a new RSA-2048 keypair from the OS random source.

    Returns:
        A new Keypair instance.

    Raises:
        KeyGenerationError: If the underlying key generation fails.
    """
    try:
        private_key = rsa.generate_private_key(
            public_exponent=RSA_PUBLIC_EXPONENT,
            key_size=RSA_KEY_SIZE,
        )
    except Exception as e:
        raise KeyGenerationError(f"RSA key generation failed: {e}") from e
    return Keypair(private_key=private_key, public_key=private_key.public_key())


def validate_keypair(keypair: Keypair) -> bool:
    """Validate that a keypair has the expected size and matching halves.

    Args:
        keypair: The keypair to validate.

    Returns:
        True if valid, False otherwise.
    """
    if keypair.private_key.key_size != RSA_KEY_SIZE:
        return False
    return keypair.private_key.public_key().public_numbers() == keypair.public_key.public_numbers()


def public_key_pem(public_key: rsa.RSAPublicKey) -> bytes:
    """Serialize a public key as SubjectPublicKeyInfo PEM (LF line endings)."""
    return public_key.public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )


def private_key_pem(private_key: rsa.RSAPrivateKey) -> bytes:
    """Serialize a private key as unencrypted PKCS#8 PEM (LF line endings)."""
    return private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )
