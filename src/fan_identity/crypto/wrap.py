"""Password-based private key wrapping for fan-identity.

Wrapping scheme:
    key = PBKDF2-HMAC-SHA256(password, salt[8], iterations, 32 bytes)
    ciphertext = AES-256-CBC(key, iv[16], PKCS7(PKCS#8 PEM of private key))

The ciphertext carries no authentication tag. A wrong password is detected
only through a padding or PEM parse failure on unwrap.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from cryptography.hazmat.primitives import hashes, padding, serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from ..errors import DecryptionError, EncryptionError
from .constants import (
    AES_BLOCK_SIZE,
    AES_IV_SIZE,
    AES_KEY_SIZE,
    KDF_SALT_SIZE,
    MIN_KDF_ITERATIONS,
)
from .keypair import private_key_pem
from .utils import from_base64, to_base64


@dataclass(frozen=True)
class WrappedKey:
    """A password-wrapped private key, base64 encoded for text records.

    Attributes:
        ciphertext: Base64 AES-256-CBC ciphertext of the PKCS#8 PEM.
        salt: Base64 KDF salt (8 bytes).
        iv: Base64 cipher IV (16 bytes).
    """

    ciphertext: str
    salt: str
    iv: str


def derive_key(password: str, salt: bytes, iterations: int = MIN_KDF_ITERATIONS) -> bytes:
    """Derive an AES-256 key from a password using PBKDF2-HMAC-SHA256.

    Args:
        password: The password, encoded as UTF-8.
        salt: The KDF salt.
        iterations: PBKDF2 iteration count.

    Returns:
        A 32-byte AES-256 key.
    """
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=AES_KEY_SIZE,
        salt=salt,
        iterations=iterations,
    )
    return kdf.derive(password.encode("utf-8"))


def encrypt_cbc(key: bytes, iv: bytes, plaintext: bytes) -> bytes:
    """PKCS7-pad and encrypt with AES-256-CBC."""
    padder = padding.PKCS7(AES_BLOCK_SIZE * 8).padder()
    padded = padder.update(plaintext) + padder.finalize()
    encryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).encryptor()
    return encryptor.update(padded) + encryptor.finalize()


def decrypt_cbc(key: bytes, iv: bytes, ciphertext: bytes) -> bytes:
    """Decrypt with AES-256-CBC and strip PKCS7 padding.

    Raises:
        ValueError: If the ciphertext length or the padding is invalid.
    """
    decryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).decryptor()
    padded = decryptor.update(ciphertext) + decryptor.finalize()
    unpadder = padding.PKCS7(AES_BLOCK_SIZE * 8).unpadder()
    return unpadder.update(padded) + unpadder.finalize()


def wrap_private_key(
    private_key: rsa.RSAPrivateKey,
    password: str,
    iterations: int = MIN_KDF_ITERATIONS,
) -> WrappedKey:
    """Encrypt a private key under a password-derived key.

    A fresh salt and IV are drawn independently from ``os.urandom`` on every
    call.

    Args:
        private_key: The RSA private key to protect.
        password: The password. No strength policy is applied.
        iterations: PBKDF2 iteration count.

    Returns:
        The base64-encoded ciphertext, salt and IV.

    Raises:
        EncryptionError: If the random source, serialization, padding or
            encryption fails.
    """
    try:
        salt = os.urandom(KDF_SALT_SIZE)
        iv = os.urandom(AES_IV_SIZE)
        key = derive_key(password, salt, iterations)
        ciphertext = encrypt_cbc(key, iv, private_key_pem(private_key))
    except Exception as e:
        raise EncryptionError(f"Private key encryption failed: {e}") from e

    return WrappedKey(
        ciphertext=to_base64(ciphertext),
        salt=to_base64(salt),
        iv=to_base64(iv),
    )


def unwrap_private_key(
    wrapped: WrappedKey,
    password: str,
    iterations: int = MIN_KDF_ITERATIONS,
) -> rsa.RSAPrivateKey:
    """Decrypt a wrapped private key.

    Args:
        wrapped: The wrapped key produced by :func:`wrap_private_key`.
        password: The password used when wrapping.
        iterations: PBKDF2 iteration count used when wrapping.

    Returns:
        The RSA private key.

    Raises:
        DecryptionError: If the password is wrong or the data is corrupted.
    """
    _, private_key = unwrap_with_key(wrapped, password, iterations)
    return private_key


def unwrap_with_key(
    wrapped: WrappedKey,
    password: str,
    iterations: int = MIN_KDF_ITERATIONS,
) -> tuple[bytes, rsa.RSAPrivateKey]:
    """Decrypt a wrapped private key and also return the derived AES key.

    Raises:
        DecryptionError: If the password is wrong or the data is corrupted.
    """
    try:
        salt = from_base64(wrapped.salt)
        iv = from_base64(wrapped.iv)
        ciphertext = from_base64(wrapped.ciphertext)
    except ValueError as e:
        raise DecryptionError(f"Failed to decode wrapped key: {e}") from e

    try:
        key = derive_key(password, salt, iterations)
        pem = decrypt_cbc(key, iv, ciphertext)
        private_key = serialization.load_pem_private_key(pem, password=None)
    except (ValueError, TypeError) as e:
        raise DecryptionError("Private key decryption failed. Check the password.") from e

    if not isinstance(private_key, rsa.RSAPrivateKey):
        raise DecryptionError("Decrypted key is not an RSA private key")

    return key, private_key
