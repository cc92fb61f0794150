"""Type definitions for fan-identity."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TypedDict

from .constants import DEFAULT_KDF_ITERATIONS
from .crypto.constants import MIN_KDF_ITERATIONS
from .crypto.wrap import WrappedKey


class IdentityRecord(TypedDict):
    """Serialized identity as handed to the host application."""

    identifier: str
    name: str
    encrypted_private_key: str
    salt: str
    iv: str
    public_key_jwk: str


@dataclass
class IdentityConfig:
    """Configuration for IdentityService.

    Attributes:
        kdf_iterations: PBKDF2 iteration count used to wrap and unwrap
            private keys. Must be at least 65536.
    """

    kdf_iterations: int = DEFAULT_KDF_ITERATIONS

    def __post_init__(self) -> None:
        if self.kdf_iterations < MIN_KDF_ITERATIONS:
            raise ValueError(
                f"kdf_iterations must be at least {MIN_KDF_ITERATIONS}, got {self.kdf_iterations}"
            )


@dataclass(frozen=True)
class Identity:
    """A newly created, password-protected identity.

    Attributes:
        identifier: ``did:fan:`` identifier derived from the public key.
        name: Caller-supplied label, stored verbatim.
        encrypted_private_key: Base64 AES-256-CBC ciphertext of the private key PEM.
        salt: Base64 KDF salt (8 bytes).
        iv: Base64 cipher IV (16 bytes).
        public_key_jwk: Public key as a JWK JSON string.
    """

    identifier: str
    name: str
    encrypted_private_key: str
    salt: str
    iv: str
    public_key_jwk: str

    @property
    def wrapped_key(self) -> WrappedKey:
        """The wrapped private key parts of this identity."""
        return WrappedKey(ciphertext=self.encrypted_private_key, salt=self.salt, iv=self.iv)

    def to_dict(self) -> IdentityRecord:
        """Serialize to the record shape returned to the host."""
        return {
            "identifier": self.identifier,
            "name": self.name,
            "encrypted_private_key": self.encrypted_private_key,
            "salt": self.salt,
            "iv": self.iv,
            "public_key_jwk": self.public_key_jwk,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Identity:
        """Load an identity from a stored record.

        Args:
            data: A record previously produced by :meth:`to_dict`.

        Returns:
            The identity.

        Raises:
            InvalidIdentityDataError: If the record is malformed.
        """
        from .utils.validation import validate_identity_data

        validate_identity_data(data)
        return cls(
            identifier=data["identifier"],
            name=data["name"],
            encrypted_private_key=data["encrypted_private_key"],
            salt=data["salt"],
            iv=data["iv"],
            public_key_jwk=data["public_key_jwk"],
        )
