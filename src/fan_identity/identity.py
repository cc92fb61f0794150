"""IdentityService - creation and unlocking of password-protected identities."""

from __future__ import annotations

import logging

from cryptography.hazmat.primitives.asymmetric import rsa

from .constants import LOGGER_NAME
from .crypto import (
    derive_identifier,
    generate_keypair,
    public_key_to_jwk,
    unwrap_private_key,
    unwrap_with_key,
    wrap_private_key,
)
from .errors import DecryptionError
from .types import Identity, IdentityConfig
from .vault import VaultKey

logger = logging.getLogger(LOGGER_NAME)


class IdentityService:
    """Create identities and unlock their private keys.

    Each call is independent: keys, salts and IVs are call-local and nothing
    is cached on the service, so one instance may be shared across threads.

    Example:
        ```python
        service = IdentityService()
        identity = service.create_identity("alice", "correct horse battery staple")
        print(identity.identifier)
        assert service.authenticate(identity, "correct horse battery staple")
        ```
    """

    def __init__(self, config: IdentityConfig | None = None) -> None:
        """Initialize the service.

        Args:
            config: Service configuration. Defaults to ``IdentityConfig()``.
        """
        self._config = config or IdentityConfig()

    @property
    def config(self) -> IdentityConfig:
        """Get the service configuration."""
        return self._config

    def create_identity(self, name: str, password: str) -> Identity:
        """Create a new identity protected by a password.

        Generates an RSA-2048 keypair, derives the identifier from the public
        key, wraps the private key under the password and exports the public
        key as a JWK. Neither the name nor the password is validated.

        Args:
            name: Human-readable label, stored verbatim.
            password: Password protecting the private key.

        Returns:
            The new identity.

        Raises:
            KeyGenerationError: If keypair generation fails.
            EncryptionError: If wrapping the private key fails.
        """
        keypair = generate_keypair()
        logger.debug("Generated RSA-%d keypair", keypair.public_key.key_size)

        identifier = derive_identifier(keypair.public_key)
        wrapped = wrap_private_key(keypair.private_key, password, self._config.kdf_iterations)
        public_key_jwk = public_key_to_jwk(keypair.public_key)

        logger.debug("Created identity %s", identifier)
        return Identity(
            identifier=identifier,
            name=name,
            encrypted_private_key=wrapped.ciphertext,
            salt=wrapped.salt,
            iv=wrapped.iv,
            public_key_jwk=public_key_jwk,
        )

    def authenticate(self, identity: Identity, password: str) -> bool:
        """Check whether a password opens an identity's private key.

        The recovered key must also match the identity's identifier.

        Args:
            identity: The identity to check.
            password: The candidate password.

        Returns:
            True if the password is correct, False otherwise.
        """
        try:
            private_key = unwrap_private_key(
                identity.wrapped_key, password, self._config.kdf_iterations
            )
        except DecryptionError:
            logger.debug("Authentication failed for %s", identity.identifier)
            return False
        return derive_identifier(private_key.public_key()) == identity.identifier

    def unlock(self, identity: Identity, password: str, vault: VaultKey) -> rsa.RSAPrivateKey:
        """Unlock an identity and store the derived key in a vault.

        Args:
            identity: The identity to unlock.
            password: The identity's password.
            vault: The vault slot receiving the derived symmetric key.

        Returns:
            The identity's RSA private key.

        Raises:
            DecryptionError: If the password is wrong, the data is corrupted,
                or the key does not belong to the identity.
            VaultError: If the vault is already set.
        """
        key, private_key = unwrap_with_key(
            identity.wrapped_key, password, self._config.kdf_iterations
        )
        if derive_identifier(private_key.public_key()) != identity.identifier:
            raise DecryptionError(
                f"Decrypted private key does not match identity {identity.identifier}"
            )
        vault.set(key)
        logger.debug("Unlocked identity %s", identity.identifier)
        return private_key


_default_service = IdentityService()


def create_identity(name: str, password: str) -> Identity:
    """Create a new identity with the default configuration.

    See :meth:`IdentityService.create_identity`.
    """
    return _default_service.create_identity(name, password)


def authenticate_identity(identity: Identity, password: str) -> bool:
    """Check a password against an identity with the default configuration."""
    return _default_service.authenticate(identity, password)


def unlock_identity(identity: Identity, password: str, vault: VaultKey) -> rsa.RSAPrivateKey:
    """Unlock an identity into a vault with the default configuration."""
    return _default_service.unlock(identity, password, vault)
