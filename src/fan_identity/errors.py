"""Error hierarchy for fan-identity."""

from __future__ import annotations


class FanIdentityError(Exception):
    """Base exception for all fan-identity errors."""

    pass


class KeyGenerationError(FanIdentityError):
    """Asymmetric keypair generation failure.

    Raised when the secure random source or the prime search fails.
    The call may be retried; a retry draws fresh randomness.
    """

    pass


class EncryptionError(FanIdentityError):
    """Private key wrapping failure (serialization, padding or cipher)."""

    pass


class DecryptionError(FanIdentityError):
    """Private key unwrapping failure.

    Raised for a wrong password as well as for corrupted ciphertext; the two
    cannot be told apart because the ciphertext carries no integrity tag.
    """

    pass


class InvalidIdentityDataError(FanIdentityError):
    """A stored identity record is missing fields or is malformed."""

    pass


class VaultError(FanIdentityError):
    """Vault key slot misuse, such as assigning it twice."""

    pass


class UnknownCommandError(FanIdentityError):
    """Dispatch to a command that is not registered.

    Attributes:
        command: The requested command name.
    """

    def __init__(self, command: str) -> None:
        self.command = command
        super().__init__(f"Unknown command: {command}")
