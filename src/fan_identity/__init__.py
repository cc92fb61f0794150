"""fan-identity.

Password-protected identity creation: an RSA-2048 keypair, a ``did:fan:``
identifier derived from the public key, the private key wrapped under a
password (PBKDF2-HMAC-SHA256 + AES-256-CBC), and the public key as a JWK.

Example:
    ```python
    from fan_identity import create_identity

    identity = create_identity("alice", "correct horse battery staple")
    print(identity.identifier)       # did:fan:<32 hex chars>
    record = identity.to_dict()      # hand this to your storage layer
    ```
"""

from .commands import CommandResult, available_commands, dispatch, invoke
from .constants import DEFAULT_KDF_ITERATIONS, IDENTIFIER_PREFIX
from .errors import (
    DecryptionError,
    EncryptionError,
    FanIdentityError,
    InvalidIdentityDataError,
    KeyGenerationError,
    UnknownCommandError,
    VaultError,
)
from .identity import (
    IdentityService,
    authenticate_identity,
    create_identity,
    unlock_identity,
)
from .types import Identity, IdentityConfig, IdentityRecord
from .vault import VaultKey, default_vault

__version__ = "0.1.0"

__all__ = [
    # Main API
    "IdentityService",
    "create_identity",
    "authenticate_identity",
    "unlock_identity",
    # Command dispatch
    "CommandResult",
    "available_commands",
    "dispatch",
    "invoke",
    # Vault
    "VaultKey",
    "default_vault",
    # Constants
    "DEFAULT_KDF_ITERATIONS",
    "IDENTIFIER_PREFIX",
    # Configuration
    "IdentityConfig",
    # Data types
    "Identity",
    "IdentityRecord",
    # Errors
    "FanIdentityError",
    "KeyGenerationError",
    "EncryptionError",
    "DecryptionError",
    "InvalidIdentityDataError",
    "VaultError",
    "UnknownCommandError",
    # Version
    "__version__",
]
