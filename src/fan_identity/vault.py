"""Set-once vault key slot for fan-identity.

The vault holds the symmetric key derived while unlocking an identity. It is
passed explicitly to the operations that fill it. A module-level
``default_vault`` exists for hosts that want a single process-wide slot; the
identity creation path never reads or writes it.
"""

from __future__ import annotations

import logging
import threading

from .constants import LOGGER_NAME
from .errors import VaultError

logger = logging.getLogger(LOGGER_NAME)


class VaultKey:
    """A key slot that can be assigned at most once and read many times.

    Example:
        ```python
        vault = VaultKey()
        private_key = unlock_identity(identity, password, vault)
        key = vault.get()
        ```
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._key: bytes | None = None

    @property
    def is_set(self) -> bool:
        """Whether the slot has been assigned."""
        return self._key is not None

    def set(self, key: bytes) -> None:
        """Assign the key.

        Args:
            key: The symmetric key to store.

        Raises:
            VaultError: If the key is empty or the slot is already assigned.
        """
        if not self.try_set(key):
            raise VaultError("Vault key is already set")

    def try_set(self, key: bytes) -> bool:
        """Assign the key unless the slot is already assigned.

        Returns:
            True if this call assigned the key, False otherwise.

        Raises:
            VaultError: If the key is empty.
        """
        if not key:
            raise VaultError("Vault key cannot be empty")
        with self._lock:
            if self._key is not None:
                return False
            self._key = bytes(key)
        logger.debug("Vault key set")
        return True

    def get(self) -> bytes | None:
        """Return the stored key, or None if the slot is unassigned."""
        return self._key

    def __repr__(self) -> str:
        return f"VaultKey(is_set={self.is_set})"


default_vault = VaultKey()
