"""Default configuration constants for fan-identity."""

from .crypto.constants import IDENTIFIER_PREFIX, MIN_KDF_ITERATIONS

# Key derivation settings
DEFAULT_KDF_ITERATIONS = MIN_KDF_ITERATIONS

# Logger name shared by all modules
LOGGER_NAME = "fan_identity"

__all__ = ["DEFAULT_KDF_ITERATIONS", "IDENTIFIER_PREFIX", "LOGGER_NAME"]
