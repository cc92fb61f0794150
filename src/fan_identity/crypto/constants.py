"""Cryptographic constants for fan-identity."""

# RSA keypair parameters
RSA_KEY_SIZE = 2048
RSA_PUBLIC_EXPONENT = 65537

# PBKDF2-HMAC-SHA256 key derivation
KDF_SALT_SIZE = 8
MIN_KDF_ITERATIONS = 65_536

# AES-256-CBC constants
AES_KEY_SIZE = 32
AES_IV_SIZE = 16
AES_BLOCK_SIZE = 16

# MD5 digest of the public key PEM, rendered as hex
IDENTIFIER_DIGEST_SIZE = 16

# JWK key type for exported public keys
JWK_KEY_TYPE = "RSA"

# Identifier scheme prefix
IDENTIFIER_PREFIX = "did:fan:"
