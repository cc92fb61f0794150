"""Tests for IdentityService and the module-level identity functions."""

from __future__ import annotations

import base64
import json
import re
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from unittest.mock import patch

import pytest
from cryptography.hazmat.primitives import hashes, padding, serialization
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from fan_identity import (
    DecryptionError,
    EncryptionError,
    Identity,
    IdentityConfig,
    IdentityService,
    KeyGenerationError,
    VaultError,
    VaultKey,
    authenticate_identity,
    create_identity,
    default_vault,
    unlock_identity,
)
from fan_identity.crypto import derive_identifier, from_base64url

NAME = "alice"
PASSWORD = "correct horse battery staple"


@pytest.fixture(scope="module")
def identity() -> Identity:
    return create_identity(NAME, PASSWORD)


def decrypt_manually(identity: Identity, password: str) -> bytes:
    """Decrypt an identity's private key without using the package helpers."""
    salt = base64.b64decode(identity.salt)
    iv = base64.b64decode(identity.iv)
    ciphertext = base64.b64decode(identity.encrypted_private_key)

    kdf = PBKDF2HMAC(algorithm=hashes.SHA256(), length=32, salt=salt, iterations=65536)
    key = kdf.derive(password.encode("utf-8"))

    decryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).decryptor()
    padded = decryptor.update(ciphertext) + decryptor.finalize()
    unpadder = padding.PKCS7(128).unpadder()
    return unpadder.update(padded) + unpadder.finalize()


class TestCreateIdentity:
    """Tests for create_identity."""

    def test_identifier_format(self, identity: Identity) -> None:
        assert re.match(r"^did:fan:[0-9a-f]{32}$", identity.identifier)

    def test_name_verbatim(self, identity: Identity) -> None:
        assert identity.name == NAME

    def test_name_not_validated(self) -> None:
        """Empty and unusual names are stored as given."""
        created = create_identity("", "")
        assert created.name == ""
        assert create_identity("  Zoë 🙂\n", "pw").name == "  Zoë 🙂\n"

    def test_encoded_sizes(self, identity: Identity) -> None:
        assert len(base64.b64decode(identity.salt, validate=True)) == 8
        assert len(base64.b64decode(identity.iv, validate=True)) == 16
        ciphertext = base64.b64decode(identity.encrypted_private_key, validate=True)
        assert len(ciphertext) % 16 == 0

    def test_round_trip(self, identity: Identity) -> None:
        """The decrypted key belongs to the keypair the identifier was derived from."""
        pem = decrypt_manually(identity, PASSWORD)
        private_key = serialization.load_pem_private_key(pem, password=None)
        assert derive_identifier(private_key.public_key()) == identity.identifier

    def test_jwk_matches_private_key(self, identity: Identity) -> None:
        jwk = json.loads(identity.public_key_jwk)
        assert jwk["kty"] == "RSA"
        for member in ("n", "e"):
            assert not any(c in jwk[member] for c in "+/=")

        pem = decrypt_manually(identity, PASSWORD)
        private_key = serialization.load_pem_private_key(pem, password=None)
        numbers = private_key.public_key().public_numbers()
        assert int.from_bytes(from_base64url(jwk["n"]), "big") == numbers.n
        assert int.from_bytes(from_base64url(jwk["e"]), "big") == numbers.e

    def test_fresh_randomness_per_call(self, identity: Identity) -> None:
        """Same inputs give different identities, each still decryptable."""
        other = create_identity(NAME, PASSWORD)
        assert other.identifier != identity.identifier
        assert other.salt != identity.salt
        assert other.iv != identity.iv
        assert other.encrypted_private_key != identity.encrypted_private_key
        assert authenticate_identity(other, PASSWORD) is True

    def test_wrong_password_does_not_return_key(self, identity: Identity) -> None:
        """A wrong password yields a padding failure or bytes that are not the key."""
        try:
            plaintext = decrypt_manually(identity, "wrong password")
        except ValueError:
            return
        with pytest.raises(ValueError):
            serialization.load_pem_private_key(plaintext, password=None)

    def test_key_generation_failure(self) -> None:
        with patch(
            "fan_identity.crypto.keypair.rsa.generate_private_key",
            side_effect=ValueError("prime search exhausted"),
        ):
            with pytest.raises(KeyGenerationError, match="prime search exhausted"):
                create_identity(NAME, PASSWORD)

    def test_encryption_failure(self) -> None:
        with patch(
            "fan_identity.crypto.wrap.encrypt_cbc",
            side_effect=ValueError("padding error"),
        ):
            with pytest.raises(EncryptionError, match="padding error"):
                create_identity(NAME, PASSWORD)

    def test_does_not_touch_default_vault(self, identity: Identity) -> None:
        assert default_vault.is_set is False

    def test_identity_is_immutable(self, identity: Identity) -> None:
        from dataclasses import FrozenInstanceError

        with pytest.raises(FrozenInstanceError):
            identity.name = "mallory"  # type: ignore[misc]

    def test_concurrent_creation(self) -> None:
        """Concurrent calls share no key material or randomness."""
        with ThreadPoolExecutor(max_workers=3) as executor:
            futures = [executor.submit(create_identity, f"user{i}", PASSWORD) for i in range(3)]
            identities = [f.result() for f in futures]

        assert len({i.identifier for i in identities}) == 3
        assert len({i.salt for i in identities}) == 3
        assert len({i.iv for i in identities}) == 3
        for created in identities:
            assert authenticate_identity(created, PASSWORD) is True


class TestAuthenticate:
    """Tests for authenticate_identity."""

    def test_correct_password(self, identity: Identity) -> None:
        assert authenticate_identity(identity, PASSWORD) is True

    def test_wrong_password(self, identity: Identity) -> None:
        assert authenticate_identity(identity, "wrong") is False

    def test_unencodable_password(self, identity: Identity) -> None:
        """A password with a lone surrogate is rejected, not raised."""
        assert authenticate_identity(identity, "\ud800") is False

    def test_identifier_mismatch(self, identity: Identity) -> None:
        """A key that does not hash to the identifier is rejected."""
        tampered = replace(identity, identifier="did:fan:" + "0" * 32)
        assert authenticate_identity(tampered, PASSWORD) is False

    def test_service_iterations_must_match(self) -> None:
        service = IdentityService(IdentityConfig(kdf_iterations=70_000))
        created = service.create_identity(NAME, PASSWORD)
        assert service.authenticate(created, PASSWORD) is True
        assert authenticate_identity(created, PASSWORD) is False


class TestUnlock:
    """Tests for unlock_identity."""

    def test_unlock_sets_vault(self, identity: Identity) -> None:
        vault = VaultKey()
        private_key = unlock_identity(identity, PASSWORD, vault)

        assert derive_identifier(private_key.public_key()) == identity.identifier
        key = vault.get()
        assert key is not None
        assert len(key) == 32

    def test_unlock_wrong_password_leaves_vault_empty(self, identity: Identity) -> None:
        vault = VaultKey()
        with pytest.raises(DecryptionError):
            unlock_identity(identity, "wrong", vault)
        assert vault.is_set is False

    def test_unlock_identifier_mismatch(self, identity: Identity) -> None:
        vault = VaultKey()
        tampered = replace(identity, identifier="did:fan:" + "f" * 32)
        with pytest.raises(DecryptionError, match="does not match identity"):
            unlock_identity(tampered, PASSWORD, vault)
        assert vault.is_set is False

    def test_unlock_twice_into_same_vault(self, identity: Identity) -> None:
        vault = VaultKey()
        unlock_identity(identity, PASSWORD, vault)
        with pytest.raises(VaultError, match="already set"):
            unlock_identity(identity, PASSWORD, vault)


class TestIdentityConfig:
    """Tests for IdentityConfig."""

    def test_default_iterations(self) -> None:
        assert IdentityConfig().kdf_iterations == 65536

    def test_rejects_low_iterations(self) -> None:
        with pytest.raises(ValueError, match="at least 65536"):
            IdentityConfig(kdf_iterations=1000)

    def test_service_default_config(self) -> None:
        assert IdentityService().config.kdf_iterations == 65536
