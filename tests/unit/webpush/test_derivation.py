"""Tests for aesgcm key derivation."""

import os

import pytest
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.kdf.hkdf import HKDF

from pushforge.webpush.derivation import (
    ContentKeys,
    build_context,
    derive_content_keys,
)
from pushforge.webpush.exceptions import DerivationError, WebPushErrorCode
from pushforge.webpush.providers import CryptographyProvider, EcdhKeyPair
from tests.fixtures.webpush import SubscriberKeys, uncompressed_point


class TestBuildContext:
    """Tests for the key derivation context string."""

    def test_layout(self) -> None:
        client = b"\x04" + b"\xaa" * 64
        local = b"\x04" + b"\xbb" * 64
        context = build_context(client, local)

        assert len(context) == 6 + 2 + 65 + 2 + 65
        assert context[:6] == b"P-256\x00"
        assert context[6:8] == b"\x00\x41"
        assert context[8:73] == client
        assert context[73:75] == b"\x00\x41"
        assert context[75:] == local


class TestDeriveContentKeys:
    """Tests for derive_content_keys."""

    @pytest.mark.asyncio
    async def test_matches_independent_derivation(self, subscriber: SubscriberKeys) -> None:
        """Nonce and key equal a step-by-step HKDF computation."""
        provider = CryptographyProvider()
        local_keys = await provider.generate_ecdh_key_pair()
        salt = os.urandom(16)

        keys = await derive_content_keys(provider, subscriber.public_key, subscriber.auth, local_keys, salt)

        shared = local_keys.private_key.exchange(ec.ECDH(), subscriber.private_key.public_key())
        prk = HKDF(hashes.SHA256(), 32, subscriber.auth, b"Content-Encoding: auth\x00").derive(shared)
        context = build_context(subscriber.public_key, local_keys.public_key)
        nonce = HKDF(hashes.SHA256(), 12, salt, b"Content-Encoding: nonce\x00" + context).derive(prk)
        cek = HKDF(hashes.SHA256(), 16, salt, b"Content-Encoding: aesgcm\x00" + context).derive(prk)

        assert keys.nonce == nonce
        assert keys.content_encryption_key == cek

    @pytest.mark.asyncio
    async def test_deterministic_for_fixed_inputs(self, subscriber: SubscriberKeys) -> None:
        provider = CryptographyProvider()
        local_keys = await provider.generate_ecdh_key_pair()
        salt = b"\x00" * 16

        first = await derive_content_keys(provider, subscriber.public_key, subscriber.auth, local_keys, salt)
        second = await derive_content_keys(provider, subscriber.public_key, subscriber.auth, local_keys, salt)
        assert first == second
        assert len(first.nonce) == 12
        assert len(first.content_encryption_key) == 16

    @pytest.mark.asyncio
    async def test_salt_changes_keys(self, subscriber: SubscriberKeys) -> None:
        provider = CryptographyProvider()
        local_keys = await provider.generate_ecdh_key_pair()

        first = await derive_content_keys(provider, subscriber.public_key, subscriber.auth, local_keys, b"\x00" * 16)
        second = await derive_content_keys(provider, subscriber.public_key, subscriber.auth, local_keys, b"\x01" * 16)
        assert first.nonce != second.nonce
        assert first.content_encryption_key != second.content_encryption_key

    @pytest.mark.asyncio
    async def test_point_not_on_curve(self, subscriber: SubscriberKeys) -> None:
        provider = CryptographyProvider()
        local_keys = await provider.generate_ecdh_key_pair()
        bogus_point = b"\x04" + b"\x01" * 64

        with pytest.raises(DerivationError) as exc_info:
            await derive_content_keys(provider, bogus_point, subscriber.auth, local_keys, os.urandom(16))
        assert exc_info.value.code == WebPushErrorCode.CRYPTO_DERIVATION_FAILED
        assert isinstance(exc_info.value.cause, ValueError)

    @pytest.mark.asyncio
    async def test_provider_failure_wrapped(self, subscriber: SubscriberKeys) -> None:
        class FailingHkdfProvider(CryptographyProvider):
            async def hkdf(self, ikm: bytes, salt: bytes, info: bytes, length: int) -> bytes:
                raise RuntimeError("hkdf unavailable")

        provider = FailingHkdfProvider()
        local_keys = await provider.generate_ecdh_key_pair()

        with pytest.raises(DerivationError, match="hkdf unavailable"):
            await derive_content_keys(provider, subscriber.public_key, subscriber.auth, local_keys, os.urandom(16))


class TestContentKeys:
    def test_repr_hides_key_material(self) -> None:
        keys = ContentKeys(nonce=b"\x01" * 12, content_encryption_key=b"\x02" * 16)
        assert "\\x01" not in repr(keys)
        assert "redacted" in repr(keys)


class TestEcdhKeyPair:
    @pytest.mark.asyncio
    async def test_generated_public_key_is_uncompressed_point(self) -> None:
        key_pair = await CryptographyProvider().generate_ecdh_key_pair()
        assert isinstance(key_pair, EcdhKeyPair)
        assert len(key_pair.public_key) == 65
        assert key_pair.public_key[0] == 0x04
        assert key_pair.public_key == uncompressed_point(key_pair.private_key.public_key())
