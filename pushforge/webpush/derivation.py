"""
Key derivation for the ``aesgcm`` Web Push content coding.

ECDH shared secret -> HKDF pseudo-random key -> context -> nonce and
content-encryption key. The order of the steps is fixed by the protocol.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass

from pushforge.webpush.exceptions import DerivationError, WebPushError
from pushforge.webpush.providers.base import BaseCryptoProvider, EcdhKeyPair

AUTH_INFO = b"Content-Encoding: auth\x00"
NONCE_INFO = b"Content-Encoding: nonce\x00"
CEK_INFO = b"Content-Encoding: aesgcm\x00"
CONTEXT_LABEL = b"P-256\x00"

SHARED_SECRET_SIZE = 32
PRK_SIZE = 32
NONCE_SIZE = 12
CEK_SIZE = 16


@dataclass(frozen=True)
class ContentKeys:
    """Per-message AES-GCM parameters. Never logged."""

    nonce: bytes
    content_encryption_key: bytes

    def __repr__(self) -> str:
        return "ContentKeys(<redacted>)"


def build_context(client_public_key: bytes, local_public_key: bytes) -> bytes:
    """``"P-256\\0"`` followed by each public key with a 16-bit big-endian length prefix."""
    return b"".join(
        (
            CONTEXT_LABEL,
            struct.pack(">H", len(client_public_key)),
            client_public_key,
            struct.pack(">H", len(local_public_key)),
            local_public_key,
        )
    )


async def derive_content_keys(
    provider: BaseCryptoProvider,
    client_public_key: bytes,
    auth_secret: bytes,
    local_keys: EcdhKeyPair,
    salt: bytes,
) -> ContentKeys:
    """
    Derive the nonce and content-encryption key for one message.

    Args:
        provider: Crypto provider performing ECDH and HKDF
        client_public_key: Subscriber ``p256dh`` key, 65-byte uncompressed point
        auth_secret: Subscriber 16-byte ``auth`` secret
        local_keys: Ephemeral key pair generated for this message
        salt: 16 random bytes generated for this message

    Returns:
        ContentKeys with a 12-byte nonce and a 16-byte key

    Raises:
        DerivationError: any provider failure
    """
    try:
        client_key = await provider.import_ecdh_public_key(client_public_key[1:33], client_public_key[33:65])
        shared_secret = await provider.derive_shared_secret(local_keys.private_key, client_key)
        if len(shared_secret) != SHARED_SECRET_SIZE:
            raise DerivationError(f"ECDH produced {len(shared_secret)} bytes, expected {SHARED_SECRET_SIZE}")

        pseudo_random_key = await provider.hkdf(shared_secret, auth_secret, AUTH_INFO, PRK_SIZE)

        # The context uses the points as the provider exports them
        context = build_context(
            await provider.export_public_key(client_key),
            local_keys.public_key,
        )
        nonce = await provider.hkdf(pseudo_random_key, salt, NONCE_INFO + context, NONCE_SIZE)
        content_encryption_key = await provider.hkdf(pseudo_random_key, salt, CEK_INFO + context, CEK_SIZE)
    except WebPushError:
        raise
    except Exception as e:
        raise DerivationError(f"Key derivation failed: {e}", cause=e) from e

    return ContentKeys(nonce=nonce, content_encryption_key=content_encryption_key)
