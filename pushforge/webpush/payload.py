"""
Payload framing and encryption.

A record is ``uint16be(pad_len) || pad_len zero bytes || payload``, encrypted
with AES-128-GCM. The whole record must fit in 4078 bytes so that, with the
16-byte tag, the body stays within the 4096-byte push service limit.
"""

from __future__ import annotations

import logging
import secrets
import struct
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from pushforge.configs import configs
from pushforge.webpush.derivation import ContentKeys
from pushforge.webpush.encoding import canonical_json
from pushforge.webpush.exceptions import EncryptionError, PayloadTooLargeError
from pushforge.webpush.providers.base import BaseCryptoProvider

logger = logging.getLogger(__name__)

PADDING_LENGTH_PREFIX_SIZE = 2


def max_payload_size(record_size: int | None = None) -> int:
    """Largest payload that fits in a record with zero padding."""
    if record_size is None:
        record_size = configs.WebPush.MaxRecordSize
    return record_size - PADDING_LENGTH_PREFIX_SIZE


@dataclass(frozen=True)
class PaddingPolicy:
    """Random padding length policy.

    Picks a length uniformly in ``[0, min(max_padding, budget)]`` to blur the
    payload length on the wire.
    """

    max_padding: int = 100
    randbelow: Callable[[int], int] = field(default=secrets.randbelow, repr=False, compare=False)

    @classmethod
    def from_config(cls) -> "PaddingPolicy":
        return cls(max_padding=configs.WebPush.MaxPadding)

    @classmethod
    def none(cls) -> "PaddingPolicy":
        return cls(max_padding=0)

    def choose(self, budget: int) -> int:
        upper = min(self.max_padding, budget)
        if upper <= 0:
            return 0
        return self.randbelow(upper + 1)


def encode_payload(payload: Any) -> bytes:
    return canonical_json(payload).encode("utf-8")


def pad_payload(
    payload: bytes,
    policy: PaddingPolicy | None = None,
    record_size: int | None = None,
) -> bytes:
    """Prefix the payload with its padding length and the padding itself.

    Raises:
        PayloadTooLargeError: payload does not fit even with zero padding
    """
    if record_size is None:
        record_size = configs.WebPush.MaxRecordSize
    if policy is None:
        policy = PaddingPolicy.from_config()

    limit = max_payload_size(record_size)
    if len(payload) > limit:
        raise PayloadTooLargeError(len(payload), limit)

    padding_size = policy.choose(limit - len(payload))
    logger.debug("Framed %d-byte payload with %d bytes of padding", len(payload), padding_size)
    return struct.pack(">H", padding_size) + bytes(padding_size) + payload


async def encrypt_payload(
    provider: BaseCryptoProvider,
    keys: ContentKeys,
    padded_payload: bytes,
) -> bytes:
    """AES-128-GCM encrypt a framed record; the tag stays appended."""
    try:
        return await provider.aes_gcm_encrypt(keys.content_encryption_key, keys.nonce, padded_payload)
    except Exception as e:
        raise EncryptionError(f"Payload encryption failed: {e}", cause=e) from e
