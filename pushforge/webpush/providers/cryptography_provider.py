"""
Crypto provider backed by the ``cryptography`` package.

All operations are CPU-bound and short, so they run inline on the caller's
event loop.
"""

from __future__ import annotations

import os

from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.asymmetric.utils import decode_dss_signature
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from cryptography.hazmat.primitives.kdf.hkdf import HKDF

from pushforge.webpush.providers.base import BaseCryptoProvider, EcdhKeyPair

_CURVE = ec.SECP256R1()
_COORDINATE_SIZE = 32


class CryptographyProvider(BaseCryptoProvider):
    """Default provider for CPython hosts."""

    async def generate_ecdh_key_pair(self) -> EcdhKeyPair:
        private_key = ec.generate_private_key(_CURVE)
        return EcdhKeyPair(
            private_key=private_key,
            public_key=await self.export_public_key(private_key.public_key()),
        )

    async def import_ecdh_public_key(self, x: bytes, y: bytes) -> ec.EllipticCurvePublicKey:
        # Raises ValueError when the point is not on the curve
        numbers = ec.EllipticCurvePublicNumbers(
            int.from_bytes(x, "big"),
            int.from_bytes(y, "big"),
            _CURVE,
        )
        return numbers.public_key()

    async def export_public_key(self, public_key: ec.EllipticCurvePublicKey) -> bytes:
        return public_key.public_bytes(
            encoding=serialization.Encoding.X962,
            format=serialization.PublicFormat.UncompressedPoint,
        )

    async def derive_shared_secret(
        self,
        private_key: ec.EllipticCurvePrivateKey,
        public_key: ec.EllipticCurvePublicKey,
    ) -> bytes:
        return private_key.exchange(ec.ECDH(), public_key)

    async def hkdf(self, ikm: bytes, salt: bytes, info: bytes, length: int) -> bytes:
        return HKDF(
            algorithm=hashes.SHA256(),
            length=length,
            salt=salt,
            info=info,
        ).derive(ikm)

    async def aes_gcm_encrypt(self, key: bytes, iv: bytes, plaintext: bytes) -> bytes:
        return AESGCM(key).encrypt(iv, plaintext, None)

    async def import_signing_key(self, x: bytes, y: bytes, d: bytes) -> ec.EllipticCurvePrivateKey:
        public_numbers = ec.EllipticCurvePublicNumbers(
            int.from_bytes(x, "big"),
            int.from_bytes(y, "big"),
            _CURVE,
        )
        # Rejects a d that does not match (x, y)
        return ec.EllipticCurvePrivateNumbers(int.from_bytes(d, "big"), public_numbers).private_key()

    async def ecdsa_sign(self, private_key: ec.EllipticCurvePrivateKey, data: bytes) -> bytes:
        der_signature = private_key.sign(data, ec.ECDSA(hashes.SHA256()))
        # JOSE wants fixed-width r || s, not DER
        r, s = decode_dss_signature(der_signature)
        return r.to_bytes(_COORDINATE_SIZE, "big") + s.to_bytes(_COORDINATE_SIZE, "big")

    def random_bytes(self, length: int) -> bytes:
        return os.urandom(length)
