"""
Base Crypto Provider

Abstract capability interface for the primitive operations the Web Push
pipeline consumes. The pipeline never touches a crypto library directly, so
a host can plug in an async, hardware-backed or remote implementation.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class EcdhKeyPair:
    """Ephemeral P-256 key pair.

    ``private_key`` is an opaque provider handle; ``public_key`` is the raw
    65-byte uncompressed point.
    """

    private_key: Any
    public_key: bytes


class BaseCryptoProvider(ABC):
    """Abstract base class for crypto providers."""

    @abstractmethod
    async def generate_ecdh_key_pair(self) -> EcdhKeyPair:
        """Generate a fresh P-256 key pair for ECDH."""
        pass

    @abstractmethod
    async def import_ecdh_public_key(self, x: bytes, y: bytes) -> Any:
        """
        Import a P-256 public key from its affine coordinates.

        Args:
            x: 32-byte big-endian x coordinate
            y: 32-byte big-endian y coordinate

        Returns:
            Opaque key handle usable with :meth:`derive_shared_secret`
        """
        pass

    @abstractmethod
    async def export_public_key(self, public_key: Any) -> bytes:
        """Export a public key handle as a raw uncompressed point."""
        pass

    @abstractmethod
    async def derive_shared_secret(self, private_key: Any, public_key: Any) -> bytes:
        """Derive the 32-byte ECDH shared secret."""
        pass

    @abstractmethod
    async def hkdf(self, ikm: bytes, salt: bytes, info: bytes, length: int) -> bytes:
        """
        HKDF-SHA256 extract-and-expand.

        Args:
            ikm: Input keying material
            salt: Extract salt
            info: Expand context
            length: Output length in bytes

        Returns:
            ``length`` bytes of output keying material
        """
        pass

    @abstractmethod
    async def aes_gcm_encrypt(self, key: bytes, iv: bytes, plaintext: bytes) -> bytes:
        """AES-GCM encrypt; returns ciphertext with the 16-byte tag appended."""
        pass

    @abstractmethod
    async def import_signing_key(self, x: bytes, y: bytes, d: bytes) -> Any:
        """Import a P-256 private key for ECDSA from its JWK coordinates."""
        pass

    @abstractmethod
    async def ecdsa_sign(self, private_key: Any, data: bytes) -> bytes:
        """Sign with ECDSA P-256/SHA-256; returns the 64-byte ``r || s`` form."""
        pass

    @abstractmethod
    def random_bytes(self, length: int) -> bytes:
        """Return ``length`` cryptographically secure random bytes."""
        pass
