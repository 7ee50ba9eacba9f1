"""
Crypto Providers

Implementations of the primitive operations behind the Web Push pipeline.
"""

from pushforge.webpush.providers.base import BaseCryptoProvider, EcdhKeyPair
from pushforge.webpush.providers.cryptography_provider import CryptographyProvider

__all__ = [
    "BaseCryptoProvider",
    "CryptographyProvider",
    "EcdhKeyPair",
]
