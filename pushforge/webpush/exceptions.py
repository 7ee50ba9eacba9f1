"""
Web Push build errors

Every failure aborts the build. Callers distinguish categories by exception
class or by ``error.code``.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any


class WebPushErrorCode(StrEnum):
    """Machine-readable error codes.

    Format: {category}.{specific_error}
    """

    # Input validation
    IDENTITY_INVALID_KEY = "identity.invalid_key"
    SUBSCRIPTION_INVALID_ENDPOINT = "subscription.invalid_endpoint"
    SUBSCRIPTION_INVALID_KEY = "subscription.invalid_key"
    MESSAGE_INVALID_TTL = "message.invalid_ttl"
    MESSAGE_PAYLOAD_TOO_LARGE = "message.payload_too_large"

    # Provider failures
    CRYPTO_DERIVATION_FAILED = "crypto.derivation_failed"
    CRYPTO_ENCRYPTION_FAILED = "crypto.encryption_failed"
    CRYPTO_SIGNING_FAILED = "crypto.signing_failed"

    @property
    def category(self) -> str:
        return self.value.split(".")[0]

    @property
    def recoverable(self) -> bool:
        """Whether rebuilding with the same inputs could succeed.

        Validation errors never do. Crypto failures only do when the provider
        failed transiently, which the core cannot tell apart, so the caller
        decides.
        """
        return False


class WebPushError(Exception):
    """Base class for all request build failures."""

    code: WebPushErrorCode

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidIdentityKeyError(WebPushError):
    """VAPID key is not an EC P-256 private JWK, or could not be parsed."""

    code = WebPushErrorCode.IDENTITY_INVALID_KEY


class InvalidEndpointError(WebPushError):
    """Subscription endpoint is not an absolute HTTPS URL."""

    code = WebPushErrorCode.SUBSCRIPTION_INVALID_ENDPOINT

    def __init__(self, message: str, endpoint: str | None = None) -> None:
        self.endpoint = endpoint
        super().__init__(message)


class InvalidSubscriberKeyError(WebPushError):
    """Subscriber ``p256dh`` or ``auth`` key has the wrong encoding or length."""

    code = WebPushErrorCode.SUBSCRIPTION_INVALID_KEY

    def __init__(self, message: str, field: str) -> None:
        self.field = field
        super().__init__(message)


class InvalidTTLError(WebPushError):
    """TTL is not an integer or is larger than the VAPID assertion lifetime allows."""

    code = WebPushErrorCode.MESSAGE_INVALID_TTL

    def __init__(self, ttl: Any, max_ttl: int) -> None:
        self.ttl = ttl
        self.max_ttl = max_ttl
        if isinstance(ttl, int):
            message = f"TTL must be less than 24 hours ({max_ttl} seconds), received {ttl}"
        else:
            message = f"TTL must be an integer number of seconds, received {ttl!r}"
        super().__init__(message)


class PayloadTooLargeError(WebPushError):
    """Serialized payload does not fit in a single record."""

    code = WebPushErrorCode.MESSAGE_PAYLOAD_TOO_LARGE

    def __init__(self, size: int, limit: int) -> None:
        self.size = size
        self.limit = limit
        super().__init__(f"Payload too large. Maximum size is {limit} bytes, but received {size} bytes")


class CryptoOperationError(WebPushError):
    """A provider-level cryptographic operation failed."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        self.cause = cause
        super().__init__(message)


class DerivationError(CryptoOperationError):
    code = WebPushErrorCode.CRYPTO_DERIVATION_FAILED


class EncryptionError(CryptoOperationError):
    code = WebPushErrorCode.CRYPTO_ENCRYPTION_FAILED


class SigningError(CryptoOperationError):
    code = WebPushErrorCode.CRYPTO_SIGNING_FAILED
