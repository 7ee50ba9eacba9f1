"""
Web Push request builder

Encrypts payloads with the ``aesgcm`` content coding and signs VAPID
assertions, producing the endpoint, headers and body of a push request.
"""

from pushforge.webpush.exceptions import (
    CryptoOperationError,
    DerivationError,
    EncryptionError,
    InvalidEndpointError,
    InvalidIdentityKeyError,
    InvalidSubscriberKeyError,
    InvalidTTLError,
    PayloadTooLargeError,
    SigningError,
    WebPushError,
    WebPushErrorCode,
)
from pushforge.webpush.models import (
    PushMessage,
    PushMessageOptions,
    PushOptions,
    PushRequest,
    PushSubscription,
    SubscriptionKeys,
    Urgency,
    VapidIdentity,
)
from pushforge.webpush.payload import PaddingPolicy
from pushforge.webpush.providers import BaseCryptoProvider, CryptographyProvider, EcdhKeyPair
from pushforge.webpush.request import build_push_http_request, build_push_http_request_sync
from pushforge.webpush.vapid import vapid_public_key

__all__ = [
    # Builder
    "build_push_http_request",
    "build_push_http_request_sync",
    "vapid_public_key",
    "PaddingPolicy",
    # Data models
    "VapidIdentity",
    "PushSubscription",
    "SubscriptionKeys",
    "PushMessage",
    "PushMessageOptions",
    "PushOptions",
    "PushRequest",
    "Urgency",
    # Providers
    "BaseCryptoProvider",
    "CryptographyProvider",
    "EcdhKeyPair",
    # Errors
    "WebPushError",
    "WebPushErrorCode",
    "InvalidIdentityKeyError",
    "InvalidEndpointError",
    "InvalidSubscriberKeyError",
    "InvalidTTLError",
    "PayloadTooLargeError",
    "CryptoOperationError",
    "DerivationError",
    "EncryptionError",
    "SigningError",
]
