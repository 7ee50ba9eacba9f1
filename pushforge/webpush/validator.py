"""
Input validation for push request building.

Everything here runs before any cryptographic work and has no side effects.
Each check raises the matching :mod:`pushforge.webpush.exceptions` error.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlsplit

from pydantic import ValidationError

from pushforge.configs import configs
from pushforge.webpush.encoding import b64url_decode
from pushforge.webpush.exceptions import (
    InvalidEndpointError,
    InvalidIdentityKeyError,
    InvalidSubscriberKeyError,
    InvalidTTLError,
    WebPushError,
)
from pushforge.webpush.models import (
    PushMessage,
    PushOptions,
    PushSubscription,
    VapidIdentity,
)

logger = logging.getLogger(__name__)

AUTH_SECRET_SIZE = 16
UNCOMPRESSED_POINT_SIZE = 65
UNCOMPRESSED_POINT_MARKER = 0x04
COORDINATE_SIZE = 32
MAX_TTL = 24 * 60 * 60


@dataclass(frozen=True)
class ValidatedInputs:
    """Normalized inputs handed to the rest of the pipeline."""

    identity: VapidIdentity
    endpoint: str
    client_public_key: bytes
    auth_secret: bytes
    admin_contact: str
    payload: Any
    options: PushOptions


def parse_vapid_identity(private_jwk: VapidIdentity | Mapping[str, Any] | str) -> VapidIdentity:
    """Parse a private JWK given as a model, a mapping or a JSON string."""
    if isinstance(private_jwk, VapidIdentity):
        identity = private_jwk
    else:
        if isinstance(private_jwk, str):
            try:
                private_jwk = json.loads(private_jwk)
            except json.JSONDecodeError as e:
                raise InvalidIdentityKeyError("Invalid privateJWK: failed to parse JSON string") from e
        if not isinstance(private_jwk, Mapping):
            raise InvalidIdentityKeyError("Invalid privateJWK: expected a JSON object")
        try:
            identity = VapidIdentity.model_validate(dict(private_jwk))
        except ValidationError as e:
            raise InvalidIdentityKeyError(f"Invalid JWK: {e.errors()[0]['msg']}") from e

    validate_vapid_identity(identity)
    return identity


def validate_vapid_identity(identity: VapidIdentity) -> None:
    """Check the JWK is an EC P-256 private key with all three coordinates."""
    if identity.kty != "EC":
        raise InvalidIdentityKeyError(f"Invalid JWK: 'kty' must be 'EC', received '{identity.kty}'")
    if identity.crv != "P-256":
        raise InvalidIdentityKeyError(f"Invalid JWK: 'crv' must be 'P-256', received '{identity.crv}'")

    for name, label in (("x", "'x' coordinate"), ("y", "'y' coordinate"), ("d", "'d' (private key)")):
        value = getattr(identity, name)
        if not value:
            raise InvalidIdentityKeyError(f"Invalid JWK: missing or invalid {label}")
        try:
            decoded = b64url_decode(value)
        except ValueError as e:
            raise InvalidIdentityKeyError(f"Invalid JWK: missing or invalid {label}") from e
        if len(decoded) != COORDINATE_SIZE:
            raise InvalidIdentityKeyError(
                f"Invalid JWK: {label} must decode to {COORDINATE_SIZE} bytes, received {len(decoded)}"
            )


def validate_endpoint(endpoint: str) -> str:
    """Require an absolute HTTPS URL with a host."""
    try:
        parts = urlsplit(endpoint)
        parts.port  # parsed lazily, raises on a malformed port
    except ValueError as e:
        raise InvalidEndpointError(f"'{endpoint}' is not a valid URL", endpoint=endpoint) from e

    if not parts.scheme or not parts.hostname:
        raise InvalidEndpointError(f"'{endpoint}' is not a valid URL", endpoint=endpoint)
    if not parts.hostname.isascii():
        try:
            parts.hostname.encode("idna")
        except UnicodeError as e:
            raise InvalidEndpointError(f"'{endpoint}' is not a valid URL", endpoint=endpoint) from e
    if parts.scheme.lower() != "https":
        raise InvalidEndpointError(
            f"Invalid endpoint: push endpoints must use HTTPS, received '{parts.scheme}:'",
            endpoint=endpoint,
        )
    return endpoint


def decode_auth_secret(auth: str) -> bytes:
    try:
        decoded = b64url_decode(auth)
    except ValueError as e:
        raise InvalidSubscriberKeyError(f"Invalid auth key: {e}", field="auth") from e
    if len(decoded) != AUTH_SECRET_SIZE:
        raise InvalidSubscriberKeyError(
            f"Incorrect auth length, expected {AUTH_SECRET_SIZE} bytes but got {len(decoded)}",
            field="auth",
        )
    return decoded


def decode_client_public_key(p256dh: str) -> bytes:
    """Decode the subscriber ``p256dh`` key into a 65-byte uncompressed point."""
    try:
        decoded = b64url_decode(p256dh)
    except ValueError as e:
        raise InvalidSubscriberKeyError(f"Invalid p256dh key: {e}", field="p256dh") from e

    if len(decoded) != UNCOMPRESSED_POINT_SIZE:
        raise InvalidSubscriberKeyError(
            f"Invalid p256dh key: expected {UNCOMPRESSED_POINT_SIZE} bytes but got {len(decoded)} bytes",
            field="p256dh",
        )
    if decoded[0] != UNCOMPRESSED_POINT_MARKER:
        raise InvalidSubscriberKeyError(
            "Invalid p256dh key: expected uncompressed point format (0x04 prefix) "
            f"but got 0x{decoded[0]:02x}",
            field="p256dh",
        )
    return decoded


def resolve_options(message: PushMessage) -> PushOptions:
    """Resolve TTL (default when absent or non-positive) and pass topic/urgency through."""
    settings = configs.WebPush
    options = message.options

    ttl = options.ttl if options is not None else None
    max_ttl = min(settings.MaxTtl, MAX_TTL)
    if ttl is None or ttl <= 0:
        ttl = settings.DefaultTtl
    if ttl > max_ttl:
        raise InvalidTTLError(ttl, max_ttl)

    return PushOptions(
        ttl=ttl,
        topic=(options.topic or None) if options is not None else None,
        urgency=options.urgency if options is not None else None,
    )


def validate_push_inputs(
    private_jwk: VapidIdentity | Mapping[str, Any] | str,
    subscription: PushSubscription | Mapping[str, Any],
    message: PushMessage | Mapping[str, Any],
) -> ValidatedInputs:
    """Validate and normalize all caller inputs.

    Raises:
        InvalidIdentityKeyError: JWK unparseable, not EC/P-256, or missing a coordinate
        InvalidEndpointError: endpoint not an absolute HTTPS URL
        InvalidSubscriberKeyError: ``auth`` or ``p256dh`` wrong length or format
        InvalidTTLError: TTL above the 24-hour ceiling
    """
    try:
        identity = parse_vapid_identity(private_jwk)
        subscription = _coerce_subscription(subscription)
        endpoint = validate_endpoint(subscription.endpoint)
        auth_secret = decode_auth_secret(subscription.keys.auth)
        client_public_key = decode_client_public_key(subscription.keys.p256dh)
        message = _coerce_message(message)
        options = resolve_options(message)
    except WebPushError as e:
        logger.debug("Push input rejected (%s): %s", e.code, e)
        raise

    return ValidatedInputs(
        identity=identity,
        endpoint=endpoint,
        client_public_key=client_public_key,
        auth_secret=auth_secret,
        admin_contact=message.admin_contact,
        payload=message.payload,
        options=options,
    )


def _coerce_subscription(subscription: PushSubscription | Mapping[str, Any]) -> PushSubscription:
    if isinstance(subscription, PushSubscription):
        return subscription
    try:
        return PushSubscription.model_validate(dict(subscription))
    except ValidationError as e:
        error = e.errors()[0]
        location = error["loc"]
        if location and location[0] == "keys":
            field = str(location[-1]) if len(location) > 1 else "keys"
            raise InvalidSubscriberKeyError(f"Invalid subscription keys: {error['msg']}", field=field) from e
        if location and location[0] == "endpoint":
            raise InvalidEndpointError(f"Invalid subscription endpoint: {error['msg']}") from e
        raise


def _coerce_message(message: PushMessage | Mapping[str, Any]) -> PushMessage:
    if isinstance(message, PushMessage):
        return message
    try:
        return PushMessage.model_validate(dict(message))
    except ValidationError as e:
        for error in e.errors():
            if tuple(error["loc"][:2]) == ("options", "ttl"):
                raise InvalidTTLError(error.get("input"), configs.WebPush.MaxTtl) from e
        raise
