"""
Push request assembly.

``build_push_http_request`` runs the whole pipeline: validate inputs, derive
per-message keys, frame and encrypt the payload, sign the VAPID assertion and
assemble the headers. It performs no network I/O; the caller POSTs the result.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from pushforge.webpush.derivation import derive_content_keys
from pushforge.webpush.encoding import b64url_encode
from pushforge.webpush.models import PushMessage, PushOptions, PushRequest, PushSubscription, VapidIdentity
from pushforge.webpush.payload import PaddingPolicy, encode_payload, encrypt_payload, pad_payload
from pushforge.webpush.providers.base import BaseCryptoProvider
from pushforge.webpush.providers.cryptography_provider import CryptographyProvider
from pushforge.webpush.validator import validate_push_inputs
from pushforge.webpush.vapid import (
    authorization_header,
    build_claims,
    create_jwt,
    endpoint_origin,
    vapid_public_key,
)

logger = logging.getLogger(__name__)

SALT_SIZE = 16
CONTENT_TYPE = "application/octet-stream"
CONTENT_ENCODING = "aesgcm"


def assemble_headers(
    *,
    body_length: int,
    salt: bytes,
    local_public_key: bytes,
    jwt: str,
    server_public_key: str,
    options: PushOptions,
) -> dict[str, str]:
    """Build the push request headers. Pure function of its arguments."""
    headers = {
        "Content-Type": CONTENT_TYPE,
        "Content-Encoding": CONTENT_ENCODING,
        "Content-Length": str(body_length),
        "Encryption": f"salt={b64url_encode(salt)}",
        "Crypto-Key": f"dh={b64url_encode(local_public_key)}",
        "Authorization": authorization_header(jwt, server_public_key),
        "TTL": str(options.ttl),
    }
    if options.topic is not None:
        headers["Topic"] = options.topic
    if options.urgency is not None:
        headers["Urgency"] = options.urgency.value
    return headers


async def build_push_http_request(
    private_jwk: VapidIdentity | Mapping[str, Any] | str,
    subscription: PushSubscription | Mapping[str, Any],
    message: PushMessage | Mapping[str, Any],
    *,
    provider: BaseCryptoProvider | None = None,
    padding: PaddingPolicy | None = None,
    now: int | None = None,
) -> PushRequest:
    """
    Build the endpoint, headers and encrypted body of a Web Push request.

    Args:
        private_jwk: VAPID private key as a JWK mapping, JSON string or model
        subscription: Browser push subscription (``endpoint`` + ``keys``)
        message: ``payload``, ``adminContact`` and optional ``options``
        provider: Crypto provider; defaults to :class:`CryptographyProvider`
        padding: Padding policy; defaults to the configured policy
        now: Unix time used for the JWT ``exp`` claim; defaults to the clock

    Returns:
        PushRequest ready to be sent as ``POST endpoint``

    Raises:
        WebPushError: any validation or cryptographic failure
    """
    inputs = validate_push_inputs(private_jwk, subscription, message)
    provider = provider or CryptographyProvider()
    padding = padding or PaddingPolicy.from_config()
    if now is None:
        now = int(time.time())

    # Fail on oversized payloads before generating any key material
    padded_payload = pad_payload(encode_payload(inputs.payload), padding)

    salt = provider.random_bytes(SALT_SIZE)
    local_keys = await provider.generate_ecdh_key_pair()

    content_keys = await derive_content_keys(
        provider,
        inputs.client_public_key,
        inputs.auth_secret,
        local_keys,
        salt,
    )
    body = await encrypt_payload(provider, content_keys, padded_payload)

    claims = build_claims(inputs.endpoint, inputs.options.ttl, inputs.admin_contact, now)
    jwt = await create_jwt(provider, inputs.identity, claims)

    headers = assemble_headers(
        body_length=len(body),
        salt=salt,
        local_public_key=local_keys.public_key,
        jwt=jwt,
        server_public_key=vapid_public_key(inputs.identity),
        options=inputs.options,
    )

    logger.debug(
        "Built push request for %s (record=%d bytes, body=%d bytes, ttl=%d)",
        endpoint_origin(inputs.endpoint),
        len(padded_payload),
        len(body),
        inputs.options.ttl,
    )
    return PushRequest(endpoint=inputs.endpoint, headers=MappingProxyType(headers), body=body)


def build_push_http_request_sync(
    private_jwk: VapidIdentity | Mapping[str, Any] | str,
    subscription: PushSubscription | Mapping[str, Any],
    message: PushMessage | Mapping[str, Any],
    **kwargs: Any,
) -> PushRequest:
    """Blocking variant of :func:`build_push_http_request` for code without an event loop."""
    return asyncio.run(build_push_http_request(private_jwk, subscription, message, **kwargs))
