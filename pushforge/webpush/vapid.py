"""VAPID (RFC 8292) assertion signing."""

from __future__ import annotations

import logging
from urllib.parse import urlsplit

from pushforge.webpush.encoding import b64url_decode, b64url_encode, canonical_json
from pushforge.webpush.exceptions import SigningError
from pushforge.webpush.models import JwtClaims, VapidIdentity
from pushforge.webpush.providers.base import BaseCryptoProvider

logger = logging.getLogger(__name__)

JWT_HEADER = {"typ": "JWT", "alg": "ES256"}


def endpoint_origin(endpoint: str) -> str:
    """``scheme://host[:port]`` of the push service, used as the JWT audience."""
    parts = urlsplit(endpoint)
    host = parts.hostname or ""
    if ":" in host:
        host = f"[{host}]"
    elif not host.isascii():
        host = host.encode("idna").decode("ascii")
    origin = f"{parts.scheme.lower()}://{host}"
    if parts.port is not None and parts.port != 443:
        origin += f":{parts.port}"
    return origin


def build_claims(endpoint: str, ttl: int, admin_contact: str, now: int) -> JwtClaims:
    return JwtClaims(aud=endpoint_origin(endpoint), exp=now + ttl, sub=admin_contact)


def vapid_public_key(identity: VapidIdentity) -> str:
    """Base64url uncompressed point ``0x04 || x || y`` of the identity's public key."""
    return b64url_encode(b"\x04" + b64url_decode(identity.x) + b64url_decode(identity.y))


async def create_jwt(provider: BaseCryptoProvider, identity: VapidIdentity, claims: JwtClaims) -> str:
    """
    Sign a compact ES256 JWT carrying the VAPID claims.

    Raises:
        SigningError: key import or signing failed in the provider
    """
    encoded_header = b64url_encode(canonical_json(JWT_HEADER))
    encoded_claims = b64url_encode(canonical_json(claims.to_dict()))
    signing_input = f"{encoded_header}.{encoded_claims}"

    try:
        private_key = await provider.import_signing_key(
            b64url_decode(identity.x),
            b64url_decode(identity.y),
            b64url_decode(identity.d),
        )
        signature = await provider.ecdsa_sign(private_key, signing_input.encode("ascii"))
    except Exception as e:
        raise SigningError(f"VAPID signing failed: {e}", cause=e) from e

    logger.debug("Signed VAPID assertion for %s (exp=%d)", claims.aud, claims.exp)
    return f"{signing_input}.{b64url_encode(signature)}"


def authorization_header(token: str, public_key: str) -> str:
    return f"vapid t={token}, k={public_key}"
