"""
Web Push data models

Caller-supplied inputs (VAPID identity, subscription, message) are pydantic
models so they can be built straight from stored JSON. Per-call values
produced by the pipeline are plain dataclasses.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Urgency(StrEnum):
    """Values of the ``Urgency`` request header (RFC 8030 §5.3)."""

    VERY_LOW = "very-low"
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"


class VapidIdentity(BaseModel):
    """Sender's long-term ES256 signing key, in private JWK form."""

    # JWKs exported by WebCrypto carry key_ops / ext as well
    model_config = ConfigDict(extra="ignore", frozen=True)

    kty: str | None = None
    crv: str | None = None
    x: str | None = None
    y: str | None = None
    d: str | None = None
    alg: str | None = None


class SubscriptionKeys(BaseModel):
    """Subscriber static key material from ``PushSubscription.getKey()``."""

    model_config = ConfigDict(frozen=True)

    p256dh: str
    auth: str


class PushSubscription(BaseModel):
    """A browser push subscription, as returned by ``PushSubscription.toJSON()``."""

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    endpoint: str
    keys: SubscriptionKeys
    expiration_time: float | None = Field(default=None, alias="expirationTime")


class PushMessageOptions(BaseModel):
    """Optional delivery settings. Absent values are omitted from the request."""

    model_config = ConfigDict(frozen=True)

    ttl: int | None = None
    topic: str | None = None
    urgency: Urgency | None = None


class PushMessage(BaseModel):
    """Content to deliver and the contact the push service may reach."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    payload: Any
    admin_contact: str = Field(alias="adminContact")
    options: PushMessageOptions | None = None


@dataclass(frozen=True)
class PushOptions:
    """Normalized delivery options: TTL resolved, topic/urgency passed through."""

    ttl: int
    topic: str | None = None
    urgency: Urgency | None = None


@dataclass(frozen=True)
class JwtClaims:
    """Claims of the VAPID assertion."""

    aud: str
    exp: int
    sub: str

    def to_dict(self) -> dict[str, Any]:
        return {"aud": self.aud, "exp": self.exp, "sub": self.sub}


@dataclass(frozen=True)
class PushRequest:
    """Wire-ready push request: ``POST endpoint`` with these headers and body."""

    endpoint: str
    headers: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    body: bytes = b""

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary, e.g. as keyword arguments for an HTTP client."""
        return {
            "url": self.endpoint,
            "headers": dict(self.headers),
            "content": self.body,
        }
