"""Web Push request builder configuration.

Defaults follow the ``aesgcm`` content coding and the VAPID assertion rules:
a push service accepts at most a 4096-byte encrypted record, and a VAPID
token may not outlive 24 hours.
"""

from pydantic import BaseModel, Field


class WebPushConfig(BaseModel):
    """Limits and policies applied while building a push request."""

    DefaultTtl: int = Field(
        default=24 * 60 * 60,
        ge=1,
        le=24 * 60 * 60,
        description="TTL in seconds used when the message sets none (or a non-positive value)",
    )
    MaxTtl: int = Field(
        default=24 * 60 * 60,
        ge=1,
        le=24 * 60 * 60,
        description="Largest accepted TTL; also bounds the VAPID 'exp' claim",
    )

    # 4096 bytes minus the 16-byte AES-GCM tag
    MaxRecordSize: int = Field(
        default=4078,
        description="Largest plaintext record (padding prefix + padding + payload) in bytes",
    )
    MaxPadding: int = Field(
        default=100,
        description="Upper bound of the random padding length. Set 0 to disable padding.",
    )
