from pushforge.webpush import (
    PushMessage,
    PushRequest,
    PushSubscription,
    VapidIdentity,
    WebPushError,
    build_push_http_request,
    build_push_http_request_sync,
)

__all__ = [
    "PushMessage",
    "PushRequest",
    "PushSubscription",
    "VapidIdentity",
    "WebPushError",
    "build_push_http_request",
    "build_push_http_request_sync",
]
