import json
from typing import Any

import pytest

from tests.fixtures.webpush import (
    SUBSCRIBER_PRIVATE_VALUE,
    VAPID_PRIVATE_VALUE,
    SubscriberKeys,
    make_private_jwk,
    make_subscriber,
)


@pytest.fixture
def private_jwk() -> dict[str, Any]:
    return make_private_jwk(VAPID_PRIVATE_VALUE)


@pytest.fixture
def private_jwk_json(private_jwk: dict[str, Any]) -> str:
    return json.dumps(private_jwk, indent=2)


@pytest.fixture
def subscriber() -> SubscriberKeys:
    return make_subscriber(SUBSCRIBER_PRIVATE_VALUE)


@pytest.fixture
def subscription(subscriber: SubscriberKeys) -> dict[str, Any]:
    return subscriber.subscription()


@pytest.fixture
def message() -> dict[str, Any]:
    return {
        "payload": {"title": "Test", "body": "Test message"},
        "adminContact": "mailto:test@example.com",
        "options": {"ttl": 3600},
    }
