"""Shared fixtures for unit tests."""

from unittest.mock import AsyncMock

import pytest


class FakeGateways:
    """AsyncMock doubles for the three gateways, recording every call."""

    def __init__(self) -> None:
        self.auth = AsyncMock()
        self.store = AsyncMock()
        self.media = AsyncMock()


@pytest.fixture
def gateways() -> FakeGateways:
    """Create a fresh set of gateway mocks."""
    return FakeGateways()


@pytest.fixture
def user_id() -> str:
    """The test user's ID."""
    return "test-user-uid"


class SequentialKeys:
    """Deterministic key factory yielding key-1, key-2, ..."""

    def __init__(self) -> None:
        self.count = 0

    def __call__(self) -> str:
        self.count += 1
        return f"key-{self.count}"


@pytest.fixture
def keys() -> SequentialKeys:
    return SequentialKeys()
