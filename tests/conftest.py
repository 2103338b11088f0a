"""Shared fixtures for BigInt tests."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from app import create_app
from bigint import BigInt


@pytest.fixture
def client() -> TestClient:
    return TestClient(create_app())


@pytest.fixture
def small_client() -> TestClient:
    """Client whose app only accepts operands of up to 20 digits."""
    return TestClient(create_app(max_digits=20))


@pytest.fixture
def int64_max_minus_one() -> BigInt:
    return BigInt(9223372036854775806)
