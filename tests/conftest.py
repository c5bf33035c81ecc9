"""Pytest configuration and fixtures."""

import pytest
from fastapi.testclient import TestClient

from fake_gateway import FakeGateway
from fake_gateway.api import create_app
from fake_gateway.config import GatewayConfig
from fake_gateway.store import TransactionRegistry


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible card data."""
    return 42


@pytest.fixture
def gateway(seed: int) -> FakeGateway:
    """Create a fresh gateway for each test."""
    return FakeGateway(GatewayConfig(seed=seed))


@pytest.fixture
def registry() -> TransactionRegistry:
    """Create a fresh registry for each test."""
    return TransactionRegistry()


@pytest.fixture
def cc_token(gateway: FakeGateway) -> str:
    """Token of a vaulted Visa card."""
    return gateway.create_credit_card(number="4111111111111111", expiration_date="12/2030").token


@pytest.fixture
def merchant_id(gateway: FakeGateway) -> str:
    return gateway.config.merchant_id


@pytest.fixture
def client(gateway: FakeGateway) -> TestClient:
    """HTTP client bound to the ``gateway`` fixture."""
    return TestClient(create_app(gateway))
