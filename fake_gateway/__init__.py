"""In-memory stand-in for a payment gateway, for integration test suites."""

__version__ = "0.1.0"

from fake_gateway.gateway import FakeGateway  # noqa: E402

__all__ = ["FakeGateway"]
