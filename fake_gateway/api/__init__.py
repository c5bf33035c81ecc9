"""HTTP boundary for the fake gateway."""

from fake_gateway.api.app import create_app

__all__ = ["create_app"]
