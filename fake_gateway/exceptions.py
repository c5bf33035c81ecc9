"""Custom exception hierarchy for fake-gateway."""

from typing import Any


class FakeGatewayError(Exception):
    """Base exception for all fake-gateway errors."""

    error_code = "gateway_error"

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API error response format."""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(FakeGatewayError):
    """Raised when a referenced transaction or payment method does not exist."""

    error_code = "not_found"


class InvalidStateTransitionError(FakeGatewayError):
    """Raised when a transaction's status does not allow the requested change."""

    error_code = "invalid_state_transition"

    def __init__(self, current: str, target: str, message: str | None = None) -> None:
        self.current = current
        self.target = target
        super().__init__(
            message or f"Cannot move transaction from {current} to {target}",
            {"current_status": current, "target_status": target},
        )


class ValidationError(FakeGatewayError):
    """Raised when request data is structurally invalid."""

    error_code = "validation_error"


class ConfigurationError(FakeGatewayError):
    """Raised when configuration is invalid or missing."""

    error_code = "configuration_error"
