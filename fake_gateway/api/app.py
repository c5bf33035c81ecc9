"""FastAPI application exposing a :class:`FakeGateway` over HTTP."""
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from fake_gateway import __version__
from fake_gateway.api import admin, payment_methods, transactions
from fake_gateway.config import GatewayConfig
from fake_gateway.exceptions import (
    FakeGatewayError,
    InvalidStateTransitionError,
    NotFoundError,
)
from fake_gateway.gateway import FakeGateway
from fake_gateway.logging import get_logger

logger = get_logger(__name__)

_STATUS_CODES = {
    NotFoundError: 404,
    InvalidStateTransitionError: 422,
}


async def gateway_error_handler(request: Request, exc: FakeGatewayError) -> JSONResponse:
    """Translate core errors into ``{"error_code", "message", "details"}`` bodies.

    Not-found is 404; invalid transitions and validation errors are 422.
    """
    status_code = _STATUS_CODES.get(type(exc), 422)
    logger.warning("%s on %s %s: %s", exc.error_code, request.method, request.url.path, exc.message)
    return JSONResponse(status_code=status_code, content=exc.to_dict())


def create_app(
    gateway: FakeGateway | None = None,
    config: GatewayConfig | None = None,
) -> FastAPI:
    """Build the app around ``gateway`` (a new one from ``config`` if omitted)."""
    gateway = gateway or FakeGateway(config)

    app = FastAPI(
        title="Fake Gateway",
        description="In-memory stand-in for a payment gateway",
        version=__version__,
    )
    app.state.gateway = gateway
    app.add_exception_handler(FakeGatewayError, gateway_error_handler)

    @app.get("/health")
    async def health_check():
        return {
            "status": "healthy",
            "version": __version__,
            "merchant_id": gateway.config.merchant_id,
            "declining": gateway.policy.is_declining,
            "transactions": len(gateway.transactions),
        }

    app.include_router(transactions.router, tags=["Transactions"])
    app.include_router(payment_methods.router, tags=["Payment Methods"])
    app.include_router(admin.router, tags=["Admin"])

    return app
