"""FastAPI dependencies shared by the routers."""

from fastapi import HTTPException, Request

from fake_gateway.gateway import FakeGateway


def get_gateway(request: Request) -> FakeGateway:
    """Return the gateway owned by the running app."""
    return request.app.state.gateway


def check_merchant(merchant_id: str, request: Request) -> str:
    """Reject requests addressed to another merchant."""
    expected = request.app.state.gateway.config.merchant_id
    if merchant_id != expected:
        raise HTTPException(
            status_code=404,
            detail={
                "error_code": "merchant_not_found",
                "message": f"Unknown merchant {merchant_id}",
                "details": {"merchant_id": merchant_id},
            },
        )
    return merchant_id
