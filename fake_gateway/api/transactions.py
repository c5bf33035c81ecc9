"""Transaction endpoints.

Mutations answer with ``{"success": bool, "transaction": {...}}``. An
unsuccessful result (decline or validation failure) is a 422 carrying the
same body, so clients can branch on ``success`` alone.
"""
from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from fake_gateway.api.dependencies import check_merchant, get_gateway
from fake_gateway.api.schemas import RefundEnvelope, SaleEnvelope, SearchRequest
from fake_gateway.gateway import FakeGateway
from fake_gateway.logging import get_logger
from fake_gateway.models import Result
from fake_gateway.projection import project_result, project_transaction

logger = get_logger(__name__)

router = APIRouter(
    prefix="/merchants/{merchant_id}/transactions",
    dependencies=[Depends(check_merchant)],
)


def _respond(result: Result, success_status: int = 200) -> JSONResponse:
    return JSONResponse(
        status_code=success_status if result.success else 422,
        content=project_result(result),
    )


@router.post("")
async def create_transaction(
    body: SaleEnvelope,
    gateway: FakeGateway = Depends(get_gateway),
) -> JSONResponse:
    """Create a sale.

    Example:
        POST /merchants/fake-merchant/transactions
        {"transaction": {"type": "sale", "amount": "10.00",
                         "payment_method_token": "...",
                         "options": {"submit_for_settlement": true}}}
    """
    request = body.transaction
    if request.type != "sale":
        return _respond(Result.invalid(f"Transaction type {request.type} is not supported here"))

    result = gateway.sale(
        request.payment_method_token,
        request.amount,
        request.options,
        order_id=request.order_id,
        merchant_account_id=request.merchant_account_id,
    )
    return _respond(result, success_status=201)


@router.post("/advanced_search")
async def search_transactions(
    body: SearchRequest,
    gateway: FakeGateway = Depends(get_gateway),
) -> dict[str, Any]:
    """Search transactions; results keep the order of ``ids.is_in``."""
    transactions = gateway.search(body.criteria())
    logger.debug("Search matched %d transactions", len(transactions))
    return {
        "count": len(transactions),
        "transactions": [project_transaction(t) for t in transactions],
    }


@router.get("/{transaction_id}")
async def find_transaction(
    transaction_id: str,
    gateway: FakeGateway = Depends(get_gateway),
) -> dict[str, Any]:
    return {"transaction": project_transaction(gateway.find(transaction_id))}


@router.post("/{transaction_id}/refund")
async def refund_transaction(
    transaction_id: str,
    body: RefundEnvelope = RefundEnvelope(),
    gateway: FakeGateway = Depends(get_gateway),
) -> JSONResponse:
    return _respond(gateway.refund(transaction_id, body.transaction.amount), success_status=201)


@router.put("/{transaction_id}/void")
async def void_transaction(
    transaction_id: str,
    gateway: FakeGateway = Depends(get_gateway),
) -> JSONResponse:
    return _respond(gateway.void(transaction_id))


@router.put("/{transaction_id}/submit_for_settlement")
async def submit_transaction_for_settlement(
    transaction_id: str,
    gateway: FakeGateway = Depends(get_gateway),
) -> JSONResponse:
    return _respond(gateway.submit_for_settlement(transaction_id))
