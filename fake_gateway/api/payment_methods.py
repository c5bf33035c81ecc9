"""Payment method (vault) endpoints."""
from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from fake_gateway.api.dependencies import check_merchant, get_gateway
from fake_gateway.api.schemas import CreditCardEnvelope
from fake_gateway.gateway import FakeGateway
from fake_gateway.projection import project_credit_card

router = APIRouter(
    prefix="/merchants/{merchant_id}/payment_methods",
    dependencies=[Depends(check_merchant)],
)


@router.post("")
async def create_payment_method(
    body: CreditCardEnvelope = CreditCardEnvelope(),
    gateway: FakeGateway = Depends(get_gateway),
) -> JSONResponse:
    """Vault a credit card and return its token."""
    request = body.credit_card
    card = gateway.create_credit_card(
        number=request.number,
        expiration_date=request.expiration_date,
        cardholder_name=request.cardholder_name,
        customer_id=request.customer_id,
    )
    return JSONResponse(
        status_code=201,
        content={"success": True, "credit_card": project_credit_card(card)},
    )


@router.get("/{token}")
async def find_payment_method(
    token: str,
    gateway: FakeGateway = Depends(get_gateway),
) -> dict[str, Any]:
    return {"credit_card": project_credit_card(gateway.find_credit_card(token))}
