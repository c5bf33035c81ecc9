"""Test-control endpoints: decline switch, settlement and reset."""
from fastapi import APIRouter, Depends, Response
from fastapi.responses import JSONResponse

from fake_gateway.api.dependencies import get_gateway
from fake_gateway.gateway import FakeGateway
from fake_gateway.projection import project_result

router = APIRouter(prefix="/admin")


@router.put("/decline_all_cards", status_code=204)
async def decline_all_cards(gateway: FakeGateway = Depends(get_gateway)) -> Response:
    gateway.decline_all_cards()
    return Response(status_code=204)


@router.delete("/decline_all_cards", status_code=204)
async def approve_all_cards(gateway: FakeGateway = Depends(get_gateway)) -> Response:
    gateway.approve_all_cards()
    return Response(status_code=204)


@router.put("/transactions/{transaction_id}/settle")
async def settle_transaction(
    transaction_id: str,
    gateway: FakeGateway = Depends(get_gateway),
) -> JSONResponse:
    return JSONResponse(content=project_result(gateway.settle(transaction_id)))


@router.post("/reset", status_code=204)
async def reset(gateway: FakeGateway = Depends(get_gateway)) -> Response:
    """Drop all transactions, payment methods and the decline switch."""
    gateway.reset()
    return Response(status_code=204)
