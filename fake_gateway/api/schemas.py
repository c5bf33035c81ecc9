"""Request bodies accepted by the HTTP boundary."""

from typing import Any

from pydantic import BaseModel, Field

# Amounts are validated by the gateway so that a bad amount yields an
# unsuccessful result body instead of a framework error.
Amount = str | int | float | None


class SaleRequest(BaseModel):
    """Fields of a ``transaction`` create request."""

    type: str = "sale"
    amount: Amount = None
    payment_method_token: str | None = None
    order_id: str | None = None
    merchant_account_id: str | None = None
    options: dict[str, Any] | None = None

    model_config = {"extra": "ignore"}


class SaleEnvelope(BaseModel):
    transaction: SaleRequest


class RefundRequest(BaseModel):
    amount: Amount = None


class RefundEnvelope(BaseModel):
    transaction: RefundRequest = Field(default_factory=RefundRequest)


class CreditCardRequest(BaseModel):
    """Card details; anything omitted is generated."""

    number: str | None = None
    expiration_date: str | None = None
    cardholder_name: str | None = None
    customer_id: str | None = None

    model_config = {"extra": "ignore"}


class CreditCardEnvelope(BaseModel):
    credit_card: CreditCardRequest = Field(default_factory=CreditCardRequest)


class SearchRequest(BaseModel):
    """Advanced search criteria, e.g. ``{"ids": {"is_in": [...]}}``."""

    ids: Any = None
    status: Any = None
    type: Any = None

    def criteria(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)
