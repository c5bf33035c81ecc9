"""Transaction model and sale options."""

from dataclasses import dataclass, field, fields
from datetime import datetime
from decimal import Decimal
from typing import Any, Mapping

from fake_gateway.models.enums import TransactionStatus, TransactionType

APPROVED_RESPONSE = ("1000", "Approved")
DECLINED_RESPONSE = ("2000", "Do Not Honor")


@dataclass
class StatusEvent:
    """One entry of a transaction's status history."""

    status: TransactionStatus
    timestamp: datetime
    amount: Decimal


@dataclass
class Transaction:
    """Gateway transaction (sale or credit)."""

    id: str
    type: TransactionType
    amount: Decimal
    status: TransactionStatus
    created_at: datetime
    payment_method_token: str | None = None
    refunded_transaction_id: str | None = None  # credits only; may be unknown
    order_id: str | None = None
    merchant_account_id: str | None = None
    currency_iso_code: str = "USD"
    processor_response_code: str = APPROVED_RESPONSE[0]
    processor_response_text: str = APPROVED_RESPONSE[1]
    updated_at: datetime | None = None
    status_history: list[StatusEvent] = field(default_factory=list)


@dataclass
class SaleOptions:
    """Recognized keys of a sale request's ``options`` hash.

    Unknown keys are ignored and absent keys take their defaults, so
    ``SaleOptions.from_mapping(None)`` and ``SaleOptions.from_mapping({})``
    both describe a plain authorization.
    """

    submit_for_settlement: bool = False

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any] | None) -> "SaleOptions":
        """Build options from a raw request mapping."""
        if not options:
            return cls()
        known = {f.name for f in fields(cls)}
        return cls(**{k: v is True for k, v in options.items() if k in known})
