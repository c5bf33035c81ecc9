"""Map gateway entities to their wire representation."""

from dataclasses import fields
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from fake_gateway.models import CreditCard, Result, Transaction

CENTS = Decimal("0.01")

_TRANSACTION_FIELDS = (
    "id",
    "type",
    "status",
    "amount",
    "created_at",
    "updated_at",
    "payment_method_token",
    "refunded_transaction_id",
    "order_id",
    "merchant_account_id",
    "currency_iso_code",
    "processor_response_code",
    "processor_response_text",
)


def serialize_value(value: Any) -> Any:
    """Serialize a value for JSON output."""
    if isinstance(value, Decimal):
        return str(value.quantize(CENTS))
    elif isinstance(value, Enum):
        return value.value
    elif isinstance(value, datetime):
        return value.isoformat(timespec="microseconds")
    elif isinstance(value, date):
        return value.isoformat()
    elif isinstance(value, dict):
        return {k: serialize_value(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [serialize_value(v) for v in value]
    return value


def to_dict_fast(obj: Any) -> dict:
    """Convert a flat dataclass without the deep copy ``asdict`` makes."""
    return {f.name: serialize_value(getattr(obj, f.name)) for f in fields(obj)}


def project_transaction(transaction: Transaction) -> dict[str, Any]:
    """Return the external shape of a transaction."""
    data = {name: serialize_value(getattr(transaction, name)) for name in _TRANSACTION_FIELDS}
    data["status_history"] = [to_dict_fast(event) for event in transaction.status_history]
    return data


def project_result(result: Result) -> dict[str, Any]:
    """Return ``{"success": ..., "transaction": ...}`` plus any message/errors."""
    data: dict[str, Any] = {
        "success": result.success,
        "transaction": project_transaction(result.transaction) if result.transaction else None,
    }
    if result.message:
        data["message"] = result.message
    if result.errors:
        data["errors"] = list(result.errors)
    return data


def project_credit_card(card: CreditCard) -> dict[str, Any]:
    """Return the external shape of a vaulted card."""
    data = to_dict_fast(card)
    data["masked_number"] = card.masked_number
    data["expiration_date"] = card.expiration_date
    return data
