"""Gateway domain models."""

from fake_gateway.models.enums import CardBrand, TransactionStatus, TransactionType
from fake_gateway.models.payment_method import CreditCard
from fake_gateway.models.result import Result
from fake_gateway.models.transaction import SaleOptions, StatusEvent, Transaction

__all__ = [
    "CardBrand",
    "CreditCard",
    "Result",
    "SaleOptions",
    "StatusEvent",
    "Transaction",
    "TransactionStatus",
    "TransactionType",
]
