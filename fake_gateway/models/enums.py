"""Enumeration types for gateway entities."""

from enum import Enum


class TransactionType(str, Enum):
    SALE = "sale"
    CREDIT = "credit"


class TransactionStatus(str, Enum):
    AUTHORIZED = "authorized"
    SUBMITTED_FOR_SETTLEMENT = "submitted_for_settlement"
    SETTLED = "settled"
    VOIDED = "voided"
    PROCESSOR_DECLINED = "processor_declined"


class CardBrand(str, Enum):
    VISA = "Visa"
    MASTERCARD = "MasterCard"
    AMEX = "American Express"
    DISCOVER = "Discover"
    UNKNOWN = "Unknown"
