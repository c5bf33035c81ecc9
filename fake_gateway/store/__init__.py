"""In-memory stores for transactions and payment methods."""

from fake_gateway.store.registry import TransactionRegistry
from fake_gateway.store.vault import PaymentMethodVault

__all__ = ["PaymentMethodVault", "TransactionRegistry"]
