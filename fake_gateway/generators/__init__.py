"""Identifier and payment method generators."""

from fake_gateway.generators.ids import IdGenerator
from fake_gateway.generators.payment_method import CreditCardGenerator

__all__ = ["CreditCardGenerator", "IdGenerator"]
