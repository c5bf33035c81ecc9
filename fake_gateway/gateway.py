"""The operation surface a test suite drives."""

from decimal import Decimal, InvalidOperation
from typing import Any, Mapping

from fake_gateway.config import GatewayConfig
from fake_gateway.exceptions import NotFoundError, ValidationError
from fake_gateway.generators.ids import IdGenerator
from fake_gateway.generators.payment_method import CreditCardGenerator
from fake_gateway.logging import get_logger
from fake_gateway.models import CreditCard, Result, SaleOptions, Transaction
from fake_gateway.policy import DeclinePolicy
from fake_gateway.projection import CENTS
from fake_gateway.search import TransactionSearch, search
from fake_gateway.store import PaymentMethodVault, TransactionRegistry

logger = get_logger(__name__)

# Cards that the real sandbox always declines
DECLINE_CARD_NUMBERS = frozenset({"4000111111111115", "5105105105105100", "378734493671000"})

# Largest amount the gateway accepts
MAX_AMOUNT = Decimal("9999999999.99")


def parse_amount(value: Any) -> Decimal:
    """Parse a monetary amount from a string or number.

    Raises
    ------
    ValidationError
        If the amount is missing, not a finite number, negative, above
        ``MAX_AMOUNT`` or has fractions of a cent.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError("Amount is required", {"amount": value})
    if isinstance(value, bool):
        raise ValidationError("Amount is invalid", {"amount": value})
    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValidationError("Amount is invalid", {"amount": value}) from None
    if not amount.is_finite():
        raise ValidationError("Amount is invalid", {"amount": value})
    if amount < 0:
        raise ValidationError("Amount cannot be negative", {"amount": value})
    if amount > MAX_AMOUNT:
        raise ValidationError("Amount is too large", {"amount": value})
    if amount.quantize(CENTS) != amount:
        raise ValidationError("Amount cannot have more than two decimal places", {"amount": value})
    return amount


class FakeGateway:
    """Transactions, payment methods and the decline switch for one test run.

    Instances share no state, so parallel tests can each own one. Lookup and
    state errors raise :class:`~fake_gateway.exceptions.NotFoundError` and
    :class:`~fake_gateway.exceptions.InvalidStateTransitionError`; declines
    and malformed requests come back as unsuccessful :class:`Result` values.

    Parameters
    ----------
    config : GatewayConfig | None
        Gateway settings. Defaults are used when omitted.
    """

    def __init__(self, config: GatewayConfig | None = None) -> None:
        self.config = config or GatewayConfig()
        self.ids = IdGenerator()
        self.transactions = TransactionRegistry(self.ids, self.config.currency_iso_code)
        self.payment_methods = PaymentMethodVault()
        self.policy = DeclinePolicy(self.config.decline_all_cards)
        self.cards = CreditCardGenerator(seed=self.config.seed, locale=self.config.locale)

    # Transactions

    def sale(
        self,
        payment_method_token: str | None,
        amount: Any,
        options: Mapping[str, Any] | None = None,
        order_id: str | None = None,
        merchant_account_id: str | None = None,
    ) -> Result:
        """Authorize ``amount`` against a payment method.

        The decline policy is consulted before the options: a declined sale
        is recorded as ``processor_declined`` even when
        ``submit_for_settlement`` was requested.
        """
        errors = []
        try:
            parsed = parse_amount(amount)
        except ValidationError as e:
            errors.append(e.message)
        if not payment_method_token:
            errors.append("Payment method token is required")
        if errors:
            logger.info("Sale rejected: %s", "; ".join(errors))
            return Result.invalid(*errors)

        declined = self.policy.should_decline(payment_method_token, parsed)
        transaction = self.transactions.create_sale(
            payment_method_token,
            parsed,
            SaleOptions.from_mapping(options),
            declined=declined,
            order_id=order_id,
            merchant_account_id=merchant_account_id,
        )
        if declined:
            return Result.declined(transaction)
        return Result.successful(transaction)

    def refund(self, transaction_id: str, amount: Any = None) -> Result:
        """Credit ``amount`` back against ``transaction_id``.

        The refunded transaction need not exist. When ``amount`` is omitted
        the original amount is used, which requires the original to exist.
        """
        if amount is None:
            try:
                parsed = self.transactions.find(transaction_id).amount
            except NotFoundError:
                return Result.invalid("Amount is required when refunding an unknown transaction")
        else:
            try:
                parsed = parse_amount(amount)
            except ValidationError as e:
                logger.info(
                    "Refund of %s rejected: %s",
                    transaction_id,
                    e.message,
                    extra={"refunded_transaction_id": transaction_id},
                )
                return Result.invalid(e.message)
        return Result.successful(self.transactions.create_refund(transaction_id, parsed))

    def void(self, transaction_id: str) -> Result:
        return Result.successful(self.transactions.void(transaction_id))

    def submit_for_settlement(self, transaction_id: str) -> Result:
        return Result.successful(self.transactions.submit_for_settlement(transaction_id))

    def settle(self, transaction_id: str) -> Result:
        """Advance a submitted transaction to ``settled``."""
        return Result.successful(self.transactions.settle(transaction_id))

    def find(self, transaction_id: str) -> Transaction:
        return self.transactions.find(transaction_id)

    def search(self, criteria: TransactionSearch | Mapping[str, Any] | None = None) -> list[Transaction]:
        """Search transactions; ``criteria`` may be a wire-shaped mapping."""
        if not isinstance(criteria, TransactionSearch):
            criteria = TransactionSearch.from_mapping(criteria)
        return search(self.transactions, criteria)

    # Payment methods

    def create_credit_card(
        self,
        number: str | None = None,
        expiration_date: str | None = None,
        cardholder_name: str | None = None,
        customer_id: str | None = None,
    ) -> CreditCard:
        """Vault a card and return it; omitted details are generated."""
        card = self.cards.generate(
            self.ids.next_token(),
            number=number,
            expiration_date=expiration_date,
            cardholder_name=cardholder_name,
            customer_id=customer_id,
        )
        self.payment_methods.add(card)
        if number and number.replace(" ", "").replace("-", "") in DECLINE_CARD_NUMBERS:
            self.policy.decline_token(card.token)
        return card

    def find_credit_card(self, token: str) -> CreditCard:
        return self.payment_methods.find(token)

    # Admin

    def decline_all_cards(self) -> None:
        self.policy.decline_all_cards()

    def approve_all_cards(self) -> None:
        self.policy.approve_all_cards()

    def reset(self) -> None:
        """Clear transactions, payment methods and the decline switch."""
        self.transactions.reset()
        self.payment_methods.reset()
        self.policy.reset()
        logger.info("Gateway reset")
