"""In-memory transaction registry."""

import threading
from datetime import datetime, timezone
from decimal import Decimal
from typing import Iterator

from fake_gateway.exceptions import NotFoundError, ValidationError
from fake_gateway.generators.ids import IdGenerator
from fake_gateway.lifecycle import apply_transition
from fake_gateway.logging import get_logger
from fake_gateway.models import (
    SaleOptions,
    StatusEvent,
    Transaction,
    TransactionStatus,
    TransactionType,
)
from fake_gateway.models.transaction import DECLINED_RESPONSE

logger = get_logger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


class TransactionRegistry:
    """Owns every transaction created during a test run.

    All public methods hold a single re-entrant lock, so creates and status
    changes are atomic with respect to each other. Transactions live until
    :meth:`reset`.

    Parameters
    ----------
    ids : IdGenerator | None
        Id allocator. A fresh one is created when omitted.
    currency_iso_code : str
        Currency stamped on new transactions.
    """

    def __init__(self, ids: IdGenerator | None = None, currency_iso_code: str = "USD") -> None:
        self._lock = threading.RLock()
        self._ids = ids or IdGenerator()
        self._currency = currency_iso_code
        self._transactions: dict[str, Transaction] = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._transactions)

    def __contains__(self, transaction_id: object) -> bool:
        with self._lock:
            return transaction_id in self._transactions

    def create_sale(
        self,
        payment_method_token: str | None,
        amount: Decimal,
        options: SaleOptions | None = None,
        *,
        declined: bool = False,
        order_id: str | None = None,
        merchant_account_id: str | None = None,
    ) -> Transaction:
        """Record a sale.

        The initial status is ``authorized``, or ``submitted_for_settlement``
        when ``options.submit_for_settlement`` is set. A declined sale is
        stored as ``processor_declined`` and its options are ignored.
        """
        options = options or SaleOptions()
        with self._lock:
            transaction = self._new(
                TransactionType.SALE,
                amount,
                payment_method_token=payment_method_token,
                order_id=order_id,
                merchant_account_id=merchant_account_id,
            )
            if declined:
                code, text = DECLINED_RESPONSE
                transaction.status = TransactionStatus.PROCESSOR_DECLINED
                transaction.processor_response_code = code
                transaction.processor_response_text = text
                self._stamp(transaction)
            else:
                self._stamp(transaction)
                if options.submit_for_settlement:
                    apply_transition(
                        transaction,
                        TransactionStatus.SUBMITTED_FOR_SETTLEMENT,
                        transaction.created_at,
                    )
            self._transactions[transaction.id] = transaction

        logger.info(
            "Created sale %s status=%s",
            transaction.id,
            transaction.status.value,
            extra={
                "transaction_id": transaction.id,
                "status": transaction.status.value,
                "token": payment_method_token,
                "amount": amount,
            },
        )
        return transaction

    def create_refund(
        self,
        original_transaction_id: str,
        amount: Decimal,
        *,
        order_id: str | None = None,
    ) -> Transaction:
        """Record a credit against ``original_transaction_id``.

        The original transaction does not have to exist. Credits are
        submitted for settlement as soon as they are created.
        """
        with self._lock:
            original = self._transactions.get(original_transaction_id)
            transaction = self._new(
                TransactionType.CREDIT,
                amount,
                payment_method_token=original.payment_method_token if original else None,
                refunded_transaction_id=original_transaction_id,
                order_id=order_id,
            )
            transaction.status = TransactionStatus.SUBMITTED_FOR_SETTLEMENT
            self._stamp(transaction)
            self._transactions[transaction.id] = transaction

        logger.info(
            "Created credit %s refunding %s",
            transaction.id,
            original_transaction_id,
            extra={
                "transaction_id": transaction.id,
                "refunded_transaction_id": original_transaction_id,
                "status": transaction.status.value,
                "amount": amount,
            },
        )
        return transaction

    def find(self, transaction_id: str) -> Transaction:
        """Return the transaction with ``transaction_id``.

        Raises
        ------
        NotFoundError
            If no such transaction was created since the last reset.
        """
        with self._lock:
            try:
                return self._transactions[transaction_id]
            except KeyError:
                logger.debug(
                    "Transaction %s not found", transaction_id, extra={"transaction_id": transaction_id}
                )
                raise NotFoundError(
                    f"Transaction {transaction_id} not found",
                    {"transaction_id": transaction_id},
                ) from None

    def void(self, transaction_id: str) -> Transaction:
        """Void an authorized or submitted transaction."""
        return self._transition(transaction_id, TransactionStatus.VOIDED)

    def submit_for_settlement(self, transaction_id: str) -> Transaction:
        """Submit an authorized transaction for settlement."""
        return self._transition(transaction_id, TransactionStatus.SUBMITTED_FOR_SETTLEMENT)

    def settle(self, transaction_id: str) -> Transaction:
        """Settle a submitted transaction, as the nightly batch would."""
        return self._transition(transaction_id, TransactionStatus.SETTLED)

    def all(self) -> list[Transaction]:
        """Return a snapshot of all transactions in creation order."""
        with self._lock:
            return list(self._transactions.values())

    def __iter__(self) -> Iterator[Transaction]:
        return iter(self.all())

    def reset(self) -> None:
        """Forget every transaction."""
        with self._lock:
            count = len(self._transactions)
            self._transactions.clear()
        logger.info("Registry reset, %d transactions dropped", count)

    def _transition(self, transaction_id: str, target: TransactionStatus) -> Transaction:
        with self._lock:
            transaction = self.find(transaction_id)
            apply_transition(transaction, target, _now())
        logger.info(
            "Transaction %s is now %s",
            transaction_id,
            target.value,
            extra={"transaction_id": transaction_id, "status": target.value},
        )
        return transaction

    def _new(self, type_: TransactionType, amount: Decimal, **fields) -> Transaction:
        if amount is None or amount < 0:
            raise ValidationError("Amount must be a non-negative value", {"amount": str(amount)})
        return Transaction(
            id=self._ids.next_id(),
            type=type_,
            amount=amount,
            status=TransactionStatus.AUTHORIZED,
            created_at=_now(),
            currency_iso_code=self._currency,
            **fields,
        )

    @staticmethod
    def _stamp(transaction: Transaction) -> None:
        """Record the initial status in the history."""
        transaction.updated_at = transaction.created_at
        transaction.status_history.append(
            StatusEvent(transaction.status, transaction.created_at, transaction.amount)
        )
