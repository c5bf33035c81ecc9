"""Transaction status transitions."""

from datetime import datetime

from fake_gateway.exceptions import InvalidStateTransitionError
from fake_gateway.models import StatusEvent, Transaction, TransactionStatus

ALLOWED_TRANSITIONS: dict[TransactionStatus, set[TransactionStatus]] = {
    TransactionStatus.AUTHORIZED: {
        TransactionStatus.SUBMITTED_FOR_SETTLEMENT,
        TransactionStatus.VOIDED,
    },
    TransactionStatus.SUBMITTED_FOR_SETTLEMENT: {
        TransactionStatus.SETTLED,
        TransactionStatus.VOIDED,
    },
    TransactionStatus.SETTLED: set(),
    TransactionStatus.VOIDED: set(),
    TransactionStatus.PROCESSOR_DECLINED: set(),
}

_MESSAGES = {
    TransactionStatus.VOIDED: (
        "Transaction can only be voided if status is authorized or submitted_for_settlement."
    ),
    TransactionStatus.SUBMITTED_FOR_SETTLEMENT: (
        "Cannot submit for settlement unless status is authorized."
    ),
    TransactionStatus.SETTLED: (
        "Cannot settle unless status is submitted_for_settlement."
    ),
}


def can_transition(current: TransactionStatus, target: TransactionStatus) -> bool:
    """Return True when ``current -> target`` is a defined edge."""
    return target in ALLOWED_TRANSITIONS.get(current, set())


def validate_transition(current: TransactionStatus, target: TransactionStatus) -> None:
    """Raise when a transition is not allowed by the state machine."""
    if not can_transition(current, target):
        raise InvalidStateTransitionError(current.value, target.value, _MESSAGES.get(target))


def apply_transition(
    transaction: Transaction,
    target: TransactionStatus,
    at: datetime,
) -> Transaction:
    """Move ``transaction`` to ``target`` and record it in the status history.

    Parameters
    ----------
    transaction : Transaction
        Transaction to mutate in place.
    target : TransactionStatus
        Requested status.
    at : datetime
        Time of the change, stamped on ``updated_at`` and the history entry.

    Returns
    -------
    Transaction
        The same transaction, for chaining.

    Raises
    ------
    InvalidStateTransitionError
        If the current status has no edge to ``target``.
    """
    validate_transition(transaction.status, target)
    transaction.status = target
    transaction.updated_at = at
    transaction.status_history.append(StatusEvent(target, at, transaction.amount))
    return transaction
