"""Outcome of a gateway operation."""

from dataclasses import dataclass, field

from fake_gateway.models.transaction import Transaction


@dataclass
class Result:
    """Success flag plus the transaction an operation produced.

    Declines and validation failures are unsuccessful results rather than
    exceptions. A decline carries the ``processor_declined`` transaction;
    a validation failure carries no transaction and lists its ``errors``.
    """

    success: bool
    transaction: Transaction | None = None
    message: str | None = None
    errors: list[str] = field(default_factory=list)

    @classmethod
    def successful(cls, transaction: Transaction) -> "Result":
        return cls(success=True, transaction=transaction)

    @classmethod
    def declined(cls, transaction: Transaction) -> "Result":
        return cls(
            success=False,
            transaction=transaction,
            message=transaction.processor_response_text,
        )

    @classmethod
    def invalid(cls, *errors: str) -> "Result":
        return cls(success=False, message=errors[0] if errors else None, errors=list(errors))
