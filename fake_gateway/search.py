"""Transaction search over a registry.

Criteria mirror the gateway's advanced-search request body::

    {
        "ids": {"is_in": ["a1b2c3d4", "e5f6a7b8"]},
        "status": {"is_in": ["authorized"]},
        "type": {"is": "sale"},
    }

When ids are given, results come back in the order the ids were listed and
ids with no transaction are skipped. Otherwise results follow creation order.
"""

from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from fake_gateway.exceptions import NotFoundError, ValidationError
from fake_gateway.models import Transaction, TransactionStatus, TransactionType
from fake_gateway.store.registry import TransactionRegistry


@dataclass
class TransactionSearch:
    """Search criteria. ``None`` means "no constraint"."""

    ids: list[str] | None = None
    statuses: list[TransactionStatus] | None = None
    types: list[TransactionType] | None = None

    @classmethod
    def from_mapping(cls, criteria: Mapping[str, Any] | None) -> "TransactionSearch":
        """Parse the wire shape shown in the module docstring."""
        criteria = criteria or {}
        try:
            ids = _values(criteria.get("ids"))
            statuses = _values(criteria.get("status"))
            types = _values(criteria.get("type"))
            return cls(
                ids=[str(i) for i in ids] if ids is not None else None,
                statuses=[TransactionStatus(s) for s in statuses] if statuses is not None else None,
                types=[TransactionType(t) for t in types] if types is not None else None,
            )
        except ValueError as e:
            raise ValidationError(f"Invalid search criteria: {e}") from e

    def matches(self, transaction: Transaction) -> bool:
        """Check the non-id criteria against one transaction."""
        if self.statuses is not None and transaction.status not in self.statuses:
            return False
        if self.types is not None and transaction.type not in self.types:
            return False
        return True


def _values(node: Any) -> list | None:
    if node is None:
        return None
    if isinstance(node, Mapping):
        if "is_in" in node:
            return _listed(node["is_in"], "is_in")
        if "is" in node:
            return _listed(node["is"], "is")
        raise ValueError(f"unsupported operator in {dict(node)}")
    return _listed(node, "value")


def _listed(value: Any, operator: str) -> list:
    """Wrap a single string, or copy a list of values."""
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple)):
        return list(value)
    raise ValueError(f"{operator} expects a string or a list, got {value!r}")


def _candidates(registry: TransactionRegistry, ids: Iterable[str]) -> list[Transaction]:
    seen: set[str] = set()
    found = []
    for transaction_id in ids:
        if transaction_id in seen:
            continue
        seen.add(transaction_id)
        try:
            found.append(registry.find(transaction_id))
        except NotFoundError:
            continue
    return found


def search(registry: TransactionRegistry, criteria: TransactionSearch) -> list[Transaction]:
    """Return the transactions matching ``criteria``.

    Parameters
    ----------
    registry : TransactionRegistry
        Registry to read. It is never modified.
    criteria : TransactionSearch
        What to match.

    Returns
    -------
    list[Transaction]
        Matches, in input-id order when ids were given, creation order
        otherwise. Empty when nothing matches.
    """
    if criteria.ids is not None:
        candidates = _candidates(registry, criteria.ids)
    else:
        candidates = registry.all()
    return [t for t in candidates if criteria.matches(t)]
