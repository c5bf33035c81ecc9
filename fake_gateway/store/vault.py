"""In-memory payment method vault."""

import threading

from fake_gateway.exceptions import NotFoundError
from fake_gateway.logging import get_logger
from fake_gateway.models import CreditCard

logger = get_logger(__name__)


class PaymentMethodVault:
    """Stores vaulted credit cards by token."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._cards: dict[str, CreditCard] = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._cards)

    def __contains__(self, token: object) -> bool:
        with self._lock:
            return token in self._cards

    def add(self, card: CreditCard) -> None:
        """Add a credit card to the vault."""
        with self._lock:
            self._cards[card.token] = card
        logger.info(
            "Vaulted %s card %s ending in %s",
            card.card_type.value,
            card.token,
            card.last_4,
            extra={"token": card.token},
        )

    def find(self, token: str) -> CreditCard:
        """Return the card for ``token`` or raise :class:`NotFoundError`."""
        with self._lock:
            card = self._cards.get(token)
        if card is None:
            raise NotFoundError(f"Payment method {token} not found", {"token": token})
        return card

    def reset(self) -> None:
        with self._lock:
            self._cards.clear()
