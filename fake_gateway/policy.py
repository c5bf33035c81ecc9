"""Authorization decline policy."""

import threading
from decimal import Decimal

from fake_gateway.logging import get_logger

logger = get_logger(__name__)


class DeclinePolicy:
    """Process-wide "decline all cards" switch plus per-token declines.

    Parameters
    ----------
    decline_all : bool
        Initial state of the global switch.
    """

    def __init__(self, decline_all: bool = False) -> None:
        self._lock = threading.Lock()
        self._decline_all = decline_all
        self._declined_tokens: set[str] = set()

    @property
    def is_declining(self) -> bool:
        """Whether every authorization is currently forced to fail."""
        return self._decline_all

    def decline_all_cards(self) -> None:
        with self._lock:
            self._decline_all = True
        logger.warning("Decline policy enabled: all authorizations will fail")

    def approve_all_cards(self) -> None:
        with self._lock:
            self._decline_all = False
        logger.info("Decline policy disabled")

    def decline_token(self, token: str) -> None:
        """Always decline sales against one payment method."""
        with self._lock:
            self._declined_tokens.add(token)
        logger.info("Payment method %s will always be declined", token, extra={"token": token})

    def should_decline(self, payment_method_token: str | None, amount: Decimal) -> bool:
        """Decide the authorization outcome. Amount does not influence it."""
        with self._lock:
            return self._decline_all or payment_method_token in self._declined_tokens

    def reset(self) -> None:
        """Turn the switch off and forget per-token declines."""
        with self._lock:
            self._decline_all = False
            self._declined_tokens.clear()
