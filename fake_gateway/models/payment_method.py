"""Payment method models."""

from dataclasses import dataclass
from datetime import datetime

from fake_gateway.models.enums import CardBrand


@dataclass
class CreditCard:
    """Vaulted credit card. Only the BIN and last four digits are kept."""

    token: str
    bin: str
    last_4: str
    card_type: CardBrand
    expiration_month: str
    expiration_year: str
    cardholder_name: str
    created_at: datetime
    customer_id: str | None = None

    @property
    def masked_number(self) -> str:
        """Card number with the middle digits hidden."""
        return f"{self.bin}******{self.last_4}"

    @property
    def expiration_date(self) -> str:
        """Expiration in MM/YYYY form."""
        return f"{self.expiration_month}/{self.expiration_year}"
