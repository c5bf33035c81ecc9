"""Credit card generator: fills in whatever card data a request omits."""

from datetime import datetime, timezone

from fake_gateway.exceptions import ValidationError
from fake_gateway.generators.base import BaseGenerator
from fake_gateway.models import CardBrand, CreditCard

# Faker card_type keys per brand
_FAKER_CARD_TYPES = {
    CardBrand.VISA: "visa16",
    CardBrand.MASTERCARD: "mastercard",
    CardBrand.AMEX: "amex",
    CardBrand.DISCOVER: "discover",
}


def detect_brand(number: str) -> CardBrand:
    """Guess the card brand from the leading digits."""
    if number.startswith("4"):
        return CardBrand.VISA
    if number[:2] in {"34", "37"}:
        return CardBrand.AMEX
    if number[:2] in {"51", "52", "53", "54", "55"} or "2221" <= number[:4] <= "2720":
        return CardBrand.MASTERCARD
    if number.startswith("6011") or number.startswith("65"):
        return CardBrand.DISCOVER
    return CardBrand.UNKNOWN


def normalize_number(number: str) -> str:
    """Strip spaces and dashes, and require 12-19 digits."""
    digits = number.replace(" ", "").replace("-", "")
    if not digits.isdigit() or not 12 <= len(digits) <= 19:
        raise ValidationError("Credit card number is invalid", {"field": "number"})
    return digits


class CreditCardGenerator(BaseGenerator):
    """Generate vaultable credit cards."""

    BRANDS = list(_FAKER_CARD_TYPES)
    BRAND_WEIGHTS = [0.5, 0.3, 0.1, 0.1]

    def card_number(self, brand: CardBrand | None = None) -> str:
        """Return a Luhn-valid card number for the brand (random brand if omitted)."""
        if brand is None or brand not in _FAKER_CARD_TYPES:
            brand = self.rng.choices(self.BRANDS, weights=self.BRAND_WEIGHTS, k=1)[0]
        return self.fake.credit_card_number(card_type=_FAKER_CARD_TYPES[brand])

    def generate(
        self,
        token: str,
        number: str | None = None,
        expiration_date: str | None = None,
        cardholder_name: str | None = None,
        customer_id: str | None = None,
    ) -> CreditCard:
        """Build a card, generating any of number/expiration/name not supplied.

        ``expiration_date`` is ``MM/YY`` or ``MM/YYYY``.
        """
        digits = normalize_number(number) if number else self.card_number()
        month, year = _split_expiration(expiration_date or self.fake.credit_card_expire())

        return CreditCard(
            token=token,
            bin=digits[:6],
            last_4=digits[-4:],
            card_type=detect_brand(digits),
            expiration_month=month,
            expiration_year=year,
            cardholder_name=cardholder_name or self.fake.name(),
            customer_id=customer_id,
            created_at=datetime.now(timezone.utc),
        )


def _split_expiration(value: str) -> tuple[str, str]:
    month, sep, year = value.partition("/")
    if not sep or not month.isdigit() or not year.isdigit() or not 1 <= int(month) <= 12:
        raise ValidationError("Expiration date is invalid", {"field": "expiration_date"})
    if len(year) == 2:
        year = f"20{year}"
    return f"{int(month):02d}", year
