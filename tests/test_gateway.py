"""Tests for the FakeGateway operation surface."""

from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from fake_gateway import FakeGateway
from fake_gateway.config import GatewayConfig
from fake_gateway.exceptions import InvalidStateTransitionError, NotFoundError, ValidationError
from fake_gateway.gateway import parse_amount
from fake_gateway.models import TransactionStatus, TransactionType
from fake_gateway.search import TransactionSearch


def _create_transaction(gateway: FakeGateway, token: str, amount="10.00"):
    return gateway.sale(token, amount).transaction


class TestParseAmount:
    """Tests for parse_amount."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (10.00, Decimal("10.0")),
            (10, Decimal("10")),
            ("1", Decimal("1")),
            (" 12.50 ", Decimal("12.50")),
            (Decimal("3.3"), Decimal("3.3")),
            ("10.000", Decimal("10")),
            ("9999999999.99", Decimal("9999999999.99")),
        ],
    )
    def test_valid(self, value, expected) -> None:
        assert parse_amount(value) == expected

    @pytest.mark.parametrize(
        ("value", "message"),
        [
            (None, "Amount is required"),
            ("", "Amount is required"),
            ("ten", "Amount is invalid"),
            (True, "Amount is invalid"),
            ("NaN", "Amount is invalid"),
            ("Infinity", "Amount is invalid"),
            ("-0.01", "Amount cannot be negative"),
            ("1e30", "Amount is too large"),
            ("10000000000", "Amount is too large"),
            ("0.004", "Amount cannot have more than two decimal places"),
            (0.1 + 0.2, "Amount cannot have more than two decimal places"),
        ],
    )
    def test_invalid(self, value, message) -> None:
        with pytest.raises(ValidationError) as exc_info:
            parse_amount(value)

        assert exc_info.value.message == message


class TestSale:
    """Tests for sale."""

    def test_successfully_creates_a_transaction(self, gateway, cc_token) -> None:
        result = gateway.sale(cc_token, 10.00)

        assert result.success is True
        assert result.transaction.type == TransactionType.SALE

    def test_sets_the_creation_time(self, gateway, cc_token) -> None:
        transaction = gateway.sale(cc_token, 10.00).transaction

        assert abs(datetime.now(timezone.utc) - transaction.created_at) < timedelta(seconds=1)

    def test_options_none_is_authorized(self, gateway, cc_token) -> None:
        assert gateway.sale(cc_token, 10.00).transaction.status == TransactionStatus.AUTHORIZED

    def test_submit_for_settlement_false_is_authorized(self, gateway, cc_token) -> None:
        result = gateway.sale(cc_token, 10.00, {"submit_for_settlement": False})

        assert result.transaction.status == TransactionStatus.AUTHORIZED

    def test_other_options_only_is_authorized(self, gateway, cc_token) -> None:
        result = gateway.sale(cc_token, 10.00, {"add_billing_address_to_payment_method": True})

        assert result.transaction.status == TransactionStatus.AUTHORIZED

    def test_unknown_options_ignored(self, gateway, cc_token) -> None:
        result = gateway.sale(cc_token, 10.00, {"three_d_secure": {"required": True}})

        assert result.success is True

    def test_submit_for_settlement_true(self, gateway, cc_token) -> None:
        result = gateway.sale(cc_token, 10.00, {"submit_for_settlement": True})

        assert result.transaction.status == TransactionStatus.SUBMITTED_FOR_SETTLEMENT

    def test_ids_are_unique(self, gateway, cc_token) -> None:
        ids = [gateway.sale(cc_token, n).transaction.id for n in range(100)]

        assert len(set(ids)) == 100

    def test_missing_amount(self, gateway, cc_token) -> None:
        result = gateway.sale(cc_token, None)

        assert result.success is False
        assert result.transaction is None
        assert result.errors == ["Amount is required"]
        assert len(gateway.transactions) == 0

    def test_negative_amount(self, gateway, cc_token) -> None:
        result = gateway.sale(cc_token, "-1")

        assert result.success is False
        assert "Amount cannot be negative" in result.errors

    @pytest.mark.parametrize("amount", ["0.004", "1e30", "1E+20"])
    def test_rejects_amounts_that_cannot_be_shown_in_cents(self, gateway, cc_token, amount) -> None:
        result = gateway.sale(cc_token, amount)

        assert result.success is False
        assert result.transaction is None
        assert len(gateway.transactions) == 0

    def test_missing_token(self, gateway) -> None:
        result = gateway.sale(None, "1")

        assert result.success is False
        assert result.errors == ["Payment method token is required"]

    def test_token_need_not_be_vaulted(self, gateway) -> None:
        assert gateway.sale("not-vaulted", "1").success is True

    def test_extra_fields_echoed(self, gateway, cc_token) -> None:
        tx = gateway.sale(cc_token, "1", order_id="order-9", merchant_account_id="ma").transaction

        assert tx.order_id == "order-9"
        assert tx.merchant_account_id == "ma"


class TestDecline:
    """Tests for the decline switch through the gateway."""

    def test_fails_when_all_cards_declined(self, gateway, cc_token) -> None:
        gateway.decline_all_cards()

        result = gateway.sale(cc_token, 10.00)

        assert result.success is False
        assert result.transaction.status == TransactionStatus.PROCESSOR_DECLINED
        assert result.message == "Do Not Honor"

    @pytest.mark.parametrize("amount", ["0", "10.00", "5000"])
    def test_every_sale_fails(self, gateway, amount) -> None:
        gateway.decline_all_cards()

        assert gateway.sale("any-token", amount).success is False

    def test_decline_wins_over_submit_for_settlement(self, gateway, cc_token) -> None:
        """Decline is checked first; settlement options do not apply."""
        gateway.decline_all_cards()

        result = gateway.sale(cc_token, 10.00, {"submit_for_settlement": True})

        assert result.success is False
        assert result.transaction.status == TransactionStatus.PROCESSOR_DECLINED

    def test_declined_sale_is_not_authorized_on_find(self, gateway, cc_token) -> None:
        gateway.decline_all_cards()
        tx = gateway.sale(cc_token, 10.00).transaction

        assert gateway.find(tx.id).status == TransactionStatus.PROCESSOR_DECLINED

    def test_declined_sale_cannot_be_voided(self, gateway, cc_token) -> None:
        gateway.decline_all_cards()
        tx = gateway.sale(cc_token, 10.00).transaction

        with pytest.raises(InvalidStateTransitionError):
            gateway.void(tx.id)

    def test_approve_all_cards(self, gateway, cc_token) -> None:
        gateway.decline_all_cards()
        gateway.approve_all_cards()

        assert gateway.sale(cc_token, 10.00).success is True

    def test_configured_to_decline(self) -> None:
        gateway = FakeGateway(GatewayConfig(decline_all_cards=True))

        assert gateway.sale("tok", "1").success is False

    def test_decline_test_card(self, gateway) -> None:
        card = gateway.create_credit_card(number="4000111111111115")

        assert gateway.sale(card.token, "1").success is False
        assert gateway.policy.is_declining is False


class TestRefund:
    """Tests for refund."""

    def test_successfully_refunds(self, gateway) -> None:
        result = gateway.refund("foobar", "1")

        assert result.success is True
        assert result.transaction.type == TransactionType.CREDIT
        assert result.transaction.amount == Decimal("1")

    def test_sets_the_creation_time(self, gateway) -> None:
        transaction = gateway.refund("foobar", "1").transaction

        assert abs(datetime.now(timezone.utc) - transaction.created_at) < timedelta(seconds=1)

    def test_defaults_to_original_amount(self, gateway, cc_token) -> None:
        sale = _create_transaction(gateway, cc_token, "25.00")

        assert gateway.refund(sale.id).transaction.amount == Decimal("25.00")

    def test_unknown_original_without_amount(self, gateway) -> None:
        result = gateway.refund("foobar")

        assert result.success is False
        assert result.transaction is None

    @pytest.mark.parametrize("amount", ["abc", "-5", "0.004", "1e30"])
    def test_invalid_amount(self, gateway, amount) -> None:
        result = gateway.refund("foobar", amount)

        assert result.success is False
        assert len(gateway.transactions) == 0


class TestVoid:
    """Tests for void."""

    def test_successfully_voids(self, gateway, cc_token) -> None:
        sale = gateway.sale(cc_token, 10.00)

        result = gateway.void(sale.transaction.id)

        assert result.success is True
        assert result.transaction.status == TransactionStatus.VOIDED

    def test_voids_submitted(self, gateway, cc_token) -> None:
        sale = gateway.sale(cc_token, 10.00, {"submit_for_settlement": True})

        assert gateway.void(sale.transaction.id).transaction.status == TransactionStatus.VOIDED

    def test_void_twice_fails(self, gateway, cc_token) -> None:
        tx = _create_transaction(gateway, cc_token)
        gateway.void(tx.id)

        with pytest.raises(InvalidStateTransitionError):
            gateway.void(tx.id)

    def test_void_unknown(self, gateway) -> None:
        with pytest.raises(NotFoundError):
            gateway.void("foobar")


class TestFind:
    """Tests for find."""

    def test_can_find_a_created_sale(self, gateway, cc_token) -> None:
        tx = _create_transaction(gateway, cc_token, 10.00)

        assert gateway.find(tx.id).amount == Decimal("10.00")

    def test_can_find_more_than_one(self, gateway, cc_token) -> None:
        assert gateway.find(_create_transaction(gateway, cc_token).id)
        assert gateway.find(_create_transaction(gateway, cc_token).id)

    def test_raises_when_missing(self, gateway) -> None:
        with pytest.raises(NotFoundError):
            gateway.find("foobar")


class TestSearch:
    """Tests for search through the gateway."""

    def test_can_find_a_created_sale(self, gateway, cc_token) -> None:
        tx = _create_transaction(gateway, cc_token, 10.00)

        result = gateway.search({"ids": {"is_in": [tx.id]}})

        assert result[0].amount == Decimal("10.00")

    def test_multiple_in_order(self, gateway, cc_token) -> None:
        ids = [_create_transaction(gateway, cc_token, a).id for a in (10.00, 11.00, 12.00)]

        result = gateway.search(TransactionSearch(ids=ids))

        assert [t.amount for t in result] == [10, 11, 12]

    def test_partial_match(self, gateway, cc_token) -> None:
        ids = [_create_transaction(gateway, cc_token, a).id for a in (10.00, 11.00, 12.00)]

        result = gateway.search({"ids": {"is_in": [ids[0], "non-existing", ids[2], "weird-id"]}})

        assert [t.amount for t in result] == [10, 12]

    def test_no_criteria(self, gateway, cc_token) -> None:
        _create_transaction(gateway, cc_token)

        assert len(gateway.search()) == 1

    def test_invalid_criteria(self, gateway) -> None:
        with pytest.raises(ValidationError):
            gateway.search({"type": {"is": "refund"}})


class TestSubmitForSettlement:
    """Tests for submit_for_settlement and settle."""

    def test_round_trip(self, gateway, cc_token) -> None:
        tx = _create_transaction(gateway, cc_token)

        result = gateway.submit_for_settlement(tx.id)

        assert result.success is True
        assert gateway.find(tx.id).status == TransactionStatus.SUBMITTED_FOR_SETTLEMENT

    def test_unknown(self, gateway) -> None:
        with pytest.raises(NotFoundError):
            gateway.submit_for_settlement("foobar")

    def test_after_void(self, gateway, cc_token) -> None:
        tx = _create_transaction(gateway, cc_token)
        gateway.void(tx.id)

        with pytest.raises(InvalidStateTransitionError):
            gateway.submit_for_settlement(tx.id)

    def test_settle(self, gateway, cc_token) -> None:
        tx = _create_transaction(gateway, cc_token)
        gateway.submit_for_settlement(tx.id)

        assert gateway.settle(tx.id).transaction.status == TransactionStatus.SETTLED


class TestCreditCards:
    """Tests for the payment method vault through the gateway."""

    def test_create_and_find(self, gateway) -> None:
        card = gateway.create_credit_card(
            number="5555 5555 5555 4444", expiration_date="01/29", cardholder_name="Grace Hopper"
        )

        found = gateway.find_credit_card(card.token)

        assert found is card
        assert found.last_4 == "4444"
        assert found.cardholder_name == "Grace Hopper"

    def test_generated_card(self, gateway) -> None:
        card = gateway.create_credit_card()

        assert card.token in gateway.payment_methods
        assert gateway.sale(card.token, "1").success is True

    def test_tokens_unique(self, gateway) -> None:
        tokens = {gateway.create_credit_card().token for _ in range(20)}

        assert len(tokens) == 20

    def test_tokens_unique_while_sales_run(self, gateway) -> None:
        def vault(_: int) -> str:
            gateway.sale("tok", "1")
            return gateway.create_credit_card(number="4111111111111111", expiration_date="12/2030").token

        with ThreadPoolExecutor(max_workers=8) as pool:
            tokens = list(pool.map(vault, range(200)))

        assert len(set(tokens)) == 200
        assert len(gateway.payment_methods) == 200
        assert len(gateway.transactions) == 200

    def test_find_unknown(self, gateway) -> None:
        with pytest.raises(NotFoundError):
            gateway.find_credit_card("nope")

    def test_invalid_number(self, gateway) -> None:
        with pytest.raises(ValidationError):
            gateway.create_credit_card(number="1234")
        assert len(gateway.payment_methods) == 0


class TestReset:
    """Tests for reset isolation."""

    def test_reset_forgets_transactions(self, gateway, cc_token) -> None:
        ids = [_create_transaction(gateway, cc_token).id for _ in range(3)]

        gateway.reset()

        for transaction_id in ids:
            with pytest.raises(NotFoundError):
                gateway.find(transaction_id)

    def test_reset_clears_decline_switch_and_vault(self, gateway, cc_token) -> None:
        gateway.decline_all_cards()

        gateway.reset()

        assert gateway.policy.is_declining is False
        assert cc_token not in gateway.payment_methods
        assert gateway.sale(cc_token, "1").success is True

    def test_independent_gateways(self) -> None:
        first = FakeGateway()
        second = FakeGateway()
        tx = first.sale("tok", "1").transaction
        first.decline_all_cards()

        with pytest.raises(NotFoundError):
            second.find(tx.id)
        assert second.sale("tok", "1").success is True
