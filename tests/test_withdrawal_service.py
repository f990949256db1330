# Tests for:
# - confirm_withdrawal preconditions (session, cart, requester)
# - all-or-nothing stock decrement
# - ledger ids and newest-first ordering

from decimal import Decimal

import pytest

from stockroom.domain.errors import ConflictError, NotFoundError, ValidationError
from stockroom.services.lock_service import WITHDRAWAL_LOCK_KEY


class TestConfirmWithdrawal:
    def test_widget_scenario(self, logged_in, cart, products, withdrawals, widget, notifier):
        """
        SCENARIO: stock 10, cart 5 (+7 rejected), confirm for Ana / Ops
        EXPECTED: stock 5, withdrawal #1 with 5 items, cart empty
        """
        cart.add_item(widget["id"], 5)
        with pytest.raises(ConflictError):
            cart.add_item(widget["id"], 7)

        w = withdrawals.confirm_withdrawal("Ana", "Ops")

        assert w["id"] == 1
        assert w["total_items"] == 5
        assert w["withdrawer_name"] == "Ana"
        assert w["withdrawer_section"] == "Ops"
        assert w["user_id"] == logged_in.id
        assert w["user_name"] == logged_in.name
        assert w["user_section"] == logged_in.section
        assert w["notes"] is None
        assert products.get_product(widget["id"])["stock"] == 5
        assert cart.get_cart() == {"items": [], "total_items": 0}
        assert notifier.withdrawals == [(1, 5, "Ana")]

    def test_snapshot_keeps_product_data(self, logged_in, cart, products, withdrawals, widget, gadget):
        cart.add_item(gadget["id"], 2)
        cart.add_item(widget["id"], 1)
        w = withdrawals.confirm_withdrawal("Ana", "Ops", notes="for the line")

        products.update_product(widget["id"], {"name": "Renamed"})
        products.remove_product(gadget["id"])

        stored = withdrawals.get_withdrawal(w["id"])
        assert [(i["product_name"], i["quantity"]) for i in stored["items"]] == [("Gadget", 2), ("Widget", 1)]
        assert stored["items"][1]["price"] == Decimal("3.50")
        assert stored["items"][0]["category"] == "Tools"
        assert stored["notes"] == "for the line"

    def test_silent_stock_change(self, logged_in, cart, withdrawals, widget, notifier):
        cart.add_item(widget["id"], 1)
        withdrawals.confirm_withdrawal("Ana", "Ops")

        assert notifier.stock == []

    def test_requires_session_user(self, cart, products, withdrawals, widget):
        cart.add_item(widget["id"], 1)

        with pytest.raises(PermissionError):
            withdrawals.confirm_withdrawal("Ana", "Ops")

        assert products.get_product(widget["id"])["stock"] == 10
        assert cart.total_items() == 1

    def test_empty_cart(self, logged_in, withdrawals):
        with pytest.raises(ValidationError):
            withdrawals.confirm_withdrawal("Ana", "Ops")

    @pytest.mark.parametrize("name,section", [("  ", "Ops"), ("Ana", ""), ("", "")])
    def test_blank_requester(self, logged_in, cart, withdrawals, widget, name, section):
        cart.add_item(widget["id"], 1)

        with pytest.raises(ValidationError):
            withdrawals.confirm_withdrawal(name, section)

        assert cart.total_items() == 1

    def test_requester_is_trimmed(self, logged_in, cart, withdrawals, widget):
        cart.add_item(widget["id"], 1)

        w = withdrawals.confirm_withdrawal("  Ana ", " Ops")

        assert (w["withdrawer_name"], w["withdrawer_section"]) == ("Ana", "Ops")

    def test_blank_notes_stored_as_none(self, logged_in, cart, withdrawals, widget):
        cart.add_item(widget["id"], 1)

        w = withdrawals.confirm_withdrawal("Ana", "Ops", notes="   ")

        assert w["notes"] is None
        assert withdrawals.get_withdrawal(w["id"])["notes"] is None

    def test_atomic_when_one_line_is_short(self, logged_in, cart, products, withdrawals, widget, gadget):
        """
        SCENARIO: gadget stock drops below its cart line after it was added
        EXPECTED: whole commit rejected naming Gadget, no stock moves, cart unchanged
        """
        cart.add_item(widget["id"], 5)
        cart.add_item(gadget["id"], 3)
        products.adjust_stock(gadget["id"], -2)

        with pytest.raises(ConflictError) as exc:
            withdrawals.confirm_withdrawal("Ana", "Ops")

        assert "Gadget" in exc.value.message
        assert products.get_product(widget["id"])["stock"] == 10
        assert products.get_product(gadget["id"])["stock"] == 2
        assert [(i["product_id"], i["quantity"]) for i in cart.get_cart()["items"]] == [
            (widget["id"], 5),
            (gadget["id"], 3),
        ]
        assert withdrawals.list_withdrawals() == []

    def test_lock_held_elsewhere(self, logged_in, cart, products, withdrawals, widget, redis_client):
        cart.add_item(widget["id"], 1)
        redis_client.set(WITHDRAWAL_LOCK_KEY, "someone-else")

        with pytest.raises(ConflictError):
            withdrawals.confirm_withdrawal("Ana", "Ops")

        assert products.get_product(widget["id"])["stock"] == 10
        assert redis_client.get(WITHDRAWAL_LOCK_KEY) == "someone-else"

    def test_lock_released_after_commit_and_failure(self, logged_in, cart, products, withdrawals, widget, redis_client):
        cart.add_item(widget["id"], 2)
        withdrawals.confirm_withdrawal("Ana", "Ops")
        assert redis_client.get(WITHDRAWAL_LOCK_KEY) is None

        cart.add_item(widget["id"], 2)
        products.adjust_stock(widget["id"], -7)
        with pytest.raises(ConflictError):
            withdrawals.confirm_withdrawal("Ana", "Ops")
        assert redis_client.get(WITHDRAWAL_LOCK_KEY) is None


class TestLedger:
    def test_ids_increase_and_newest_first(self, logged_in, cart, withdrawals, widget, gadget):
        cart.add_item(widget["id"], 1)
        first = withdrawals.confirm_withdrawal("Ana", "Ops")
        cart.add_item(gadget["id"], 2)
        second = withdrawals.confirm_withdrawal("Bo", "Lab")

        assert second["id"] == first["id"] + 1
        assert [w["id"] for w in withdrawals.list_withdrawals()] == [second["id"], first["id"]]

    def test_get_unknown(self, withdrawals):
        with pytest.raises(NotFoundError):
            withdrawals.get_withdrawal(1)

    def test_stock_never_negative_across_commits(self, logged_in, cart, products, withdrawals, widget):
        for quantity in (4, 4, 4):
            try:
                cart.add_item(widget["id"], quantity)
                withdrawals.confirm_withdrawal("Ana", "Ops")
            except ConflictError:
                pass
            assert products.get_product(widget["id"])["stock"] >= 0

        assert products.get_product(widget["id"])["stock"] == 2
