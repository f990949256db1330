# Tests for:
# - Adding / merging / updating / removing cart lines
# - Cart lines never exceeding current stock
# - total_items derived on read

import pytest

from stockroom.domain.errors import ConflictError, NotFoundError, ValidationError


def _quantities(cart):
    return [(i["product_id"], i["quantity"]) for i in cart.get_cart()["items"]]


class TestCartAdd:
    def test_add_and_merge_rejected_over_stock(self, cart, widget):
        """
        SCENARIO: Widget has stock 10; add 5, then add 7 more
        EXPECTED: second add rejected, line stays at 5
        """
        cart.add_item(widget["id"], 5)
        assert _quantities(cart) == [(widget["id"], 5)]

        with pytest.raises(ConflictError):
            cart.add_item(widget["id"], 7)

        assert _quantities(cart) == [(widget["id"], 5)]

    def test_merge_within_stock(self, cart, widget):
        cart.add_item(widget["id"], 4)
        result = cart.add_item(widget["id"], 6)

        assert result["items"][0]["quantity"] == 10
        assert result["total_items"] == 10

    @pytest.mark.parametrize("quantity", [0, -1])
    def test_non_positive_quantity(self, cart, widget, quantity):
        with pytest.raises(ValidationError):
            cart.add_item(widget["id"], quantity)

    def test_more_than_stock(self, cart, widget):
        with pytest.raises(ConflictError):
            cart.add_item(widget["id"], 11)

        assert cart.get_cart()["items"] == []

    def test_unknown_product(self, cart):
        with pytest.raises(NotFoundError):
            cart.add_item(404, 1)

    def test_insertion_order_kept(self, cart, widget, gadget):
        cart.add_item(gadget["id"], 1)
        cart.add_item(widget["id"], 1)
        cart.add_item(gadget["id"], 1)

        assert _quantities(cart) == [(gadget["id"], 2), (widget["id"], 1)]

    def test_revalidates_against_current_stock(self, cart, products, widget):
        cart.add_item(widget["id"], 3)
        products.adjust_stock(widget["id"], -6)

        with pytest.raises(ConflictError):
            cart.add_item(widget["id"], 2)

        assert _quantities(cart) == [(widget["id"], 3)]


class TestCartUpdateRemove:
    def test_set_quantity(self, cart, widget):
        cart.add_item(widget["id"], 2)

        assert cart.set_quantity(widget["id"], 8)["items"][0]["quantity"] == 8

    def test_set_quantity_over_stock_leaves_line(self, cart, widget):
        cart.add_item(widget["id"], 2)

        with pytest.raises(ConflictError):
            cart.set_quantity(widget["id"], 11)

        assert _quantities(cart) == [(widget["id"], 2)]

    def test_set_quantity_zero_removes(self, cart, widget, gadget):
        cart.add_item(widget["id"], 2)
        cart.add_item(gadget["id"], 1)

        cart.set_quantity(widget["id"], 0)

        assert _quantities(cart) == [(gadget["id"], 1)]

    def test_set_quantity_unknown_product(self, cart):
        with pytest.raises(NotFoundError):
            cart.set_quantity(404, 1)

    def test_set_quantity_product_not_in_cart(self, cart, widget):
        with pytest.raises(NotFoundError):
            cart.set_quantity(widget["id"], 1)

    def test_remove(self, cart, widget):
        cart.add_item(widget["id"], 2)

        assert cart.remove_item(widget["id"])["items"] == []

    def test_remove_absent_line(self, cart, widget):
        with pytest.raises(NotFoundError):
            cart.remove_item(widget["id"])

    def test_clear(self, cart, widget, gadget):
        cart.add_item(widget["id"], 2)
        cart.add_item(gadget["id"], 3)

        result = cart.clear()

        assert result == {"items": [], "total_items": 0}
        assert cart.total_items() == 0

    def test_total_items(self, cart, widget, gadget):
        cart.add_item(widget["id"], 2)
        cart.add_item(gadget["id"], 3)
        cart.set_quantity(gadget["id"], 1)

        assert cart.total_items() == 3

    def test_lines_never_exceed_stock(self, cart, products, widget, gadget):
        ops = [
            (widget["id"], 4), (gadget["id"], 5), (gadget["id"], 4),
            (widget["id"], 7), (widget["id"], 6), (gadget["id"], 1),
        ]
        for product_id, quantity in ops:
            try:
                cart.add_item(product_id, quantity)
            except ConflictError:
                pass
            for line in cart.get_cart()["items"]:
                assert line["quantity"] <= products.get_product(line["product_id"])["stock"]
