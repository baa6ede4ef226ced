"""Tests for the cart use cases."""

import pytest

from storefront.application.add_to_cart import AddToCartHandler
from storefront.application.remove_from_cart import ClearCartHandler, RemoveFromCartHandler
from storefront.application.show_cart import ShowCartHandler
from storefront.application.update_cart_item import UpdateCartItemHandler
from storefront.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    OutOfStockError,
    ValidationError,
)
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from tests.fakes import FakeUnitOfWork


def _setup() -> FakeUnitOfWork:
    return FakeUnitOfWork([
        Product(id="1", name="Widget", price=Money.of("15.00"), stock_quantity=5),
        Product(id="2", name="Gadget", price=Money.of("25.00"), stock_quantity=0),
    ])


class TestAddToCart:

    def test_adds_line_with_price_snapshot(self):
        uow = _setup()

        dto = AddToCartHandler(uow).handle("user-1", "Widget", 2)

        assert dto.total_items == 2
        assert dto.items[0].unit_price == 1500
        assert dto.total_display == "$30.00"
        assert uow.commits == 1

    def test_accepts_product_id(self):
        dto = AddToCartHandler(_setup()).handle("user-1", "1", 1)
        assert dto.items[0].product_name == "Widget"

    def test_adding_again_increases_quantity(self):
        uow = _setup()
        handler = AddToCartHandler(uow)
        handler.handle("user-1", "Widget", 2)

        dto = handler.handle("user-1", "Widget", 3)

        assert len(dto.items) == 1
        assert dto.items[0].quantity == 5

    def test_combined_quantity_checked_against_stock(self):
        uow = _setup()
        handler = AddToCartHandler(uow)
        handler.handle("user-1", "Widget", 4)

        with pytest.raises(InsufficientStockError):
            handler.handle("user-1", "Widget", 2)

        assert uow.carts.get_or_create("user-1").items[0].quantity.value == 4

    def test_out_of_stock(self):
        with pytest.raises(OutOfStockError):
            AddToCartHandler(_setup()).handle("user-1", "Gadget", 1)

    def test_unknown_product(self):
        with pytest.raises(EntityNotFoundError, match="Product not found"):
            AddToCartHandler(_setup()).handle("user-1", "Sprocket", 1)

    def test_zero_quantity(self):
        with pytest.raises(ValidationError):
            AddToCartHandler(_setup()).handle("user-1", "Widget", 0)


class TestChangeCart:

    def test_update_quantity(self):
        uow = _setup()
        AddToCartHandler(uow).handle("user-1", "Widget", 1)

        dto = UpdateCartItemHandler(uow).handle("user-1", "Widget", 3)

        assert dto.items[0].quantity == 3

    def test_update_quantity_beyond_stock(self):
        uow = _setup()
        AddToCartHandler(uow).handle("user-1", "Widget", 1)

        with pytest.raises(InsufficientStockError):
            UpdateCartItemHandler(uow).handle("user-1", "Widget", 6)

    def test_update_item_not_in_cart(self):
        with pytest.raises(EntityNotFoundError, match="not in the cart"):
            UpdateCartItemHandler(_setup()).handle("user-1", "Widget", 1)

    def test_remove(self):
        uow = _setup()
        AddToCartHandler(uow).handle("user-1", "Widget", 1)

        dto = RemoveFromCartHandler(uow).handle("user-1", "Widget")

        assert dto.items == []

    def test_clear_keeps_cart(self):
        uow = _setup()
        AddToCartHandler(uow).handle("user-1", "Widget", 1)
        cart_id = uow.carts.get_or_create("user-1").id

        ClearCartHandler(uow).handle("user-1")

        cart = uow.carts.get_or_create("user-1")
        assert cart.is_empty
        assert cart.id == cart_id


class TestShowCart:

    def test_creates_cart_lazily(self):
        uow = _setup()

        dto = ShowCartHandler(uow).handle("new-user")

        assert dto.user_id == "new-user"
        assert dto.items == []
        assert dto.total_amount == 0
        assert uow.commits == 1
