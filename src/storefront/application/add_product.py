"""Application service: Add Product use case."""

from __future__ import annotations

import uuid

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.unit_of_work import UnitOfWork


class AddProductHandler:

    def __init__(self, uow: UnitOfWork, currency: str = "USD") -> None:
        self._uow = uow
        self._currency = currency

    def handle(self, name: str, price: str, stock: int = 0) -> Product:
        """Add a new product to the catalog."""
        if not name or not name.strip():
            raise ValidationError("Product name is required")

        money = Money.of(price, self._currency)
        if money.amount <= 0:
            raise ValidationError("Product price must be greater than zero")

        with self._uow as uow:
            if uow.products.get_by_name(name.strip()) is not None:
                raise ValidationError(f"Product '{name.strip()}' already exists")

            product = Product(
                id=str(uuid.uuid4()),
                name=name.strip(),
                price=money,
                stock_quantity=stock,
            )
            uow.products.save(product)
            uow.commit()
        return product
