"""Application service: Update Product use case."""

from __future__ import annotations

from storefront.application.lookup import find_product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.unit_of_work import UnitOfWork


class UpdateProductHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, product_ref: str, new_price: str) -> None:
        """Update a product's price.

        This does NOT affect existing orders or cart lines; they captured
        a price snapshot.
        """
        with self._uow as uow:
            product = find_product(uow.products, product_ref)
            product.update_price(Money.of(new_price, product.price.currency))
            uow.products.save(product)
            uow.commit()
