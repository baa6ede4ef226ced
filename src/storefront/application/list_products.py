"""Application service: List Products with stock levels (query)."""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.repository.unit_of_work import UnitOfWork


@dataclass(frozen=True)
class ProductLineDTO:
    id: str
    name: str
    price: str
    stock_quantity: int


class ListProductsHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self) -> list[ProductLineDTO]:
        with self._uow as uow:
            products = uow.products.list_all()
        return [
            ProductLineDTO(
                id=product.id,
                name=product.name,
                price=str(product.price),
                stock_quantity=product.stock_quantity,
            )
            for product in products
        ]
