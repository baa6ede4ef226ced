"""Helpers shared by handlers that accept a product by ID or by name."""

from __future__ import annotations

from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.product import Product
from storefront.domain.repository.product_repository import ProductRepository


def find_product(product_repo: ProductRepository, ref: str) -> Product:
    """Resolve a product ID or name, raising EntityNotFoundError if neither matches."""
    product = product_repo.get_by_id(ref) or product_repo.get_by_name(ref)
    if product is None:
        raise EntityNotFoundError(f"Product not found: '{ref}'")
    return product
