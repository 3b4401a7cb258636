# catalog/lookups.py

"""
Read-only product lookup used by the inventory core.
"""

from __future__ import annotations

from dataclasses import dataclass

from catalog.models import Product


class ProductNotFound(Exception):
    pass


@dataclass(frozen=True)
class ProductInfo:
    id: int
    name: str
    category_id: int
    category_name: str


def get_product(product_id) -> ProductInfo:
    product = (
        Product.objects.select_related("category")
        .filter(pk=product_id)
        .first()
    )
    if product is None:
        raise ProductNotFound(f"Product {product_id} not found")

    return ProductInfo(
        id=product.id,
        name=product.name,
        category_id=product.category_id,
        category_name=product.category.name,
    )
