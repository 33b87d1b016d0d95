"""Catalog-level exceptions.

Raised by the service layer; the application maps them to HTTP responses
in ``catalog.main``.
"""


class CatalogError(Exception):
    """Base class for all catalog errors."""


class ProductNotFoundError(CatalogError):
    """No product is stored under the requested identity."""

    def __init__(self, product_id: int) -> None:
        self.product_id = product_id
        super().__init__(f"Product not found with id: {product_id}")
