from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer

# Decimal in Python, plain number on the wire.
Price = Annotated[
    Decimal,
    PlainSerializer(lambda v: float(v), return_type=float, when_used="json"),
]


# --- Product ---

class ProductRequest(BaseModel):
    """Replacement values for create / update; never carries an identity."""
    name: str = Field(max_length=255)
    description: str | None = None
    # Same precision and scale as the products.price column, so nothing is
    # rounded between the request and what the store keeps.
    price: Price = Field(max_digits=38, decimal_places=2)


class ProductResponse(BaseModel):
    id: int
    name: str
    description: str | None
    price: Price
    model_config = ConfigDict(from_attributes=True)


# --- Pagination ---

class ProductPage(BaseModel):
    items: list[ProductResponse]
    total: int
    page: int
    page_size: int
    pages: int


# --- Console ---

class HealthResponse(BaseModel):
    status: str
    version: str


class ConsoleResponse(HealthResponse):
    environment: str
    database: str
    product_count: int
