"""
Product service: business logic for the Product entity.

Design notes
------------
- Reads and updates escalate a missing record into
  ``ProductNotFoundError``; deletion reports a missing record as ``False``
  instead.  Callers rely on that asymmetry.
- Every function takes the request-scoped ``AsyncSession`` first and goes
  through ``ProductRepository``.  Writes flush but do not commit; the
  transaction boundary is owned by ``get_db`` (or by the seeder).
"""
import math

from sqlalchemy.ext.asyncio import AsyncSession

from catalog.exceptions import ProductNotFoundError
from catalog.models import Product
from catalog.repository import ProductRepository
from catalog.schemas import ProductPage, ProductRequest, ProductResponse


async def get_products_page(
    db: AsyncSession,
    page: int = 1,
    page_size: int = 20,
    sort_by: str = "id",
    sort_order: str = "asc",
) -> ProductPage:
    """Return one page of products together with the total count."""
    products, total = await ProductRepository(db).find_all_paged(
        offset=(page - 1) * page_size,
        limit=page_size,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    return ProductPage(
        items=[ProductResponse.model_validate(p) for p in products],
        total=total,
        page=page,
        page_size=page_size,
        pages=math.ceil(total / page_size) if total > 0 else 0,
    )


async def get_all_products(db: AsyncSession) -> list[Product]:
    return await ProductRepository(db).find_all()


async def get_product_by_id(db: AsyncSession, product_id: int) -> Product:
    product = await ProductRepository(db).find_by_id(product_id)
    if product is None:
        raise ProductNotFoundError(product_id)
    return product


async def add_product(db: AsyncSession, data: ProductRequest) -> Product:
    """Persist a new product; the returned instance carries its new id."""
    product = Product(name=data.name, description=data.description, price=data.price)
    return await ProductRepository(db).save(product)


async def update_product(
    db: AsyncSession, product_id: int, data: ProductRequest
) -> Product:
    """
    Overwrite name, description and price of an existing product.

    The identity is left untouched.  Raises ``ProductNotFoundError`` before
    any write when the product does not exist.
    """
    repo = ProductRepository(db)
    product = await repo.find_by_id(product_id)
    if product is None:
        raise ProductNotFoundError(product_id)

    product.name = data.name
    product.description = data.description
    product.price = data.price
    return await repo.save(product)


async def delete_product(db: AsyncSession, product_id: int) -> bool:
    """Delete the product; ``False`` when there was nothing to delete."""
    repo = ProductRepository(db)
    if not await repo.exists_by_id(product_id):
        return False
    await repo.delete_by_id(product_id)
    return True
