"""
Persistence gateway for the Product table.

A thin adapter over an ``AsyncSession``: every method maps to one or two
SQL statements and nothing here commits.  ``save`` flushes so the caller
sees the store-assigned identity immediately; the surrounding unit of
work (``get_db`` or the seeder's own transaction) owns commit / rollback.
"""
from sqlalchemy import asc, delete, desc, exists, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.models import Product

# Columns that are safe to sort by; guards against arbitrary attribute access.
_SORTABLE_COLUMNS: frozenset[str] = frozenset({"id", "name", "price"})


def _resolve_sort_column(sort_by: str):
    """Return the column for *sort_by*, falling back to ``Product.id``."""
    if sort_by in _SORTABLE_COLUMNS:
        return getattr(Product, sort_by)
    return Product.id


class ProductRepository:

    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    async def find_all(self) -> list[Product]:
        result = await self._db.execute(select(Product).order_by(Product.id))
        return list(result.scalars().all())

    async def find_all_paged(
        self,
        offset: int,
        limit: int,
        sort_by: str = "id",
        sort_order: str = "asc",
    ) -> tuple[list[Product], int]:
        """Return one slice of products plus the total row count."""
        total = await self.count()

        sort_col = _resolve_sort_column(sort_by)
        order_expr = desc(sort_col) if sort_order == "desc" else asc(sort_col)
        q = select(Product).order_by(order_expr, Product.id).offset(offset).limit(limit)
        result = await self._db.execute(q)
        return list(result.scalars().all()), total

    async def find_by_id(self, product_id: int) -> Product | None:
        return await self._db.get(Product, product_id)

    async def exists_by_id(self, product_id: int) -> bool:
        q = select(exists().where(Product.id == product_id))
        return bool((await self._db.execute(q)).scalar())

    async def count(self) -> int:
        q = select(func.count()).select_from(Product)
        return (await self._db.execute(q)).scalar_one()

    async def save(self, product: Product) -> Product:
        self._db.add(product)
        await self._db.flush()
        return product

    async def delete_by_id(self, product_id: int) -> None:
        # ORM-enabled DELETE also evicts the matching identity-map entry.
        await self._db.execute(delete(Product).where(Product.id == product_id))
