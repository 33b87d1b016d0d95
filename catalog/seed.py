"""Startup seeder: baseline catalog data for an empty store."""
import logging
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from catalog.database import unit_of_work
from catalog.schemas import ProductRequest
from catalog.services import product_service

logger = logging.getLogger(__name__)

SAMPLE_PRODUCTS: tuple[ProductRequest, ...] = (
    ProductRequest(name="Laptop Pro", description="Powerful laptop for professionals", price=Decimal("1200.00")),
    ProductRequest(name="Wireless Mouse", description="Ergonomic wireless mouse", price=Decimal("25.99")),
    ProductRequest(name="Mechanical Keyboard", description="RGB mechanical gaming keyboard", price=Decimal("89.95")),
)


async def seed_products(db: AsyncSession) -> int:
    """
    Insert ``SAMPLE_PRODUCTS`` in order when the store is empty.

    Returns the number of products inserted (0 when data already exists).
    Flushes only; the caller owns the transaction.
    """
    if await product_service.get_all_products(db):
        logger.info("Products already exist, skipping initial data load.")
        return 0

    logger.info("Loading initial product data...")
    for data in SAMPLE_PRODUCTS:
        await product_service.add_product(db, data)
    logger.info("Initial product data loaded.")
    return len(SAMPLE_PRODUCTS)


async def run_seeder(session_factory: async_sessionmaker[AsyncSession] | None = None) -> int:
    """Run ``seed_products`` in its own unit of work; nothing is kept if it fails."""
    async with unit_of_work(session_factory) as session:
        return await seed_products(session)
