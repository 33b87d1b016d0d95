from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from catalog import __version__
from catalog.config import settings
from catalog.database import get_db
from catalog.repository import ProductRepository
from catalog.schemas import ConsoleResponse, HealthResponse

# Exempt from authentication, see catalog.security.DEFAULT_RULES.
router = APIRouter(prefix=settings.CONSOLE_PATH, tags=["console"])

@router.get("", response_model=ConsoleResponse)
async def console(db: AsyncSession = Depends(get_db)):
    product_count = await ProductRepository(db).count()
    bind = db.get_bind()

    return ConsoleResponse(
        status="healthy",
        version=__version__,
        environment=settings.APP_ENV,
        database=bind.dialect.name,
        product_count=product_count,
    )

@router.get("/health", response_model=HealthResponse)
async def health():
    return {"status": "healthy", "version": __version__}
