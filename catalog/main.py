import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from catalog import __version__
from catalog.config import configure_logging, settings
from catalog.database import Base, async_session, engine
from catalog.exceptions import ProductNotFoundError
from catalog.middleware import TimingMiddleware
from catalog.routers import console, products
from catalog.security import BasicAuthMiddleware
from catalog.seed import run_seeder

configure_logging()
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: schema and baseline data are in place before traffic arrives.
    if settings.CREATE_SCHEMA:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    if settings.SEED_ON_STARTUP:
        await run_seeder(async_session)
    yield
    # Shutdown
    await engine.dispose()

app = FastAPI(
    title="Product Catalog API",
    description="CRUD service for the product catalog, secured with HTTP Basic",
    version=__version__,
    lifespan=lifespan,
)

# Middleware: the last one added runs first, so timing wraps authentication.
app.add_middleware(BasicAuthMiddleware)
app.add_middleware(TimingMiddleware)

# Routers
app.include_router(products.router)
app.include_router(console.router)

@app.exception_handler(ProductNotFoundError)
async def product_not_found_handler(request: Request, exc: ProductNotFoundError):
    logger.info("%s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=404, content={"detail": str(exc)})
