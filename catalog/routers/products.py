import logging

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.config import settings
from catalog.database import get_db
from catalog.dependencies import PaginationParams, ProductId, current_principal
from catalog.schemas import ProductPage, ProductRequest, ProductResponse
from catalog.security import Principal
from catalog.services import product_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix=settings.API_PREFIX, tags=["products"])

@router.get("", response_model=ProductPage)
async def list_products(
    pagination: PaginationParams = Depends(),
    db: AsyncSession = Depends(get_db),
):
    return await product_service.get_products_page(
        db, pagination.page, pagination.page_size, pagination.sort_by, pagination.sort_order
    )

@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: ProductId, db: AsyncSession = Depends(get_db)):
    return await product_service.get_product_by_id(db, product_id)

@router.post("", status_code=201, response_model=ProductResponse)
async def create_product(
    data: ProductRequest,
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(current_principal),
):
    product = await product_service.add_product(db, data)
    logger.info("Product %d created by %s", product.id, principal.username)
    return product

@router.put("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: ProductId,
    data: ProductRequest,
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(current_principal),
):
    product = await product_service.update_product(db, product_id, data)
    logger.info("Product %d updated by %s", product_id, principal.username)
    return product

@router.delete("/{product_id}", status_code=204)
async def delete_product(
    product_id: ProductId,
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(current_principal),
):
    deleted = await product_service.delete_product(db, product_id)
    if not deleted:
        raise HTTPException(status_code=404, detail=f"Product not found with id: {product_id}")
    logger.info("Product %d deleted by %s", product_id, principal.username)
    return Response(status_code=204)
