from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Query, status

from inventory_service.models import ApiResponse, Product, ProductCreate, ProductPage, ProductUpdate
from inventory_service.services import ProductService

router = APIRouter(prefix="/api/products", tags=["products"])
svc = ProductService()


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse[Product],
    response_model_exclude_none=True,
)
async def create_product(payload: ProductCreate):
    product = await svc.create(payload)
    return ApiResponse(data=product, message="Product created successfully")


@router.get("", response_model=ApiResponse[ProductPage], response_model_exclude_none=True)
async def list_products(
    # page/limit stay strings so that junk falls back to defaults instead of a 400
    page: Optional[str] = Query(default=None),
    limit: Optional[str] = Query(default=None),
    search: Optional[str] = Query(default=None),
    categories: Optional[str] = Query(default=None, description="Comma-joined category ids"),
):
    category_ids = categories.split(",") if categories else None
    result = await svc.search(page=page, limit=limit, search=search, category_ids=category_ids)
    return ApiResponse(data=result)


@router.get("/{product_id}", response_model=ApiResponse[Product], response_model_exclude_none=True)
async def get_product(product_id: str):
    return ApiResponse(data=await svc.get(product_id))


@router.put("/{product_id}", response_model=ApiResponse[Product], response_model_exclude_none=True)
async def update_product(product_id: str, patch: ProductUpdate):
    product = await svc.update(product_id, patch)
    return ApiResponse(data=product, message="Product updated successfully")


@router.delete("/{product_id}", response_model=ApiResponse[Product], response_model_exclude_none=True)
async def delete_product(product_id: str):
    product = await svc.delete(product_id)
    return ApiResponse(data=product, message="Product deleted successfully")
