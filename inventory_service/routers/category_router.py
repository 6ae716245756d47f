from __future__ import annotations

from typing import List

from fastapi import APIRouter

from inventory_service.models import ApiResponse, Category
from inventory_service.services import CategoryService

router = APIRouter(prefix="/api/categories", tags=["categories"])
svc = CategoryService()


@router.get("", response_model=ApiResponse[List[Category]], response_model_exclude_none=True)
async def list_categories():
    return ApiResponse(data=await svc.list_all())


@router.get("/{category_id}", response_model=ApiResponse[Category], response_model_exclude_none=True)
async def get_category(category_id: str):
    return ApiResponse(data=await svc.get(category_id))
