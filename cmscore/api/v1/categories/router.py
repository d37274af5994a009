"""
Category API router
Thin adapter over CategoryService; static routes are declared before /{category_id}
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

from cmscore.core.database import get_db
from cmscore.services import CategoryService
from cmscore.schemas.category import (
    CategoryCreate,
    CategoryUpdate,
    CategoryMove,
    CategoryResponse,
    CategoryTree,
    CategoryListResponse,
    CategoryReorderRequest,
    CategoryReorderResult,
)

router = APIRouter()


@router.get("/tree", response_model=CategoryTree)
async def get_category_tree(db: AsyncSession = Depends(get_db)):
    """Get complete category tree structure"""
    categories = await CategoryService(db).get_category_tree()
    return CategoryTree(categories=categories)


@router.get("", response_model=CategoryListResponse)
async def get_categories(
    path_prefix: Optional[str] = Query(None, description="Only the subtree rooted at this path"),
    db: AsyncSession = Depends(get_db)
):
    """Get categories, optionally restricted to one subtree"""
    categories = await CategoryService(db).list_categories(path_prefix)
    return CategoryListResponse(
        items=[CategoryResponse.model_validate(c) for c in categories],
        total=len(categories)
    )


@router.put("/reorder", response_model=CategoryReorderResult)
async def reorder_categories(
    payload: CategoryReorderRequest,
    db: AsyncSession = Depends(get_db)
):
    """Apply a drag-and-drop reorder of the tree in one transaction"""
    return await CategoryService(db).reorder_categories(payload.items)


@router.get("/{category_id}", response_model=CategoryResponse)
async def get_category(category_id: int, db: AsyncSession = Depends(get_db)):
    """Get category by ID"""
    return await CategoryService(db).get_category(category_id)


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(payload: CategoryCreate, db: AsyncSession = Depends(get_db)):
    """Create new category"""
    return await CategoryService(db).create_category(payload)


@router.put("/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: int,
    payload: CategoryUpdate,
    db: AsyncSession = Depends(get_db)
):
    """Update category; slug or parent changes re-path the subtree"""
    return await CategoryService(db).update_category(category_id, payload)


@router.put("/{category_id}/move", response_model=CategoryResponse)
async def move_category(
    category_id: int,
    payload: CategoryMove,
    db: AsyncSession = Depends(get_db)
):
    """Move category under a new parent, or to the root"""
    return await CategoryService(db).move_category(category_id, payload.parent_id)


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(category_id: int, db: AsyncSession = Depends(get_db)):
    """Delete a category without children"""
    await CategoryService(db).delete_category(category_id)
