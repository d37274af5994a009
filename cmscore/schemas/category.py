"""
Category schemas for request/response validation
"""

from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime


class CategoryBase(BaseModel):
    """Base schema for categories"""
    name: str = Field(..., min_length=1, max_length=100, description="Category name")
    slug: str = Field(..., min_length=1, max_length=100, description="URL-friendly slug")
    description: Optional[str] = Field(None, max_length=1000, description="Category description")
    order: int = Field(default=0, description="Sort order among siblings")


class CategoryCreate(CategoryBase):
    """Schema for creating category"""
    parent_id: Optional[int] = Field(None, description="Parent category ID; null for a root")


class CategoryUpdate(BaseModel):
    """Schema for updating category; parent_id set explicitly to null moves to root"""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    slug: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=1000)
    parent_id: Optional[int] = None
    order: Optional[int] = None


class CategoryMove(BaseModel):
    """Schema for reparenting a category"""
    parent_id: Optional[int] = Field(None, description="New parent ID; null moves to root")


class CategoryResponse(CategoryBase):
    """Schema for category response"""
    id: int
    parent_id: Optional[int] = None
    path: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class CategoryWithChildren(CategoryResponse):
    """Schema for category with children"""
    children: List['CategoryWithChildren'] = Field(default=[], description="Child categories")


class CategoryTree(BaseModel):
    """Schema for category tree structure"""
    categories: List[CategoryWithChildren]


class CategoryListResponse(BaseModel):
    """Schema for category list"""
    items: List[CategoryResponse]
    total: int


class CategoryReorderItem(BaseModel):
    """One dragged node: its new parent and sibling position"""
    id: int
    parent_id: Optional[int] = None
    order: int = 0


class CategoryReorderRequest(BaseModel):
    """Schema for bulk reorder"""
    items: List[CategoryReorderItem]


class CategoryReorderResult(BaseModel):
    """Outcome of a bulk reorder"""
    success: bool = True
    updated: int
    paths_rewritten: int


# Enable forward references
CategoryWithChildren.model_rebuild()
