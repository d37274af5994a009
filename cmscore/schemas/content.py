"""
Page, article and tag schemas
"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from cmscore.models.article import ArticleStatus


class PageCreate(BaseModel):
    """Schema for creating a page; slug is derived from the title when omitted"""
    title: str = Field(..., min_length=1, max_length=255)
    slug: Optional[str] = Field(None, max_length=255)
    content: str = Field(..., min_length=1)
    is_published: bool = True
    order: int = 0


class PageUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    slug: Optional[str] = Field(None, max_length=255)
    content: Optional[str] = None
    is_published: Optional[bool] = None
    order: Optional[int] = None


class PageResponse(BaseModel):
    id: int
    slug: str
    title: str
    content: str
    is_published: bool
    order: Optional[int] = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ArticleCreate(BaseModel):
    """Schema for creating an article; slug is derived from the title when omitted"""
    title: str = Field(..., min_length=1, max_length=255)
    slug: Optional[str] = Field(None, max_length=255)
    content: Optional[str] = None
    excerpt: Optional[str] = Field(None, max_length=500)
    status: ArticleStatus = ArticleStatus.DRAFT
    category_id: Optional[int] = None


class ArticleUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    slug: Optional[str] = Field(None, max_length=255)
    content: Optional[str] = None
    excerpt: Optional[str] = Field(None, max_length=500)
    status: Optional[ArticleStatus] = None
    category_id: Optional[int] = None


class ArticleResponse(BaseModel):
    id: int
    title: str
    slug: str
    content: Optional[str] = None
    excerpt: Optional[str] = None
    status: ArticleStatus
    category_id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class TagCreate(BaseModel):
    """Schema for creating a tag; slug is derived from the name when omitted"""
    name: str = Field(..., min_length=1, max_length=50)
    slug: Optional[str] = Field(None, max_length=50)


class TagUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=50)
    slug: Optional[str] = Field(None, max_length=50)


class TagResponse(BaseModel):
    id: int
    name: str
    slug: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
