"""Slug validation schemas"""

from pydantic import BaseModel
from typing import Optional
import enum


class SlugEntity(str, enum.Enum):
    """Entity kinds owning a slug; pages and categories share one namespace"""
    PAGE = "page"
    CATEGORY = "category"
    ARTICLE = "article"
    TAG = "tag"


class SlugErrorCode(str, enum.Enum):
    INVALID_FORMAT = "SLUG_INVALID_FORMAT"
    RESERVED = "SLUG_RESERVED"
    CONFLICT = "SLUG_CONFLICT"


class SlugValidationResult(BaseModel):
    """Result of a read-only slug check"""
    valid: bool
    reason: Optional[str] = None
    code: Optional[SlugErrorCode] = None
