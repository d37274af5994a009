"""Models package initialization"""

from .base import Base
from .category import Category
from .cms import Page
from .article import Article, ArticleStatus, Tag

# Export all models
__all__ = [
    "Base",
    "Category",
    "Page",
    "Article",
    "ArticleStatus",
    "Tag",
]
