"""Service layer"""

from .slug_service import SlugService
from .category_service import CategoryService
from .content_service import PageService, ArticleService, TagService

__all__ = [
    "SlugService",
    "CategoryService",
    "PageService",
    "ArticleService",
    "TagService",
]
