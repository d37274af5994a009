"""API v1 routes aggregation"""

from fastapi import APIRouter

from .categories.router import router as categories_router
from .validation.router import router as validation_router
from .cms.router import router as cms_router
from .articles.router import router as articles_router
from .tags.router import router as tags_router

# Create v1 router
api_router = APIRouter()

# Include all routers
api_router.include_router(categories_router, prefix="/categories", tags=["Categories"])
api_router.include_router(validation_router, prefix="/validation", tags=["Validation"])
api_router.include_router(cms_router, prefix="/pages", tags=["CMS"])
api_router.include_router(articles_router, prefix="/articles", tags=["Articles"])
api_router.include_router(tags_router, prefix="/tags", tags=["Tags"])

# Export router
router = api_router
