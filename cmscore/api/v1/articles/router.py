from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from cmscore.core.database import get_db
from cmscore.services import ArticleService
from cmscore.schemas.content import ArticleCreate, ArticleUpdate, ArticleResponse

router = APIRouter()

@router.post("", response_model=ArticleResponse, status_code=status.HTTP_201_CREATED)
async def create_article(payload: ArticleCreate, db: AsyncSession = Depends(get_db)):
    """Create article"""
    return await ArticleService(db).create_article(payload)

@router.put("/{article_id}", response_model=ArticleResponse)
async def update_article(article_id: int, payload: ArticleUpdate, db: AsyncSession = Depends(get_db)):
    """Update article"""
    return await ArticleService(db).update_article(article_id, payload)
