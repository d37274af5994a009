from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from cmscore.core.database import get_db
from cmscore.services import PageService
from cmscore.schemas.content import PageCreate, PageUpdate, PageResponse

router = APIRouter()

@router.get("/slug/{slug}", response_model=PageResponse)
async def get_page_by_slug(slug: str, db: AsyncSession = Depends(get_db)):
    """Get CMS page by slug"""
    return await PageService(db).get_page_by_slug(slug)

@router.post("", response_model=PageResponse, status_code=status.HTTP_201_CREATED)
async def create_page(payload: PageCreate, db: AsyncSession = Depends(get_db)):
    """Create CMS page"""
    return await PageService(db).create_page(payload)

@router.put("/{page_id}", response_model=PageResponse)
async def update_page(page_id: int, payload: PageUpdate, db: AsyncSession = Depends(get_db)):
    """Update CMS page"""
    return await PageService(db).update_page(page_id, payload)
