from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from cmscore.core.database import get_db
from cmscore.services import TagService
from cmscore.schemas.content import TagCreate, TagUpdate, TagResponse

router = APIRouter()

@router.post("", response_model=TagResponse, status_code=status.HTTP_201_CREATED)
async def create_tag(payload: TagCreate, db: AsyncSession = Depends(get_db)):
    """Create tag"""
    return await TagService(db).create_tag(payload)

@router.put("/{tag_id}", response_model=TagResponse)
async def update_tag(tag_id: int, payload: TagUpdate, db: AsyncSession = Depends(get_db)):
    """Update tag"""
    return await TagService(db).update_tag(tag_id, payload)
