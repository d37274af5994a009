"""Slug availability checks for editor forms"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

from cmscore.core.database import get_db
from cmscore.services import SlugService
from cmscore.schemas.slug import SlugValidationResult

router = APIRouter()


@router.get("/check-slug", response_model=SlugValidationResult)
async def check_slug(
    slug: str = Query(..., description="Candidate slug"),
    type: str = Query(..., description="page, category, article or tag"),
    exclude_id: Optional[int] = Query(None, description="Row being edited"),
    db: AsyncSession = Depends(get_db)
):
    """Check a slug without writing anything"""
    return await SlugService(db).validate(slug, type, exclude_id)
