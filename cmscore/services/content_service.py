"""
Content services for pages, articles and tags

Pages and articles pick their slug through the auto-resolver on create;
updates and tags validate strictly and surface the failure.
"""

from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
import logging

from cmscore.core.exceptions import (
    PageNotFoundException,
    ArticleNotFoundException,
    TagNotFoundException,
    CategoryNotFoundException,
    SlugFormatException,
)
from cmscore.models import Page, Article, Tag, Category
from cmscore.schemas.content import (
    PageCreate,
    PageUpdate,
    ArticleCreate,
    ArticleUpdate,
    TagCreate,
    TagUpdate,
)
from cmscore.schemas.slug import SlugEntity
from cmscore.utils.helpers import generate_slug
from .base import TransactionalService
from .slug_service import SlugService

logger = logging.getLogger(__name__)


class PageService(TransactionalService):
    """Static pages"""

    def __init__(self, db: AsyncSession):
        super().__init__(db)
        self.slugs = SlugService(db)

    async def get_page(self, page_id: int) -> Page:
        page = await self.db.get(Page, page_id)
        if not page:
            raise PageNotFoundException(f"Page {page_id} not found")
        return page

    async def get_page_by_slug(self, slug: str) -> Page:
        """Get page by slug or raise"""
        result = await self.db.execute(select(Page).where(Page.slug == slug))
        page = result.scalar_one_or_none()
        if not page:
            raise PageNotFoundException(f"Page '{slug}' not found")
        return page

    async def create_page(self, data: PageCreate) -> Page:
        """Create a page; a taken slug is disambiguated once with a time suffix"""
        async with self._unit_of_work("create page"):
            slug = await self.slugs.resolve_for_create(data.title, data.slug, SlugEntity.PAGE)
            page = Page(
                title=data.title,
                slug=slug,
                content=data.content,
                is_published=data.is_published,
                order=data.order,
            )
            self.db.add(page)

        await self.db.refresh(page)
        logger.info(f"Created page {page.id} with slug {page.slug!r}")
        return page

    async def update_page(self, page_id: int, data: PageUpdate) -> Page:
        fields = data.model_dump(exclude_unset=True, exclude_none=True)

        async with self._unit_of_work("update page"):
            page = await self.get_page(page_id)

            new_slug = fields.pop("slug", None)
            if new_slug is not None and new_slug != page.slug:
                await self.slugs.ensure_available(new_slug, SlugEntity.PAGE, exclude_id=page_id)
                page.slug = new_slug

            for key, value in fields.items():
                setattr(page, key, value)

        await self.db.refresh(page)
        return page


class ArticleService(TransactionalService):
    """Articles"""

    def __init__(self, db: AsyncSession):
        super().__init__(db)
        self.slugs = SlugService(db)

    async def get_article(self, article_id: int) -> Article:
        article = await self.db.get(Article, article_id)
        if not article:
            raise ArticleNotFoundException(article_id)
        return article

    async def create_article(self, data: ArticleCreate) -> Article:
        """
        Create an article in an optional category

        Raises:
            CategoryNotFoundException: category_id does not exist
            SlugFormatException, SlugConflictException: No usable slug
        """
        async with self._unit_of_work("create article"):
            await self._check_category(data.category_id)
            slug = await self.slugs.resolve_for_create(data.title, data.slug, SlugEntity.ARTICLE)

            article = Article(
                title=data.title,
                slug=slug,
                content=data.content,
                excerpt=data.excerpt,
                status=data.status.value,
                category_id=data.category_id,
            )
            self.db.add(article)

        await self.db.refresh(article)
        logger.info(f"Created article {article.id} with slug {article.slug!r}")
        return article

    async def update_article(self, article_id: int, data: ArticleUpdate) -> Article:
        fields = data.model_dump(exclude_unset=True)

        async with self._unit_of_work("update article"):
            article = await self.get_article(article_id)

            new_slug = fields.pop("slug", None)
            if new_slug is not None and new_slug != article.slug:
                await self.slugs.ensure_available(new_slug, SlugEntity.ARTICLE, exclude_id=article_id)
                article.slug = new_slug

            if "category_id" in fields:
                await self._check_category(fields["category_id"])

            status = fields.pop("status", None)
            if status is not None:
                article.status = status.value

            for key, value in fields.items():
                if value is None and key == "title":
                    continue
                setattr(article, key, value)

        await self.db.refresh(article)
        return article

    async def _check_category(self, category_id: Optional[int]) -> None:
        if category_id is None:
            return
        if not await self.db.get(Category, category_id):
            raise CategoryNotFoundException(category_id)


class TagService(TransactionalService):
    """Tags; slugs are validated strictly, without disambiguation"""

    def __init__(self, db: AsyncSession):
        super().__init__(db)
        self.slugs = SlugService(db)

    async def get_tag(self, tag_id: int) -> Tag:
        tag = await self.db.get(Tag, tag_id)
        if not tag:
            raise TagNotFoundException(tag_id)
        return tag

    async def create_tag(self, data: TagCreate) -> Tag:
        async with self._unit_of_work("create tag"):
            slug = data.slug or generate_slug(data.name)
            if not slug:
                raise SlugFormatException("Cannot derive a slug from the given name")
            await self.slugs.ensure_available(slug, SlugEntity.TAG)

            tag = Tag(name=data.name, slug=slug)
            self.db.add(tag)

        await self.db.refresh(tag)
        logger.info(f"Created tag {tag.id} with slug {tag.slug!r}")
        return tag

    async def update_tag(self, tag_id: int, data: TagUpdate) -> Tag:
        fields = data.model_dump(exclude_unset=True, exclude_none=True)

        async with self._unit_of_work("update tag"):
            tag = await self.get_tag(tag_id)

            new_slug = fields.pop("slug", None)
            if new_slug is not None and new_slug != tag.slug:
                await self.slugs.ensure_available(new_slug, SlugEntity.TAG, exclude_id=tag_id)
                tag.slug = new_slug

            if "name" in fields:
                tag.name = fields["name"]

        await self.db.refresh(tag)
        return tag
