"""Pages, articles and tags: slug resolution on create, strict checks on update"""
import re

import pytest
import pytest_asyncio

from cmscore.core.exceptions import (
    CategoryNotFoundException,
    PageNotFoundException,
    ArticleNotFoundException,
    TagNotFoundException,
    SlugConflictException,
    SlugFormatException,
)
from cmscore.models import Category
from cmscore.models.article import ArticleStatus
from cmscore.schemas.content import (
    PageCreate,
    PageUpdate,
    ArticleCreate,
    ArticleUpdate,
    TagCreate,
    TagUpdate,
)
from cmscore.services import PageService, ArticleService, TagService


@pytest_asyncio.fixture
async def news(db_session):
    category = Category(name="News", slug="news", path="news")
    db_session.add(category)
    await db_session.commit()
    return category.id


class TestPageService:

    @pytest.mark.asyncio
    async def test_create_derives_slug(self, db_session):
        page = await PageService(db_session).create_page(PageCreate(title="About Us", content="Hi"))

        assert page.slug == "about-us"
        assert page.is_published is True
        assert page.created_at is not None

    @pytest.mark.asyncio
    async def test_category_slug_is_disambiguated(self, db_session, news):
        page = await PageService(db_session).create_page(PageCreate(title="News", content="..."))
        assert re.fullmatch(r"news-[0-9a-z]+", page.slug)

    @pytest.mark.asyncio
    async def test_get_by_slug(self, db_session):
        pages = PageService(db_session)
        created = await pages.create_page(PageCreate(title="About", slug="about", content="..."))

        assert (await pages.get_page_by_slug("about")).id == created.id
        with pytest.raises(PageNotFoundException):
            await pages.get_page_by_slug("missing")

    @pytest.mark.asyncio
    async def test_update_checks_slug_strictly(self, db_session, news):
        pages = PageService(db_session)
        page = await pages.create_page(PageCreate(title="About", content="..."))
        page_id = page.id

        with pytest.raises(SlugConflictException):
            await pages.update_page(page_id, PageUpdate(slug="news"))
        with pytest.raises(SlugFormatException):
            await pages.update_page(page_id, PageUpdate(slug="About Us"))

        updated = await pages.update_page(page_id, PageUpdate(slug="about", title="About Us"))
        assert updated.slug == "about"
        assert updated.title == "About Us"

    @pytest.mark.asyncio
    async def test_update_missing_page(self, db_session):
        with pytest.raises(PageNotFoundException):
            await PageService(db_session).update_page(42, PageUpdate(title="x"))


class TestArticleService:

    @pytest.mark.asyncio
    async def test_duplicate_title_gets_suffix(self, db_session):
        articles = ArticleService(db_session)
        first = await articles.create_article(ArticleCreate(title="My Article"))
        second = await articles.create_article(ArticleCreate(title="My Article"))

        assert first.slug == "my-article"
        assert re.fullmatch(r"my-article-[0-9a-z]+", second.slug)

    @pytest.mark.asyncio
    async def test_max_length_title_collision_fits_column(self, db_session):
        articles = ArticleService(db_session)
        first = await articles.create_article(ArticleCreate(title="a" * 255))
        second = await articles.create_article(ArticleCreate(title="a" * 255))

        assert len(first.slug) == 255
        assert len(second.slug) <= 255
        assert second.slug != first.slug

    @pytest.mark.asyncio
    async def test_article_may_reuse_category_slug(self, db_session, news):
        article = await ArticleService(db_session).create_article(
            ArticleCreate(title="News", category_id=news)
        )
        assert article.slug == "news"
        assert article.category_id == news
        assert article.status == ArticleStatus.DRAFT

    @pytest.mark.asyncio
    async def test_unknown_category(self, db_session):
        with pytest.raises(CategoryNotFoundException):
            await ArticleService(db_session).create_article(ArticleCreate(title="Hi", category_id=7))

    @pytest.mark.asyncio
    async def test_update(self, db_session, news):
        articles = ArticleService(db_session)
        article = await articles.create_article(ArticleCreate(title="Draft"))
        other = await articles.create_article(ArticleCreate(title="Other"))
        article_id, other_slug = article.id, other.slug

        updated = await articles.update_article(
            article_id,
            ArticleUpdate(status=ArticleStatus.PUBLISHED, category_id=news, excerpt="Short")
        )
        assert updated.status == ArticleStatus.PUBLISHED
        assert updated.category_id == news
        assert updated.excerpt == "Short"

        with pytest.raises(SlugConflictException):
            await articles.update_article(article_id, ArticleUpdate(slug=other_slug))
        with pytest.raises(ArticleNotFoundException):
            await articles.update_article(999, ArticleUpdate(title="x"))


class TestTagService:

    @pytest.mark.asyncio
    async def test_create_derives_slug(self, db_session):
        tag = await TagService(db_session).create_tag(TagCreate(name="Machine Learning"))
        assert tag.slug == "machine-learning"

    @pytest.mark.asyncio
    async def test_duplicates_are_not_resolved(self, db_session):
        tags = TagService(db_session)
        await tags.create_tag(TagCreate(name="Python"))

        with pytest.raises(SlugConflictException):
            await tags.create_tag(TagCreate(name="Python"))

    @pytest.mark.asyncio
    async def test_name_without_slug_characters(self, db_session):
        with pytest.raises(SlugFormatException):
            await TagService(db_session).create_tag(TagCreate(name="!!!"))

    @pytest.mark.asyncio
    async def test_update(self, db_session):
        tags = TagService(db_session)
        tag = await tags.create_tag(TagCreate(name="Py"))

        updated = await tags.update_tag(tag.id, TagUpdate(name="Python", slug="python"))
        assert (updated.name, updated.slug) == ("Python", "python")

        with pytest.raises(TagNotFoundException):
            await tags.update_tag(999, TagUpdate(name="x"))
