"""
Category service layer
Create, update, move, bulk reorder and delete category nodes while keeping
the materialized paths, the tree shape and the slug namespace consistent
"""

from typing import Dict, List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, func, or_
import logging

from cmscore.core.exceptions import (
    BadRequestException,
    CategoryNotFoundException,
    ParentCategoryNotFoundException,
    CategorySelfParentException,
    CategoryCycleException,
    CategoryHasChildrenException,
)
from cmscore.models import Category, Article
from cmscore.schemas.category import (
    CategoryCreate,
    CategoryUpdate,
    CategoryReorderItem,
    CategoryReorderResult,
    CategoryWithChildren,
)
from cmscore.schemas.slug import SlugEntity
from .category_tree import (
    PATH_SEPARATOR,
    compute_path,
    would_create_cycle,
    recompute_paths,
    children_index,
)
from .base import TransactionalService
from .slug_service import SlugService

logger = logging.getLogger(__name__)


class CategoryService(TransactionalService):
    """Category tree mutations; each public write is one transaction"""

    def __init__(self, db: AsyncSession):
        super().__init__(db)
        self.slugs = SlugService(db)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def get_category(self, category_id: int) -> Category:
        """Get category by ID or raise"""
        category = await self.db.get(Category, category_id)
        if not category:
            raise CategoryNotFoundException(category_id)
        return category

    async def get_category_by_slug(self, slug: str) -> Optional[Category]:
        """Get category by slug"""
        result = await self.db.execute(select(Category).where(Category.slug == slug))
        return result.scalar_one_or_none()

    async def get_category_by_path(self, path: str) -> Optional[Category]:
        """Get category by its full materialized path"""
        result = await self.db.execute(select(Category).where(Category.path == path))
        return result.scalar_one_or_none()

    async def list_categories(self, path_prefix: Optional[str] = None) -> List[Category]:
        """
        List categories, optionally restricted to one subtree

        Args:
            path_prefix: Path of the subtree root; the root itself is included

        Returns:
            Categories ordered by sort order and name
        """
        stmt = select(Category)
        if path_prefix:
            stmt = stmt.where(
                or_(
                    Category.path == path_prefix,
                    Category.path.startswith(path_prefix + PATH_SEPARATOR, autoescape=True),
                )
            )
        stmt = stmt.order_by(Category.order, Category.name)

        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def get_category_tree(self) -> List[CategoryWithChildren]:
        """Get complete category tree; nodes with a missing parent are listed as roots"""
        categories = {c.id: c for c in await self.list_categories()}
        index = children_index({cid: c.parent_id for cid, c in categories.items()})

        def build(node_ids: List[int]) -> List[CategoryWithChildren]:
            nodes = sorted((categories[i] for i in node_ids), key=lambda c: (c.order or 0, c.name))
            return [
                CategoryWithChildren.model_validate(node).model_copy(
                    update={"children": build(index.get(node.id, []))}
                )
                for node in nodes
            ]

        return build(index.get(None, []))

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def create_category(self, data: CategoryCreate) -> Category:
        """
        Create a category under an optional parent

        Raises:
            SlugFormatException, ReservedSlugException, SlugConflictException:
                Slug rejected in the page/category namespace
            ParentCategoryNotFoundException: parent_id does not exist
            PersistenceException: Storage failure
        """
        async with self._unit_of_work("create category"):
            await self.slugs.ensure_available(data.slug, SlugEntity.CATEGORY)

            parent = None
            if data.parent_id is not None:
                parent = await self.db.get(Category, data.parent_id)
                if not parent:
                    raise ParentCategoryNotFoundException(data.parent_id)

            category = Category(
                name=data.name,
                slug=data.slug,
                description=data.description,
                parent_id=data.parent_id,
                order=data.order,
            )
            category.path = compute_path(category, lambda _id: parent)
            self.db.add(category)

        await self.db.refresh(category)
        logger.info(f"Created category {category.id} at {category.path!r}")
        return category

    async def update_category(self, category_id: int, data: CategoryUpdate) -> Category:
        """
        Update fields of a category; a changed slug or parent re-paths the subtree

        Only fields present in the payload are applied. Sending parent_id
        explicitly as null moves the category to the root.
        """
        fields = data.model_dump(exclude_unset=True)
        parent_given = "parent_id" in fields
        new_parent_id = fields.pop("parent_id", None)
        new_slug = fields.pop("slug", None)

        if parent_given and new_parent_id == category_id:
            raise CategorySelfParentException(category_id)

        async with self._unit_of_work("update category"):
            category = await self._get_for_update(category_id)

            slug_changed = new_slug is not None and new_slug != category.slug
            parent_changed = parent_given and new_parent_id != category.parent_id

            if slug_changed:
                await self.slugs.ensure_available(new_slug, SlugEntity.CATEGORY, exclude_id=category_id)
            if parent_changed:
                await self._check_new_parent(category_id, new_parent_id)

            for key, value in fields.items():
                if value is None and key in ("name", "order"):
                    continue
                setattr(category, key, value)

            rewritten = 0
            if slug_changed:
                category.slug = new_slug
            if parent_changed:
                category.parent_id = new_parent_id
            if slug_changed or parent_changed:
                rewritten = await self._repath(category)

        await self.db.refresh(category)
        if slug_changed or parent_changed:
            logger.info(
                f"Updated category {category_id}: path {category.path!r}, "
                f"{rewritten} descendant paths rewritten"
            )
        return category

    async def move_category(self, category_id: int, new_parent_id: Optional[int]) -> Category:
        """
        Reparent a category and rewrite the paths of its whole subtree

        Raises:
            CategorySelfParentException: new_parent_id == category_id
            CategoryNotFoundException: Category does not exist
            ParentCategoryNotFoundException: New parent does not exist
            CategoryCycleException: New parent lies inside the category's subtree
            PersistenceException: Storage failure; nothing was changed
        """
        if new_parent_id == category_id:
            raise CategorySelfParentException(category_id)

        async with self._unit_of_work("move category"):
            category = await self._get_for_update(category_id)
            rewritten = 0
            if new_parent_id != category.parent_id:
                await self._check_new_parent(category_id, new_parent_id)
                category.parent_id = new_parent_id
                rewritten = await self._repath(category)

        await self.db.refresh(category)
        logger.info(
            f"Moved category {category_id} under {new_parent_id}: path {category.path!r}, "
            f"{rewritten} descendant paths rewritten"
        )
        return category

    async def reorder_categories(self, items: List[CategoryReorderItem]) -> CategoryReorderResult:
        """
        Apply parent and order changes from a tree drag-and-drop, then
        recompute every path from scratch

        Raises:
            BadRequestException: Empty payload or duplicate ids
            CategorySelfParentException: An item names itself as parent
            CategoryNotFoundException / ParentCategoryNotFoundException: Unknown ids
            CategoryCycleException: Resulting parent links contain a cycle
            PersistenceException: Storage failure; nothing was changed
        """
        if not items:
            raise BadRequestException("No updates provided", error_code="REORDER_EMPTY")

        ids = [item.id for item in items]
        if len(set(ids)) != len(ids):
            raise BadRequestException(
                "Each category may appear only once in a reorder request",
                error_code="REORDER_DUPLICATE_ID"
            )
        for item in items:
            if item.parent_id == item.id:
                raise CategorySelfParentException(item.id)

        async with self._unit_of_work("reorder categories"):
            result = await self.db.execute(select(Category).with_for_update())
            categories: Dict[int, Category] = {c.id: c for c in result.scalars().all()}

            for item in items:
                category = categories.get(item.id)
                if category is None:
                    raise CategoryNotFoundException(item.id)
                if item.parent_id is not None and item.parent_id not in categories:
                    raise ParentCategoryNotFoundException(item.parent_id)
                category.parent_id = item.parent_id
                category.order = item.order

            paths = recompute_paths(
                {cid: c.slug for cid, c in categories.items()},
                {cid: c.parent_id for cid, c in categories.items()},
            )

            rewritten = 0
            for cid, category in categories.items():
                if category.path != paths[cid]:
                    category.path = paths[cid]
                    rewritten += 1

        logger.info(f"Reordered {len(items)} categories, {rewritten} paths rewritten")
        return CategoryReorderResult(updated=len(items), paths_rewritten=rewritten)

    async def delete_category(self, category_id: int) -> None:
        """
        Delete a leaf category; articles in it become uncategorized

        Raises:
            CategoryNotFoundException: Category does not exist
            CategoryHasChildrenException: Category still has children
        """
        async with self._unit_of_work("delete category"):
            category = await self._get_for_update(category_id)

            children = await self.db.execute(
                select(func.count(Category.id)).where(Category.parent_id == category_id)
            )
            children_count = children.scalar() or 0
            if children_count > 0:
                raise CategoryHasChildrenException(category_id, children_count)

            await self.db.execute(
                update(Article)
                .where(Article.category_id == category_id)
                .values(category_id=None)
                .execution_options(synchronize_session=False)
            )
            await self.db.delete(category)

        logger.info(f"Deleted category {category_id}")

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _get_for_update(self, category_id: int) -> Category:
        result = await self.db.execute(
            select(Category).where(Category.id == category_id).with_for_update()
        )
        category = result.scalar_one_or_none()
        if not category:
            raise CategoryNotFoundException(category_id)
        return category

    async def _check_new_parent(self, category_id: int, parent_id: Optional[int]) -> None:
        """Parent must exist and must not sit inside the category's own subtree"""
        if parent_id is None:
            return

        rows = await self.db.execute(select(Category.id, Category.parent_id))
        parents: Dict[int, Optional[int]] = {row.id: row.parent_id for row in rows}

        if parent_id not in parents:
            raise ParentCategoryNotFoundException(parent_id)
        if would_create_cycle(category_id, parent_id, parents.get):
            raise CategoryCycleException(category_id, parent_id)

    async def _repath(self, category: Category) -> int:
        """
        Recompute the category's path from its parent and rewrite the prefix
        of every descendant path

        Returns:
            Number of descendant rows rewritten
        """
        parent = None
        if category.parent_id is not None:
            parent = await self.db.get(Category, category.parent_id)

        old_path = category.path
        new_path = compute_path(category, lambda _id: parent)
        category.path = new_path

        if not old_path or old_path == new_path:
            return 0

        old_prefix = old_path + PATH_SEPARATOR
        result = await self.db.execute(
            select(Category)
            .where(Category.path.startswith(old_prefix, autoescape=True))
            .with_for_update()
        )
        descendants = result.scalars().all()
        for descendant in descendants:
            descendant.path = new_path + descendant.path[len(old_path):]

        return len(descendants)
