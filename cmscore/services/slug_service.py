"""
Slug namespace service
Validates slugs across pages, categories, articles and tags, and resolves
collisions for content-creation flows
"""

from typing import Callable, Iterable, Optional, Union
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
import logging
import time

from cmscore.core.config import settings
from cmscore.core.exceptions import (
    BadRequestException,
    SlugFormatException,
    ReservedSlugException,
    SlugConflictException,
)
from cmscore.models import Category, Page, Article, Tag
from cmscore.schemas.slug import SlugEntity, SlugErrorCode, SlugValidationResult
from cmscore.utils.helpers import generate_slug, time_suffix
from cmscore.utils.validators import is_valid_slug_format

logger = logging.getLogger(__name__)

FORMAT_ERROR_MESSAGE = (
    "Slug may only contain lowercase letters, digits, Hangul, '@' "
    "and single hyphens between them"
)

# Tables checked per entity kind, in order: (model, honours exclude_id, message).
# Pages and categories share one namespace; articles and tags are independent.
SLUG_NAMESPACES = {
    SlugEntity.PAGE: (
        (Category, False, "'{slug}' is already used by a category"),
        (Page, True, "'{slug}' is already used by another page"),
    ),
    SlugEntity.CATEGORY: (
        (Page, False, "'{slug}' is already used by a page"),
        (Category, True, "'{slug}' is already used by another category"),
    ),
    SlugEntity.ARTICLE: (
        (Article, True, "'{slug}' is already used by another article"),
    ),
    SlugEntity.TAG: (
        (Tag, True, "'{slug}' is already used by another tag"),
    ),
}

# Table whose slug column bounds the length of each entity's slugs
SLUG_OWNERS = {
    SlugEntity.PAGE: Page,
    SlugEntity.CATEGORY: Category,
    SlugEntity.ARTICLE: Article,
    SlugEntity.TAG: Tag,
}


class SlugService:
    """Slug format, reserved-word and namespace checks"""

    def __init__(
        self,
        db: AsyncSession,
        reserved_slugs: Optional[Iterable[str]] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.db = db
        self.reserved_slugs = frozenset(
            settings.RESERVED_SLUGS if reserved_slugs is None else reserved_slugs
        )
        self._clock = clock

    async def validate(
        self,
        slug: str,
        entity: Union[SlugEntity, str],
        exclude_id: Optional[int] = None
    ) -> SlugValidationResult:
        """
        Check a candidate slug without writing anything

        Args:
            slug: Candidate slug
            entity: Kind of entity that will own the slug
            exclude_id: Row to ignore, used when validating an update

        Returns:
            Validation result; the first failing check wins
        """
        entity = self._entity(entity)

        if not is_valid_slug_format(slug):
            return SlugValidationResult(
                valid=False,
                reason=FORMAT_ERROR_MESSAGE,
                code=SlugErrorCode.INVALID_FORMAT
            )

        max_length = self.max_length(entity)
        if len(slug) > max_length:
            return SlugValidationResult(
                valid=False,
                reason=f"Slug may be at most {max_length} characters long",
                code=SlugErrorCode.INVALID_FORMAT
            )

        if slug in self.reserved_slugs:
            return SlugValidationResult(
                valid=False,
                reason=f"'{slug}' is a reserved system word",
                code=SlugErrorCode.RESERVED
            )

        for model, honours_exclude, message in SLUG_NAMESPACES[entity]:
            if await self._slug_taken(model, slug, exclude_id if honours_exclude else None):
                return SlugValidationResult(
                    valid=False,
                    reason=message.format(slug=slug),
                    code=SlugErrorCode.CONFLICT
                )

        return SlugValidationResult(valid=True)

    async def ensure_available(
        self,
        slug: str,
        entity: Union[SlugEntity, str],
        exclude_id: Optional[int] = None
    ) -> str:
        """
        Validate and raise the matching typed exception on failure

        Raises:
            SlugFormatException: Slug fails the format pattern
            ReservedSlugException: Slug is a reserved word
            SlugConflictException: Slug is taken within its namespace
        """
        result = await self.validate(slug, entity, exclude_id)
        if result.valid:
            return slug

        logger.debug(f"Rejected {self._entity(entity).value} slug {slug!r}: {result.reason}")
        raise self._to_exception(slug, result)

    async def resolve_for_create(
        self,
        title: str,
        requested_slug: Optional[str],
        entity: Union[SlugEntity, str]
    ) -> str:
        """
        Pick a slug for new content, appending a time-based suffix once on collision

        Derived slugs are cut to the column width, and the base is cut again
        before the suffix is appended, so the result always fits.

        Args:
            title: Content title, used when no slug was requested
            requested_slug: Slug supplied by the user, if any
            entity: Kind of content being created

        Returns:
            Slug that passed validation

        Raises:
            SlugFormatException: Candidate is empty or malformed. This is a 422
                rather than the 409 of a failed retry, since no suffix can make
                a malformed slug valid
            SlugConflictException: Suffixed candidate was rejected as well
        """
        entity = self._entity(entity)
        max_length = self.max_length(entity)
        candidate = requested_slug or _truncate(generate_slug(title), max_length)
        if not candidate:
            raise SlugFormatException("Cannot derive a slug from the given title")

        result = await self.validate(candidate, entity)
        if result.valid:
            return candidate

        # A malformed slug stays malformed with a suffix
        if result.code == SlugErrorCode.INVALID_FORMAT:
            raise SlugFormatException(result.reason)

        suffix = time_suffix(self._clock())
        retry = f"{_truncate(candidate, max_length - len(suffix) - 1)}-{suffix}"
        logger.info(f"{entity.value} slug {candidate!r} unavailable ({result.reason}); retrying as {retry!r}")

        result = await self.validate(retry, entity)
        if result.valid:
            return retry

        logger.warning(f"{entity.value} slug {retry!r} rejected after disambiguation: {result.reason}")
        raise SlugConflictException(result.reason)

    async def _slug_taken(self, model, slug: str, exclude_id: Optional[int]) -> bool:
        stmt = select(model.id).where(model.slug == slug)
        if exclude_id is not None:
            stmt = stmt.where(model.id != exclude_id)

        result = await self.db.execute(stmt.limit(1))
        return result.scalar() is not None

    @staticmethod
    def max_length(entity: SlugEntity) -> int:
        """Width of the slug column owned by this entity kind"""
        return SLUG_OWNERS[entity].__table__.c.slug.type.length

    @staticmethod
    def _entity(entity: Union[SlugEntity, str]) -> SlugEntity:
        try:
            return SlugEntity(entity)
        except ValueError:
            raise BadRequestException(
                f"Unknown slug type {entity!r}; expected one of "
                + ", ".join(e.value for e in SlugEntity),
                error_code="SLUG_UNKNOWN_TYPE"
            )

    @staticmethod
    def _to_exception(slug: str, result: SlugValidationResult):
        if result.code == SlugErrorCode.INVALID_FORMAT:
            return SlugFormatException(result.reason)
        if result.code == SlugErrorCode.RESERVED:
            return ReservedSlugException(slug)
        return SlugConflictException(result.reason)


def _truncate(slug: str, length: int) -> str:
    return slug[:length].rstrip("-")

