"""
Custom exception classes
Every rejection raised by the category and slug services is classified here
so the HTTP layer can map it without inspecting message text
"""

from fastapi import HTTPException, status
from typing import Any, Dict, Optional

class CMSException(HTTPException):
    """Base exception class for the CMS core"""

    def __init__(
        self,
        status_code: int,
        detail: str,
        error_code: Optional[str] = None,
        headers: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.error_code = error_code

class BadRequestException(CMSException):
    """400 Bad Request"""

    def __init__(self, detail: str, error_code: str = "BAD_REQUEST"):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            error_code=error_code
        )

class NotFoundException(CMSException):
    """404 Not Found"""

    def __init__(self, detail: str = "Not found", error_code: str = "NOT_FOUND"):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
            error_code=error_code
        )

class ConflictException(CMSException):
    """409 Conflict"""

    def __init__(self, detail: str, error_code: str = "CONFLICT"):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail=detail,
            error_code=error_code
        )

class ValidationException(CMSException):
    """422 Unprocessable Entity"""

    def __init__(self, detail: str, error_code: str = "VALIDATION_ERROR"):
        super().__init__(
            status_code=422,
            detail=detail,
            error_code=error_code
        )

class InternalServerException(CMSException):
    """500 Internal Server Error"""

    def __init__(
        self,
        detail: str = "Internal server error",
        error_code: str = "INTERNAL_ERROR"
    ):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail,
            error_code=error_code
        )

# Slug exceptions
class SlugFormatException(ValidationException):
    """Slug does not match the allowed alphabet"""

    def __init__(self, detail: str = "Slug may only contain lowercase letters, digits, Hangul, '@' and single hyphens"):
        super().__init__(detail=detail, error_code="SLUG_INVALID_FORMAT")

class ReservedSlugException(ValidationException):
    """Slug collides with a fixed application route"""

    def __init__(self, slug: str):
        super().__init__(
            detail=f"'{slug}' is a reserved system word",
            error_code="SLUG_RESERVED"
        )

class SlugConflictException(ConflictException):
    """Slug already used within its namespace"""

    def __init__(self, detail: str):
        super().__init__(detail=detail, error_code="SLUG_CONFLICT")

# Category tree exceptions
class CategoryNotFoundException(NotFoundException):
    """Category id does not exist"""

    def __init__(self, category_id: int):
        super().__init__(
            detail=f"Category {category_id} not found",
            error_code="CATEGORY_NOT_FOUND"
        )

class ParentCategoryNotFoundException(NotFoundException):
    """Proposed parent category does not exist"""

    def __init__(self, parent_id: int):
        super().__init__(
            detail=f"Parent category {parent_id} not found",
            error_code="PARENT_CATEGORY_NOT_FOUND"
        )

class CategorySelfParentException(BadRequestException):
    """A category cannot be its own parent"""

    def __init__(self, category_id: int):
        super().__init__(
            detail=f"Category {category_id} cannot be its own parent",
            error_code="CATEGORY_SELF_PARENT"
        )

class CategoryCycleException(ConflictException):
    """Reparenting would make a category its own ancestor"""

    def __init__(self, category_id: int, parent_id: int):
        super().__init__(
            detail=(
                f"Moving category {category_id} under {parent_id} would create a cycle: "
                f"a category cannot be placed inside its own subtree"
            ),
            error_code="CATEGORY_CYCLE"
        )

class CategoryTreeCorruptedException(ConflictException):
    """Stored parent chain already loops; ancestry cannot be decided"""

    def __init__(self, category_id: int):
        super().__init__(
            detail=f"Parent chain of category {category_id} loops back on itself",
            error_code="CATEGORY_TREE_CORRUPTED"
        )

class CategoryHasChildrenException(ConflictException):
    """Category still has child categories"""

    def __init__(self, category_id: int, children: int):
        super().__init__(
            detail=f"Category {category_id} has {children} child categories; move or delete them first",
            error_code="CATEGORY_HAS_CHILDREN"
        )

# Content exceptions
class PageNotFoundException(NotFoundException):
    """Page not found"""

    def __init__(self, detail: str = "Page not found"):
        super().__init__(detail=detail, error_code="PAGE_NOT_FOUND")

class ArticleNotFoundException(NotFoundException):
    """Article not found"""

    def __init__(self, article_id: int):
        super().__init__(
            detail=f"Article {article_id} not found",
            error_code="ARTICLE_NOT_FOUND"
        )

class TagNotFoundException(NotFoundException):
    """Tag not found"""

    def __init__(self, tag_id: int):
        super().__init__(
            detail=f"Tag {tag_id} not found",
            error_code="TAG_NOT_FOUND"
        )

# Storage exceptions
class PersistenceException(InternalServerException):
    """The storage layer failed to commit; the whole operation was rolled back"""

    def __init__(self, operation: str):
        super().__init__(
            detail=f"Failed to {operation}; no changes were saved",
            error_code="PERSISTENCE_ERROR"
        )
