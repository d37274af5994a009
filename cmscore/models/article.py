"""Article and tag models"""

from sqlalchemy import Column, String, Text, Integer, ForeignKey, DateTime, Index
from sqlalchemy.sql import func
import enum

from .base import Base, TimestampedModel

class ArticleStatus(str, enum.Enum):
    DRAFT = "draft"
    REVIEW = "review"
    PUBLISHED = "published"

class Article(Base, TimestampedModel):
    """Article; slugs are unique among articles only"""

    __tablename__ = "articles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    slug = Column(String(255), unique=True, nullable=False, index=True)
    content = Column(Text, nullable=True)
    excerpt = Column(String(500), nullable=True)
    status = Column(String(20), nullable=False, default=ArticleStatus.DRAFT.value)
    category_id = Column(
        Integer,
        ForeignKey("categories.id", ondelete="SET NULL"),
        nullable=True
    )

    __table_args__ = (
        Index("idx_articles_category", "category_id"),
        Index("idx_articles_status", "status"),
    )

class Tag(Base):
    """Tag; slugs are unique among tags only"""

    __tablename__ = "tags"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(50), nullable=False)
    slug = Column(String(50), unique=True, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
