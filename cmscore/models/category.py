"""
Category model for content categorization
Supports hierarchical categories with a materialized path
"""

from sqlalchemy import Column, String, Integer, ForeignKey, Text, Index

from .base import Base, TimestampedModel

class Category(Base, TimestampedModel):
    """Category node; parent_id is the source of truth, path caches the ancestor slugs"""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    slug = Column(String(100), unique=True, nullable=False, index=True)
    description = Column(Text, nullable=True)

    # Hierarchy
    parent_id = Column(Integer, ForeignKey("categories.id"), nullable=True)
    path = Column(Text, nullable=True)  # e.g. "tech/programming/web"; unbounded, depth is unlimited
    order = Column(Integer, nullable=False, default=0)

    # Ancestors and children are always resolved by lookup, never via relationships
    __table_args__ = (
        Index("idx_categories_parent_id", "parent_id"),
        Index("idx_categories_path", "path"),
    )

    def __repr__(self) -> str:
        return f"<Category(id={self.id!r}, path={self.path!r})>"
