"""CMS models for static pages"""

from sqlalchemy import Column, String, Text, Boolean, Integer

from .base import Base, TimestampedModel

class Page(Base, TimestampedModel):
    """Static page; its slug shares a namespace with category slugs"""

    __tablename__ = "pages"

    id = Column(Integer, primary_key=True, autoincrement=True)
    slug = Column(String(255), unique=True, nullable=False, index=True)
    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)
    is_published = Column(Boolean, default=True)
    order = Column(Integer, default=0)
