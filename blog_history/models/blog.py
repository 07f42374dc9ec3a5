"""Blog 도메인(게시글/카테고리/태그)의 SQLAlchemy 모델 정의입니다."""

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Index, Table, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from blog_history.database import Base

BLOG_STATUSES = ("draft", "published")
BLOG_VISIBILITIES = ("public", "subscribers_only")


blog_tags = Table(
    "blog_tags",
    Base.metadata,
    Column("blog_id", Integer, ForeignKey("blogs.blog_id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", Integer, ForeignKey("tags.tag_id", ondelete="CASCADE"), primary_key=True),
)


class Category(Base):
    __tablename__ = "categories"

    category_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), unique=True, nullable=False)
    slug = Column(String(100), unique=True, nullable=False)
    created_at = Column(DateTime, server_default=func.now())


class Tag(Base):
    __tablename__ = "tags"

    tag_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(50), unique=True, nullable=False)
    slug = Column(String(50), unique=True, nullable=False)
    created_at = Column(DateTime, server_default=func.now())


class Blog(Base):
    __tablename__ = "blogs"

    blog_id = Column(Integer, primary_key=True, autoincrement=True)
    author_id = Column(Integer, ForeignKey("users.user_id"), nullable=False)
    category_id = Column(Integer, ForeignKey("categories.category_id", ondelete="SET NULL"), nullable=True)
    title = Column(String(255), nullable=False)
    slug = Column(String(255), nullable=False)
    excerpt = Column(Text)
    content = Column(Text, nullable=False)
    thumbnail_url = Column(String(500))
    status = Column(String(20), nullable=False, default="draft")  # draft/published
    visibility = Column(String(20), nullable=False, default="public")  # public/subscribers_only
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, onupdate=func.now())

    author = relationship("User", back_populates="blogs")
    category = relationship("Category")
    tags = relationship("Tag", secondary=blog_tags, order_by="Tag.tag_id", passive_deletes=True)

    __table_args__ = (
        UniqueConstraint("author_id", "slug", name="uq_blog_author_slug"),
        Index("idx_blog_author", "author_id", "created_at"),
    )
