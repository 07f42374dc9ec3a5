"""게시글 버전 스냅샷을 저장하는 SQLAlchemy 모델 정의입니다."""

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Index, Table, UniqueConstraint, event
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from blog_history.database import Base
from blog_history.exceptions import VersionImmutable


# 게시글의 blog_tags와 별개인 스냅샷 전용 태그 연결
blog_version_tags = Table(
    "blog_version_tags",
    Base.metadata,
    Column("version_id", Integer, ForeignKey("blog_versions.version_id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", Integer, ForeignKey("tags.tag_id", ondelete="CASCADE"), primary_key=True),
)


class BlogVersion(Base):
    __tablename__ = "blog_versions"

    version_id = Column(Integer, primary_key=True, autoincrement=True)
    blog_id = Column(Integer, ForeignKey("blogs.blog_id", ondelete="CASCADE"), nullable=False)
    version_number = Column(Integer, nullable=False)
    title = Column(String(255), nullable=False)
    slug = Column(String(255), nullable=False)
    excerpt = Column(Text)
    content = Column(Text, nullable=False)
    thumbnail_url = Column(String(500))
    status = Column(String(20), nullable=False)
    visibility = Column(String(20), nullable=False)
    category_id = Column(Integer, ForeignKey("categories.category_id"), nullable=True)
    editor_id = Column(Integer, ForeignKey("users.user_id"), nullable=False)
    change_summary = Column(Text)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)

    editor = relationship("User")
    category = relationship("Category")
    tags = relationship("Tag", secondary=blog_version_tags, order_by="Tag.tag_id", passive_deletes=True)

    __table_args__ = (
        UniqueConstraint("blog_id", "version_number", name="uq_blog_version_number"),
        Index("idx_blog_version_blog", "blog_id", "version_number"),
    )


@event.listens_for(BlogVersion, "before_update")
def receive_before_update(mapper, connection, target):
    raise VersionImmutable()
