"""SQLAlchemy 모델 패키지 초기화 모듈입니다."""

from blog_history.models.user import User
from blog_history.models.blog import Blog, Category, Tag, blog_tags
from blog_history.models.blog_version import BlogVersion, blog_version_tags

__all__ = [
    "User",
    "Blog", "Category", "Tag", "blog_tags",
    "BlogVersion", "blog_version_tags",
]
