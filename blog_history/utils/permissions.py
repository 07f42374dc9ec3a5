"""Permissions 관련 공용 유틸리티 헬퍼입니다."""

from blog_history.exceptions import BlogAccessDenied
from blog_history.models.blog import Blog


def is_blog_author(blog: Blog, user_id: int) -> bool:
    return blog.author_id is not None and int(blog.author_id) == int(user_id)


def can_view_blog(blog: Blog, user_id: int | None) -> bool:
    if blog.status == "published":
        return True
    return user_id is not None and is_blog_author(blog, user_id)


def ensure_blog_author(blog: Blog, user_id: int) -> None:
    # 상위 라우터의 확인 여부와 무관하게 원시 사용자 ID로 다시 검증한다.
    if not is_blog_author(blog, user_id):
        raise BlogAccessDenied()
