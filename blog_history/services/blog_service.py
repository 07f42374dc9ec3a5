"""Blog Service 도메인 서비스 레이어입니다. 게시글 CRUD와 버전 캡처 트리거를 담당합니다."""

import logging
from typing import Iterable, List, Optional

from sqlalchemy.orm import Session

from blog_history.database import atomic
from blog_history.exceptions import BlogNotFound, CategoryNotFound, SlugAlreadyExists, UnknownTag
from blog_history.models.blog import Blog, Category, Tag
from blog_history.models.user import User
from blog_history.schemas.blog import BlogCreate, BlogUpdate
from blog_history.services import version_service
from blog_history.utils.permissions import can_view_blog, ensure_blog_author

logger = logging.getLogger(__name__)

VERSION_INITIAL = "Initial version"
VERSION_AUTO_SAVE = "Auto-saved"


def find_blog(db: Session, blog_id: int) -> Optional[Blog]:
    return db.query(Blog).filter(Blog.blog_id == blog_id).first()


def get_blog_or_raise(db: Session, blog_id: int) -> Blog:
    blog = find_blog(db, blog_id)
    if not blog:
        raise BlogNotFound()
    return blog


def get_blog_for_update(db: Session, blog_id: int) -> Blog:
    # 복원 중 다른 편집과의 lost update를 막기 위해 행 잠금으로 읽는다. (SQLite에서는 무시됨)
    blog = db.query(Blog).filter(Blog.blog_id == blog_id).with_for_update().first()
    if not blog:
        raise BlogNotFound()
    return blog


def get_blog(db: Session, blog_id: int, viewer: User | None = None) -> Blog:
    blog = get_blog_or_raise(db, blog_id)
    if not can_view_blog(blog, viewer.user_id if viewer else None):
        # 초안은 작성자 외에는 존재 여부도 노출하지 않는다.
        raise BlogNotFound()
    return blog


def get_owned_blog(db: Session, blog_id: int, user_id: int) -> Blog:
    blog = get_blog_or_raise(db, blog_id)
    ensure_blog_author(blog, user_id)
    return blog


def resolve_tags(db: Session, tag_ids: Iterable[int]) -> List[Tag]:
    wanted = list(dict.fromkeys(int(tag_id) for tag_id in tag_ids))
    if not wanted:
        return []
    rows = db.query(Tag).filter(Tag.tag_id.in_(wanted)).all()
    found = {row.tag_id: row for row in rows}
    missing = [tag_id for tag_id in wanted if tag_id not in found]
    if missing:
        raise UnknownTag(f"존재하지 않는 태그입니다: {', '.join(str(t) for t in missing)}")
    return [found[tag_id] for tag_id in wanted]


def replace_tags(db: Session, blog: Blog, tag_ids: Iterable[int]) -> None:
    """게시글 태그 연결을 주어진 목록으로 교체한다. 병합하지 않는다."""
    blog.tags = resolve_tags(db, tag_ids)


def _ensure_category(db: Session, category_id: int | None) -> None:
    if category_id is None:
        return
    exists = db.query(Category.category_id).filter(Category.category_id == category_id).first()
    if not exists:
        raise CategoryNotFound()


def ensure_slug_available(db: Session, author_id: int, slug: str, exclude_blog_id: int | None = None) -> None:
    q = db.query(Blog.blog_id).filter(Blog.author_id == author_id, Blog.slug == slug)
    if exclude_blog_id is not None:
        q = q.filter(Blog.blog_id != exclude_blog_id)
    if q.first():
        raise SlugAlreadyExists()


def create_blog(db: Session, data: BlogCreate, current_user: User) -> Blog:
    payload = data.model_dump()
    tag_ids = payload.pop("tag_ids", [])
    with atomic(db):
        ensure_slug_available(db, current_user.user_id, payload["slug"])
        _ensure_category(db, payload.get("category_id"))
        blog = Blog(author_id=current_user.user_id, **payload)
        blog.tags = resolve_tags(db, tag_ids)
        db.add(blog)
        db.flush()
        version_service.capture_version(db, blog, current_user.user_id, VERSION_INITIAL)
    logger.info("[blog] created blog %s by user %s", blog.blog_id, current_user.user_id)
    return blog


def update_blog(db: Session, blog_id: int, data: BlogUpdate, current_user: User) -> Blog:
    payload = data.model_dump(exclude_unset=True)
    tag_ids = payload.pop("tag_ids", None)
    with atomic(db):
        blog = get_blog_for_update(db, blog_id)
        ensure_blog_author(blog, current_user.user_id)
        if payload.get("slug") and payload["slug"] != blog.slug:
            ensure_slug_available(db, blog.author_id, payload["slug"], exclude_blog_id=blog.blog_id)
        if "category_id" in payload:
            _ensure_category(db, payload["category_id"])
        for k, v in payload.items():
            # title/slug/content/status/visibility는 null로 지울 수 없다.
            if v is None and k not in ("excerpt", "thumbnail_url", "category_id"):
                continue
            setattr(blog, k, v)
        if tag_ids is not None:
            replace_tags(db, blog, tag_ids)
        db.flush()
        version_service.capture_version(db, blog, current_user.user_id, VERSION_AUTO_SAVE)
    return blog


def delete_blog(db: Session, blog_id: int, current_user: User) -> None:
    with atomic(db):
        blog = get_blog_or_raise(db, blog_id)
        ensure_blog_author(blog, current_user.user_id)
        # blog_versions / blog_version_tags는 FK ON DELETE CASCADE로 함께 삭제된다.
        db.delete(blog)
    logger.info("[blog] deleted blog %s by user %s", blog_id, current_user.user_id)
