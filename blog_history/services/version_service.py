"""게시글 버전 이력(스냅샷 캡처/조회/보존 정책/복원/삭제)을 담당하는 도메인 서비스입니다.

버전 행은 추가 전용입니다. 번호는 게시글별 "현재 최대값 + 1"이며, 삽입과 같은
트랜잭션 안의 SAVEPOINT에서 계산/삽입하고 (blog_id, version_number) 유일성 충돌 시
번호를 다시 계산해 재시도합니다.
"""

import logging
import math
from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from blog_history.config import settings
from blog_history.database import atomic
from blog_history.exceptions import VersionConflict, VersionMismatch, VersionNotFound
from blog_history.models.blog import Blog
from blog_history.models.blog_version import BlogVersion
from blog_history.models.user import User
from blog_history.services import blog_service
from blog_history.utils.permissions import ensure_blog_author

logger = logging.getLogger(__name__)

# 스냅샷으로 복사/복원되는 게시글 필드
SNAPSHOT_FIELDS = (
    "title",
    "slug",
    "excerpt",
    "content",
    "thumbnail_url",
    "status",
    "visibility",
    "category_id",
)


@dataclass
class VersionPage:
    items: List[BlogVersion]
    total: int
    page: int
    page_size: int
    total_pages: int


def next_version_number(db: Session, blog_id: int) -> int:
    current_max = (
        db.query(func.max(BlogVersion.version_number))
        .filter(BlogVersion.blog_id == blog_id)
        .scalar()
    )
    return (current_max or 0) + 1


def _version_number_taken(db: Session, blog_id: int, version_number: int) -> bool:
    row = (
        db.query(BlogVersion.version_id)
        .filter(BlogVersion.blog_id == blog_id, BlogVersion.version_number == version_number)
        .first()
    )
    return row is not None


def _snapshot(blog: Blog) -> dict:
    return {field: getattr(blog, field) for field in SNAPSHOT_FIELDS}


def capture_version(
    db: Session,
    blog: Blog,
    editor_id: int,
    change_summary: Optional[str] = None,
    *,
    keep: Optional[int] = None,
) -> BlogVersion:
    """현재 게시글 상태를 새 버전으로 저장하고 보존 정책을 적용한다.

    호출자의 트랜잭션 안에서 동작하며 commit 하지 않는다. 보존 정책(prune) 실패는
    로그만 남기고 새 버전은 유지한다.
    """
    max_retries = settings.VERSION_NUMBER_MAX_RETRIES
    version: Optional[BlogVersion] = None

    for attempt in range(1, max_retries + 1):
        version_number = next_version_number(db, blog.blog_id)
        candidate = BlogVersion(
            blog_id=blog.blog_id,
            version_number=version_number,
            editor_id=editor_id,
            change_summary=change_summary or None,
            **_snapshot(blog),
        )
        # 게시글의 blog_tags와 공유하지 않는 독립 복사본
        candidate.tags = list(blog.tags)
        try:
            with db.begin_nested():
                db.add(candidate)
        except IntegrityError:
            if not _version_number_taken(db, blog.blog_id, version_number):
                raise
            logger.warning(
                "[version] number collision on blog %s (v%s), attempt %s/%s",
                blog.blog_id, version_number, attempt, max_retries,
            )
            continue
        version = candidate
        break

    if version is None:
        raise VersionConflict()

    logger.info(
        "[version] captured blog %s v%s by user %s (%s)",
        blog.blog_id, version.version_number, editor_id, change_summary or "-",
    )
    safe_prune_versions(db, blog.blog_id, settings.VERSION_RETENTION_LIMIT if keep is None else keep)
    return version


def create_checkpoint(
    db: Session,
    blog_id: int,
    current_user: User,
    change_summary: Optional[str] = None,
) -> BlogVersion:
    with atomic(db):
        blog = blog_service.get_owned_blog(db, blog_id, current_user.user_id)
        version = capture_version(db, blog, current_user.user_id, change_summary)
    return version


def get_version(db: Session, version_id: int) -> BlogVersion:
    row = db.query(BlogVersion).filter(BlogVersion.version_id == version_id).first()
    if not row:
        raise VersionNotFound()
    return row


def get_blog_version(db: Session, blog_id: int, version_id: int) -> BlogVersion:
    row = get_version(db, version_id)
    if row.blog_id != blog_id:
        raise VersionMismatch()
    return row


def list_versions(db: Session, blog_id: int, page: int, page_size: int) -> VersionPage:
    q = db.query(BlogVersion).filter(BlogVersion.blog_id == blog_id)
    total = q.count()
    items = (
        q.options(selectinload(BlogVersion.editor))
        .order_by(BlogVersion.version_number.desc())
        .offset((page - 1) * page_size)
        .limit(page_size)
        .all()
    )
    total_pages = math.ceil(total / page_size) if page_size > 0 else 0
    return VersionPage(items=items, total=total, page=page, page_size=page_size, total_pages=total_pages)


def count_versions(db: Session, blog_id: int) -> int:
    return db.query(func.count(BlogVersion.version_id)).filter(BlogVersion.blog_id == blog_id).scalar() or 0


def prune_versions(db: Session, blog_id: int, keep: int) -> int:
    """버전이 keep개를 넘으면 가장 낮은 번호부터 초과분을 한 번의 DELETE로 제거한다."""
    count = count_versions(db, blog_id)
    if count <= keep:
        return 0
    excess = count - keep
    # MySQL은 IN 서브쿼리의 LIMIT과 삭제 대상 테이블 자기 참조를 허용하지 않으므로 id를 먼저 읽는다.
    oldest_ids = [
        row[0]
        for row in db.query(BlogVersion.version_id)
        .filter(BlogVersion.blog_id == blog_id)
        .order_by(BlogVersion.version_number.asc())
        .limit(excess)
        .all()
    ]
    removed = (
        db.query(BlogVersion)
        .filter(BlogVersion.version_id.in_(oldest_ids))
        .delete(synchronize_session=False)
    )
    logger.info("[version] pruned %s old versions of blog %s (keep=%s)", removed, blog_id, keep)
    return removed


def safe_prune_versions(db: Session, blog_id: int, keep: int) -> int:
    try:
        with db.begin_nested():
            return prune_versions(db, blog_id, keep)
    except SQLAlchemyError as exc:
        # 방금 만든 버전을 잃는 것보다 잠시 초과 보존하는 쪽을 택한다.
        logger.warning("[version] retention prune skipped for blog %s: %s", blog_id, exc)
        return 0


def restore_version(db: Session, blog_id: int, version_id: int, requester_id: int) -> Blog:
    with atomic(db):
        version = get_blog_version(db, blog_id, version_id)
        blog = blog_service.get_blog_for_update(db, blog_id)
        ensure_blog_author(blog, requester_id)
        if version.slug != blog.slug:
            blog_service.ensure_slug_available(db, blog.author_id, version.slug, exclude_blog_id=blog.blog_id)

        for field in SNAPSHOT_FIELDS:
            setattr(blog, field, getattr(version, field))
        blog_service.replace_tags(db, blog, [tag.tag_id for tag in version.tags])
        db.flush()

        capture_version(db, blog, requester_id, f"Restored from version {version.version_number}")
    logger.info("[version] restored blog %s to version %s by user %s", blog_id, version_id, requester_id)
    return blog


def delete_version(db: Session, version_id: int, requester_id: int) -> None:
    with atomic(db):
        version = get_version(db, version_id)
        blog = blog_service.get_blog_or_raise(db, version.blog_id)
        ensure_blog_author(blog, requester_id)
        blog_id = version.blog_id
        db.delete(version)
    logger.info("[version] deleted version %s of blog %s by user %s", version_id, blog_id, requester_id)
