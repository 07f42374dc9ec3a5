"""게시글 버전 이력 API 라우터입니다. 작성자 확인 후 버전 서비스로 위임합니다."""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
from blog_history.config import settings
from blog_history.database import get_db
from blog_history.schemas.blog import BlogOut
from blog_history.schemas.version import VersionCreate, VersionDetailOut, VersionOut, VersionPageOut
from blog_history.services import blog_service, version_service
from blog_history.middleware.auth_middleware import get_current_user
from blog_history.models.user import User

router = APIRouter(prefix="/api/blogs/{blog_id}/versions", tags=["versions"])


def _clamp_page(page: int, page_size: int) -> tuple[int, int]:
    page = max(1, page)
    if page_size < 1:
        page_size = settings.VERSION_PAGE_SIZE_DEFAULT
    return page, min(page_size, settings.VERSION_PAGE_SIZE_MAX)


@router.get("", response_model=VersionPageOut)
def list_versions(
    blog_id: int,
    page: int = 1,
    page_size: int = settings.VERSION_PAGE_SIZE_DEFAULT,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    blog_service.get_owned_blog(db, blog_id, current_user.user_id)
    page, page_size = _clamp_page(page, page_size)
    result = version_service.list_versions(db, blog_id, page, page_size)
    return VersionPageOut.model_validate(result)


@router.post("", response_model=VersionOut)
def create_version(
    blog_id: int,
    data: VersionCreate | None = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    change_summary = data.change_summary if data else None
    return version_service.create_checkpoint(db, blog_id, current_user, change_summary)


@router.get("/{version_id}", response_model=VersionDetailOut)
def get_version(
    blog_id: int,
    version_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    blog_service.get_owned_blog(db, blog_id, current_user.user_id)
    return version_service.get_blog_version(db, blog_id, version_id)


@router.post("/{version_id}/restore", response_model=BlogOut)
def restore_version(
    blog_id: int,
    version_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    blog_service.get_owned_blog(db, blog_id, current_user.user_id)
    return version_service.restore_version(db, blog_id, version_id, current_user.user_id)


@router.delete("/{version_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_version(
    blog_id: int,
    version_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    blog_service.get_owned_blog(db, blog_id, current_user.user_id)
    version_service.get_blog_version(db, blog_id, version_id)
    version_service.delete_version(db, version_id, current_user.user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
