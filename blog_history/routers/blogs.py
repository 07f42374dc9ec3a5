"""Blogs 기능 API 라우터입니다. 요청을 검증하고 서비스 레이어로 비즈니스 로직을 위임합니다."""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
from blog_history.database import get_db
from blog_history.schemas.blog import BlogCreate, BlogUpdate, BlogOut
from blog_history.services import blog_service
from blog_history.middleware.auth_middleware import get_current_user
from blog_history.models.user import User

router = APIRouter(prefix="/api/blogs", tags=["blogs"])


@router.post("", response_model=BlogOut, status_code=status.HTTP_201_CREATED)
def create_blog(
    data: BlogCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return blog_service.create_blog(db, data, current_user)


@router.get("/{blog_id}", response_model=BlogOut)
def get_blog(blog_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return blog_service.get_blog(db, blog_id, viewer=current_user)


@router.put("/{blog_id}", response_model=BlogOut)
def update_blog(
    blog_id: int,
    data: BlogUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return blog_service.update_blog(db, blog_id, data, current_user)


@router.delete("/{blog_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_blog(blog_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    blog_service.delete_blog(db, blog_id, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
