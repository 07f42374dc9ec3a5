"""게시글 버전 이력 요청/응답 계약을 위한 Pydantic 스키마입니다."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from blog_history.schemas.blog import CategoryOut, TagOut
from blog_history.schemas.user import UserBriefOut


class VersionCreate(BaseModel):
    change_summary: Optional[str] = Field(None, max_length=1000)


class VersionOut(BaseModel):
    version_id: int
    blog_id: int
    version_number: int
    title: str
    excerpt: Optional[str] = None
    status: str
    visibility: str
    editor_id: int
    editor: Optional[UserBriefOut] = None
    change_summary: Optional[str] = None
    created_at: datetime

    model_config = {"from_attributes": True}


class VersionDetailOut(VersionOut):
    slug: str
    content: str
    thumbnail_url: Optional[str] = None
    category_id: Optional[int] = None
    category: Optional[CategoryOut] = None
    tags: List[TagOut] = []


class VersionPageOut(BaseModel):
    items: List[VersionOut]
    total: int
    page: int
    page_size: int
    total_pages: int

    model_config = {"from_attributes": True}
