"""Blog 요청/응답 계약을 위한 Pydantic 스키마입니다."""

from pydantic import BaseModel, Field
from typing import List, Literal, Optional
from datetime import datetime

from blog_history.schemas.user import UserBriefOut

BlogStatus = Literal["draft", "published"]
BlogVisibility = Literal["public", "subscribers_only"]


class CategoryOut(BaseModel):
    category_id: int
    name: str
    slug: str

    model_config = {"from_attributes": True}


class TagOut(BaseModel):
    tag_id: int
    name: str
    slug: str

    model_config = {"from_attributes": True}


class BlogBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    slug: str = Field(..., min_length=1, max_length=255)
    excerpt: Optional[str] = None
    content: str
    thumbnail_url: Optional[str] = Field(None, max_length=500)
    status: BlogStatus = "draft"
    visibility: BlogVisibility = "public"
    category_id: Optional[int] = None


class BlogCreate(BlogBase):
    tag_ids: List[int] = []


class BlogUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    slug: Optional[str] = Field(None, min_length=1, max_length=255)
    excerpt: Optional[str] = None
    content: Optional[str] = None
    thumbnail_url: Optional[str] = Field(None, max_length=500)
    status: Optional[BlogStatus] = None
    visibility: Optional[BlogVisibility] = None
    category_id: Optional[int] = None
    tag_ids: Optional[List[int]] = None


class BlogOut(BlogBase):
    blog_id: int
    author_id: int
    author: Optional[UserBriefOut] = None
    category: Optional[CategoryOut] = None
    tags: List[TagOut] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
