"""Blog post API schemas."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from portfolio_api.schemas.validators import blank_to_none, ensure_http_url


class BlogPostForm(BaseModel):
    title: str = Field(min_length=1)
    slug: str | None = None
    content: str = Field(min_length=1)
    excerpt: str | None = None
    image_url: str | None = None
    published: bool = False

    @field_validator("excerpt")
    @classmethod
    def blank_excerpt(cls, value: str | None) -> str | None:
        return blank_to_none(value)

    @field_validator("image_url")
    @classmethod
    def validate_image_url(cls, value: str | None) -> str | None:
        return ensure_http_url(value)


class BlogPostUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1)
    slug: str | None = Field(default=None, min_length=1)
    content: str | None = Field(default=None, min_length=1)
    excerpt: str | None = None
    image_url: str | None = None
    published: bool | None = None

    @field_validator("image_url")
    @classmethod
    def validate_image_url(cls, value: str | None) -> str | None:
        return ensure_http_url(value)


class BlogPost(BaseModel):
    id: str
    title: str
    slug: str
    content: str
    excerpt: str | None = None
    image_url: str | None = None
    published: bool
    created_at: datetime
    updated_at: datetime
