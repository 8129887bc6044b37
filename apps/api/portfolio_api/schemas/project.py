"""Project API schemas."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from portfolio_api.schemas.validators import ensure_http_url


class ProjectForm(BaseModel):
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    technologies: list[str] = Field(default_factory=list)
    image_url: str | None = None
    demo_url: str | None = None
    github_url: str | None = None
    featured: bool = False

    @field_validator("image_url", "demo_url", "github_url")
    @classmethod
    def validate_urls(cls, value: str | None) -> str | None:
        return ensure_http_url(value)

    @field_validator("technologies")
    @classmethod
    def drop_blank_technologies(cls, value: list[str]) -> list[str]:
        return [item.strip() for item in value if item.strip()]


class ProjectUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1)
    description: str | None = Field(default=None, min_length=1)
    technologies: list[str] | None = None
    image_url: str | None = None
    demo_url: str | None = None
    github_url: str | None = None
    featured: bool | None = None

    @field_validator("image_url", "demo_url", "github_url")
    @classmethod
    def validate_urls(cls, value: str | None) -> str | None:
        return ensure_http_url(value)


class Project(BaseModel):
    id: str
    title: str
    description: str
    technologies: list[str]
    image_url: str | None = None
    demo_url: str | None = None
    github_url: str | None = None
    featured: bool
    created_at: datetime
    updated_at: datetime
