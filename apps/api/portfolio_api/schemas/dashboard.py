"""Admin dashboard schemas.

A ``None`` section means its read failed; ``failed`` names those sections so
clients never mistake a failed read for an empty collection.
"""

from pydantic import BaseModel, Field


class ProjectStats(BaseModel):
    total: int
    featured: int


class ExperienceStats(BaseModel):
    total: int


class SkillStats(BaseModel):
    total: int


class MessageStats(BaseModel):
    total: int
    unread: int


class BlogStats(BaseModel):
    total: int
    published: int


class DashboardStats(BaseModel):
    projects: ProjectStats | None = None
    experiences: ExperienceStats | None = None
    skills: SkillStats | None = None
    messages: MessageStats | None = None
    blog: BlogStats | None = None
    failed: list[str] = Field(default_factory=list)
