"""Skill API schemas."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

MIN_PROFICIENCY = 1
MAX_PROFICIENCY = 5


def _check_proficiency(value: int) -> int:
    if not MIN_PROFICIENCY <= value <= MAX_PROFICIENCY:
        raise ValueError(f"Proficiency must be between {MIN_PROFICIENCY} and {MAX_PROFICIENCY}")
    return value


class SkillForm(BaseModel):
    name: str = Field(min_length=1)
    category: str = Field(min_length=1)
    proficiency: int

    @field_validator("proficiency")
    @classmethod
    def validate_proficiency(cls, value: int) -> int:
        return _check_proficiency(value)


class SkillUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1)
    category: str | None = Field(default=None, min_length=1)
    proficiency: int | None = None

    @field_validator("proficiency")
    @classmethod
    def validate_proficiency(cls, value: int | None) -> int | None:
        return None if value is None else _check_proficiency(value)


class Skill(BaseModel):
    id: str
    name: str
    category: str
    proficiency: int
    created_at: datetime
