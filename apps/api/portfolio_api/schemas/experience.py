"""Experience API schemas."""

from datetime import date, datetime

from pydantic import BaseModel, Field, field_validator

from portfolio_api.schemas.validators import blank_to_none


class ExperienceForm(BaseModel):
    company: str = Field(min_length=1)
    position: str = Field(min_length=1)
    description: str = ""
    start_date: date
    end_date: date | None = None
    location: str | None = None

    @field_validator("end_date", mode="before")
    @classmethod
    def blank_end_date(cls, value: object) -> object:
        # An empty end date means the position is current.
        return None if value == "" else value

    @field_validator("location")
    @classmethod
    def blank_location(cls, value: str | None) -> str | None:
        return blank_to_none(value)


class ExperienceUpdate(BaseModel):
    company: str | None = Field(default=None, min_length=1)
    position: str | None = Field(default=None, min_length=1)
    description: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    location: str | None = None

    @field_validator("end_date", mode="before")
    @classmethod
    def blank_end_date(cls, value: object) -> object:
        return None if value == "" else value

    @field_validator("location")
    @classmethod
    def blank_location(cls, value: str | None) -> str | None:
        return blank_to_none(value)


class Experience(BaseModel):
    id: str
    company: str
    position: str
    description: str
    start_date: date
    end_date: date | None = None
    location: str | None = None
    created_at: datetime
