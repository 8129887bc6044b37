"""Contact message schemas."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, field_validator

from portfolio_api.schemas.validators import blank_to_none, ensure_email

MIN_MESSAGE_LENGTH = 10


class ContactForm(BaseModel):
    name: str = Field(min_length=1)
    email: str
    subject: str | None = None
    message: str

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        return ensure_email(value)

    @field_validator("subject")
    @classmethod
    def blank_subject(cls, value: str | None) -> str | None:
        return blank_to_none(value)

    @field_validator("message")
    @classmethod
    def validate_length(cls, value: str) -> str:
        if len(value) < MIN_MESSAGE_LENGTH:
            raise ValueError(f"Message must be at least {MIN_MESSAGE_LENGTH} characters")
        return value


class MessageUpdate(BaseModel):
    is_read: bool


class ReadStatus(str, Enum):
    ALL = "all"
    READ = "read"
    UNREAD = "unread"


class Message(BaseModel):
    id: str
    name: str
    email: str
    subject: str | None = None
    message: str
    is_read: bool
    created_at: datetime


class Inbox(BaseModel):
    messages: list[Message]
    count: int
    unread_count: int
