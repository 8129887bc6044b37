"""Authentication schemas."""

from enum import Enum

from pydantic import BaseModel, Field


class Identity(BaseModel):
    """Normalized identity resolved from an identity-service session."""

    user_id: str = Field(min_length=1)
    email: str = Field(min_length=1)


class AuthSession(BaseModel):
    token: str = Field(min_length=1)
    identity: Identity


class GateState(str, Enum):
    LOADING = "loading"
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATED_NON_ADMIN = "authenticated_non_admin"
    AUTHENTICATED_ADMIN = "authenticated_admin"


class LoginRequest(BaseModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class SignedInUser(BaseModel):
    email: str


class SessionView(BaseModel):
    state: GateState
    email: str | None = None
    next: str | None = None
