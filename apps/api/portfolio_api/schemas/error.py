"""API error response schemas."""

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    error: str


ADMIN_ERROR_RESPONSES: dict[int | str, dict] = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    403: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}
