"""FastAPI application entrypoint."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, RedirectResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from portfolio_api.core.config import get_settings
from portfolio_api.domain.slugs import MonotonicMillis
from portfolio_api.errors import ApiError, ValidationError
from portfolio_api.repositories.memory import InMemoryStore
from portfolio_api.routes import (
    admin_router,
    blog_router,
    experiences_router,
    messages_router,
    projects_router,
    skills_router,
)
from portfolio_api.routes.dependencies import LoginRedirect, build_identity_provider
from portfolio_api.schemas.error import ErrorResponse

logger = logging.getLogger(__name__)


def _validation_message(exc: RequestValidationError) -> str:
    """Reduce pydantic's error list to the first human-readable message."""
    errors = exc.errors()
    if not errors:
        return "Invalid request"

    first = errors[0]
    ctx = first.get("ctx") or {}
    if first.get("type") == "value_error" and ctx.get("error") is not None:
        return str(ctx["error"])

    location = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path")]
    message = str(first.get("msg") or "Invalid value")
    if location:
        return f"{'.'.join(location)}: {message}"
    return message


def create_app() -> FastAPI:
    app = FastAPI(title="Portfolio API", version="1.0.0")
    app.state.store = InMemoryStore()
    app.state.identity_provider = build_identity_provider(get_settings())
    app.state.slug_disambiguator = MonotonicMillis()

    @app.exception_handler(ApiError)
    async def handle_api_error(_, exc: ApiError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=exc.payload.model_dump())

    @app.exception_handler(LoginRedirect)
    async def handle_login_redirect(_, exc: LoginRedirect) -> RedirectResponse:
        return RedirectResponse(exc.location, status_code=303)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(_, exc: StarletteHTTPException) -> JSONResponse:
        payload = ErrorResponse(error=str(exc.detail))
        return JSONResponse(status_code=exc.status_code, content=payload.model_dump(), headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(_, exc: RequestValidationError) -> JSONResponse:
        error = ValidationError(_validation_message(exc))
        return JSONResponse(status_code=error.status_code, content=error.payload.model_dump())

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("request.failed method=%s path=%s", request.method, request.url.path)
        return JSONResponse(status_code=500, content=ErrorResponse(error="Server error").model_dump())

    api_prefix = "/api"
    app.include_router(projects_router, prefix=api_prefix)
    app.include_router(experiences_router, prefix=api_prefix)
    app.include_router(skills_router, prefix=api_prefix)
    app.include_router(blog_router, prefix=api_prefix)
    app.include_router(messages_router, prefix=api_prefix)
    app.include_router(admin_router)

    return app


app = create_app()
