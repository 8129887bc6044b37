"""Dependency wiring for routes."""

from __future__ import annotations

import logging
from typing import Annotated, AsyncIterator
from urllib.parse import urlencode
from uuid import uuid4

from fastapi import Depends, Request, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from portfolio_api.adapters.auth import (
    FirebaseIdentityProvider,
    IdentityProvider,
    MockIdentityProvider,
)
from portfolio_api.core.config import Settings, get_settings
from portfolio_api.core.logging_safety import safe_log_identifier
from portfolio_api.domain.session_gate import AllowListAuthorizer, Authorizer, SessionGate, SessionProvider
from portfolio_api.errors import AuthenticationError, AuthorizationError
from portfolio_api.repositories.memory import InMemoryStore
from portfolio_api.schemas.auth import AuthSession, GateState
from portfolio_api.services.blog import BlogService
from portfolio_api.services.dashboard import DashboardService
from portfolio_api.services.experiences import ExperienceService
from portfolio_api.services.messages import MessageService
from portfolio_api.services.projects import ProjectService
from portfolio_api.services.skills import SkillService

bearer_scheme = HTTPBearer(auto_error=False, scheme_name="bearerAuth")
logger = logging.getLogger(__name__)


class LoginRedirect(Exception):
    """Raised by gated admin pages; rendered as a 303 to the login page."""

    def __init__(self, location: str) -> None:
        self.location = location
        super().__init__(location)


def _request_correlation_id(request: Request) -> str:
    existing = getattr(request.state, "correlation_id", None)
    if isinstance(existing, str) and existing:
        return existing

    correlation_id = request.headers.get("X-Correlation-Id")
    if correlation_id:
        request.state.correlation_id = correlation_id
        return correlation_id

    generated = f"req-{uuid4()}"
    request.state.correlation_id = generated
    return generated


def build_identity_provider(settings: Settings) -> IdentityProvider:
    """Resolve provider adapter from configuration."""
    if settings.auth_provider == "firebase":
        return FirebaseIdentityProvider(
            project_id=settings.firebase_project_id,
            api_key=settings.firebase_api_key,
        )
    return MockIdentityProvider(accounts=settings.mock_accounts)


def get_identity_provider(request: Request) -> IdentityProvider:
    return request.app.state.identity_provider


def get_authorizer(settings: Annotated[Settings, Depends(get_settings)]) -> Authorizer:
    return AllowListAuthorizer(settings.admin_emails)


def _session_token(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None,
    settings: Settings,
) -> str | None:
    if credentials is not None and credentials.scheme.lower() == "bearer" and credentials.credentials:
        return credentials.credentials
    return request.cookies.get(settings.session_cookie_name) or None


async def get_session_gate(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Security(bearer_scheme)],
    identity: Annotated[IdentityProvider, Depends(get_identity_provider)],
    authorizer: Annotated[Authorizer, Depends(get_authorizer)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> AsyncIterator[SessionGate]:
    """Resolve the caller's session once per request and expose the gate over it."""
    provider = SessionProvider(identity, _session_token(request, credentials, settings))
    try:
        await provider.resolve()
        yield SessionGate(provider, authorizer)
    finally:
        provider.close()


def _log_rejection(request: Request, gate: SessionGate, *, kind: str) -> None:
    session = gate.session
    logger.warning(
        "%s correlation_id=%s method=%s path=%s state=%s principal_id=%s",
        kind,
        safe_log_identifier(_request_correlation_id(request), prefix="cid"),
        request.method,
        request.url.path,
        gate.state.value,
        safe_log_identifier(session.identity.user_id if session else None, prefix="pid"),
    )


async def require_admin(
    request: Request,
    gate: Annotated[SessionGate, Depends(get_session_gate)],
) -> AuthSession:
    """Guard admin-only API operations; rejects before any store access."""
    state = gate.state
    if state is GateState.AUTHENTICATED_ADMIN and gate.session is not None:
        return gate.session

    _log_rejection(request, gate, kind="auth.rejected")
    if state is GateState.AUTHENTICATED_NON_ADMIN:
        raise AuthorizationError("Admin access required")
    raise AuthenticationError("Authentication required")


async def require_admin_page(
    request: Request,
    gate: Annotated[SessionGate, Depends(get_session_gate)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> AuthSession:
    """Guard admin pages; anyone but an admin is redirected to the login page."""
    if gate.renders_content and gate.session is not None:
        return gate.session

    _log_rejection(request, gate, kind="gate.redirect")
    next_path = request.url.path
    if request.url.query:
        next_path = f"{next_path}?{request.url.query}"
    raise LoginRedirect(f"{settings.login_path}?{urlencode({'next': next_path})}")


def get_store(request: Request) -> InMemoryStore:
    return request.app.state.store


def get_project_service(store: Annotated[InMemoryStore, Depends(get_store)]) -> ProjectService:
    return ProjectService(store)


def get_experience_service(store: Annotated[InMemoryStore, Depends(get_store)]) -> ExperienceService:
    return ExperienceService(store)


def get_skill_service(store: Annotated[InMemoryStore, Depends(get_store)]) -> SkillService:
    return SkillService(store)


def get_blog_service(
    request: Request,
    store: Annotated[InMemoryStore, Depends(get_store)],
) -> BlogService:
    return BlogService(store, disambiguator=request.app.state.slug_disambiguator)


def get_message_service(store: Annotated[InMemoryStore, Depends(get_store)]) -> MessageService:
    return MessageService(store)


def get_dashboard_service(store: Annotated[InMemoryStore, Depends(get_store)]) -> DashboardService:
    return DashboardService(store)
