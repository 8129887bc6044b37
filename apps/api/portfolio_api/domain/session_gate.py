"""Admin session gate: who may see admin pages and call admin-only operations.

``SessionProvider`` owns the session value for one protected request and
notifies subscribers when it changes. ``SessionGate`` combines that value with
an authorization predicate into one of four states; only
``AUTHENTICATED_ADMIN`` renders content.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable

from portfolio_api.adapters.auth.base import (
    AuthEvent,
    AuthVerificationError,
    IdentityProvider,
    IdentityUnavailableError,
)
from portfolio_api.core.logging_safety import safe_log_identifier
from portfolio_api.errors import AuthenticationError, AuthorizationError, NetworkError
from portfolio_api.schemas.auth import AuthSession, GateState, Identity

logger = logging.getLogger(__name__)

Authorizer = Callable[[Identity], bool]
SessionListener = Callable[[AuthSession | None], None]


class AllowListAuthorizer:
    """Admits identities whose email is on a fixed list (case-insensitive)."""

    def __init__(self, emails: Iterable[str]) -> None:
        self._emails = frozenset(email.strip().casefold() for email in emails if email.strip())

    def __call__(self, identity: Identity) -> bool:
        return identity.email.strip().casefold() in self._emails


class SessionProvider:
    """Holds the observed session for one request.

    Every resolution takes a ticket. A result is applied only if no newer
    ticket has already been applied, so a slow stale lookup can never
    overwrite a fresher one.
    """

    def __init__(self, identity: IdentityProvider, token: str | None) -> None:
        self._identity = identity
        self._token = token or None
        self._session: AuthSession | None = None
        self._resolved = False
        self._issued = 0
        self._applied = 0
        self._listeners: list[SessionListener] = []
        self._unsubscribe = identity.on_auth_state_change(self._handle_auth_event)

    @property
    def identity_provider(self) -> IdentityProvider:
        return self._identity

    @property
    def session(self) -> AuthSession | None:
        return self._session

    @property
    def resolved(self) -> bool:
        return self._resolved

    @property
    def token(self) -> str | None:
        return self._token

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def resolve(self) -> AuthSession | None:
        self._issued += 1
        ticket = self._issued
        token = self._token

        session: AuthSession | None = None
        if token:
            try:
                identity = await self._identity.get_user(token)
            except AuthVerificationError:
                logger.info("session.resolve_rejected ticket=%s", ticket)
            except IdentityUnavailableError:
                logger.warning("session.resolve_unavailable ticket=%s", ticket)
            else:
                session = AuthSession(token=token, identity=identity)

        self._apply(ticket, session)
        return self._session

    def set_session(self, session: AuthSession | None) -> None:
        """Apply an explicit sign-in/sign-out result, superseding in-flight lookups."""
        self._issued += 1
        self._apply(self._issued, session)

    def clear(self) -> None:
        self.set_session(None)

    def close(self) -> None:
        self._unsubscribe()
        self._listeners.clear()

    def _apply(self, ticket: int, session: AuthSession | None) -> None:
        if ticket < self._applied:
            logger.debug("session.resolve_superseded ticket=%s applied=%s", ticket, self._applied)
            return

        self._applied = ticket
        self._resolved = True
        changed = session != self._session
        self._session = session
        self._token = session.token if session is not None else None
        if changed:
            for listener in list(self._listeners):
                listener(session)

    def _handle_auth_event(self, event: AuthEvent, session: AuthSession) -> None:
        # The identity provider is shared; only react to events about our own token.
        if self._token is None or session.token != self._token:
            return
        self.set_session(session if event is AuthEvent.SIGNED_IN else None)


class SessionGate:
    def __init__(self, provider: SessionProvider, is_admin: Authorizer) -> None:
        self._provider = provider
        self._is_admin = is_admin

    @property
    def session(self) -> AuthSession | None:
        return self._provider.session

    @property
    def state(self) -> GateState:
        if not self._provider.resolved:
            return GateState.LOADING

        session = self._provider.session
        if session is None:
            return GateState.UNAUTHENTICATED
        if not self._is_admin(session.identity):
            return GateState.AUTHENTICATED_NON_ADMIN
        return GateState.AUTHENTICATED_ADMIN

    @property
    def renders_content(self) -> bool:
        return self.state is GateState.AUTHENTICATED_ADMIN

    @property
    def requires_redirect(self) -> bool:
        return self.state in (GateState.UNAUTHENTICATED, GateState.AUTHENTICATED_NON_ADMIN)

    async def sign_in(self, email: str, password: str) -> AuthSession:
        """Sign in and re-check admin membership before the session is accepted.

        A non-admin account has its fresh session revoked at once, so the
        sign-in path never leaves an authenticated non-admin session behind.
        Any refused attempt also ends the session the caller held before it.
        """
        identity_provider = self._provider.identity_provider
        previous_token = self._provider.token
        safe_email = safe_log_identifier(email, prefix="email")
        try:
            session = await identity_provider.sign_in_with_password(email, password)
        except AuthVerificationError as exc:
            await self._discard(previous_token)
            logger.warning("auth.sign_in_rejected email=%s reason=invalid_credentials", safe_email)
            raise AuthenticationError(str(exc) or "Invalid email or password") from exc
        except IdentityUnavailableError as exc:
            await self._discard(previous_token)
            logger.warning("auth.sign_in_rejected email=%s reason=identity_unavailable", safe_email)
            raise NetworkError("Identity service is unreachable") from exc

        if not self._is_admin(session.identity):
            await self._revoke(session.token)
            await self._discard(previous_token)
            logger.warning("auth.sign_in_rejected email=%s reason=not_admin", safe_email)
            raise AuthorizationError("This account does not have admin access")

        self._provider.set_session(session)
        logger.info("auth.sign_in_accepted email=%s", safe_email)
        return session

    async def sign_out(self) -> None:
        """Revoke remotely if possible; local state is cleared either way."""
        await self._discard(self._provider.token)

    async def _discard(self, token: str | None) -> None:
        try:
            if token:
                await self._revoke(token)
        finally:
            self._provider.clear()

    async def _revoke(self, token: str) -> None:
        try:
            await self._provider.identity_provider.sign_out(token)
        except (AuthVerificationError, IdentityUnavailableError) as exc:
            logger.warning("auth.sign_out_revocation_failed reason=%s", exc)


__all__ = ["AllowListAuthorizer", "Authorizer", "SessionGate", "SessionProvider"]
