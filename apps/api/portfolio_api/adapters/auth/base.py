"""Identity service interfaces."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Callable

from portfolio_api.schemas.auth import AuthSession, Identity

logger = logging.getLogger(__name__)


class AuthVerificationError(Exception):
    """Raised when credentials or a session token are rejected."""


class IdentityUnavailableError(Exception):
    """Raised when the identity service cannot be reached."""


class AuthEvent(str, Enum):
    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"


AuthStateListener = Callable[[AuthEvent, AuthSession], None]


class IdentityProvider(ABC):
    """Provider-neutral identity service interface.

    Subclasses call ``_emit`` after a successful sign-in or sign-out so that
    subscribed session holders can react to auth-state changes.
    """

    def __init__(self) -> None:
        self._listeners: list[AuthStateListener] = []

    @abstractmethod
    async def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        """Exchange credentials for a new session."""

    @abstractmethod
    async def sign_out(self, token: str) -> None:
        """Revoke the session behind ``token``."""

    @abstractmethod
    async def get_user(self, token: str) -> Identity:
        """Resolve the identity behind ``token``."""

    def on_auth_state_change(self, listener: AuthStateListener) -> Callable[[], None]:
        """Subscribe to sign-in/sign-out events; returns the unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self, event: AuthEvent, session: AuthSession) -> None:
        for listener in list(self._listeners):
            try:
                listener(event, session)
            except Exception:
                logger.exception("identity.listener_failed event=%s", event.value)


__all__ = [
    "AuthEvent",
    "AuthStateListener",
    "AuthVerificationError",
    "IdentityProvider",
    "IdentityUnavailableError",
]
