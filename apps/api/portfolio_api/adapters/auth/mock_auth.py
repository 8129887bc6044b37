"""Mock identity provider for local development and tests."""

from portfolio_api.adapters.auth.base import (
    AuthEvent,
    AuthVerificationError,
    IdentityProvider,
)
from portfolio_api.schemas.auth import AuthSession, Identity

_TOKEN_PREFIX = "test:"


class MockIdentityProvider(IdentityProvider):
    """Accepts deterministic test tokens only.

    Expected token format: ``test:<email>``. Password sign-in is checked
    against ``accounts`` (email -> password). Any well-formed token resolves
    until it is signed out, which lets tests restore sessions out-of-band.
    """

    def __init__(self, accounts: dict[str, str] | None = None) -> None:
        super().__init__()
        self._accounts = {email.strip().casefold(): password for email, password in (accounts or {}).items()}
        self._revoked: set[str] = set()

    async def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        email = email.strip()
        expected = self._accounts.get(email.casefold())
        if expected is None or expected != password:
            raise AuthVerificationError("Invalid email or password")

        token = f"{_TOKEN_PREFIX}{email}"
        self._revoked.discard(token)
        session = AuthSession(token=token, identity=self._identity_for(email))
        self._emit(AuthEvent.SIGNED_IN, session)
        return session

    async def sign_out(self, token: str) -> None:
        identity = await self.get_user(token)
        self._revoked.add(token)
        self._emit(AuthEvent.SIGNED_OUT, AuthSession(token=token, identity=identity))

    async def get_user(self, token: str) -> Identity:
        if not token.startswith(_TOKEN_PREFIX) or token in self._revoked:
            raise AuthVerificationError("Invalid session token")

        email = token[len(_TOKEN_PREFIX):].strip()
        if not email:
            raise AuthVerificationError("Session token missing user identity")
        return self._identity_for(email)

    @staticmethod
    def _identity_for(email: str) -> Identity:
        return Identity(user_id=f"mock-{email.casefold()}", email=email)


__all__ = ["MockIdentityProvider"]
