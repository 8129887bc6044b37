"""Firebase Auth identity provider adapter."""

from __future__ import annotations

import asyncio
from typing import Any

import httpx

from portfolio_api.adapters.auth.base import (
    AuthEvent,
    AuthVerificationError,
    IdentityProvider,
    IdentityUnavailableError,
)
from portfolio_api.schemas.auth import AuthSession, Identity

SIGN_IN_URL = "https://identitytoolkit.googleapis.com/v1/accounts:signInWithPassword"


class FirebaseIdentityProvider(IdentityProvider):
    """Password sign-in through the Identity Toolkit REST API; token checks through ``firebase_admin``.

    ``http_client`` is optional; when omitted a short-lived client is opened per sign-in.
    """

    def __init__(
        self,
        project_id: str | None,
        api_key: str | None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        super().__init__()
        self._project_id = project_id
        self._api_key = api_key
        self._http_client = http_client

    async def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        if not self._api_key:
            raise AuthVerificationError("Password sign-in is not configured")

        payload = {"email": email, "password": password, "returnSecureToken": True}
        try:
            if self._http_client is not None:
                response = await self._post_sign_in(self._http_client, payload)
            else:
                async with httpx.AsyncClient(timeout=10.0) as client:
                    response = await self._post_sign_in(client, payload)
        except httpx.TransportError as exc:
            raise IdentityUnavailableError("Identity service is unreachable") from exc

        if response.status_code == 429 or response.status_code >= 500:
            raise IdentityUnavailableError(f"Identity service answered {response.status_code}")
        if response.status_code != 200:
            raise AuthVerificationError("Invalid email or password")

        body = response.json()
        token = str(body.get("idToken") or "")
        user_id = str(body.get("localId") or "").strip()
        if not token or not user_id:
            raise AuthVerificationError("Identity service returned an incomplete session")

        session = AuthSession(
            token=token,
            identity=Identity(user_id=user_id, email=str(body.get("email") or email)),
        )
        self._emit(AuthEvent.SIGNED_IN, session)
        return session

    async def sign_out(self, token: str) -> None:
        identity = await self.get_user(token)
        await asyncio.to_thread(self._revoke, identity.user_id)
        self._emit(AuthEvent.SIGNED_OUT, AuthSession(token=token, identity=identity))

    async def get_user(self, token: str) -> Identity:
        decoded = await asyncio.to_thread(self._verify, token)

        user_id = str(decoded.get("uid") or decoded.get("sub") or "").strip()
        email = str(decoded.get("email") or "").strip()
        if not user_id:
            raise AuthVerificationError("Session token missing user identity")
        if not email:
            raise AuthVerificationError("Session token missing email")
        return Identity(user_id=user_id, email=email)

    async def _post_sign_in(self, client: httpx.AsyncClient, payload: dict[str, Any]) -> httpx.Response:
        return await client.post(SIGN_IN_URL, params={"key": self._api_key}, json=payload)

    def _verify(self, token: str) -> dict[str, Any]:
        firebase_auth = self._auth_module()
        try:
            decoded = firebase_auth.verify_id_token(token, check_revoked=True)
        except Exception as exc:  # pragma: no cover - provider exception surface
            raise AuthVerificationError("Invalid session token") from exc

        if self._project_id:
            issuer = str(decoded.get("iss", ""))
            audience = str(decoded.get("aud", ""))
            if self._project_id not in issuer and audience != self._project_id:
                raise AuthVerificationError("Invalid session token issuer")
        return decoded

    def _revoke(self, user_id: str) -> None:
        firebase_auth = self._auth_module()
        try:
            firebase_auth.revoke_refresh_tokens(user_id)
        except Exception as exc:  # pragma: no cover - provider exception surface
            raise IdentityUnavailableError("Session revocation failed") from exc

    @staticmethod
    def _auth_module() -> Any:
        try:
            import firebase_admin
            from firebase_admin import auth as firebase_auth
        except ImportError as exc:  # pragma: no cover - depends on optional package
            raise AuthVerificationError("Firebase identity provider is unavailable") from exc

        if not firebase_admin._apps:
            firebase_admin.initialize_app()
        return firebase_auth


__all__ = ["FirebaseIdentityProvider", "SIGN_IN_URL"]
