"""Identity provider adapter tests."""

from __future__ import annotations

import sys
import types
import unittest
from unittest.mock import patch

import httpx

from portfolio_api.adapters.auth.base import AuthEvent, AuthVerificationError, IdentityUnavailableError
from portfolio_api.adapters.auth.firebase_auth import SIGN_IN_URL, FirebaseIdentityProvider
from portfolio_api.adapters.auth.mock_auth import MockIdentityProvider


class MockIdentityProviderTests(unittest.IsolatedAsyncioTestCase):
    async def test_sign_in_checks_password_case_insensitively_by_email(self) -> None:
        provider = MockIdentityProvider(accounts={"Admin@Example.com": "secret"})

        session = await provider.sign_in_with_password("admin@example.com", "secret")

        self.assertEqual(session.identity.email, "admin@example.com")
        with self.assertRaises(AuthVerificationError):
            await provider.sign_in_with_password("admin@example.com", "wrong")

    async def test_events_are_emitted_until_unsubscribed(self) -> None:
        provider = MockIdentityProvider(accounts={"a@example.com": "pw"})
        events: list[AuthEvent] = []
        unsubscribe = provider.on_auth_state_change(lambda event, _session: events.append(event))

        session = await provider.sign_in_with_password("a@example.com", "pw")
        await provider.sign_out(session.token)
        unsubscribe()
        await provider.sign_in_with_password("a@example.com", "pw")

        self.assertEqual(events, [AuthEvent.SIGNED_IN, AuthEvent.SIGNED_OUT])

    async def test_failing_listener_does_not_break_sign_in(self) -> None:
        provider = MockIdentityProvider(accounts={"a@example.com": "pw"})

        def explode(_event: AuthEvent, _session: object) -> None:
            raise RuntimeError("listener bug")

        provider.on_auth_state_change(explode)
        with self.assertLogs("portfolio_api.adapters.auth.base", level="ERROR"):
            session = await provider.sign_in_with_password("a@example.com", "pw")

        self.assertEqual(session.identity.email, "a@example.com")

    async def test_malformed_token_is_rejected(self) -> None:
        provider = MockIdentityProvider()

        for token in ("garbage", "test:", "test:   "):
            with self.subTest(token=token):
                with self.assertRaises(AuthVerificationError):
                    await provider.get_user(token)


class FirebaseIdentityProviderTests(unittest.IsolatedAsyncioTestCase):
    @staticmethod
    def _fake_firebase_modules(decoded_token: dict[str, str]) -> tuple[dict[str, types.ModuleType], list[str]]:
        fake_admin = types.ModuleType("firebase_admin")
        fake_auth = types.ModuleType("firebase_admin.auth")
        revoked: list[str] = []

        fake_admin._apps = []

        def initialize_app() -> object:
            app_handle = object()
            fake_admin._apps.append(app_handle)
            return app_handle

        def verify_id_token(token: str, check_revoked: bool = True) -> dict[str, str]:
            if token != "valid-jwt":
                raise ValueError("invalid token")
            if not check_revoked:
                raise ValueError("must validate revoked tokens")
            return decoded_token

        def revoke_refresh_tokens(uid: str) -> None:
            revoked.append(uid)

        fake_admin.initialize_app = initialize_app
        fake_admin.auth = fake_auth
        fake_auth.verify_id_token = verify_id_token
        fake_auth.revoke_refresh_tokens = revoke_refresh_tokens

        return {"firebase_admin": fake_admin, "firebase_admin.auth": fake_auth}, revoked

    @staticmethod
    def _client(handler) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    async def test_password_sign_in_posts_to_identity_toolkit(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(
                200,
                json={"idToken": "valid-jwt", "localId": "uid-1", "email": "admin@example.com"},
            )

        async with self._client(handler) as client:
            provider = FirebaseIdentityProvider(project_id="project-a", api_key="key-1", http_client=client)
            session = await provider.sign_in_with_password("admin@example.com", "secret")

        self.assertEqual(session.token, "valid-jwt")
        self.assertEqual(session.identity.user_id, "uid-1")
        self.assertEqual(f"{seen[0].url.scheme}://{seen[0].url.host}{seen[0].url.path}", SIGN_IN_URL)
        self.assertEqual(seen[0].url.params["key"], "key-1")

    async def test_rejected_credentials_raise_verification_error(self) -> None:
        async with self._client(lambda _request: httpx.Response(400, json={"error": {}})) as client:
            provider = FirebaseIdentityProvider(project_id="project-a", api_key="key-1", http_client=client)
            with self.assertRaises(AuthVerificationError):
                await provider.sign_in_with_password("admin@example.com", "bad")

    async def test_transport_failure_raises_unavailable(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("down", request=request)

        async with self._client(handler) as client:
            provider = FirebaseIdentityProvider(project_id="project-a", api_key="key-1", http_client=client)
            with self.assertRaises(IdentityUnavailableError):
                await provider.sign_in_with_password("admin@example.com", "secret")

    async def test_identity_service_outage_raises_unavailable(self) -> None:
        for status_code in (429, 503):
            with self.subTest(status_code=status_code):
                async with self._client(lambda _request, code=status_code: httpx.Response(code)) as client:
                    provider = FirebaseIdentityProvider(project_id="project-a", api_key="key-1", http_client=client)
                    with self.assertRaises(IdentityUnavailableError):
                        await provider.sign_in_with_password("admin@example.com", "secret")

    async def test_missing_api_key_rejects_sign_in(self) -> None:
        provider = FirebaseIdentityProvider(project_id="project-a", api_key=None)

        with self.assertRaises(AuthVerificationError):
            await provider.sign_in_with_password("admin@example.com", "secret")

    async def test_get_user_normalizes_identity(self) -> None:
        fake_modules, _ = self._fake_firebase_modules(
            {
                "uid": "uid-1",
                "email": "admin@example.com",
                "iss": "https://securetoken.google.com/project-a",
                "aud": "project-a",
            }
        )

        with patch.dict(sys.modules, fake_modules):
            provider = FirebaseIdentityProvider(project_id="project-a", api_key="key-1")
            identity = await provider.get_user("valid-jwt")
            with self.assertRaises(AuthVerificationError):
                await provider.get_user("forged-jwt")

        self.assertEqual(identity.user_id, "uid-1")
        self.assertEqual(identity.email, "admin@example.com")

    async def test_get_user_rejects_foreign_project(self) -> None:
        fake_modules, _ = self._fake_firebase_modules(
            {
                "uid": "uid-1",
                "email": "admin@example.com",
                "iss": "https://securetoken.google.com/other-project",
                "aud": "other-project",
            }
        )

        with patch.dict(sys.modules, fake_modules):
            provider = FirebaseIdentityProvider(project_id="project-a", api_key="key-1")
            with self.assertRaises(AuthVerificationError):
                await provider.get_user("valid-jwt")

    async def test_get_user_requires_email(self) -> None:
        fake_modules, _ = self._fake_firebase_modules(
            {"uid": "uid-1", "iss": "https://securetoken.google.com/project-a", "aud": "project-a"}
        )

        with patch.dict(sys.modules, fake_modules):
            provider = FirebaseIdentityProvider(project_id="project-a", api_key="key-1")
            with self.assertRaises(AuthVerificationError):
                await provider.get_user("valid-jwt")

    async def test_sign_out_revokes_refresh_tokens(self) -> None:
        fake_modules, revoked = self._fake_firebase_modules(
            {
                "uid": "uid-1",
                "email": "admin@example.com",
                "iss": "https://securetoken.google.com/project-a",
                "aud": "project-a",
            }
        )
        events: list[AuthEvent] = []

        with patch.dict(sys.modules, fake_modules):
            provider = FirebaseIdentityProvider(project_id="project-a", api_key="key-1")
            provider.on_auth_state_change(lambda event, _session: events.append(event))
            await provider.sign_out("valid-jwt")

        self.assertEqual(revoked, ["uid-1"])
        self.assertEqual(events, [AuthEvent.SIGNED_OUT])


if __name__ == "__main__":
    unittest.main()
