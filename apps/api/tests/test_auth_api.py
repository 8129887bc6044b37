"""Admin sign-in, sign-out and gated page tests."""

from __future__ import annotations

import os
import unittest

from fastapi.testclient import TestClient

from portfolio_api.adapters.auth import FirebaseIdentityProvider, MockIdentityProvider
from portfolio_api.core.config import Settings, get_settings
from portfolio_api.main import create_app
from portfolio_api.routes.dependencies import build_identity_provider

ADMIN = "admin@example.com"
VISITOR = "visitor@example.com"
ADMIN_HEADERS = {"Authorization": f"Bearer test:{ADMIN}"}
VISITOR_HEADERS = {"Authorization": f"Bearer test:{VISITOR}"}


class _SettingsEnvCase(unittest.TestCase):
    _env_keys = (
        "PORTFOLIO_AUTH_PROVIDER",
        "PORTFOLIO_ADMIN_EMAILS",
        "PORTFOLIO_MOCK_ACCOUNTS",
        "PORTFOLIO_SESSION_COOKIE_SECURE",
    )

    def setUp(self) -> None:
        self._old_env = {k: os.environ.get(k) for k in self._env_keys}
        os.environ["PORTFOLIO_AUTH_PROVIDER"] = "mock"
        os.environ["PORTFOLIO_ADMIN_EMAILS"] = f'["{ADMIN}"]'
        os.environ["PORTFOLIO_MOCK_ACCOUNTS"] = f'{{"{ADMIN}": "secret", "{VISITOR}": "secret"}}'
        os.environ["PORTFOLIO_SESSION_COOKIE_SECURE"] = "false"
        get_settings.cache_clear()

    def tearDown(self) -> None:
        for key, value in self._old_env.items():
            if value is None:
                os.environ.pop(key, None)
            else:
                os.environ[key] = value
        get_settings.cache_clear()


class LoginTests(_SettingsEnvCase):
    def test_admin_login_sets_session_cookie(self) -> None:
        client = TestClient(create_app())

        response = client.post("/admin/login", json={"email": ADMIN, "password": "secret"})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["data"], {"email": ADMIN})
        self.assertIsNotNone(client.cookies.get("portfolio_session"))
        cookie_header = response.headers["set-cookie"].lower()
        self.assertIn("httponly", cookie_header)
        self.assertIn("samesite=lax", cookie_header)

        session = client.get("/admin/session")
        self.assertEqual(session.json()["data"], {"state": "authenticated_admin", "email": ADMIN, "next": None})

    def test_refused_logins_end_the_previous_admin_session(self) -> None:
        client = TestClient(create_app())
        client.post("/admin/login", json={"email": ADMIN, "password": "secret"})

        refused = client.post("/admin/login", json={"email": VISITOR, "password": "secret"})
        wrong = client.post("/admin/login", json={"email": ADMIN, "password": "nope"})

        self.assertEqual(refused.status_code, 403)
        self.assertEqual(wrong.status_code, 401)
        self.assertIsNone(client.cookies.get("portfolio_session"))
        self.assertEqual(client.get("/admin/session").json()["data"]["state"], "unauthenticated")
        replayed = client.get("/admin/session", headers=ADMIN_HEADERS)
        self.assertEqual(replayed.json()["data"]["state"], "unauthenticated")

    def test_wrong_password_ends_the_previous_admin_session(self) -> None:
        client = TestClient(create_app())
        client.post("/admin/login", json={"email": ADMIN, "password": "secret"})

        response = client.post("/admin/login", json={"email": ADMIN, "password": "nope"})

        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json(), {"error": "Invalid email or password"})
        self.assertEqual(client.get("/admin/session").json()["data"]["state"], "unauthenticated")

    def test_wrong_password_returns_401(self) -> None:
        client = TestClient(create_app())

        response = client.post("/admin/login", json={"email": ADMIN, "password": "nope"})

        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json(), {"error": "Invalid email or password"})
        self.assertIsNone(client.cookies.get("portfolio_session"))

    def test_non_admin_login_is_refused_and_revoked(self) -> None:
        app = create_app()
        client = TestClient(app)

        response = client.post("/admin/login", json={"email": VISITOR, "password": "secret"})

        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json(), {"error": "This account does not have admin access"})
        self.assertIsNone(client.cookies.get("portfolio_session"))

        session = client.get("/admin/session", headers=VISITOR_HEADERS)
        self.assertEqual(session.json()["data"]["state"], "unauthenticated")

    def test_missing_credentials_return_400(self) -> None:
        client = TestClient(create_app())

        response = client.post("/admin/login", json={"email": ADMIN})

        self.assertEqual(response.status_code, 400)
        self.assertIn("error", response.json())

    def test_session_endpoint_reports_each_state(self) -> None:
        client = TestClient(create_app())

        anonymous = client.get("/admin/session")
        visitor = client.get("/admin/session", headers=VISITOR_HEADERS)
        admin = client.get("/admin/session", headers=ADMIN_HEADERS)

        self.assertEqual(anonymous.json()["data"]["state"], "unauthenticated")
        self.assertEqual(visitor.json()["data"]["state"], "authenticated_non_admin")
        self.assertEqual(admin.json()["data"]["state"], "authenticated_admin")

    def test_bearer_token_takes_precedence_over_cookie(self) -> None:
        client = TestClient(create_app())
        client.cookies.set("portfolio_session", f"test:{VISITOR}")

        response = client.get("/admin/session", headers=ADMIN_HEADERS)

        self.assertEqual(response.json()["data"]["email"], ADMIN)

    def test_login_page_echoes_return_path(self) -> None:
        client = TestClient(create_app())

        response = client.get("/admin/login", params={"next": "/admin/messages"})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["data"]["next"], "/admin/messages")


class LogoutTests(_SettingsEnvCase):
    def test_logout_redirects_to_login_and_revokes(self) -> None:
        client = TestClient(create_app(), follow_redirects=False)
        client.post("/admin/login", json={"email": ADMIN, "password": "secret"})

        response = client.post("/admin/logout")

        self.assertEqual(response.status_code, 303)
        self.assertEqual(response.headers["location"], "/admin/login")
        self.assertIsNone(client.cookies.get("portfolio_session"))

        revoked = client.get("/admin/session", headers=ADMIN_HEADERS)
        self.assertEqual(revoked.json()["data"]["state"], "unauthenticated")

    def test_logout_without_session_still_redirects(self) -> None:
        client = TestClient(create_app(), follow_redirects=False)

        response = client.post("/admin/logout")

        self.assertEqual(response.status_code, 303)
        self.assertEqual(response.headers["location"], "/admin/login")


class GatedPageTests(_SettingsEnvCase):
    def test_anonymous_dashboard_redirects_before_any_store_read(self) -> None:
        app = create_app()
        client = TestClient(app, follow_redirects=False)

        response = client.get("/admin/dashboard")

        self.assertEqual(response.status_code, 303)
        self.assertEqual(response.headers["location"], "/admin/login?next=%2Fadmin%2Fdashboard")
        self.assertEqual(app.state.store.read_count, 0)

    def test_non_admin_inbox_redirects_before_any_store_read(self) -> None:
        app = create_app()
        client = TestClient(app, follow_redirects=False)

        response = client.get("/admin/messages", headers=VISITOR_HEADERS)

        self.assertEqual(response.status_code, 303)
        self.assertEqual(response.headers["location"], "/admin/login?next=%2Fadmin%2Fmessages")
        self.assertEqual(app.state.store.read_count, 0)

    def test_redirect_keeps_the_query_string(self) -> None:
        client = TestClient(create_app(), follow_redirects=False)

        response = client.get("/admin/messages", params={"status": "unread"})

        self.assertEqual(response.status_code, 303)
        self.assertEqual(
            response.headers["location"],
            "/admin/login?next=%2Fadmin%2Fmessages%3Fstatus%3Dunread",
        )

    def test_admin_sees_dashboard(self) -> None:
        client = TestClient(create_app(), follow_redirects=False)

        response = client.get("/admin/dashboard", headers=ADMIN_HEADERS)

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["data"]["failed"], [])


class AdminApiGuardTests(_SettingsEnvCase):
    def test_anonymous_write_returns_401_without_side_effect(self) -> None:
        app = create_app()
        client = TestClient(app)

        response = client.post("/api/skills", json={"name": "Python", "category": "Languages", "proficiency": 5})

        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json(), {"error": "Authentication required"})
        self.assertEqual(app.state.store.write_count, 0)

    def test_non_admin_write_returns_403_without_side_effect(self) -> None:
        app = create_app()
        client = TestClient(app)

        response = client.delete("/api/projects/some-id", headers=VISITOR_HEADERS)

        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json(), {"error": "Admin access required"})
        self.assertEqual(app.state.store.write_count, 0)

    def test_message_listing_is_admin_only(self) -> None:
        app = create_app()
        client = TestClient(app)

        response = client.get("/api/messages")

        self.assertEqual(response.status_code, 401)
        self.assertEqual(app.state.store.read_count, 0)


class FrameworkErrorEnvelopeTests(_SettingsEnvCase):
    def test_unknown_path_returns_error_payload(self) -> None:
        response = TestClient(create_app()).get("/api/nope")

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {"error": "Not Found"})

    def test_unsupported_method_returns_error_payload(self) -> None:
        response = TestClient(create_app()).patch("/api/projects", json={})

        self.assertEqual(response.status_code, 405)
        self.assertEqual(response.json(), {"error": "Method Not Allowed"})
        self.assertIn("GET", response.headers["allow"])


class IdentityProviderSelectionTests(unittest.TestCase):
    def test_mock_provider_is_selected_from_settings(self) -> None:
        settings = Settings(auth_provider="mock", mock_accounts={ADMIN: "secret"})

        self.assertIsInstance(build_identity_provider(settings), MockIdentityProvider)

    def test_firebase_provider_is_the_default(self) -> None:
        settings = Settings(firebase_project_id="project-a", firebase_api_key="key")

        self.assertIsInstance(build_identity_provider(settings), FirebaseIdentityProvider)


if __name__ == "__main__":
    unittest.main()
