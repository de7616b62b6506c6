"""Auth, privacy PIN and profile endpoints."""

import pytest

pytestmark = pytest.mark.integration


def _prime_csrf(client) -> str:
    """Insert CSRF token into client session."""
    token = "test-csrf-token"
    with client.session_transaction() as sess:
        sess["_csrf_token"] = token
    return token


class TestAuth:
    def test_register_and_login(self, client):
        resp = client.post(
            "/auth/register",
            json={"name": " Ada ", "email": "Ada@Example.com", "password": "secret123"},
        )
        assert resp.status_code == 201
        user = resp.get_json()["user"]
        assert user["email"] == "ada@example.com"
        assert user["name"] == "Ada"
        assert "password_hash" not in user

        resp = client.post("/auth/login", json={"email": "ada@example.com", "password": "secret123"})
        body = resp.get_json()
        assert resp.status_code == 200
        assert body["access_token"] and body["refresh_token"] and body["csrf_token"]

        me = client.get("/auth/me", headers={"Authorization": f"Bearer {body['access_token']}"})
        assert me.get_json()["user"]["email"] == "ada@example.com"

    def test_duplicate_email(self, client, user):
        resp = client.post(
            "/auth/register",
            json={"name": "Dup", "email": user.email.upper(), "password": "secret123"},
        )
        assert resp.status_code == 400
        assert resp.get_json()["error"] == "email_already_exists"

    def test_short_password_is_validation_error(self, client):
        resp = client.post("/auth/register", json={"name": "A", "email": "a@example.com", "password": "123"})
        assert resp.status_code == 400
        assert resp.get_json()["error"] == "validation_error"

    def test_bad_credentials(self, client, user):
        resp = client.post("/auth/login", json={"email": user.email, "password": "wrong-pass"})
        assert resp.status_code == 401

    def test_refresh_issues_access_token(self, client, user):
        login = client.post("/auth/login", json={"email": user.email, "password": "secret123"}).get_json()
        resp = client.post("/auth/refresh", headers={"Authorization": f"Bearer {login['refresh_token']}"})
        assert resp.status_code == 200
        assert resp.get_json()["access_token"]

    def test_csrf_enforced_when_enabled(self, app, client, headers):
        app.config["WTF_CSRF_ENABLED"] = True
        resp = client.post("/api/shorts", json={"category": "habit", "content": "x"}, headers=headers)
        assert resp.status_code == 403

        token = _prime_csrf(client)
        resp = client.post(
            "/api/shorts",
            json={"category": "habit", "content": "x"},
            headers={**headers, "X-CSRF-Token": token},
        )
        assert resp.status_code == 201


class TestPrivacyPin:
    def test_verify_before_set(self, client, headers):
        resp = client.post("/auth/verify-pin", json={"pin": "1234"}, headers=headers)
        assert resp.status_code == 400
        assert resp.get_json()["error"] == "pin_not_set"

    def test_set_and_verify(self, client, headers):
        assert client.post("/auth/pin", json={"pin": "4821"}, headers=headers).status_code == 200
        assert client.post("/auth/verify-pin", json={"pin": "4821"}, headers=headers).get_json() == {"ok": True}
        wrong = client.post("/auth/verify-pin", json={"pin": "0000"}, headers=headers)
        assert wrong.status_code == 401
        bad = client.post("/auth/verify-pin", json={"pin": "12"}, headers=headers)
        assert bad.status_code == 400
        assert bad.get_json()["error"] == "invalid_pin_format"

    def test_set_rejects_non_digits(self, client, headers):
        resp = client.post("/auth/pin", json={"pin": "12ab"}, headers=headers)
        assert resp.status_code == 400

    def test_profile_exposes_has_pin_not_hash(self, client, headers):
        client.post("/auth/pin", json={"pin": "4821"}, headers=headers)
        user = client.get("/api/user/profile", headers=headers).get_json()["user"]
        assert user["has_pin"] is True
        assert "privacy_pin_hash" not in user


class TestProfile:
    def test_defaults(self, client, headers):
        user = client.get("/api/user/profile", headers=headers).get_json()["user"]
        assert user["theme_preference"] == "electric"
        assert user["settings"] == {
            "email_notifications": True,
            "daily_reminders": True,
            "concealed_mode": False,
        }

    def test_patch_profile_and_settings(self, client, headers):
        resp = client.patch(
            "/api/user/profile",
            json={
                "theme_preference": "boreal",
                "current_focus": "Consistency",
                "is_onboarded": True,
                "settings": {"concealed_mode": True},
            },
            headers=headers,
        )
        user = resp.get_json()["user"]
        assert resp.status_code == 200
        assert user["theme_preference"] == "boreal"
        assert user["current_focus"] == "Consistency"
        assert user["is_onboarded"] is True
        assert user["settings"]["concealed_mode"] is True
        assert user["settings"]["daily_reminders"] is True

    def test_unknown_theme_rejected(self, client, headers):
        resp = client.patch("/api/user/profile", json={"theme_preference": "neon"}, headers=headers)
        assert resp.status_code == 400

    def test_momentum_has_seven_weeks(self, client, headers):
        body = client.get("/api/user/momentum", headers=headers).get_json()
        assert body["ok"] is True
        assert [w["week_label"] for w in body["weeks"]] == [f"WK{i}" for i in range(1, 8)]


def test_health(client):
    assert client.get("/health").get_json() == {"ok": True}


def test_unknown_route_is_json(client):
    resp = client.get("/nope")
    assert resp.status_code == 404
    assert resp.get_json()["ok"] is False
