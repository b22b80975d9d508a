# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Integration tests for authentication endpoints."""


class TestFirstRun:
    """Tests for first-run registration of the initial admin."""

    def test_status_reports_first_run(self, client):
        response = client.get("/api/v1/auth/status")
        assert response.status_code == 200
        assert response.json() == {"first_run": True}

    def test_register_first_admin_logs_in(self, client):
        response = client.post(
            "/api/v1/auth/register",
            json={
                "name": "First Admin",
                "email": "first@example.com",
                "password": "long-enough-password",
            },
        )
        assert response.status_code == 201
        user = response.json()["user"]
        assert user["role"] == "admin"
        assert user["avatar_url"].startswith("https://ui-avatars.com/api/")
        assert "hashed_password" not in user

        me = client.get("/api/v1/auth/me")
        assert me.status_code == 200
        assert me.json()["user"]["email"] == "first@example.com"
        assert client.get("/api/v1/auth/status").json() == {"first_run": False}

    def test_register_closed_after_first_run(self, client, employee):
        response = client.post(
            "/api/v1/auth/register",
            json={
                "name": "Latecomer",
                "email": "late@example.com",
                "password": "long-enough-password",
            },
        )
        assert response.status_code == 403

    def test_register_rejects_short_password(self, client):
        response = client.post(
            "/api/v1/auth/register",
            json={"name": "Admin", "email": "a@example.com", "password": "short"},
        )
        assert response.status_code == 422


class TestLogin:
    """Tests for login, logout and the current principal."""

    def test_login_sets_session_cookie(self, client, employee, user_password):
        response = client.post(
            "/api/v1/auth/login",
            json={"email": "employee@example.com", "password": user_password},
        )
        assert response.status_code == 200
        assert response.json()["user"]["name"] == "John Employee"
        assert "session" in response.cookies

    def test_login_wrong_password(self, client, employee):
        response = client.post(
            "/api/v1/auth/login",
            json={"email": "employee@example.com", "password": "wrong-password"},
        )
        assert response.status_code == 401
        assert response.json()["code"] == "invalid_credentials"

    def test_login_inactive_account(self, client, make_user, user_password):
        make_user("Former", "former@example.com", is_active=False)
        response = client.post(
            "/api/v1/auth/login",
            json={"email": "former@example.com", "password": user_password},
        )
        assert response.status_code == 401

    def test_me_requires_session(self, client):
        assert client.get("/api/v1/auth/me").status_code == 401

    def test_me_rejects_unknown_session(self, client):
        response = client.get(
            "/api/v1/auth/me", headers={"Cookie": "session=not-a-session"}
        )
        assert response.status_code == 401

    def test_logout_ends_session(self, client, login_as, manager):
        login_as(manager)
        assert client.get("/api/v1/auth/me").json()["user"]["role"] == "manager"

        response = client.post("/api/v1/auth/logout")
        assert response.status_code == 204
        assert client.get("/api/v1/auth/me").status_code == 401

    def test_logout_without_session(self, client):
        assert client.post("/api/v1/auth/logout").status_code == 204

    def test_switching_principals(self, client, login_as, employee, admin):
        login_as(employee)
        assert client.get("/api/v1/auth/me").json()["user"]["role"] == "employee"

        login_as(admin)
        assert client.get("/api/v1/auth/me").json()["user"]["role"] == "admin"


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}
