"""Session login / logout and the cookie contract."""

from datetime import datetime, timedelta, timezone

from sqlalchemy import select

from bizdesk.core.config import settings
from bizdesk.models import UserSession
from conftest import PASSWORD, tenant_host


class TestLogin:

    async def test_login_sets_httponly_session_cookie(self, client, make_company, make_user):
        acme = await make_company("acme")
        user = await make_user("u1@acme.example.com", company=acme)

        response = await client.post(
            "/api/auth/login",
            json={"email": user.email, "password": PASSWORD},
            headers={"Host": tenant_host("acme")},
        )

        assert response.status_code == 200
        assert response.json()["id"] == user.id
        set_cookie = response.headers["set-cookie"]
        assert settings.SESSION_COOKIE_NAME in set_cookie
        assert "HttpOnly" in set_cookie
        assert "Max-Age=86400" in set_cookie

    async def test_session_remembers_login_tenant(self, client, db, make_company, make_user, login):
        acme = await make_company("acme")
        user = await make_user("u1@acme.example.com", company=acme)
        await login(user, host=tenant_host("acme"))

        session = await db.scalar(select(UserSession).where(UserSession.user_id == user.id))

        assert session.company_id == acme.id
        assert session.tenant_slug == "acme"

    async def test_wrong_password_is_401(self, client, make_user):
        user = await make_user("ops@platform.example.com", role="admin")

        response = await client.post("/api/auth/login", json={"email": user.email, "password": "nope-nope"})

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid email or password"

    async def test_inactive_user_cannot_log_in(self, client, make_user):
        user = await make_user("gone@platform.example.com", role="admin", is_active=False)

        response = await client.post("/api/auth/login", json={"email": user.email, "password": PASSWORD})

        assert response.status_code == 401


class TestSessionLifecycle:

    async def test_me_requires_session(self, client):
        response = await client.get("/api/auth/me")
        assert response.status_code == 401

    async def test_me_then_logout(self, client, make_company, make_user, login):
        acme = await make_company("acme")
        user = await make_user("u1@acme.example.com", company=acme)
        headers = await login(user, host=tenant_host("acme"))

        me = await client.get("/api/auth/me", headers=headers)
        logout = await client.post("/api/auth/logout", headers=headers)
        after = await client.get("/api/auth/me", headers=headers)

        assert me.json()["email"] == "u1@acme.example.com"
        assert logout.status_code == 204
        assert after.status_code == 401

    async def test_expired_session_is_ignored(self, client, db, make_company, make_user, login):
        acme = await make_company("acme")
        user = await make_user("u1@acme.example.com", company=acme)
        headers = await login(user, host=tenant_host("acme"))
        session = await db.scalar(select(UserSession).where(UserSession.user_id == user.id))
        session.expires_at = datetime.now(timezone.utc) - timedelta(minutes=1)
        await db.commit()

        response = await client.get("/api/auth/me", headers=headers)

        assert response.status_code == 401
