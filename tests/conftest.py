"""Pytest fixtures for the bizdesk backend.

Provides:
- A fresh file-backed SQLite database per test (foreign keys enforced, so
  tenant deletion cascades the way it does on PostgreSQL)
- A direct AsyncSession for seeding and repository-level tests
- An httpx AsyncClient wired to the app with get_db overridden
- Factories for companies and users, and a login helper that goes through
  the real /api/auth/login endpoint

Usage:
    async def test_something(client, make_company, make_user, login):
        acme = await make_company("acme")
        admin = await make_user("admin@acme.example.com", role="admin", company=acme)
        headers = await login(admin, host=tenant_host("acme"))
        response = await client.get("/api/customers", headers=headers)
"""

import os
import tempfile

# Set environment variables BEFORE any application import so Settings sees them
_TMP_DIR = tempfile.mkdtemp(prefix="bizdesk-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TMP_DIR}/unused.db"
os.environ["ROOT_DOMAIN"] = "bizdesk.test"
os.environ["APP_ENV"] = "test"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["UNKNOWN_SLUG_POLICY"] = "session_fallback"

from typing import Optional

import httpx
import pytest
from sqlalchemy.pool import NullPool

from bizdesk.core.config import settings
from bizdesk.core.security import hash_password
from bizdesk.db.session import build_engine, build_sessionmaker, get_db
from bizdesk.models import Base, Company, User
from main import app

ROOT = "bizdesk.test"
PASSWORD = "correct-horse-battery"


def tenant_host(slug: str) -> str:
    return f"{slug}.{ROOT}"


@pytest.fixture
async def engine(tmp_path):
    test_engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'bizdesk.db'}", poolclass=NullPool)
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_sessionmaker(engine)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url=f"http://{ROOT}") as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_company(db):
    async def _make(slug: str, name: Optional[str] = None) -> Company:
        company = Company(slug=slug, name=name or slug.title())
        db.add(company)
        await db.commit()
        await db.refresh(company)
        return company

    return _make


@pytest.fixture
def make_user(db):
    async def _make(
        email: str,
        role: str = "staff",
        company: Optional[Company] = None,
        password: str = PASSWORD,
        is_active: bool = True,
    ) -> User:
        user = User(
            email=email,
            hashed_password=hash_password(password),
            name=email.split("@")[0],
            role=role,
            company_id=company.id if company else None,
            is_active=is_active,
        )
        db.add(user)
        await db.commit()
        await db.refresh(user)
        return user

    return _make


@pytest.fixture
def login(client):
    """Log `user` in on `host`; returns headers carrying that host and the session cookie."""

    async def _login(user: User, host: str = ROOT, password: str = PASSWORD) -> dict:
        response = await client.post(
            "/api/auth/login",
            json={"email": user.email, "password": password},
            headers={"Host": host},
        )
        assert response.status_code == 200, response.text
        token = response.cookies.get(settings.SESSION_COOKIE_NAME)
        assert token
        # Requests pick their host explicitly; keep the jar out of the way.
        client.cookies.clear()
        return {"Host": host, "Cookie": f"{settings.SESSION_COOKIE_NAME}={token}"}

    return _login


def on_host(headers: dict, host: str) -> dict:
    """Same session cookie, presented on another host."""
    return {**headers, "Host": host}
