"""Tenant branding and root-domain tenant management."""

from sqlalchemy import func, select

from bizdesk.models import Customer, Task, User, UserSession
from conftest import ROOT, tenant_host


class TestBranding:

    async def test_tenant_host_returns_tenant_branding(self, client, make_company):
        acme = await make_company("acme", "Acme Corp")

        response = await client.get("/api/tenant", headers={"Host": tenant_host("acme")})

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == acme.id
        assert body["name"] == "Acme Corp"
        assert body["primary_color"] == "#3B82F6"
        assert body["scope"] == "host"

    async def test_root_host_returns_platform_defaults(self, client):
        response = await client.get("/api/tenant", headers={"Host": ROOT})

        assert response.json()["slug"] is None
        assert response.json()["scope"] == "root"


class TestCompanyManagement:

    async def test_operator_creates_and_lists_companies(self, client, make_user, login):
        operator = await make_user("ops@platform.example.com", role="ceo")
        headers = await login(operator)

        created = await client.post(
            "/api/admin/companies", json={"slug": "Initech", "name": "Initech"}, headers=headers
        )
        listed = await client.get("/api/admin/companies", headers=headers)

        assert created.status_code == 201, created.text
        assert created.json()["slug"] == "initech"
        assert [c["slug"] for c in listed.json()] == ["initech"]

    async def test_reserved_and_duplicate_slugs_conflict(self, client, make_company, make_user, login):
        await make_company("acme")
        operator = await make_user("ops@platform.example.com", role="admin")
        headers = await login(operator)

        reserved = await client.post("/api/admin/companies", json={"slug": "api", "name": "API"}, headers=headers)
        duplicate = await client.post("/api/admin/companies", json={"slug": "acme", "name": "Acme 2"}, headers=headers)

        assert reserved.status_code == 409
        assert duplicate.status_code == 409

    async def test_rename_changes_the_subdomain(self, client, make_company, make_user, login):
        acme = await make_company("acme")
        operator = await make_user("ops@platform.example.com", role="admin")
        headers = await login(operator)

        response = await client.patch(
            f"/api/admin/companies/{acme.id}", json={"slug": "acme-corp"}, headers=headers
        )

        assert response.status_code == 200
        assert (await client.get("/api/tenant", headers={"Host": tenant_host("acme-corp")})).json()["id"] == acme.id
        assert (await client.get("/api/tenant", headers={"Host": tenant_host("acme")})).json()["id"] is None

    async def test_management_requires_platform_operator_on_root(self, client, make_company, make_user, login):
        acme = await make_company("acme")
        tenant_admin = await make_user("admin@acme.example.com", role="admin", company=acme)
        operator = await make_user("ops@platform.example.com", role="admin")
        staff_operator = await make_user("staffops@platform.example.com", role="staff")

        tenant_headers = await login(tenant_admin, host=tenant_host("acme"))
        on_subdomain = await login(operator, host=tenant_host("acme"))
        staff_headers = await login(staff_operator)

        assert (await client.get("/api/admin/companies", headers=tenant_headers)).status_code == 403
        assert (await client.get("/api/admin/companies", headers=on_subdomain)).status_code == 403
        assert (await client.get("/api/admin/companies", headers=staff_headers)).status_code == 403

    async def test_unauthenticated_is_401(self, client):
        response = await client.get("/api/admin/companies", headers={"Host": ROOT})
        assert response.status_code == 401


class TestCompanyDeletion:

    async def test_delete_cascades_to_every_scoped_row(self, client, db, make_company, make_user, login):
        acme = await make_company("acme")
        globex = await make_company("globex")
        acme_user = await make_user("u1@acme.example.com", role="manager", company=acme)
        globex_user = await make_user("u1@globex.example.com", role="manager", company=globex)
        db.add_all([
            Customer(company_id=acme.id, company_name="A", assigned_to=acme_user.id),
            Task(company_id=acme.id, title="A task", created_by=acme_user.id),
            Customer(company_id=globex.id, company_name="G"),
        ])
        await db.commit()
        await login(acme_user, host=tenant_host("acme"))
        operator = await make_user("ops@platform.example.com", role="admin")
        headers = await login(operator)

        response = await client.delete(f"/api/admin/companies/{acme.id}", headers=headers)

        assert response.status_code == 204
        db.expire_all()
        for model in (Customer, Task, User, UserSession):
            count = await db.scalar(select(func.count()).select_from(model).where(model.company_id == acme.id))
            assert count == 0
        assert await db.scalar(select(func.count()).select_from(Customer)) == 1
        assert await db.get(User, globex_user.id) is not None

    async def test_delete_unknown_company_is_404(self, client, make_user, login):
        operator = await make_user("ops@platform.example.com", role="admin")
        headers = await login(operator)

        response = await client.delete("/api/admin/companies/missing", headers=headers)

        assert response.status_code == 404
        assert response.json()["detail"] == "Company not found"


class TestCompanyUpdateNulls:

    async def test_null_slug_and_name_are_ignored(self, client, make_company, make_user, login):
        acme = await make_company("acme", "Acme Corp")
        operator = await make_user("ops@platform.example.com", role="admin")
        headers = await login(operator)

        response = await client.patch(
            f"/api/admin/companies/{acme.id}",
            json={"slug": None, "name": None, "primary_color": "#000000"},
            headers=headers,
        )

        assert response.status_code == 200, response.text
        assert response.json()["slug"] == "acme"
        assert response.json()["name"] == "Acme Corp"
        assert response.json()["primary_color"] == "#000000"
