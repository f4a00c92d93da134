"""Scoped repositories: tenant isolation, stamping, ownership, deadlines."""

import asyncio

import pytest

from bizdesk.core.errors import Forbidden, QueryTimeout, RecordNotFound, SelfDeletionBlocked, SelfEscalationBlocked
from bizdesk.models.user import User
from bizdesk.repositories.entities import (
    AiConversationRepository,
    CustomerRepository,
    EmployeeRepository,
    SeoArticleRepository,
    TaskRepository,
)
from bizdesk.repositories.users import UserRepository
from bizdesk.tenancy.scope import TenantScoped, Unrestricted


@pytest.fixture
async def two_tenants(make_company, make_user):
    acme = await make_company("acme")
    globex = await make_company("globex")
    acme_admin = await make_user("admin@acme.example.com", role="admin", company=acme)
    globex_admin = await make_user("admin@globex.example.com", role="admin", company=globex)
    return acme, globex, acme_admin, globex_admin


class TestTenantIsolation:

    async def test_rows_never_cross_tenants(self, db, two_tenants):
        acme, globex, acme_admin, globex_admin = two_tenants
        acme_repo = CustomerRepository(db, TenantScoped(acme.id))
        globex_repo = CustomerRepository(db, TenantScoped(globex.id))

        row = await acme_repo.create({"company_name": "Road Runner"}, acme_admin)

        assert await globex_repo.list(globex_admin) == []
        with pytest.raises(RecordNotFound):
            await globex_repo.get(row.id, globex_admin)
        with pytest.raises(RecordNotFound):
            await globex_repo.update(row.id, {"status": "lost"}, globex_admin)
        with pytest.raises(RecordNotFound):
            await globex_repo.delete(row.id, globex_admin)

    async def test_foreign_row_looks_like_missing_row(self, db, two_tenants):
        acme, globex, acme_admin, globex_admin = two_tenants
        row = await CustomerRepository(db, TenantScoped(acme.id)).create({"company_name": "X"}, acme_admin)
        globex_repo = CustomerRepository(db, TenantScoped(globex.id))

        with pytest.raises(RecordNotFound) as foreign:
            await globex_repo.get(row.id, globex_admin)
        with pytest.raises(RecordNotFound) as missing:
            await globex_repo.get("no-such-id", globex_admin)

        assert foreign.value.detail == missing.value.detail == "Customer not found"

    async def test_unrestricted_reads_span_tenants(self, db, two_tenants, make_user):
        acme, globex, acme_admin, globex_admin = two_tenants
        operator = await make_user("ops@platform.example.com", role="admin")
        await CustomerRepository(db, TenantScoped(acme.id)).create({"company_name": "A"}, acme_admin)
        await CustomerRepository(db, TenantScoped(globex.id)).create({"company_name": "G"}, globex_admin)

        rows = await CustomerRepository(db, Unrestricted()).list(operator)

        assert {r.company_name for r in rows} == {"A", "G"}


class TestCreateStamping:

    async def test_task_company_comes_from_capability(self, db, two_tenants):
        acme, globex, acme_admin, _ = two_tenants
        repo = TaskRepository(db, TenantScoped(acme.id))

        task = await repo.create({"title": "Ship it", "company_id": globex.id, "id": "forged"}, acme_admin)

        assert task.company_id == acme.id
        assert task.id != "forged"
        assert task.created_by == acme_admin.id

    async def test_unrestricted_create_leaves_company_null(self, db, make_user):
        operator = await make_user("ops@platform.example.com", role="admin")
        task = await TaskRepository(db, Unrestricted()).create({"title": "Global"}, operator)

        assert task.company_id is None

    async def test_update_never_moves_a_row(self, db, two_tenants):
        acme, globex, acme_admin, _ = two_tenants
        repo = TaskRepository(db, TenantScoped(acme.id))
        task = await repo.create({"title": "Stay"}, acme_admin)

        updated = await repo.update(task.id, {"company_id": globex.id, "title": "Moved?"}, acme_admin)

        assert updated.company_id == acme.id
        assert updated.title == "Moved?"

    async def test_generated_defaults(self, db, two_tenants):
        acme, _, acme_admin, _ = two_tenants

        employee = await EmployeeRepository(db, TenantScoped(acme.id)).create({}, acme_admin)
        article = await SeoArticleRepository(db, TenantScoped(acme.id)).create(
            {"title": "Hello", "content": "..."}, acme_admin
        )

        assert employee.employee_number.startswith("EMP-")
        assert article.slug.startswith("article-")
        assert article.user_id == acme_admin.id


class TestOwnership:

    async def test_staff_sees_only_assigned_customers(self, db, make_company, make_user):
        acme = await make_company("acme")
        staff = await make_user("staff@acme.example.com", role="staff", company=acme)
        manager = await make_user("manager@acme.example.com", role="manager", company=acme)
        repo = CustomerRepository(db, TenantScoped(acme.id))
        mine = await repo.create({"company_name": "Mine", "assigned_to": staff.id}, manager)
        await repo.create({"company_name": "Theirs", "assigned_to": manager.id}, manager)
        await repo.create({"company_name": "Nobody's"}, manager)

        assert [c.id for c in await repo.list(staff)] == [mine.id]
        assert len(await repo.list(manager)) == 3
        assert await repo.count(staff) == 1

    async def test_staff_create_stays_visible_to_creator(self, db, make_company, make_user):
        acme = await make_company("acme")
        staff = await make_user("staff@acme.example.com", role="staff", company=acme)
        manager = await make_user("manager@acme.example.com", role="manager", company=acme)
        repo = CustomerRepository(db, TenantScoped(acme.id))

        row = await repo.create({"company_name": "Handed off", "assigned_to": manager.id}, staff)

        assert row.assigned_to == staff.id

    async def test_staff_cannot_hand_off_ownership(self, db, make_company, make_user):
        acme = await make_company("acme")
        staff = await make_user("staff@acme.example.com", role="staff", company=acme)
        manager = await make_user("manager@acme.example.com", role="manager", company=acme)
        repo = CustomerRepository(db, TenantScoped(acme.id))
        row = await repo.create({"company_name": "Mine"}, staff)

        with pytest.raises(Forbidden):
            await repo.update(row.id, {"assigned_to": manager.id}, staff)

    async def test_clear_conversation_only_touches_caller(self, db, make_company, make_user):
        acme = await make_company("acme")
        alice = await make_user("alice@acme.example.com", role="staff", company=acme)
        bob = await make_user("bob@acme.example.com", role="staff", company=acme)
        repo = AiConversationRepository(db, TenantScoped(acme.id))
        await repo.create({"role": "user", "content": "hi"}, alice)
        await repo.create({"role": "assistant", "content": "hello"}, alice)
        await repo.create({"role": "user", "content": "hey"}, bob)

        assert await repo.clear(alice) == 2
        assert await repo.list(alice) == []
        assert len(await repo.list(bob)) == 1


class TestSelfProtection:

    async def test_self_role_change_blocked(self, db, make_company, make_user):
        acme = await make_company("acme")
        admin = await make_user("admin@acme.example.com", role="admin", company=acme)
        repo = UserRepository(db, TenantScoped(acme.id))

        with pytest.raises(SelfEscalationBlocked):
            await repo.update(admin.id, {"role": "client"}, admin)

        # Same role, or other fields, are fine
        updated = await repo.update(admin.id, {"role": "admin", "name": "Boss"}, admin)
        assert updated.name == "Boss"

    async def test_self_delete_blocked(self, db, make_company, make_user):
        acme = await make_company("acme")
        admin = await make_user("admin@acme.example.com", role="admin", company=acme)

        with pytest.raises(SelfDeletionBlocked):
            await UserRepository(db, TenantScoped(acme.id)).delete(admin.id, admin)

    async def test_duplicate_email_is_a_conflict(self, db, make_company, make_user):
        acme = await make_company("acme")
        admin = await make_user("admin@acme.example.com", role="admin", company=acme)

        with pytest.raises(ValueError):
            await UserRepository(db, TenantScoped(acme.id)).create(
                {"email": "ADMIN@acme.example.com", "password": "long-enough-1", "name": "Dup"}, admin
            )


class _SlowSession:
    async def execute(self, statement):
        await asyncio.sleep(1)


class _FoundRow:
    def scalar_one_or_none(self):
        return object()


class _StalledDeleteSession:
    async def execute(self, statement):
        return _FoundRow()

    async def delete(self, row):
        await asyncio.sleep(1)


class TestQueryDeadline:

    async def test_slow_query_raises_timeout(self):
        caller = User(id="u1", email="u1@acme.example.com", name="u1", role="admin", company_id="acme-id")
        repo = CustomerRepository(_SlowSession(), TenantScoped("acme-id"), timeout=0.01)

        with pytest.raises(QueryTimeout):
            await repo.list(caller)

    async def test_email_uniqueness_lookup_is_bounded(self):
        caller = User(id="u1", email="u1@acme.example.com", name="u1", role="admin", company_id="acme-id")
        repo = UserRepository(_SlowSession(), TenantScoped("acme-id"), timeout=0.01)

        with pytest.raises(QueryTimeout):
            await repo.create({"email": "new@acme.example.com", "password": "long-enough-1", "name": "N"}, caller)

    async def test_role_check_precedes_email_lookup(self):
        caller = User(id="u1", email="u1@acme.example.com", name="u1", role="staff", company_id="acme-id")
        repo = UserRepository(_SlowSession(), TenantScoped("acme-id"), timeout=0.01)

        # Forbidden, not QueryTimeout: the users table is never touched
        with pytest.raises(Forbidden):
            await repo.create({"email": "new@acme.example.com", "password": "long-enough-1", "name": "N"}, caller)

    async def test_delete_is_bounded(self):
        caller = User(id="u1", email="u1@acme.example.com", name="u1", role="admin", company_id="acme-id")
        repo = CustomerRepository(_StalledDeleteSession(), TenantScoped("acme-id"), timeout=0.01)

        with pytest.raises(QueryTimeout):
            await repo.delete("c1", caller)


class TestReferenceChecks:

    async def test_dangling_reference_raises_not_found(self, db, two_tenants):
        acme, _, acme_admin, _ = two_tenants

        with pytest.raises(RecordNotFound) as exc:
            await CustomerRepository(db, TenantScoped(acme.id)).create(
                {"company_name": "X", "assigned_to": "missing"}, acme_admin
            )
        assert exc.value.detail == "User not found"

    async def test_unrestricted_scope_accepts_any_existing_user(self, db, two_tenants, make_user):
        _, globex, _, globex_admin = two_tenants
        operator = await make_user("ops@platform.example.com", role="admin")

        row = await CustomerRepository(db, Unrestricted()).create(
            {"company_name": "X", "assigned_to": globex_admin.id}, operator
        )

        assert row.assigned_to == globex_admin.id

    async def test_operator_creating_inside_tenant_is_stamped_as_creator(self, db, two_tenants, make_user):
        acme, _, _, _ = two_tenants
        operator = await make_user("ops@platform.example.com", role="admin")

        task = await TaskRepository(db, TenantScoped(acme.id)).create({"title": "Audit"}, operator)

        assert task.created_by == operator.id
        assert task.company_id == acme.id
