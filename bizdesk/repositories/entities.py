"""
repositories/entities.py
------------------------
One ScopedRepository per business entity.

Each class only declares what differs: the model, the policy key, the
column stamped with the caller on create, ordering, and the odd default
(employee numbers, article slugs). Scoping and role filtering come from
the base class.
"""

import secrets
import time
from typing import Any

from sqlalchemy import delete

from bizdesk.core.logging import get_logger
from bizdesk.models.ai import AiConversation, AiLog
from bizdesk.models.client import ClientInvoice, ClientProject
from bizdesk.models.crm import Customer, Lead
from bizdesk.models.finance import AgencySale, Business, Investment
from bizdesk.models.seo import SeoArticle, SeoCategory
from bizdesk.models.staff import Employee
from bizdesk.models.user import User
from bizdesk.models.work import Memo, QuickNote, Task
from bizdesk.repositories.base import ScopedRepository
from bizdesk.repositories.users import UserRepository
from bizdesk.tenancy.policy import Action

logger = get_logger(__name__)


def _suffix(length: int = 6) -> str:
    return secrets.token_hex(length)[:length]


class CustomerRepository(ScopedRepository[Customer]):
    model = Customer
    entity = "customers"
    label = "customer"


class LeadRepository(ScopedRepository[Lead]):
    model = Lead
    entity = "leads"
    label = "lead"


class TaskRepository(ScopedRepository[Task]):
    model = Task
    entity = "tasks"
    label = "task"
    creator_column = "created_by"


class BusinessRepository(ScopedRepository[Business]):
    model = Business
    entity = "businesses"
    label = "business"


class AgencySaleRepository(ScopedRepository[AgencySale]):
    model = AgencySale
    entity = "agency_sales"
    label = "agency sale"
    creator_column = "agency_id"

    def order_by(self):
        return (AgencySale.sale_date.desc(), AgencySale.id)


class InvestmentRepository(ScopedRepository[Investment]):
    model = Investment
    entity = "investments"
    label = "investment"
    creator_column = "created_by"

    def order_by(self):
        return (Investment.investment_date.desc(), Investment.id)


class EmployeeRepository(ScopedRepository[Employee]):
    model = Employee
    entity = "employees"
    label = "employee"

    def prepare_create(self, data: dict[str, Any], caller: User) -> dict[str, Any]:
        if not (data.get("employee_number") or "").strip():
            data["employee_number"] = f"EMP-{int(time.time() * 1000)}-{_suffix()}"
        return data


class MemoRepository(ScopedRepository[Memo]):
    model = Memo
    entity = "memos"
    label = "memo"
    creator_column = "user_id"

    def order_by(self):
        return (Memo.date.desc(), Memo.id)


class QuickNoteRepository(ScopedRepository[QuickNote]):
    model = QuickNote
    entity = "quick_notes"
    label = "quick note"
    creator_column = "user_id"

    def order_by(self):
        return (QuickNote.is_pinned.desc(), QuickNote.created_at.desc(), QuickNote.id)


class SeoCategoryRepository(ScopedRepository[SeoCategory]):
    model = SeoCategory
    entity = "seo_categories"
    label = "SEO category"

    def order_by(self):
        return (SeoCategory.name, SeoCategory.id)


class SeoArticleRepository(ScopedRepository[SeoArticle]):
    model = SeoArticle
    entity = "seo_articles"
    label = "SEO article"
    creator_column = "user_id"

    def prepare_create(self, data: dict[str, Any], caller: User) -> dict[str, Any]:
        if not data.get("slug"):
            data["slug"] = f"article-{int(time.time() * 1000)}-{_suffix()}"
        return data


class ClientProjectRepository(ScopedRepository[ClientProject]):
    model = ClientProject
    entity = "client_projects"
    label = "client project"


class ClientInvoiceRepository(ScopedRepository[ClientInvoice]):
    model = ClientInvoice
    entity = "client_invoices"
    label = "client invoice"


class AiLogRepository(ScopedRepository[AiLog]):
    model = AiLog
    entity = "ai_logs"
    label = "AI log"
    creator_column = "user_id"


class AiConversationRepository(ScopedRepository[AiConversation]):
    model = AiConversation
    entity = "ai_conversations"
    label = "AI conversation"
    creator_column = "user_id"

    def order_by(self):
        return (AiConversation.created_at, AiConversation.id)

    async def clear(self, caller: User) -> int:
        """Delete the caller's own conversation history inside the bound scope."""
        self.access.check(self.entity, Action.DELETE, caller)
        stmt = delete(AiConversation).where(AiConversation.user_id == caller.id)
        if self.is_tenant_scoped:
            stmt = stmt.where(AiConversation.company_id == self.company_id)
        result = await self._bounded(self.db.execute(stmt))
        logger.info("AI conversation cleared", user_id=caller.id, rows=result.rowcount)
        return result.rowcount


REPOSITORIES: dict[str, type[ScopedRepository]] = {
    repo.entity: repo
    for repo in (
        UserRepository,
        CustomerRepository,
        LeadRepository,
        TaskRepository,
        BusinessRepository,
        AgencySaleRepository,
        InvestmentRepository,
        EmployeeRepository,
        MemoRepository,
        QuickNoteRepository,
        SeoCategoryRepository,
        SeoArticleRepository,
        ClientProjectRepository,
        ClientInvoiceRepository,
        AiLogRepository,
        AiConversationRepository,
    )
}
