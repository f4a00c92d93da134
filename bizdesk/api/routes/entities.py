"""
api/routes/entities.py
----------------------
Registration of every scoped entity router.

Each entry fixes the URL prefix, the wire schemas and the ScopeMode once:
  TENANT_OR_GLOBAL → tenant-scoped on a subdomain, cross-tenant on the
                     root domain (platform-operator console)
  TENANT           → only ever served inside a tenant
"""

from fastapi import APIRouter

from bizdesk.api.routes.crud import build_crud_router
from bizdesk.repositories.entities import (
    AgencySaleRepository,
    AiConversationRepository,
    AiLogRepository,
    BusinessRepository,
    ClientInvoiceRepository,
    ClientProjectRepository,
    CustomerRepository,
    EmployeeRepository,
    InvestmentRepository,
    LeadRepository,
    MemoRepository,
    QuickNoteRepository,
    SeoArticleRepository,
    SeoCategoryRepository,
    TaskRepository,
)
from bizdesk.repositories.users import UserRepository
from bizdesk.schemas import ai, client, crm, finance, seo, staff, user, work
from bizdesk.tenancy.scope import ScopeMode

GLOBAL = ScopeMode.TENANT_OR_GLOBAL
TENANT = ScopeMode.TENANT

ENTITY_ROUTES = [
    # (repository, prefix, create, update, read, mode, tag)
    (UserRepository, "users", user.UserCreate, user.UserUpdate, user.UserRead, GLOBAL, "Users"),
    (CustomerRepository, "customers", crm.CustomerCreate, crm.CustomerUpdate, crm.CustomerRead, GLOBAL, "Customers"),
    (LeadRepository, "leads", crm.LeadCreate, crm.LeadUpdate, crm.LeadRead, GLOBAL, "Leads"),
    (TaskRepository, "tasks", work.TaskCreate, work.TaskUpdate, work.TaskRead, GLOBAL, "Tasks"),
    (MemoRepository, "memos", work.MemoCreate, work.MemoUpdate, work.MemoRead, GLOBAL, "Memos"),
    (QuickNoteRepository, "quick-notes", work.QuickNoteCreate, work.QuickNoteUpdate, work.QuickNoteRead, GLOBAL, "Quick notes"),
    (BusinessRepository, "businesses", finance.BusinessCreate, finance.BusinessUpdate, finance.BusinessRead, GLOBAL, "Businesses"),
    (AgencySaleRepository, "agency/sales", finance.AgencySaleCreate, finance.AgencySaleUpdate, finance.AgencySaleRead, GLOBAL, "Agency"),
    (InvestmentRepository, "investments", finance.InvestmentCreate, finance.InvestmentUpdate, finance.InvestmentRead, GLOBAL, "Investments"),
    (EmployeeRepository, "employees", staff.EmployeeCreate, staff.EmployeeUpdate, staff.EmployeeRead, TENANT, "Employees"),
    (SeoCategoryRepository, "seo/categories", seo.SeoCategoryCreate, seo.SeoCategoryUpdate, seo.SeoCategoryRead, GLOBAL, "SEO"),
    (SeoArticleRepository, "seo/articles", seo.SeoArticleCreate, seo.SeoArticleUpdate, seo.SeoArticleRead, GLOBAL, "SEO"),
    (ClientProjectRepository, "client/projects", client.ClientProjectCreate, client.ClientProjectUpdate, client.ClientProjectRead, TENANT, "Client portal"),
    (ClientInvoiceRepository, "client/invoices", client.ClientInvoiceCreate, client.ClientInvoiceUpdate, client.ClientInvoiceRead, TENANT, "Client portal"),
    (AiLogRepository, "ai/logs", ai.AiLogCreate, ai.AiLogUpdate, ai.AiLogRead, GLOBAL, "AI"),
    (AiConversationRepository, "ai/conversations", ai.AiConversationCreate, ai.AiConversationUpdate, ai.AiConversationRead, GLOBAL, "AI"),
]


def build_entity_routers() -> list[APIRouter]:
    return [
        build_crud_router(repo_cls, prefix, create, update, read, mode=mode, tag=tag)
        for repo_cls, prefix, create, update, read, mode, tag in ENTITY_ROUTES
    ]
