"""
models/__init__.py
------------------
Re-export all models so create_tables.py (and Alembic, when added) can
import Base and discover all tables via a single import:

    from bizdesk.models import Base
"""

from bizdesk.db.base import Base
from bizdesk.models.tenant import Company
from bizdesk.models.user import User, UserRole
from bizdesk.models.session import UserSession
from bizdesk.models.crm import Customer, Lead
from bizdesk.models.finance import AgencySale, Business, Investment
from bizdesk.models.work import Memo, QuickNote, Task
from bizdesk.models.staff import Employee
from bizdesk.models.seo import SeoArticle, SeoCategory
from bizdesk.models.client import ClientInvoice, ClientProject
from bizdesk.models.ai import AiConversation, AiLog

__all__ = [
    "Base",
    "Company",
    "User",
    "UserRole",
    "UserSession",
    "Customer",
    "Lead",
    "Business",
    "AgencySale",
    "Investment",
    "Task",
    "Memo",
    "QuickNote",
    "Employee",
    "SeoCategory",
    "SeoArticle",
    "ClientProject",
    "ClientInvoice",
    "AiLog",
    "AiConversation",
]
