"""
tenancy/policy.py
-----------------
Role + ownership filtering, declared in one table.

POLICY maps (entity, action) to an AccessRule:
  roles          roles allowed to perform the action at all
  owner_columns  columns that name the owning user; restricted roles only
                 see / mutate rows where one of them equals their own id.
                 An empty tuple marks a tenant-shared entity.

admin, ceo and manager skip the ownership predicate. Every other role gets
it whenever the entity declares owner columns. Pairs missing from the
table are refused, so a new entity is invisible until someone writes its
rules down.

The tenant predicate is NOT applied here; repositories combine it with
AccessFilter.predicate() in a single place (ScopedRepository._visible).
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional

from sqlalchemy import or_
from sqlalchemy.sql.elements import ColumnElement

from bizdesk.core.errors import Forbidden
from bizdesk.core.logging import get_logger
from bizdesk.models.user import User, UserRole

logger = get_logger(__name__)


class Action(str, Enum):
    LIST = "list"
    READ = "read"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


FULL_ACCESS_ROLES = frozenset({UserRole.admin, UserRole.ceo, UserRole.manager})
ALL_ROLES = frozenset(UserRole)
STAFF_AND_UP = FULL_ACCESS_ROLES | {UserRole.staff}
EXECUTIVES = frozenset({UserRole.admin, UserRole.ceo})


@dataclass(frozen=True)
class AccessRule:
    roles: frozenset
    owner_columns: tuple[str, ...] = ()


def _rules(
    owner_columns: tuple[str, ...] = (),
    read: frozenset = ALL_ROLES,
    create: frozenset = ALL_ROLES,
    update: frozenset = ALL_ROLES,
    delete: frozenset = ALL_ROLES,
) -> dict[Action, AccessRule]:
    return {
        Action.LIST: AccessRule(read, owner_columns),
        Action.READ: AccessRule(read, owner_columns),
        Action.CREATE: AccessRule(create, owner_columns),
        Action.UPDATE: AccessRule(update, owner_columns),
        Action.DELETE: AccessRule(delete, owner_columns),
    }


_ENTITY_RULES: dict[str, dict[Action, AccessRule]] = {
    # Everyone sees their own record; only executives remove accounts.
    "users": _rules(
        ("id",),
        create=FULL_ACCESS_ROLES,
        delete=EXECUTIVES,
    ),
    "customers": _rules(("assigned_to",), read=STAFF_AND_UP, create=STAFF_AND_UP,
                        update=STAFF_AND_UP, delete=STAFF_AND_UP),
    "leads": _rules(("assigned_to",), read=STAFF_AND_UP, create=STAFF_AND_UP,
                    update=STAFF_AND_UP, delete=STAFF_AND_UP),
    "tasks": _rules(("assigned_to", "created_by")),
    "agency_sales": _rules(
        ("agency_id",),
        read=FULL_ACCESS_ROLES | {UserRole.agency},
        create=FULL_ACCESS_ROLES | {UserRole.agency},
        update=FULL_ACCESS_ROLES | {UserRole.agency},
        delete=FULL_ACCESS_ROLES,
    ),
    "investments": _rules(("created_by",), read=STAFF_AND_UP, create=STAFF_AND_UP,
                          update=STAFF_AND_UP, delete=STAFF_AND_UP),
    "memos": _rules(("user_id",)),
    "quick_notes": _rules(("user_id",)),
    "ai_logs": _rules(("user_id",), read=STAFF_AND_UP, create=STAFF_AND_UP,
                      update=FULL_ACCESS_ROLES, delete=FULL_ACCESS_ROLES),
    "ai_conversations": _rules(("user_id",)),
    "client_projects": _rules(
        ("client_id",),
        create=FULL_ACCESS_ROLES,
        update=FULL_ACCESS_ROLES,
        delete=FULL_ACCESS_ROLES,
    ),
    "client_invoices": _rules(
        ("client_id",),
        create=FULL_ACCESS_ROLES,
        update=FULL_ACCESS_ROLES,
        delete=FULL_ACCESS_ROLES,
    ),
    "seo_articles": _rules(("user_id",), read=STAFF_AND_UP, create=STAFF_AND_UP,
                           update=STAFF_AND_UP, delete=STAFF_AND_UP),
    # Tenant-shared catalogues: readable by the tenant, managed by leads.
    "businesses": _rules(
        read=STAFF_AND_UP | {UserRole.agency},
        create=FULL_ACCESS_ROLES,
        update=FULL_ACCESS_ROLES,
        delete=EXECUTIVES,
    ),
    "seo_categories": _rules(
        read=STAFF_AND_UP,
        create=FULL_ACCESS_ROLES,
        update=FULL_ACCESS_ROLES,
        delete=FULL_ACCESS_ROLES,
    ),
    # HR data is never shown to the people it describes through this surface.
    "employees": _rules(
        read=FULL_ACCESS_ROLES,
        create=FULL_ACCESS_ROLES,
        update=FULL_ACCESS_ROLES,
        delete=EXECUTIVES,
    ),
}

POLICY: dict[tuple[str, Action], AccessRule] = {
    (entity, action): rule
    for entity, actions in _ENTITY_RULES.items()
    for action, rule in actions.items()
}


def _role_of(caller: User) -> Optional[UserRole]:
    try:
        return UserRole(caller.role)
    except ValueError:
        return None


class AccessFilter:

    def __init__(self, policy: Mapping[tuple[str, Action], AccessRule] = POLICY) -> None:
        self.policy = policy

    def rule_for(self, entity: str, action: Action) -> AccessRule:
        rule = self.policy.get((entity, action))
        if rule is None:
            raise Forbidden(f"No access rule for {action.value} on {entity}")
        return rule

    def check(self, entity: str, action: Action, caller: User) -> AccessRule:
        """Raise Forbidden unless the caller's role may perform `action`."""
        rule = self.rule_for(entity, action)
        role = _role_of(caller)
        if role is None or role not in rule.roles:
            logger.warning(
                "Access denied by role",
                entity=entity,
                action=action.value,
                user_id=caller.id,
                role=caller.role,
            )
            raise Forbidden()
        return rule

    def allows(self, entity: str, action: Action, caller: User) -> bool:
        rule = self.policy.get((entity, action))
        return rule is not None and _role_of(caller) in rule.roles

    def is_full_access(self, caller: User) -> bool:
        return _role_of(caller) in FULL_ACCESS_ROLES

    def owner_columns(self, entity: str, action: Action, caller: User) -> tuple[str, ...]:
        """Owner columns the caller is restricted by; empty when unrestricted."""
        rule = self.rule_for(entity, action)
        if self.is_full_access(caller):
            return ()
        return rule.owner_columns

    def predicate(
        self, entity: str, action: Action, caller: User, model: Any
    ) -> Optional[ColumnElement[bool]]:
        """Ownership predicate for `caller`, or None when no narrowing applies."""
        columns = self.owner_columns(entity, action, caller)
        if not columns:
            return None
        return or_(*(getattr(model, column) == caller.id for column in columns))


access_filter = AccessFilter()
