"""
core/errors.py
--------------
Typed failures raised by the tenancy core.

Services and repositories never build HTTP responses; they raise one of
these and the handler registered in main.py maps it to a status code.

Cross-tenant access to an existing row must look exactly like a missing
row, so repositories raise RecordNotFound in both cases.
"""

from fastapi import status


class ScopeError(Exception):
    status_code: int = status.HTTP_400_BAD_REQUEST
    detail: str = "Request could not be scoped"

    def __init__(self, detail: str | None = None) -> None:
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)


class NotAuthenticated(ScopeError):
    status_code = status.HTTP_401_UNAUTHORIZED
    detail = "Authentication required"


class TenantNotFound(ScopeError):
    status_code = status.HTTP_404_NOT_FOUND
    detail = "Tenant not found"


class TenantScopeRequired(ScopeError):
    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Tenant scope required"


class Forbidden(ScopeError):
    status_code = status.HTTP_403_FORBIDDEN
    detail = "Insufficient permissions"


class SelfEscalationBlocked(Forbidden):
    detail = "You cannot change your own role"


class SelfDeletionBlocked(Forbidden):
    detail = "You cannot delete your own account"


class RecordNotFound(ScopeError):
    status_code = status.HTTP_404_NOT_FOUND
    detail = "Record not found"

    def __init__(self, entity: str) -> None:
        super().__init__(f"{entity.replace('_', ' ').capitalize()} not found")
        self.entity = entity


class QueryTimeout(ScopeError):
    status_code = status.HTTP_504_GATEWAY_TIMEOUT
    detail = "Data store did not answer in time"
