"""
api/routes/ai.py
----------------
AI assistant helpers that are not plain CRUD.

DELETE /api/ai/conversations — Clear the caller's conversation history
                               inside the current scope.
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from bizdesk.dependencies import CurrentUser, repository
from bizdesk.repositories.entities import AiConversationRepository
from bizdesk.tenancy.scope import ScopeMode

router = APIRouter(prefix="/api/ai", tags=["AI"])


@router.delete("/conversations", summary="Clear my AI conversation history")
async def clear_conversations(
    repo: Annotated[
        AiConversationRepository,
        Depends(repository(AiConversationRepository, ScopeMode.TENANT_OR_GLOBAL)),
    ],
    caller: CurrentUser,
) -> dict:
    removed = await repo.clear(caller)
    return {"deleted": removed}
