"""
api/routes/crud.py
------------------
Router factory for the per-entity CRUD surface.

GET    /api/<prefix>        — List rows visible to the caller
GET    /api/<prefix>/{id}   — Fetch one row (404 when foreign or missing)
POST   /api/<prefix>        — Create a row stamped with the bound tenant
PATCH  /api/<prefix>/{id}   — Partial update (company_id is never changed)
DELETE /api/<prefix>/{id}   — Delete a row

Handlers are thin: the repository applies tenant scoping and the access
policy. The ScopeMode passed here is the only place that decides whether
the root domain may see across tenants.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, Response, status
from pydantic import BaseModel

from bizdesk.dependencies import CurrentUser, repository
from bizdesk.repositories.base import ScopedRepository
from bizdesk.tenancy.scope import ScopeMode


def build_crud_router(
    repo_cls: type[ScopedRepository],
    prefix: str,
    create_schema: type[BaseModel],
    update_schema: type[BaseModel],
    read_schema: type[BaseModel],
    mode: ScopeMode = ScopeMode.TENANT_OR_GLOBAL,
    tag: str | None = None,
) -> APIRouter:
    router = APIRouter(prefix=f"/api/{prefix}", tags=[tag or repo_cls.label.title()])
    Repo = Annotated[repo_cls, Depends(repository(repo_cls, mode))]
    label = repo_cls.label

    async def list_rows(repo: Repo, caller: CurrentUser) -> list[Any]:
        rows = await repo.list(caller)
        return [read_schema.model_validate(row) for row in rows]

    async def get_row(row_id: str, repo: Repo, caller: CurrentUser) -> Any:
        return read_schema.model_validate(await repo.get(row_id, caller))

    async def create_row(
        body: create_schema,  # type: ignore[valid-type]
        repo: Repo,
        caller: CurrentUser,
    ) -> Any:
        try:
            row = await repo.create(body.model_dump(exclude_none=True), caller)
        except ValueError as exc:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
        return read_schema.model_validate(row)

    async def update_row(
        row_id: str,
        body: update_schema,  # type: ignore[valid-type]
        repo: Repo,
        caller: CurrentUser,
    ) -> Any:
        try:
            row = await repo.update(row_id, body.model_dump(exclude_unset=True), caller)
        except ValueError as exc:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
        return read_schema.model_validate(row)

    async def delete_row(row_id: str, repo: Repo, caller: CurrentUser) -> Response:
        await repo.delete(row_id, caller)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    router.add_api_route(
        "", list_rows, methods=["GET"],
        response_model=list[read_schema], summary=f"List {label} records",
    )
    router.add_api_route(
        "/{row_id}", get_row, methods=["GET"],
        response_model=read_schema, summary=f"Get one {label}",
    )
    router.add_api_route(
        "", create_row, methods=["POST"], status_code=status.HTTP_201_CREATED,
        response_model=read_schema, summary=f"Create a {label}",
    )
    router.add_api_route(
        "/{row_id}", update_row, methods=["PATCH"],
        response_model=read_schema, summary=f"Update a {label}",
    )
    router.add_api_route(
        "/{row_id}", delete_row, methods=["DELETE"],
        status_code=status.HTTP_204_NO_CONTENT, summary=f"Delete a {label}",
    )
    return router
