from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from restlist.db.session import get_db
from restlist.services.context import ListContext, ListRequest
from restlist.services.executor import SqlAlchemyQueryExecutor
from restlist.services.list_controller import ListController
from restlist.services.resource import Resource


def build_list_router(resource: Resource, path: str) -> APIRouter:
    """Router with a ``GET path`` endpoint listing ``resource``."""
    router = APIRouter()

    @router.get(path, summary=f"List {resource.name} records")
    async def list_resource(request: Request, db: AsyncSession = Depends(get_db)):
        controller = ListController(resource, SqlAlchemyQueryExecutor(db))
        context = ListContext()
        await controller.fetch(ListRequest(query=dict(request.query_params)), context)
        return JSONResponse([row.attributes for row in context.instance], headers=context.headers)

    return router
