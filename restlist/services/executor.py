from __future__ import annotations

import logging
from typing import Protocol

from sqlalchemy import Select, asc, desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.inspection import inspect as sa_inspect
from sqlalchemy.orm import selectinload

from .options import QueryOptions
from .resource import Resource
from .rows import FindResult, ResultRow
from .sorting import SortDirection

_LOG = logging.getLogger("restlist.executor")


class QueryExecutor(Protocol):
    async def find_and_count_all(self, resource: Resource, options: QueryOptions) -> FindResult:
        ...


def _filtered_statement(resource: Resource, options: QueryOptions) -> Select:
    model = resource.model
    stmt = select(model)
    if options.scope:
        stmt = resource.config.scopes[options.scope](stmt)
    if options.where is not None:
        clause = options.where.to_clause(model)
        if clause is not None:
            stmt = stmt.where(clause)
    return stmt


def _count_statement(resource: Resource, stmt: Select, *, distinct_rows: bool) -> Select:
    subquery = stmt.subquery()
    if distinct_rows:
        keys = [subquery.c[column.key] for column in sa_inspect(resource.model).primary_key]
        return select(func.count()).select_from(select(*keys).distinct().subquery())
    return select(func.count()).select_from(subquery)


def _page_statement(resource: Resource, stmt: Select, options: QueryOptions) -> Select:
    model = resource.model
    for name in options.include:
        stmt = stmt.options(selectinload(getattr(model, name)))
    for column, direction in options.order or ():
        expr = getattr(model, column)
        stmt = stmt.order_by(desc(expr) if direction is SortDirection.DESC else asc(expr))
    # Offset only applies together with a limit.
    if options.limit is not None:
        stmt = stmt.offset(options.offset).limit(options.limit)
    return stmt


class SqlAlchemyQueryExecutor:
    """Runs list queries on an ``AsyncSession``; returns the page and the total count."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_and_count_all(self, resource: Resource, options: QueryOptions) -> FindResult:
        stmt = _filtered_statement(resource, options)
        total = (await self.db.execute(_count_statement(resource, stmt, distinct_rows=options.distinct))).scalar_one()
        instances = (await self.db.execute(_page_statement(resource, stmt, options))).scalars().all()
        _LOG.debug("%s: fetched %s of %s rows", resource.name, len(instances), total)
        rows = [ResultRow.from_instance(instance, options.attributes, options.include) for instance in instances]
        return FindResult(rows=rows, count=int(total))
