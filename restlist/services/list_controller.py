from __future__ import annotations

import logging
from typing import Mapping

from .composer import compose_criteria, resolve_scope
from .context import Flow, ListContext, ListRequest
from .executor import QueryExecutor
from .options import QueryOptions
from .pagination import resolve_window
from .resource import Resource
from .shaper import shape_result
from .sorting import resolve_order

_LOG = logging.getLogger("restlist.list")


def build_query_options(resource: Resource, query: Mapping[str, str], context: ListContext) -> QueryOptions:
    """Translate one list request into :class:`QueryOptions`.

    Stages run in a fixed order and each returns a new value: projection and
    includes, paging window, where criteria, ordering, scope, and finally the
    caller's ``transform_options`` hook.
    """
    options = QueryOptions.from_overrides(context.options)
    options = options.evolve(attributes=options.attributes or resource.attributes)

    include = tuple(resource.config.include) + tuple(context.include or ())
    if include:
        options = options.evolve(include=include)
    if options.include:
        # Count top-level rows once even when associations are loaded.
        options = options.evolve(distinct=True)

    window = resolve_window(
        query,
        count=context.count,
        offset=context.offset,
        page=context.page,
        paginate=resource.config.pagination,
    )
    options = options.evolve(offset=window.offset, limit=window.limit)

    criteria = compose_criteria(resource, query, context.criteria)
    if criteria is not None:
        options = options.evolve(where=criteria)

    order = resolve_order(resource, query)
    if order is not None:
        options = options.evolve(order=order)

    scope = resolve_scope(resource, query)
    if scope is not None:
        options = options.evolve(scope=scope)

    if context.transform_options is not None:
        options = context.transform_options(options) or options
    return options


class ListController:
    """The list action: request in, shaped rows and paging headers out."""

    def __init__(self, resource: Resource, executor: QueryExecutor):
        self.resource = resource
        self.executor = executor

    async def fetch(self, request: ListRequest, context: ListContext) -> Flow:
        options = build_query_options(self.resource, request.query, context)
        _LOG.debug("list %s: %s", self.resource.name, options.as_dict())
        result = await self.executor.find_and_count_all(self.resource, options)
        return shape_result(self.resource, options, result, context)
