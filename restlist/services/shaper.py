from __future__ import annotations

from .context import Flow, ListContext
from .options import QueryOptions
from .pagination import content_range
from .resource import Resource
from .rows import FindResult

CONTENT_RANGE_HEADER = "Content-Range"


def strip_foreign_keys(resource: Resource, result: FindResult) -> None:
    if not resource.config.association_options.remove_foreign_keys:
        return
    for row in result.rows:
        for attribute in resource.include_attributes:
            row.drop(attribute)


def shape_result(resource: Resource, options: QueryOptions, result: FindResult, context: ListContext) -> Flow:
    strip_foreign_keys(resource, result)
    context.instance = result.rows
    context.total = result.count
    context.content_range = content_range(options.offset, len(result.rows), result.count)
    if resource.config.pagination:
        context.headers[CONTENT_RANGE_HEADER] = context.content_range
    return Flow.CONTINUE
