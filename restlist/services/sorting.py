from __future__ import annotations

import logging
from enum import Enum
from typing import Mapping

from restlist.core.errors import BadRequestError

from .resource import Resource

_LOG = logging.getLogger("restlist.sorting")


class SortDirection(str, Enum):
    ASC = "ASC"
    DESC = "DESC"


OrderBy = tuple[tuple[str, SortDirection], ...]


def parse_sort(value: str) -> OrderBy:
    """Parse ``"-age,name"`` into ``(("age", DESC), ("name", ASC))``."""
    order = []
    for token in value.split(","):
        token = token.strip()
        if not token:
            continue
        if token.startswith("-"):
            order.append((token[1:], SortDirection.DESC))
        else:
            order.append((token, SortDirection.ASC))
    return tuple(order)


def resolve_order(resource: Resource, query: Mapping[str, str]) -> OrderBy | None:
    """Ordering requested by the query (or the configured default).

    Returns ``None`` when no ordering applies. Raises :class:`BadRequestError`
    when any column is outside the allowed sort attributes.
    """
    sort = resource.config.sort
    if sort.param not in query and sort.default is None:
        return None

    order = parse_sort(query.get(sort.param) or sort.default or "")
    allowed = resource.declared_attributes if sort.attributes is None else sort.attributes
    disallowed = [column for column, _ in order if column not in allowed]
    if disallowed:
        _LOG.info("sort rejected for %s: %s", resource.name, disallowed)
        raise BadRequestError("Sorting not allowed on given attributes", disallowed)
    return order or None
