from __future__ import annotations

from typing import Any, Mapping

from restlist.core.errors import BadRequestError

from .coercion import coerce_value
from .criteria import Condition, Criteria, equality
from .resource import Resource
from .search import expand_search


def as_criteria(base: Criteria | Mapping[str, Any] | None) -> Criteria | None:
    if base is None or isinstance(base, Criteria):
        return base
    return Criteria.from_mapping(base)


def _filter_condition(attribute: str, raw: str, value: Any) -> Condition:
    # JSON objects are not operator maps here; compare against the literal text.
    if isinstance(value, dict):
        value = raw
    return equality(attribute, value)


def attribute_filters(resource: Resource, query: Mapping[str, str]) -> dict[str, Condition]:
    """Equality conditions for query parameters named after declared attributes."""
    consumed = {search.param for search in resource.config.search}
    consumed.add(resource.config.sort.param)
    filters: dict[str, Condition] = {}
    for key, raw in query.items():
        if key in consumed or key not in resource.kinds:
            continue
        filters[key] = _filter_condition(key, raw, coerce_value(raw, resource.kinds[key]))
    return filters


def compose_criteria(
    resource: Resource,
    query: Mapping[str, str],
    base: Criteria | Mapping[str, Any] | None = None,
) -> Criteria | None:
    """Base criteria, then search expansion, then attribute equality filters.

    Returns ``None`` when nothing restricts the result set.
    """
    criteria = expand_search(resource, query, as_criteria(base))
    filters = attribute_filters(resource, query)
    if filters:
        criteria = (criteria or Criteria()).merge_fields(filters)
    if criteria is None or criteria.is_empty():
        return None
    return criteria


def resolve_scope(resource: Resource, query: Mapping[str, str]) -> str | None:
    name = query.get("scope")
    if not name:
        return None
    if name not in resource.config.scopes:
        raise BadRequestError("Unknown scope", [name])
    return name
