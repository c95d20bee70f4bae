from __future__ import annotations

from typing import Mapping

from restlist.schemas.resource import SearchConfig

from .coercion import AttributeKind
from .criteria import AnyOf, Condition, Criteria
from .operators import is_like_operator
from .resource import Resource


def search_expression(resource: Resource, search: SearchConfig, term: str) -> AnyOf:
    """OR of one condition per searchable attribute for a single search term."""
    like = is_like_operator(search.operator)
    value = f"%{term}%" if like else term
    conditions = []
    candidates = resource.declared_attributes if search.attributes is None else search.attributes
    for attribute in candidates:
        # Pattern operators only apply to text columns; others are left out.
        if like and resource.kinds[attribute] is not AttributeKind.TEXT:
            continue
        conditions.append(Condition(attribute, search.operator, value))
    return AnyOf(tuple(conditions))


def expand_search(resource: Resource, query: Mapping[str, str], criteria: Criteria | None = None) -> Criteria | None:
    """AND every configured search present in ``query`` onto ``criteria``."""
    for search in resource.config.search:
        if search.param not in query:
            continue
        expression = search_expression(resource, search, query[search.param])
        if criteria is None or criteria.is_empty():
            criteria = Criteria(clauses=(expression,))
        else:
            criteria = criteria.and_(expression)
    return criteria
