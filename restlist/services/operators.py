from __future__ import annotations

import re
from enum import Enum


class Operator(str, Enum):
    EQ = "eq"
    NE = "ne"
    GT = "gt"
    GTE = "gte"
    LT = "lt"
    LTE = "lte"
    LIKE = "like"
    ILIKE = "iLike"
    NOT_LIKE = "notLike"
    NOT_ILIKE = "notILike"
    IN = "in"
    NOT_IN = "notIn"
    IS = "is"


LIKE_OPERATORS = frozenset({Operator.LIKE, Operator.ILIKE, Operator.NOT_LIKE, Operator.NOT_ILIKE})

# Default operator for free-text search when the resource does not pick one.
LIKE_OPERATOR_DEFAULT = Operator.LIKE

_LIKE_TOKEN_RE = re.compile(r"like|iLike|notLike|notILike")

# Spellings accepted from configuration, keyed by lower-cased token without "$".
_OPERATOR_ALIASES = {
    "=": Operator.EQ,
    "eq": Operator.EQ,
    "!=": Operator.NE,
    "ne": Operator.NE,
    "neq": Operator.NE,
    ">": Operator.GT,
    "gt": Operator.GT,
    ">=": Operator.GTE,
    "gte": Operator.GTE,
    "<": Operator.LT,
    "lt": Operator.LT,
    "<=": Operator.LTE,
    "lte": Operator.LTE,
    "like": Operator.LIKE,
    "ilike": Operator.ILIKE,
    "notlike": Operator.NOT_LIKE,
    "not_like": Operator.NOT_LIKE,
    "notilike": Operator.NOT_ILIKE,
    "not_ilike": Operator.NOT_ILIKE,
    "in": Operator.IN,
    "notin": Operator.NOT_IN,
    "not_in": Operator.NOT_IN,
    "is": Operator.IS,
}


def parse_operator(token: Operator | str) -> Operator:
    """Turn an operator token from configuration into an :class:`Operator`.

    Accepts enum members, their values (``"iLike"``), dollar-prefixed
    ``"$like"`` tokens and SQLAlchemy-style names (``"not_ilike"``).
    """
    if isinstance(token, Operator):
        return token
    text = str(token or "").strip()
    normalized = text[1:] if text.startswith("$") else text
    operator = _OPERATOR_ALIASES.get(normalized.lower())
    if operator is None:
        raise ValueError(f'Unknown operator "{text}"')
    return operator


def is_like_operator(token: Operator | str) -> bool:
    if isinstance(token, Operator):
        return token in LIKE_OPERATORS
    return isinstance(token, str) and _LIKE_TOKEN_RE.search(token) is not None
