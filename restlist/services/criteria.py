from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Mapping, Union

from sqlalchemy import and_, false, or_, true
from sqlalchemy.sql.elements import ColumnElement

from .coercion import INVALID_DATE
from .operators import Operator, parse_operator

# Maps operators to SQLAlchemy column methods, e.g. Operator.GTE -> Column.__ge__.
_COLUMN_METHODS = {
    Operator.EQ: "__eq__",
    Operator.NE: "__ne__",
    Operator.GT: "__gt__",
    Operator.GTE: "__ge__",
    Operator.LT: "__lt__",
    Operator.LTE: "__le__",
    Operator.LIKE: "like",
    Operator.ILIKE: "ilike",
    Operator.NOT_LIKE: "not_like",
    Operator.NOT_ILIKE: "not_ilike",
    Operator.IN: "in_",
    Operator.NOT_IN: "not_in",
    Operator.IS: "is_",
}

_OR_KEYS = {"or", "$or"}
_AND_KEYS = {"and", "$and"}


@dataclass(frozen=True)
class Condition:
    attribute: str
    operator: Operator
    value: Any


@dataclass(frozen=True)
class AnyOf:
    items: tuple["Expression", ...] = ()


@dataclass(frozen=True)
class AllOf:
    items: tuple["Expression", ...] = ()


Expression = Union[Condition, AnyOf, AllOf]


def equality(attribute: str, value: Any) -> Condition:
    if value is None:
        return Condition(attribute, Operator.IS, None)
    if isinstance(value, (list, tuple)):
        return Condition(attribute, Operator.IN, tuple(value))
    return Condition(attribute, Operator.EQ, value)


def _freeze(value: Any) -> Any:
    if isinstance(value, list):
        return tuple(value)
    return value


@dataclass(frozen=True)
class Criteria:
    """Where-expression of a list query.

    ``fields`` holds one requirement per attribute, so merging a new value for
    an attribute replaces the old one. ``clauses`` are composite expressions
    (search expansions, explicit and/or groups); each one is required.
    """

    fields: Mapping[str, Expression] = field(default_factory=dict)
    clauses: tuple[Expression, ...] = ()

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Criteria":
        """Build criteria from ``{attr: value | {op: value}, "or": [...], "and": [...]}``."""
        fields: dict[str, Expression] = {}
        clauses: list[Expression] = []
        for key, value in data.items():
            if key in _OR_KEYS:
                clauses.append(AnyOf(tuple(cls.from_mapping(item).as_expression() for item in value)))
            elif key in _AND_KEYS:
                clauses.append(AllOf(tuple(cls.from_mapping(item).as_expression() for item in value)))
            elif isinstance(value, Mapping):
                conditions = tuple(
                    Condition(key, parse_operator(op), _freeze(operand)) for op, operand in value.items()
                )
                fields[key] = conditions[0] if len(conditions) == 1 else AllOf(conditions)
            else:
                fields[key] = equality(key, value)
        return cls(fields=fields, clauses=tuple(clauses))

    def is_empty(self) -> bool:
        return not self.fields and not self.clauses

    def and_(self, expression: Expression) -> "Criteria":
        return replace(self, clauses=self.clauses + (expression,))

    def merge_fields(self, conditions: Mapping[str, Expression]) -> "Criteria":
        merged = dict(self.fields)
        merged.update(conditions)
        return replace(self, fields=merged)

    def as_expression(self) -> AllOf:
        return AllOf(tuple(self.fields.values()) + self.clauses)

    def to_clause(self, model: type) -> ColumnElement | None:
        if self.is_empty():
            return None
        return compile_expression(self.as_expression(), model)


def _compile_condition(condition: Condition, model: type) -> ColumnElement:
    column = getattr(model, condition.attribute, None)
    if column is None:
        raise ValueError(f'Unknown attribute "{condition.attribute}" for {model.__name__}')
    if condition.value is INVALID_DATE:
        return false()
    if condition.value is None and condition.operator is Operator.EQ:
        return column.is_(None)
    if condition.value is None and condition.operator is Operator.NE:
        return column.is_not(None)
    method = getattr(column, _COLUMN_METHODS[condition.operator])
    return method(condition.value)


def compile_expression(expression: Expression, model: type) -> ColumnElement:
    if isinstance(expression, Condition):
        return _compile_condition(expression, model)
    parts = [compile_expression(item, model) for item in expression.items]
    if isinstance(expression, AnyOf):
        # An empty OR matches nothing, an empty AND matches everything.
        return or_(*parts) if parts else false()
    return and_(*parts) if parts else true()
