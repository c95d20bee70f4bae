from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Iterable

from sqlalchemy.inspection import inspect as sa_inspect


def _serialize_value(value: Any) -> Any:
    if isinstance(value, dict):
        return {key: _serialize_value(val) for key, val in value.items()}
    if isinstance(value, (list, tuple)):
        return [_serialize_value(item) for item in value]
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, uuid.UUID):
        return str(value)
    if isinstance(value, Decimal):
        return float(value)
    return value


def _row_to_dict(row: Any) -> dict[str, Any]:
    mapper = sa_inspect(type(row))
    return {column.key: _serialize_value(getattr(row, column.key)) for column in mapper.column_attrs}


def _related_to_payload(related: Any) -> Any:
    if related is None:
        return None
    if isinstance(related, (list, tuple, set)):
        return [_row_to_dict(item) for item in related]
    return _row_to_dict(related)


@dataclass
class ResultRow:
    """One listed entity.

    ``raw`` holds the column values as loaded from the store, ``attributes``
    the JSON-ready view sent to the client (with included associations).
    """

    raw: dict[str, Any]
    attributes: dict[str, Any]

    @classmethod
    def from_instance(cls, instance: Any, attributes: Iterable[str], include: Iterable[str] = ()) -> "ResultRow":
        names = list(attributes)
        raw = {name: getattr(instance, name) for name in names}
        payload = {name: _serialize_value(value) for name, value in raw.items()}
        for name in include:
            payload[name] = _related_to_payload(getattr(instance, name))
        return cls(raw=raw, attributes=payload)

    def drop(self, attribute: str) -> None:
        self.raw.pop(attribute, None)
        self.attributes.pop(attribute, None)


@dataclass
class FindResult:
    rows: list[ResultRow] = field(default_factory=list)
    count: int = 0
