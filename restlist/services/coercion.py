from __future__ import annotations

import json
import math
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any

from sqlalchemy.sql.sqltypes import (
    CHAR,
    BigInteger,
    DateTime,
    Enum as SAEnum,
    Integer,
    SmallInteger,
    String,
    Text,
)


class AttributeKind(str, Enum):
    TEXT = "text"
    INTEGER = "integer"
    DATETIME = "datetime"
    OTHER = "other"


class _InvalidDate:
    """Result of coercing an unparsable value for a datetime column."""

    def __repr__(self) -> str:
        return "INVALID_DATE"

    def __bool__(self) -> bool:
        return False


INVALID_DATE = _InvalidDate()

_INFINITY_LITERALS = {"Infinity", "+Infinity", "-Infinity"}


def attribute_kind(column_type: Any) -> AttributeKind:
    # Enum subclasses String in SQLAlchemy but only takes a closed set of values.
    if isinstance(column_type, SAEnum):
        return AttributeKind.OTHER
    if isinstance(column_type, (String, Text, CHAR)):
        return AttributeKind.TEXT
    if isinstance(column_type, (Integer, BigInteger, SmallInteger)):
        return AttributeKind.INTEGER
    if isinstance(column_type, DateTime):
        return AttributeKind.DATETIME
    return AttributeKind.OTHER


def _looks_numeric(raw: str) -> bool:
    text = raw.strip()
    if not text:
        # Blank strings count as numbers (they read as zero in query strings).
        return True
    if text in _INFINITY_LITERALS:
        return True
    if "_" in text:
        return False
    try:
        return math.isfinite(float(text))
    except ValueError:
        return False


def _reject_constant(name: str):
    raise ValueError(f"Unsupported JSON constant {name}")


def _parse_timestamp(raw: str):
    text = raw.strip()
    if not text:
        return INVALID_DATE
    try:
        if "T" not in text and " " not in text and len(text) == 10:
            parsed = datetime.combine(date.fromisoformat(text), datetime.min.time())
        else:
            parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        return INVALID_DATE
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def coerce_value(raw: str, kind: AttributeKind) -> Any:
    """Best-effort conversion of a query-string value for an equality filter.

    Never raises: anything that cannot be parsed is returned as the raw
    string, except for datetime columns which yield ``INVALID_DATE``.
    """
    if kind is AttributeKind.TEXT and _looks_numeric(raw):
        return raw
    if kind is AttributeKind.DATETIME:
        return _parse_timestamp(raw)
    try:
        return json.loads(raw, parse_constant=_reject_constant)
    except (ValueError, TypeError):
        return raw
