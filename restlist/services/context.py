from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Mapping, Optional, Sequence

from .criteria import Criteria
from .options import QueryOptions
from .rows import ResultRow

TransformOptions = Callable[[QueryOptions], Optional[QueryOptions]]


class Flow(str, Enum):
    CONTINUE = "continue"


@dataclass
class ListRequest:
    query: Mapping[str, str] = field(default_factory=dict)


@dataclass
class ListContext:
    # Overrides from a caller that already did resource-specific work.
    criteria: Criteria | Mapping[str, Any] | None = None
    options: Mapping[str, Any] | None = None
    count: Any = None
    offset: Any = None
    page: Any = None
    include: Sequence[str] = ()
    transform_options: TransformOptions | None = None

    # Filled in by the list action.
    instance: list[ResultRow] = field(default_factory=list)
    total: int | None = None
    content_range: str | None = None
    headers: dict[str, str] = field(default_factory=dict)
