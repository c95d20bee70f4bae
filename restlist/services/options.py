from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Mapping

from .criteria import Criteria
from .sorting import OrderBy

_OVERRIDABLE = {"attributes", "offset", "limit", "include", "distinct", "order", "where", "scope"}


@dataclass(frozen=True)
class QueryOptions:
    attributes: tuple[str, ...] = ()
    offset: int = 0
    limit: int | None = None
    include: tuple[str, ...] = ()
    distinct: bool = False
    order: OrderBy | None = None
    where: Criteria | None = None
    scope: str | None = None

    @classmethod
    def from_overrides(cls, overrides: Mapping[str, Any] | None) -> "QueryOptions":
        """Seed options from caller-supplied overrides (e.g. a narrower ``attributes`` list)."""
        if not overrides:
            return cls()
        unknown = set(overrides) - _OVERRIDABLE
        if unknown:
            raise ValueError(f"Unknown query options: {', '.join(sorted(unknown))}")
        values = dict(overrides)
        for key in ("attributes", "include"):
            if key in values and values[key] is not None:
                values[key] = tuple(values[key])
        return cls(**values)

    def evolve(self, **changes: Any) -> "QueryOptions":
        return replace(self, **changes)

    def as_dict(self) -> dict[str, Any]:
        """Options as a plain mapping; ``limit`` is absent when unpaginated."""
        data = {
            "attributes": list(self.attributes),
            "offset": self.offset,
            "include": list(self.include),
            "distinct": self.distinct,
        }
        if self.limit is not None:
            data["limit"] = self.limit
        if self.order is not None:
            data["order"] = [(column, direction.value) for column, direction in self.order]
        if self.where is not None:
            data["where"] = self.where
        if self.scope is not None:
            data["scope"] = self.scope
        return data
