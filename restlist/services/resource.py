from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from sqlalchemy.inspection import inspect as sa_inspect
from sqlalchemy.orm import MANYTOONE

from restlist.schemas.resource import ResourceConfig

from .coercion import AttributeKind, attribute_kind

_LOG = logging.getLogger("restlist.resource")


def _columns_map(model: type) -> dict[str, Any]:
    mapper = sa_inspect(model)
    return {column.key: column for column in mapper.column_attrs}


def _foreign_key_attributes(model: type, include: Iterable[str]) -> list[str]:
    mapper = sa_inspect(model)
    keys: list[str] = []
    for name in include:
        relationship = mapper.relationships[name]
        if relationship.direction is not MANYTOONE:
            continue
        for column in relationship.local_columns:
            key = mapper.get_property_by_column(column).key
            if key not in keys:
                keys.append(key)
    return keys


def _ensure_known(kind: str, names: Iterable[str], known: Iterable[str], model: type) -> None:
    unknown = [name for name in names if name not in known]
    if unknown:
        raise ValueError(f"Unknown {kind} for {model.__name__}: {', '.join(unknown)}")


@dataclass(frozen=True)
class Resource:
    """A :class:`ResourceConfig` bound to a mapped SQLAlchemy class.

    Built once at startup; attribute kinds are resolved here so request
    handling never inspects column types again.
    """

    model: type
    config: ResourceConfig
    attributes: tuple[str, ...]
    kinds: Mapping[str, AttributeKind]
    include_attributes: tuple[str, ...]

    @classmethod
    def build(cls, model: type, config: ResourceConfig | None = None, **options: Any) -> "Resource":
        if config is None:
            config = ResourceConfig(**options)
        elif options:
            raise TypeError("Pass either a ResourceConfig or keyword options, not both")

        columns = _columns_map(model)
        declared = list(columns)
        relationships = list(sa_inspect(model).relationships.keys())

        _ensure_known("attributes", config.attributes or [], declared, model)
        for search in config.search:
            _ensure_known("search attributes", search.attributes or [], declared, model)
        _ensure_known("sort attributes", config.sort.attributes or [], declared, model)
        _ensure_known("includes", config.include, relationships, model)

        include_attributes = list(config.include_attributes)
        if config.association_options.remove_foreign_keys and not include_attributes:
            include_attributes = _foreign_key_attributes(model, config.include)

        kinds = {key: attribute_kind(column.columns[0].type) for key, column in columns.items()}
        _LOG.debug(
            "resource %s: attributes=%s include=%s include_attributes=%s",
            model.__name__,
            config.attributes or declared,
            config.include,
            include_attributes,
        )
        return cls(
            model=model,
            config=config,
            attributes=tuple(config.attributes or declared),
            kinds=kinds,
            include_attributes=tuple(include_attributes),
        )

    @property
    def name(self) -> str:
        return self.model.__name__

    @property
    def declared_attributes(self) -> tuple[str, ...]:
        return tuple(self.kinds)
