from typing import Any, Callable, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, field_validator
from sqlalchemy import Select

from restlist.services.operators import LIKE_OPERATOR_DEFAULT, Operator, parse_operator

Scope = Callable[[Select], Select]


class SearchConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    param: str = "q"
    operator: Operator = LIKE_OPERATOR_DEFAULT
    attributes: Optional[List[str]] = None

    @field_validator("operator", mode="before")
    @classmethod
    def _parse_operator(cls, value: Any) -> Operator:
        return parse_operator(value)


class SortConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    param: str = "sort"
    default: Optional[str] = None
    attributes: Optional[List[str]] = None


class AssociationOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    remove_foreign_keys: bool = False


class ResourceConfig(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    attributes: Optional[List[str]] = None
    search: List[SearchConfig] = []
    sort: SortConfig = SortConfig()
    pagination: bool = True
    association_options: AssociationOptions = AssociationOptions()
    include: List[str] = []
    include_attributes: List[str] = []
    scopes: Dict[str, Scope] = {}

    @field_validator("search", mode="before")
    @classmethod
    def _normalize_search(cls, value: Any) -> Any:
        # A single search block and "no search" are both accepted.
        if value is None:
            return []
        if isinstance(value, (SearchConfig, dict)):
            return [value]
        return value
