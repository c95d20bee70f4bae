from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

DEFAULT_COUNT = 100


@dataclass(frozen=True)
class PageWindow:
    offset: int
    count: int
    limit: int | None


def _as_int(value: Any) -> int:
    """Numeric value of a paging input; unparsable values read as 0."""
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        return int(value)
    text = str(value).strip()
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return int(float(text))
    except (ValueError, OverflowError):
        return 0


def _first_set(*values: Any) -> int:
    # Zero and unparsable inputs fall through to the next source.
    for value in values:
        number = _as_int(value)
        if number:
            return number
    return 0


def resolve_window(
    query: Mapping[str, str],
    *,
    count: Any = None,
    offset: Any = None,
    page: Any = None,
    paginate: bool = True,
) -> PageWindow:
    """Resolve explicit overrides and query parameters into offset and limit.

    ``page`` is added on top of ``offset`` rather than replacing it, so
    ``offset=5&page=2&count=10`` starts at row 25.
    """
    resolved_count = _first_set(count, query.get("count")) or DEFAULT_COUNT
    if resolved_count <= 0:
        resolved_count = DEFAULT_COUNT

    resolved_offset = _first_set(offset, query.get("offset"))
    resolved_offset += _first_set(_as_int(page) * resolved_count, _as_int(query.get("page")) * resolved_count)

    return PageWindow(
        offset=resolved_offset,
        count=resolved_count,
        limit=resolved_count if paginate else None,
    )


def content_range(offset: int, returned: int, total: int) -> str:
    """``Content-Range`` value for a page of ``returned`` rows out of ``total``."""
    start = offset
    end = start + returned - 1 if returned else 0
    return f"items {start}-{end}/{total}"
