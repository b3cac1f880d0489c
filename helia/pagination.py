"""Paging arithmetic, table scaffolding and template helper functions."""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from helia.models import Field, TableData
from helia.responses import parse_id

DEFAULT_PAGE_SIZE = 20


@dataclasses.dataclass(frozen=True)
class Page:
    """The page being shown, its size and how many pages there are."""

    current_page: int
    page_size: int
    total_pages: int


def _first(query: Mapping[str, Any], key: str) -> str:
    value = query.get(key, "")
    if isinstance(value, (list, tuple)):
        return value[0] if value else ""
    return value or ""


def get_pagination_data(query: Mapping[str, Any], total_records: int) -> Page:
    """Work out the page from 'page' and 'pageSize' query parameters."""
    page_param = _first(query, "page")
    size_param = _first(query, "pageSize")

    try:
        page_size = parse_id(size_param)
    except ValueError:
        page_size = DEFAULT_PAGE_SIZE
    if page_size < 1:
        raise ValueError(f"page size must be positive, got {page_size}")

    if page_param == "":
        current_page = 1
    else:
        try:
            current_page = parse_id(page_param)
        except ValueError:
            current_page = 0
        current_page = max(current_page, 1)

    total_pages = (total_records + page_size - 1) // page_size
    if total_pages > 0 and current_page > total_pages:
        current_page = total_pages
    return Page(current_page=current_page, page_size=page_size, total_pages=total_pages)


def set_table_basic_data(
    content_title: str,
    table_id: str,
    table_fields: Sequence[Field],
    url_prefix: str,
    page_size: int,
    current_page: int,
    total_pages: int,
    total_records: int,
) -> TableData:
    """Build an empty table with its headers and record range filled in."""
    last_on_page = current_page * page_size
    return TableData(
        content_title=content_title,
        table_id=table_id,
        headers=list(table_fields),
        url_prefix=url_prefix,
        page_size=page_size,
        current_page=current_page,
        total_pages=total_pages,
        total_records=total_records,
        start_record=last_on_page - page_size + 1,
        end_record=min(last_on_page, total_records),
        show_actions=True,
    )


def add(a: int, b: int) -> int:
    return a + b


def sub(a: int, b: int) -> int:
    return a - b


def le(a: int, b: int) -> bool:
    return a <= b


def ge(a: int, b: int) -> bool:
    return a >= b


def lt(a: int, b: int) -> bool:
    return a < b


def gt(a: int, b: int) -> bool:
    return a > b


def seq(n: int) -> list[int]:
    """Return the integers 1 to n."""
    return list(range(1, n + 1))


def _contains(a: str, b: str) -> bool:
    return b in a


def create_func_map() -> dict[str, Callable[..., Any]]:
    """Return the helper functions offered to page templates."""
    return {
        "add": add,
        "sub": sub,
        "seq": seq,
        "gt": gt,
        "lt": lt,
        "ge": ge,
        "le": le,
        "con": _contains,
    }