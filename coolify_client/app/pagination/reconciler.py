"""
Pagination reconciliation.

Turns whatever a Coolify server returned for a listing into a uniform
``Page`` and a usable ``(current_page, total_pages)`` pair, even when the
server sent a bare array or no pagination metadata at all.
"""

from dataclasses import dataclass, field
from typing import Generic, List, Tuple, Type, TypeVar, Union

from pydantic import TypeAdapter, ValidationError

from shared.errors import DecodeFailure
from .envelope import Page, Pagination


T = TypeVar("T")


def decode_page(body: Union[bytes, str], item_type: Type[T]) -> Page[T]:
    """Decode a listing body into a ``Page``.

    The structured envelope is tried first. When it carries neither items nor
    pagination the body is re-read as a bare JSON array. An envelope that
    parsed but was empty is returned as-is if the array read fails too.
    """
    page = None
    envelope_error = None
    try:
        page = Page[item_type].model_validate_json(body)
    except ValidationError as exc:
        envelope_error = exc

    if page is not None and (page.results() or not page.page_info().is_empty()):
        return page

    try:
        items = TypeAdapter(List[item_type]).validate_json(body)
    except ValidationError as exc:
        if page is not None:
            return page
        raise DecodeFailure(
            message="Response matched neither a page envelope nor an item array",
            details={
                "item_type": item_type.__name__,
                "envelope_error": str(envelope_error),
                "array_error": str(exc),
            },
        ) from exc

    return Page[item_type](data=items)


def derive_page(
    pagination: Pagination,
    fetched_count: int,
    per_page: int,
    requested_page: int,
) -> Tuple[int, int]:
    """Return ``(current_page, total_pages)`` for navigation controls.

    Falls back in order: server ``last_page``, ``ceil(total / per_page)``,
    then a guess from the fetched count. A full page suggests one more page
    exists; a short page is taken as the last one.
    """
    current = pagination.current_page
    if current < 1:
        current = requested_page

    total = pagination.last_page
    if total == 0 and pagination.total > 0 and per_page > 0:
        total = (pagination.total + per_page - 1) // per_page
    if total == 0:
        if per_page > 0 and fetched_count == per_page:
            total = current + 1
        else:
            total = current
    return current, total


def backfill_per_page(page: Page[T], per_page: int) -> Page[T]:
    """Record the requested page size when the server did not report one."""
    info = page.page_info()
    if info.per_page == 0 and per_page > 0:
        page.pagination = info.model_copy(update={"per_page": per_page})
        if not page.meta.pagination.is_empty():
            page.meta.pagination = page.pagination
    return page


@dataclass(frozen=True)
class ListResult(Generic[T]):
    """What the presentation layer needs to render one page of a listing."""

    items: List[T]
    current_page: int
    total_pages: int
    pagination: Pagination = field(default_factory=Pagination)

    @classmethod
    def from_page(cls, page: Page[T], per_page: int, requested_page: int) -> "ListResult[T]":
        items = page.results()
        info = page.page_info()
        current, total = derive_page(info, len(items), per_page, requested_page)
        return cls(items=items, current_page=current, total_pages=total, pagination=info)
