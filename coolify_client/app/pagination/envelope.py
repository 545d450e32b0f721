"""
Response envelope shapes for paginated listings.
"""

from typing import Any, Generic, List, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator


T = TypeVar("T")


class Pagination(BaseModel):
    """Server pagination metadata; every field is zero when omitted."""

    model_config = ConfigDict(extra="ignore")

    current_page: int = 0
    last_page: int = 0
    per_page: int = 0
    total: int = 0

    @field_validator("current_page", "last_page", "per_page", "total", mode="before")
    @classmethod
    def _null_is_zero(cls, value: Any) -> Any:
        return 0 if value is None else value

    def is_empty(self) -> bool:
        return not (self.current_page or self.last_page or self.per_page or self.total)


class Meta(BaseModel):
    model_config = ConfigDict(extra="ignore")

    pagination: Pagination = Field(default_factory=Pagination)

    @field_validator("pagination", mode="before")
    @classmethod
    def _null_pagination(cls, value: Any) -> Any:
        return {} if value is None else value


class Page(BaseModel, Generic[T]):
    """Listing envelope.

    Coolify versions disagree on where the item list lives (``data``,
    ``items`` or the legacy ``applications``) and on whether pagination sits
    at the top level or under ``meta.pagination``. ``results`` and
    ``page_info`` hide that.
    """

    model_config = ConfigDict(extra="ignore")

    data: List[T] = Field(default_factory=list)
    items: List[T] = Field(default_factory=list)
    applications: List[T] = Field(default_factory=list)
    pagination: Pagination = Field(default_factory=Pagination)
    meta: Meta = Field(default_factory=Meta)

    @field_validator("data", "items", "applications", mode="before")
    @classmethod
    def _null_list(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("pagination", "meta", mode="before")
    @classmethod
    def _null_object(cls, value: Any) -> Any:
        return {} if value is None else value

    def results(self) -> List[T]:
        for candidate in (self.data, self.items, self.applications):
            if candidate:
                return candidate
        return []

    def page_info(self) -> Pagination:
        if not self.meta.pagination.is_empty():
            return self.meta.pagination
        return self.pagination
