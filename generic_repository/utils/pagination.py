"""페이지네이션 유틸리티 모듈.

Pagination utility module for queryable entity collections.
Provides the PaginatedList result model and a generic helper that slices
any ordered queryable (SQLAlchemy ``Query`` or an in-memory stand-in)
into a single page.
"""

import math
from typing import Any, Protocol, Sequence

from pydantic import BaseModel, Field, computed_field

from generic_repository.config import settings


class SliceableQuery(Protocol):
    """페이지네이션에 필요한 쿼리 연산 — Query operations required for pagination."""

    def count(self) -> int: ...

    def offset(self, offset: int) -> "SliceableQuery": ...

    def limit(self, limit: int) -> "SliceableQuery": ...

    def all(self) -> Sequence[Any]: ...


class PaginatedList(BaseModel):
    """페이지네이션 결과 모델.

    Pagination result model.
    Contains the entities of the requested page and the metadata a caller
    needs to walk the remaining pages.

    Attributes:
        items: 현재 페이지 항목 목록 (Items for the current page)
        page_index: 현재 페이지 번호 (Current page number, 1-based)
        page_size: 페이지당 항목 수 (Items per page)
        total_count: 전체 항목 수 (Total count across all pages)
    """

    items: list[Any]  # 현재 페이지 항목 목록 (Paginated items)
    page_index: int = Field(ge=1)  # 현재 페이지 번호 — 1부터 시작 (Current page, 1-indexed)
    page_size: int = Field(ge=1)  # 페이지당 항목 수 (Items per page)
    total_count: int  # 전체 항목 수 (Total item count)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total_pages(self) -> int:
        """전체 페이지 수 (Total pages, computed: ceil(total_count/page_size))."""
        return math.ceil(self.total_count / self.page_size)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def has_previous_page(self) -> bool:
        return self.page_index > 1

    @computed_field  # type: ignore[prop-decorator]
    @property
    def has_next_page(self) -> bool:
        return self.page_index < self.total_pages


def to_paginated_list(
    query: SliceableQuery,
    page_index: int = 1,
    page_size: int | None = None,
) -> PaginatedList:
    """정렬된 쿼리를 한 페이지로 잘라 PaginatedList로 반환합니다.

    Slice an already ordered query into one page.
    Runs two queries: one for the total count and one for the
    page of results with OFFSET/LIMIT.

    Args:
        query: 정렬과 필터가 적용된 쿼리 (Ordered, filtered query to paginate)
        page_index: 요청 페이지 번호, 1부터 시작 (Page number, 1-indexed)
        page_size: 페이지당 항목 수, None이면 settings.DEFAULT_PAGE_SIZE
                   (Items per page; falls back to settings.DEFAULT_PAGE_SIZE)

    Returns:
        PaginatedList: 페이지 항목과 메타데이터 (Page items and metadata)

    Raises:
        ValueError: page_index 또는 page_size가 1보다 작을 때
                    (When page_index or page_size is below 1)
    """
    if page_size is None:
        page_size = settings.DEFAULT_PAGE_SIZE

    if page_index < 1:
        raise ValueError(f"page_index must be >= 1, got {page_index}")
    if page_size < 1:
        raise ValueError(f"page_size must be >= 1, got {page_size}")

    # 전체 개수 조회 — Count total before slicing
    total_count: int = query.count()

    # 오프셋 계산 및 페이지 적용 — Calculate offset and apply pagination
    offset: int = (page_index - 1) * page_size
    items: Sequence[Any] = query.offset(offset).limit(page_size).all()

    return PaginatedList(
        items=list(items),
        page_index=page_index,
        page_size=page_size,
        total_count=total_count,
    )
