"""
分页工具（apps.common.pagination）

设计目标：
- 统一分页响应结构，与 common.response.page_success 对齐；
- 查询参数解析容错：非法值回退默认值，而不是报参数错误；
- 控制默认分页大小/最大分页大小，防止一次拉取过多数据
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, List, Optional

from django.core.paginator import EmptyPage, Paginator
from django.db.models import QuerySet
from rest_framework.response import Response

from apps.common.response import page_success
from apps.common.utils.validators import parse_int

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


def clamp_page(raw: Any) -> int:
    """页码：默认 1，小于 1 时取 1"""
    page = parse_int(raw, default=1)
    return max(1, page)


def clamp_page_size(raw: Any, *, default: int = DEFAULT_PAGE_SIZE, maximum: int = MAX_PAGE_SIZE) -> int:
    """每页条数：默认 10，超出 [1, maximum] 时回退默认值"""
    size = parse_int(raw, default=default)
    if size < 1 or size > maximum:
        return default
    return size


def clamp_limit(raw: Any) -> int:
    """排行榜条数：与 page_size 相同的收敛规则（默认 10，范围 1-100）"""
    return clamp_page_size(raw)


@dataclass
class PageResult:
    items: List[Any]
    page: int
    page_size: int
    total: int
    total_pages: int
    has_next: bool
    has_previous: bool


def paginate(queryset: QuerySet, *, page: int, page_size: int) -> PageResult:
    """
    按页取数据，统计与切片都交给 Django Paginator

    页码超出范围时返回空列表，而不是抛出 EmptyPage；没有数据时 total_pages 为 0
    """
    paginator = Paginator(queryset, page_size)
    total = paginator.count
    total_pages = paginator.num_pages if total else 0
    try:
        current = paginator.page(page)
    except EmptyPage:
        return PageResult(
            items=[],
            page=page,
            page_size=page_size,
            total=total,
            total_pages=total_pages,
            has_next=False,
            has_previous=page > 1,
        )
    return PageResult(
        items=list(current.object_list),
        page=current.number,
        page_size=page_size,
        total=total,
        total_pages=total_pages,
        has_next=current.has_next(),
        has_previous=current.has_previous(),
    )


def paginated_response(result: PageResult, serializer: Optional[Callable[[Any], Any]] = None) -> Response:
    """将 PageResult 封装为统一分页响应"""
    items = [serializer(item) for item in result.items] if serializer else result.items
    return page_success(
        items=items,
        page=result.page,
        page_size=result.page_size,
        total=result.total,
        total_pages=result.total_pages,
        has_next=result.has_next,
        has_previous=result.has_previous,
    )
