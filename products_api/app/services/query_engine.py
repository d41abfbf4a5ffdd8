"""
Filtering, sorting and pagination of product listings.

All functions here are pure: they take a sequence of products and
return a new list without touching the store.  ``run_query`` chains
the stages in a fixed order, each stage narrowing or reordering the
output of the previous one:

1. search (name or description, case‑insensitive substring)
2. category (case‑insensitive exact match)
3. price range (inclusive bounds)
4. sort (stable, on a known field)
5. pagination

Query values are taken as raw strings from the query string.  Values
that cannot be interpreted are treated as absent instead of raising.
"""

import math
import re
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence

from ..schemas.product import Product, SortField

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10


@dataclass
class ProductQuery:
    """Raw listing parameters as received from the client."""

    search: Optional[str] = None
    category: Optional[str] = None
    min_price: Optional[str] = None
    max_price: Optional[str] = None
    sort_by: Optional[str] = None
    order: Optional[str] = None
    page: Optional[str] = None
    limit: Optional[str] = None


@dataclass
class QueryResult:
    data: List[Product] = field(default_factory=list)
    count: int = 0
    total: int = 0
    page: int = DEFAULT_PAGE
    total_pages: int = 0


_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(r"\s*([+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?))")


def parse_int_prefix(value: Any) -> Optional[int]:
    """Parse the leading integer of ``value``.

    Trailing text is ignored, so ``"2.9"`` gives ``2`` and ``"12abc"``
    gives ``12``.  Returns ``None`` when ``value`` does not start with
    a number.
    """
    if value is None:
        return None
    match = _INT_PREFIX.match(str(value))
    if match is None:
        return None
    return int(match.group(1))


def parse_float(value: Optional[str]) -> Optional[float]:
    """Parse the leading number of a price bound.

    ``"10abc"`` gives ``10.0``; empty and non‑numeric values give
    ``None``.
    """
    if value is None:
        return None
    match = _FLOAT_PREFIX.match(str(value))
    if match is None:
        return None
    return float(match.group(1))


def parse_positive_int(value: Optional[str], default: int) -> int:
    """Parse a page number or page size, falling back to ``default``.

    Only the leading integer counts.  Missing, non‑numeric and
    non‑positive values all use the default.
    """
    number = parse_int_prefix(value)
    if number is None or number < 1:
        return default
    return number


def parse_sort_field(value: Optional[str]) -> Optional[SortField]:
    """Map ``sortBy`` onto a known field, or ``None`` when unknown."""
    if not value:
        return None
    try:
        return SortField(value)
    except ValueError:
        return None


def search_products(products: Sequence[Product], term: Optional[str]) -> List[Product]:
    if not term:
        return list(products)
    needle = term.lower()
    return [
        p for p in products
        if needle in p.name.lower() or needle in p.description.lower()
    ]


def filter_by_category(products: Sequence[Product], category: Optional[str]) -> List[Product]:
    if not category:
        return list(products)
    wanted = category.lower()
    return [p for p in products if p.category.lower() == wanted]


def filter_by_price(
    products: Sequence[Product],
    min_price: Optional[float] = None,
    max_price: Optional[float] = None,
) -> List[Product]:
    result = list(products)
    if min_price is not None:
        result = [p for p in result if p.price >= min_price]
    if max_price is not None:
        result = [p for p in result if p.price <= max_price]
    return result


def sort_products(
    products: Sequence[Product],
    sort_by: Optional[SortField],
    order: Optional[str] = None,
) -> List[Product]:
    """Stable sort on ``sort_by``; ``order == "desc"`` reverses it.

    ``sort_by=None`` (absent or unknown field) keeps the input order.
    Products comparing equal keep their relative order in both
    directions.
    """
    if sort_by is None:
        return list(products)
    return sorted(
        products,
        key=lambda p: getattr(p, sort_by.value),
        reverse=(order == "desc"),
    )


def paginate(products: Sequence[Product], page: int, limit: int) -> QueryResult:
    start = (page - 1) * limit
    end = start + limit
    page_items = list(products[start:end])
    return QueryResult(
        data=page_items,
        count=len(page_items),
        total=len(products),
        page=page,
        total_pages=math.ceil(len(products) / limit),
    )


def run_query(products: Sequence[Product], query: ProductQuery) -> QueryResult:
    """Apply every listing stage to ``products`` in order."""
    result = search_products(products, query.search)
    result = filter_by_category(result, query.category)
    result = filter_by_price(result, parse_float(query.min_price), parse_float(query.max_price))
    result = sort_products(result, parse_sort_field(query.sort_by), query.order)
    return paginate(
        result,
        parse_positive_int(query.page, DEFAULT_PAGE),
        parse_positive_int(query.limit, DEFAULT_LIMIT),
    )
