"""Tests for the product listing pipeline."""

import pytest

from products_api.app.core.store import SEED_PRODUCTS
from products_api.app.schemas.product import Product, SortField
from products_api.app.services.query_engine import (
    ProductQuery,
    filter_by_category,
    filter_by_price,
    paginate,
    parse_float,
    parse_int_prefix,
    parse_positive_int,
    parse_sort_field,
    run_query,
    search_products,
    sort_products,
)


@pytest.fixture
def products():
    return [Product(**record) for record in SEED_PRODUCTS]


def names(products):
    return [p.name for p in products]


class TestParsing:
    def test_parse_float(self):
        assert parse_float("10.5") == 10.5
        assert parse_float(None) is None
        assert parse_float("") is None
        assert parse_float("abc") is None
        assert parse_float("nan") is None

    def test_parse_positive_int_defaults(self):
        assert parse_positive_int("3", 1) == 3
        assert parse_positive_int(None, 10) == 10
        assert parse_positive_int("abc", 10) == 10
        assert parse_positive_int("0", 10) == 10
        assert parse_positive_int("-2", 1) == 1

    def test_parse_float_uses_leading_number(self):
        assert parse_float("10abc") == 10.0
        assert parse_float(" 2.5e1 ") == 25.0
        assert parse_float(".5") == 0.5
        assert parse_float("Infinity") == float("inf")

    def test_parse_int_prefix(self):
        assert parse_int_prefix("12abc") == 12
        assert parse_int_prefix("2.9") == 2
        assert parse_int_prefix(" -3") == -3
        assert parse_int_prefix("x1") is None
        assert parse_int_prefix(None) is None

    def test_parse_positive_int_truncates_decimals(self):
        assert parse_positive_int("2.5", 10) == 2
        assert parse_positive_int("2.9", 1) == 2
        assert parse_positive_int("0.5", 10) == 10

    def test_parse_sort_field(self):
        assert parse_sort_field("price") is SortField.PRICE
        assert parse_sort_field("colour") is None
        assert parse_sort_field(None) is None


class TestStages:
    def test_search_matches_name_or_description(self, products):
        assert names(search_products(products, "LAPTOP")) == ["Laptop"]
        assert names(search_products(products, "office")) == ["Desk Chair"]
        assert names(search_products(products, "o")) == ["Laptop", "Mouse", "Keyboard", "Monitor", "Desk Chair"]

    def test_search_absent_keeps_everything(self, products):
        assert search_products(products, None) == products
        assert search_products(products, "") == products

    def test_category_is_case_insensitive_exact(self, products):
        assert names(filter_by_category(products, "furniture")) == ["Desk Chair"]
        assert filter_by_category(products, "Electro") == []

    def test_price_range_is_inclusive(self, products):
        assert names(filter_by_price(products, 79.99, 299.99)) == ["Keyboard", "Monitor", "Desk Chair"]
        assert names(filter_by_price(products, min_price=500)) == ["Laptop"]
        assert names(filter_by_price(products, max_price=30)) == ["Mouse"]

    def test_sort_ascending_and_descending(self, products):
        ascending = sort_products(products, SortField.PRICE)
        descending = sort_products(products, SortField.PRICE, "desc")
        assert names(ascending) == ["Mouse", "Keyboard", "Desk Chair", "Monitor", "Laptop"]
        assert names(descending) == list(reversed(names(ascending)))

    def test_sort_text_field(self, products):
        assert names(sort_products(products, SortField.NAME)) == ["Desk Chair", "Keyboard", "Laptop", "Monitor", "Mouse"]

    def test_sort_is_stable_for_equal_keys(self, products):
        ids = [p.id for p in sort_products(products, SortField.CATEGORY)]
        assert ids == [1, 2, 3, 4, 5]
        ids = [p.id for p in sort_products(products, SortField.CATEGORY, "desc")]
        assert ids == [5, 1, 2, 3, 4]

    def test_sort_without_field_keeps_order(self, products):
        assert sort_products(products, None, "desc") == products

    def test_paginate(self, products):
        result = paginate(products, page=2, limit=2)
        assert names(result.data) == ["Keyboard", "Monitor"]
        assert (result.count, result.total, result.page, result.total_pages) == (2, 5, 2, 3)


class TestRunQuery:
    def test_defaults(self, products):
        result = run_query(products, ProductQuery())
        assert result.count == 5
        assert result.total == 5
        assert result.page == 1
        assert result.total_pages == 1

    def test_category_sort_and_page(self, products):
        query = ProductQuery(category="Electronics", sort_by="price", order="asc", limit="2", page="1")
        result = run_query(products, query)
        assert names(result.data) == ["Mouse", "Keyboard"]
        assert result.total == 4
        assert result.total_pages == 2

    def test_stages_combine(self, products):
        query = ProductQuery(search="o", category="electronics", min_price="50", sort_by="stock", order="desc")
        assert names(run_query(products, query).data) == ["Keyboard", "Monitor", "Laptop"]

    def test_no_matches(self, products):
        result = run_query(products, ProductQuery(category="Garden"))
        assert result.data == []
        assert (result.count, result.total, result.total_pages) == (0, 0, 0)

    def test_out_of_range_page_is_empty(self, products):
        result = run_query(products, ProductQuery(page="9"))
        assert result.data == []
        assert result.count == 0
        assert result.total == 5
        assert result.page == 9

    def test_fractional_limit_and_page_are_truncated(self, products):
        result = run_query(products, ProductQuery(limit="2.5", page="2.9"))
        assert names(result.data) == ["Keyboard", "Monitor"]
        assert (result.count, result.page, result.total_pages) == (2, 2, 3)

    def test_price_bound_with_trailing_text(self, products):
        result = run_query(products, ProductQuery(min_price="200abc"))
        assert names(result.data) == ["Laptop", "Monitor"]

    def test_non_numeric_bounds_are_ignored(self, products):
        result = run_query(products, ProductQuery(min_price="cheap", max_price="expensive"))
        assert result.total == 5

    def test_unknown_sort_field_keeps_order(self, products):
        result = run_query(products, ProductQuery(sort_by="colour", order="desc"))
        assert [p.id for p in result.data] == [1, 2, 3, 4, 5]

    @pytest.mark.parametrize("limit", ["1", "2", "3", "4", "7"])
    def test_page_counts_are_consistent(self, products, limit):
        result = run_query(products, ProductQuery(limit=limit))
        assert result.total >= result.count
        assert result.count == len(result.data)
        assert result.total_pages == -(-result.total // int(limit))
