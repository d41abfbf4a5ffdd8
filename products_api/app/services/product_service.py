"""
Business logic for products.

``ProductService`` composes the record store, the query engine and the
payload validation into the five catalogue operations.  Every method
either returns a result or raises a ``ProductsAPIError`` subclass that
the API layer turns into the JSON error envelope; nothing is mutated
when a method raises.
"""

import logging
from typing import Any

from ..core.errors import MalformedIdentifier, ProductNotFound, ValidationFailed
from ..core.store import ProductStore
from ..schemas.product import Product, ProductIn
from .query_engine import ProductQuery, QueryResult, parse_int_prefix, run_query
from .validation import normalize_product, parse_product

logger = logging.getLogger(__name__)


def parse_product_id(raw: Any) -> int:
    """Parse a product identifier from a path segment.

    Only the leading integer counts, so ``12abc`` and ``1.5`` name
    products 12 and 1.  Raises ``MalformedIdentifier`` when the segment
    does not start with a number.
    """
    product_id = parse_int_prefix(raw)
    if product_id is None:
        raise MalformedIdentifier()
    return product_id


def _parse_payload(payload: Any) -> ProductIn:
    try:
        return parse_product(payload)
    except ValidationFailed as e:
        logger.info("Rejected product payload: %s", "; ".join(e.details))
        raise


class ProductService:
    """Catalogue operations over a single ``ProductStore``."""

    def __init__(self, store: ProductStore) -> None:
        self.store = store

    def list_products(self, query: ProductQuery) -> QueryResult:
        return run_query(self.store.list(), query)

    def get_product(self, raw_id: Any) -> Product:
        product_id = parse_product_id(raw_id)
        product = self.store.get(product_id)
        if product is None:
            raise ProductNotFound(product_id)
        return product

    def create_product(self, payload: Any) -> Product:
        """Validate ``payload`` and append it as a new product."""
        product_in = _parse_payload(payload)
        return self.store.add(normalize_product(product_in))

    def replace_product(self, raw_id: Any, payload: Any) -> Product:
        """Overwrite an existing product with ``payload``.

        The payload is validated before the identifier is looked at, so
        an invalid body is reported even for an unknown product.
        """
        product_in = _parse_payload(payload)
        product_id = parse_product_id(raw_id)
        product = self.store.replace(product_id, normalize_product(product_in))
        if product is None:
            raise ProductNotFound(product_id)
        return product

    def delete_product(self, raw_id: Any) -> Product:
        product_id = parse_product_id(raw_id)
        product = self.store.delete(product_id)
        if product is None:
            raise ProductNotFound(product_id)
        return product
