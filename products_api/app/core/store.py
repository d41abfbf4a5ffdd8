"""
In‑memory product store.

``ProductStore`` owns the ordered list of product records for the
lifetime of the process.  Nothing is persisted; a restart brings back
the seed data.  Every read and mutation happens under a single lock so
that at most one mutator runs at a time, even when the ASGI server
executes handlers in a worker thread.

Identifiers are issued as ``max(existing ids) + 1`` (``1`` for an empty
store).  The store also remembers the highest identifier it has ever
issued, so deleting the current maximum never frees that identifier
for reuse.
"""

import copy
import logging
from threading import Lock
from typing import Any, Dict, Iterable, List, Optional

from ..schemas.product import Product

logger = logging.getLogger(__name__)

SEED_PRODUCTS: List[Dict[str, Any]] = [
    {"id": 1, "name": "Laptop", "price": 999.99, "category": "Electronics", "stock": 50, "description": "High-performance laptop"},
    {"id": 2, "name": "Mouse", "price": 29.99, "category": "Electronics", "stock": 150, "description": "Wireless mouse"},
    {"id": 3, "name": "Keyboard", "price": 79.99, "category": "Electronics", "stock": 100, "description": "Mechanical keyboard"},
    {"id": 4, "name": "Monitor", "price": 299.99, "category": "Electronics", "stock": 75, "description": "27-inch 4K monitor"},
    {"id": 5, "name": "Desk Chair", "price": 199.99, "category": "Furniture", "stock": 30, "description": "Ergonomic office chair"},
]


class ProductStore:
    """Ordered, process‑local collection of ``Product`` records."""

    def __init__(self, records: Optional[Iterable[Dict[str, Any]]] = None) -> None:
        self._lock = Lock()
        self._products: List[Product] = []
        self._last_id = 0
        self.reset(SEED_PRODUCTS if records is None else records)

    def reset(self, records: Iterable[Dict[str, Any]]) -> None:
        """Replace the whole collection, e.g. to restore the seed data."""
        products = [Product(**record) for record in records]
        with self._lock:
            self._products = products
            self._last_id = max((p.id for p in products), default=0)

    def __len__(self) -> int:
        with self._lock:
            return len(self._products)

    def list(self) -> List[Product]:
        """Return a snapshot of all products in insertion order."""
        with self._lock:
            return [p.model_copy() for p in self._products]

    def get(self, product_id: int) -> Optional[Product]:
        with self._lock:
            index = self._index_of(product_id)
            if index is None:
                return None
            return self._products[index].model_copy()

    def next_id(self) -> int:
        with self._lock:
            return self._next_id()

    def add(self, fields: Dict[str, Any]) -> Product:
        """Append a new product built from ``fields`` and return it.

        ``fields`` must already be validated; any ``id`` key is ignored
        and a fresh identifier is assigned.
        """
        data = {k: v for k, v in fields.items() if k != "id"}
        with self._lock:
            product = Product(id=self._next_id(), **data)
            self._products.append(product)
            self._last_id = product.id
        logger.info("Created product %s (%s)", product.id, product.name)
        return product.model_copy()

    def replace(self, product_id: int, fields: Dict[str, Any]) -> Optional[Product]:
        """Overwrite every field of an existing product.

        ``description`` keeps its previous value when ``fields`` omits it
        or sets it to ``None``.  Returns ``None`` if the product does
        not exist.
        """
        with self._lock:
            index = self._index_of(product_id)
            if index is None:
                return None
            current = self._products[index]
            data = {k: v for k, v in fields.items() if k != "id"}
            if data.get("description") is None:
                data["description"] = current.description
            product = Product(id=current.id, **data)
            self._products[index] = product
        logger.info("Updated product %s", product_id)
        return product.model_copy()

    def delete(self, product_id: int) -> Optional[Product]:
        """Remove a product and return it, or ``None`` if it does not exist."""
        with self._lock:
            index = self._index_of(product_id)
            if index is None:
                return None
            product = self._products.pop(index)
        logger.info("Deleted product %s", product_id)
        return product

    def _index_of(self, product_id: int) -> Optional[int]:
        for index, product in enumerate(self._products):
            if product.id == product_id:
                return index
        return None

    def _next_id(self) -> int:
        highest = max((p.id for p in self._products), default=0)
        return max(highest, self._last_id) + 1


def create_seeded_store() -> ProductStore:
    """Build a store holding a fresh copy of the seed products."""
    return ProductStore(copy.deepcopy(SEED_PRODUCTS))
