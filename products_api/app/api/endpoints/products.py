"""
Product endpoints.

Listing and reading products is public.  Creating, replacing and
deleting products requires the shared API key (see
``core.security.require_api_key``).  Each handler maps unexpected
failures to a 500 response that carries the failure's message.
"""

import logging
from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Query, status

from products_api.app.core.dependencies import get_store
from products_api.app.core.errors import InternalError, ProductsAPIError
from products_api.app.core.security import require_api_key
from products_api.app.core.store import ProductStore
from products_api.app.schemas.product import (
    ProductListResponse,
    ProductMutationResponse,
    ProductResponse,
)
from products_api.app.services.product_service import ProductService
from products_api.app.services.query_engine import ProductQuery

logger = logging.getLogger(__name__)

router = APIRouter()


def _internal_error(action: str, exc: Exception) -> InternalError:
    logger.exception("Failed to %s", action)
    return InternalError(message=str(exc))


@router.get("", response_model=ProductListResponse)
async def list_products(
    search: Optional[str] = Query(None),
    category: Optional[str] = Query(None),
    min_price: Optional[str] = Query(None, alias="minPrice"),
    max_price: Optional[str] = Query(None, alias="maxPrice"),
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    order: Optional[str] = Query(None),
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    store: ProductStore = Depends(get_store),
) -> ProductListResponse:
    """List products with search, filters, sorting and pagination.

    - **search**: substring of the name or description (case‑insensitive).
    - **category**: exact category (case‑insensitive).
    - **minPrice**, **maxPrice**: inclusive price bounds.
    - **sortBy**: `id`, `name`, `price`, `category`, `stock` or `description`.
    - **order**: `desc` for descending, anything else ascending.
    - **page**, **limit**: pagination, default 1 and 10.
    """
    query = ProductQuery(
        search=search,
        category=category,
        min_price=min_price,
        max_price=max_price,
        sort_by=sort_by,
        order=order,
        page=page,
        limit=limit,
    )
    try:
        result = ProductService(store).list_products(query)
    except ProductsAPIError:
        raise
    except Exception as e:
        raise _internal_error("list products", e) from e
    return ProductListResponse(
        count=result.count,
        total=result.total,
        page=result.page,
        totalPages=result.total_pages,
        data=result.data,
    )


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str, store: ProductStore = Depends(get_store)) -> ProductResponse:
    """Retrieve a single product by its ID."""
    try:
        product = ProductService(store).get_product(product_id)
    except ProductsAPIError:
        raise
    except Exception as e:
        raise _internal_error("get product", e) from e
    return ProductResponse(data=product)


@router.post("", response_model=ProductMutationResponse, status_code=status.HTTP_201_CREATED)
async def create_product(
    payload: Any = Body(None),
    _: None = Depends(require_api_key),
    store: ProductStore = Depends(get_store),
) -> ProductMutationResponse:
    """Create a new product (requires the API key)."""
    try:
        product = ProductService(store).create_product(payload)
    except ProductsAPIError:
        raise
    except Exception as e:
        raise _internal_error("create product", e) from e
    return ProductMutationResponse(message="Product created successfully", data=product)


@router.put("/{product_id}", response_model=ProductMutationResponse)
async def replace_product(
    product_id: str,
    payload: Any = Body(None),
    _: None = Depends(require_api_key),
    store: ProductStore = Depends(get_store),
) -> ProductMutationResponse:
    """Replace every field of a product (requires the API key).

    An omitted description keeps the product's current description.
    """
    try:
        product = ProductService(store).replace_product(product_id, payload)
    except ProductsAPIError:
        raise
    except Exception as e:
        raise _internal_error("update product", e) from e
    return ProductMutationResponse(message="Product updated successfully", data=product)


@router.delete("/{product_id}", response_model=ProductMutationResponse)
async def delete_product(
    product_id: str,
    _: None = Depends(require_api_key),
    store: ProductStore = Depends(get_store),
) -> ProductMutationResponse:
    """Delete a product and return it (requires the API key)."""
    try:
        product = ProductService(store).delete_product(product_id)
    except ProductsAPIError:
        raise
    except Exception as e:
        raise _internal_error("delete product", e) from e
    return ProductMutationResponse(message="Product deleted successfully", data=product)
