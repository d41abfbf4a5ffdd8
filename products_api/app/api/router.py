"""
Top‑level API router.

Aggregates the endpoint routers under their path prefixes.  When new
resources are added, include their routers here.
"""

from fastapi import APIRouter

from .endpoints import products, root

router = APIRouter()

router.include_router(root.router, tags=["info"])
router.include_router(products.router, prefix="/api/products", tags=["products"])
