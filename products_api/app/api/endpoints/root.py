"""
Root endpoint.

``GET /`` returns a small directory of the available endpoints so
that a client (or a human with ``curl``) can discover the API.
"""

from fastapi import APIRouter, Request

from products_api.app.schemas.product import ApiDirectory

router = APIRouter()

ENDPOINTS = {
    "GET /api/products": "Get all products (supports filtering, pagination, search)",
    "GET /api/products/:id": "Get a specific product",
    "POST /api/products": "Create a new product (requires authentication)",
    "PUT /api/products/:id": "Update a product (requires authentication)",
    "DELETE /api/products/:id": "Delete a product (requires authentication)",
}


@router.get("/", response_model=ApiDirectory)
async def api_directory(request: Request) -> ApiDirectory:
    settings = request.app.state.settings
    return ApiDirectory(
        message=f"Welcome to the {settings.project_name}",
        version=settings.api_version,
        endpoints=ENDPOINTS,
    )
