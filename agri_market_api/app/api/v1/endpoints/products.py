"""
Product endpoints.

CRUD for marketplace listings plus the catalogue query used by the
browse page (``limit``, ``category`` and free-text ``search``).
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from agri_market_api.app.api.v1.errors import not_found, storage_errors
from agri_market_api.app.schemas.product import (
    ProductCategory,
    ProductCreate,
    ProductRead,
    ProductUpdate,
)
from agri_market_api.app.storage import Storage, get_storage

router = APIRouter()


@router.post("", response_model=ProductRead, status_code=status.HTTP_201_CREATED)
def create_product(product: ProductCreate, storage: Storage = Depends(get_storage)) -> ProductRead:
    with storage_errors("Failed to create product"):
        return storage.create_product(product)


@router.get("", response_model=List[ProductRead])
def list_products(
    limit: Optional[int] = Query(None, ge=1),
    category: Optional[ProductCategory] = Query(None),
    search: Optional[str] = Query(None, description="Substring of title or description"),
    storage: Storage = Depends(get_storage),
) -> List[ProductRead]:
    """List products, newest first.

    - **limit** caps the number of results.
    - **category** keeps one category only.
    - **search** matches title or description, case-insensitively.
    """
    with storage_errors("Failed to get products"):
        return storage.get_products(
            limit=limit,
            category=category.value if category else None,
            search_term=search,
        )


@router.get("/farmer/{farmer_id}", response_model=List[ProductRead])
def list_farmer_products(farmer_id: int, storage: Storage = Depends(get_storage)) -> List[ProductRead]:
    with storage_errors("Failed to get farmer products"):
        return storage.get_products_by_farmer(farmer_id)


@router.get("/{product_id}", response_model=ProductRead)
def get_product(product_id: int, storage: Storage = Depends(get_storage)) -> ProductRead:
    with storage_errors("Failed to get product"):
        product = storage.get_product(product_id)
        if not product:
            raise not_found("Product")
        return product


@router.put("/{product_id}", response_model=ProductRead)
def update_product(
    product_id: int,
    updates: ProductUpdate,
    storage: Storage = Depends(get_storage),
) -> ProductRead:
    """Update a product; fields left out of the body keep their values."""
    with storage_errors("Failed to update product"):
        product = storage.update_product(product_id, updates)
        if not product:
            raise not_found("Product")
        return product


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_product(product_id: int, storage: Storage = Depends(get_storage)) -> None:
    with storage_errors("Failed to delete product"):
        if not storage.delete_product(product_id):
            raise not_found("Product")
    return None
